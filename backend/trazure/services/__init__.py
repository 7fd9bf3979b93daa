"""
Trazure Backend — Services Package
====================================

Business logic, independent of HTTP:
    - footprint_service.py: light up / list / get footprints (owner-scoped)
    - user_service.py:      credential-free user listing
    - file_service.py:      photo upload storage under the uploads directory
"""
