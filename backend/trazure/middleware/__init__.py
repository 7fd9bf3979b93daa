"""
Trazure Backend — Middleware Package
======================================

Request chain (last added in main.py runs first):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID first, so every later log line can carry it
    2. Logging measures everything below it, including CORS preflights
    3. CORS innermost, answering preflight OPTIONS directly
"""
