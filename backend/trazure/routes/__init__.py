"""
Trazure Backend — API Routes Package
======================================

Route Inventory:
    - footprints.py:  POST /footprints         (light up a footprint)
                      GET  /footprints         (my footprints)
                      GET  /footprints/{id}    (one of my footprints)
    - uploads.py:     POST /uploads            (store a photo)
                      GET  /uploads/{path}     (serve a stored file)
    - diagnostics.py: GET  /test/users         (only with ENABLE_DIAGNOSTICS)
    - health.py:      GET  /health

Routes stay thin: resolve identity and inputs, call a service, return.
"""
