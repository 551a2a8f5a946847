# Routes package init
"""
svc-notes: API Routes Package
===============================

Route Inventory:
    - notes.py:   GET  /api/lectures/{lectureId}/notes   (list notes)
                  POST /api/lectures/{lectureId}/notes   (create note)
    - health.py:  GET  /healthz, /readyz, /metrics
    - docs.py:    GET  /openapi.json, /docs

Routes stay thin: they read the request, call a service or the gateway, and
shape the response. Business rules live in svc_notes.services.
"""
