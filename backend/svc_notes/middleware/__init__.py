# Middleware package init
"""
svc-notes: Middleware Package
===============================

Middleware Chain (order matters):
    Request → [Request ID] → [Logging] → Route Handler

    Response ← [Request ID] ← [Logging] ← Route Handler

- The request ID is set before the logging layer reads it.
- The logging layer sees the final status, including 500 responses
  produced by the exception handlers.
"""
