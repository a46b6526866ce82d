"""
Employee API: Middleware Package
==================================

Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    - Request ID runs first so the access log line carries the id
    - Logging captures the final status code and total duration
"""
