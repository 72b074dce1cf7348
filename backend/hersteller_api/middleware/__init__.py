# Middleware package init
"""
Hersteller Service — Middleware Package
=========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Access Log] → [GZip] → [CORS] → Route Handler

    - RequestIDMiddleware assigns the correlation id first, so the access
      log line and every service log line of the request can carry it.
    - RequestLoggingMiddleware records method, path, status and duration
      on the way back out.
"""
