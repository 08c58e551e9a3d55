"""
Blog API Backend: Middleware Package
=====================================

Middleware Chain:
    Request → [Request ID] → [Access Log] → [CORS] → Route Handler

    - RequestIDMiddleware tags the request (and every log line written
      while handling it) with a correlation id.
    - RequestLoggingMiddleware writes one access line per request with
      status, duration and, for authenticated calls, the acting user.
"""
