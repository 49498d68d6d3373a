# Middleware package init
"""
DelipuCash Backend: Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [Security Headers] → [CORS] → Route Handler

    1. Request ID FIRST: every later log line can be correlated
    2. Logging: sees the final status, including error handler responses
    3. Security Headers: stamped on every response, errors included
    4. CORS: FastAPI's CORSMiddleware (answers preflight)

    Starlette runs middleware in REVERSE order of add_middleware(), so
    main.create_app() adds them CORS first and Request ID last.
"""
