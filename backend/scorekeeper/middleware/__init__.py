# Middleware package init
"""
Scorekeeper Backend — Middleware Package
==========================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID: correlation ID for logs and the X-Request-ID header
    2. Logging: access line with status and duration
    3. CORS: FastAPI's CORSMiddleware (handles preflight)
"""
