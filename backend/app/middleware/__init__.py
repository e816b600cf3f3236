# Middleware package init
"""
WorshipDeck Backend - Middleware Package
=========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID: correlation ID for logs and error bodies
    2. Logging: method, path, status, duration, tagged with the request ID
    3. CORS: FastAPI's CORSMiddleware (also answers preflight OPTIONS)
"""
