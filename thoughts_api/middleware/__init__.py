"""
Happy Thoughts API — Middleware Package

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID: correlation ID for logging, echoed in X-Request-ID
    2. Logging: one access line per request with status and duration
    3. CORS: FastAPI's CORSMiddleware (any origin by default)
"""
