# Middleware package init
"""
Catalog API — Middleware Package
==================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID first: every later log line can carry the ID
    2. Logging: records status and duration once the response is built
    3. CORS: FastAPI's CORSMiddleware, answers preflight requests
"""
