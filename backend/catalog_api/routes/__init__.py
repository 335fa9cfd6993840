# Routes package init
"""
Catalog API — API Routes Package
==================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - products.py:  GET/POST {api_prefix}, GET/PATCH/DELETE {api_prefix}/{id}
    - samples.py:   GET /api/sample-products   (static demo list)
    - health.py:    GET /health                (service health check)

Design Principle:
    Routes are THIN: they read the request, call a service, and return its
    result. Error formatting lives in the global exception handlers.
"""
