# Routes package init
"""
Catalog API — API Routes Package
==================================

Route Inventory:
    - health.py:    GET  /                     (welcome text)
                    GET  /health               (service health check)
    - items.py:     GET/POST /api/items, GET/PATCH/DELETE /api/items/{id}
    - articles.py:  GET /articles, POST /article,
                    GET/PATCH/DELETE /article/{id}

Routes are thin: they pull values out of the request, hand them with the
injected collection to a DocumentService, and return the result. Errors
raised by services are formatted by the global handlers in main.py.
"""
