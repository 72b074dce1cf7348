# Routes package init
"""
Hersteller Service — API Routes Package
=========================================

What:  Transport adapters in front of the services.

Route Inventory:
    - hersteller_read.py:   GET    /rest/{id}   (detail, ETag / If-None-Match)
                            GET    /rest        (search)
    - hersteller_write.py:  POST   /rest        (create)
                            PUT    /rest/{id}   (update, If-Match)
                            DELETE /rest/{id}   (delete)
    - graphql_router.py:    POST   /graphql     (queries and mutations)
    - health.py:            GET    /health      (service health check)

Routes stay thin: they translate HTTP or GraphQL into service calls and
service outcomes back into status codes and payloads.
"""
