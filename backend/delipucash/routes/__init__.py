# Routes package init
"""
DelipuCash Backend: API Routes Package
========================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - responses.py: POST /api/responses/{id}/like
                    POST /api/responses/{id}/dislike
                    POST /api/responses/{id}/replies
                    GET  /api/responses/{id}/replies
                    GET  /api/responses/{id}?userId=
    - health.py:    GET  /         (service banner)
                    GET  /health   (readiness, checks the database)
                    GET  /ping     (liveness)

Design Principle:
    Routes are THIN. They extract data from the request, call a service and
    return its model. Business rules live in services so they can be tested
    without HTTP.
"""
