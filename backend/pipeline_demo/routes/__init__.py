# Routes package init
"""
Pipeline Demo — API Routes Package
===================================

Route Inventory:
    - root.py:    GET  /                (welcome message and app info)
    - health.py:  GET  /health          (liveness, uptime, memory)
    - users.py:   GET  /api/users       (list mock users)
                  POST /api/users       (create a user)

Anything else falls through to the route-not-found handler in main.py.

Design Principle:
    Routes stay THIN: read the request, call a service, pick the status code.
"""
