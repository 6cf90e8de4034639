# Services package init
"""
Pipeline Demo — Services Layer
===============================

What:  Business logic sitting between routes (HTTP) and the in-memory store.

Service Inventory:
    - UserService: Create-user validation, id/timestamp generation, listing
    - system: Uptime and process memory counters for the health check
"""
