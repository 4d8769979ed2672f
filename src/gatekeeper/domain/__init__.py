"""
Domain layer - Pure admission policy with no storage concerns.

This layer contains:
- Domain models (scopes, requests, decisions)
- Value objects (limit configuration)
- Repository interfaces (ports)
- Domain services (limit resolution)
- Domain exceptions
"""
