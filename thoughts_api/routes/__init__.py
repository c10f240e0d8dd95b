"""
Happy Thoughts API — Routes Package

Route Inventory:
    - root.py:      GET /                   (welcome + route listing)
    - thoughts.py:  /thoughts CRUD and like
    - health.py:    GET /health             (service health check)

Routes stay thin: extract input, call a service, return the schema.
"""
