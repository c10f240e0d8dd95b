"""
Happy Thoughts API — Services Layer

Service Inventory:
    - ThoughtService: list, get, create, like, update and delete thoughts
"""
