"""
API layer - routes, dependencies and middleware.
"""
