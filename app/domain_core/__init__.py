"""
Domain layer - Core business entities and logic.

This package contains the pure business logic and domain models,
independent of any external concerns like databases or APIs.
"""
