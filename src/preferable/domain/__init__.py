"""Domain layer — preference types, specs, coercion rules, and errors.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, or config.
"""
