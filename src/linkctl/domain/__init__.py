"""Domain layer — the catalogue model, its rules, and name resolution.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
