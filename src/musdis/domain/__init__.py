"""Domain layer: entities, request models, validation and slug rules.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
