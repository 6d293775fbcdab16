"""Domain layer — result types, constants, and error hierarchy.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
