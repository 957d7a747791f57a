"""Domain layer — survey types, models and unit conversions.

This layer depends only on stdlib and pydantic.
It must never import from codec, services, commands, or config.
"""
