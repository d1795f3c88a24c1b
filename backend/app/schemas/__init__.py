# Schemas package init
"""Pydantic request/response models, serialized with camelCase keys."""
