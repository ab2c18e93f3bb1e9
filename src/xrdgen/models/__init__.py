"""Pydantic models for XRD input documents."""

from .xrd import (
    CompositeResourceDefinition,
    CompositeResourceDefinitionSpec,
    CompositeResourceDefinitionVersion,
    CompositeResourceValidation,
    ObjectMeta,
)

__all__ = [
    "CompositeResourceDefinition",
    "CompositeResourceDefinitionSpec",
    "CompositeResourceDefinitionVersion",
    "CompositeResourceValidation",
    "ObjectMeta",
]
