"""CRD derivation for composite resource definitions."""

from .base import CustomResourceDefinition, CRDNames, CustomResourceColumnDefinition
from .derive import for_composite_resource, for_composite_resource_claim

__all__ = [
    "CustomResourceDefinition",
    "CRDNames",
    "CustomResourceColumnDefinition",
    "for_composite_resource",
    "for_composite_resource_claim",
]
