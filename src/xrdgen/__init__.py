"""Derive Kubernetes CRDs for composite resources and their claims from XRDs."""

__version__ = "0.1.0"
