"""Environment driven settings."""

import os
from pathlib import Path

DEFAULT_XRD_PATTERNS = "xrd.yaml,test.yaml"
DEFAULT_OUTPUT_DIR_NAME = "crds"


def log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()


def xrd_patterns() -> list:
    """File names searched for XRDs, in the order they are processed."""
    raw = os.getenv("XRD_PATTERNS", DEFAULT_XRD_PATTERNS)
    return [p.strip() for p in raw.split(",") if p.strip()]


def crd_output_dir(root_dir: Path) -> Path:
    """Directory generated CRDs are written to (defaults to ``<root>/crds``)."""
    output = os.getenv("CRD_OUTPUT_DIR")
    if output:
        return Path(output)
    return Path(root_dir) / DEFAULT_OUTPUT_DIR_NAME
