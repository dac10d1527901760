"""Template manifest parsing and validation."""

from .loader import MANIFEST_NAME, load_manifest
from .schema import conform, conform_dir_spec, explain

__all__ = ["MANIFEST_NAME", "conform", "conform_dir_spec", "explain", "load_manifest"]
