"""Template directory rendering."""

from .engine import apply_dir_spec
from .substitution import DEFAULT_DELIMS, substitute, substitute_path

__all__ = ["DEFAULT_DELIMS", "apply_dir_spec", "substitute", "substitute_path"]
