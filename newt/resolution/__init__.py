"""Template lookup and hook resolution."""

from .finder import find_template_root, resolve, template_path
from .hooks import resolve_hook

__all__ = ["find_template_root", "resolve", "resolve_hook", "template_path"]
