"""Substitution map construction."""

from .substitutions import build_substitutions, default_target_dir, split_name

__all__ = ["build_substitutions", "default_target_dir", "split_name"]
