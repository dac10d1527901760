"""Newt - create new projects from templates.

Templates are directories with a ``template.yaml`` manifest describing
which subdirectories to copy, how to rename files and where to
substitute ``{{placeholders}}``.
"""

__version__ = "0.1.0"

# Configure logging for library use
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

from .api import app, create, lib, pyproject, scratch, template
from .cli import main

__all__ = ["app", "create", "lib", "main", "pyproject", "scratch", "template"]
