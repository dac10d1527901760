"""Template lookup over explicit and implicit search roots."""

from __future__ import annotations

import logging
import sys
from pathlib import Path, PurePosixPath
from typing import Callable, Iterable

from ..core.errors import TemplateNotFound
from ..core.models import ResolvedTemplate
from ..manifest.loader import MANIFEST_NAME

logger = logging.getLogger(__name__)

BUILTIN_NAMESPACE = "newt.templates"

# Directory that contains the ``newt`` package, so bundled templates are
# found even when it is not on sys.path (editable installs).
PACKAGE_ROOT = Path(__file__).resolve().parents[2]

Finder = Callable[[str, Iterable[Path]], "tuple[Path, Path] | None"]


def template_path(template_id: str) -> PurePosixPath:
    """Map a template identifier to its directory relative to a search root.

    ``acme.templates/my-app`` maps to ``acme/templates/my_app``; an
    unqualified ``app`` is a bundled template under ``newt/templates``.
    """
    namespace, _, name = template_id.strip().rpartition("/")
    if not namespace:
        namespace = BUILTIN_NAMESPACE
    parts = [*namespace.split("."), name]
    return PurePosixPath(*(part.replace("-", "_") for part in parts if part))


def find_template_root(
    template_id: str, roots: Iterable[Path]
) -> tuple[Path, Path] | None:
    """Return the template directory and manifest path under the first matching root."""
    relative = template_path(template_id)
    for root in roots:
        candidate = Path(root) / relative
        manifest = candidate / MANIFEST_NAME
        if manifest.is_file():
            logger.debug(f"Found {template_id} at {candidate}")
            return candidate, manifest
    return None


def implicit_roots() -> list[Path]:
    """Search roots used after the explicit ones: the package root, then sys.path."""
    roots = [PACKAGE_ROOT]
    for entry in sys.path:
        if not entry:
            continue
        path = Path(entry)
        if path.is_dir() and path not in roots:
            roots.append(path)
    return roots


def resolve(
    template_id: str,
    search_roots: Iterable[Path] = (),
    *,
    finder: Finder = find_template_root,
) -> ResolvedTemplate:
    """Locate a template, trying explicit roots before implicit ones.

    Args:
        template_id: Template identifier (``ns/name`` or a bundled name)
        search_roots: Directories searched before the implicit roots
        finder: Search function, ``(template_id, roots) -> (dir, manifest) | None``

    Returns:
        Resolved template location

    Raises:
        TemplateNotFound: if no root holds the template
    """
    explicit = [Path(root) for root in search_roots]
    implicit = implicit_roots()
    found = finder(template_id, explicit) if explicit else None
    if found is None:
        found = finder(template_id, implicit)
    if found is None:
        raise TemplateNotFound(template_id, [*explicit, *implicit])

    root_dir, manifest_path = found
    return ResolvedTemplate(
        template_id=template_id, root_dir=root_dir, manifest_path=manifest_path
    )
