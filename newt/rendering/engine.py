"""Directory transform engine: copies one template directory into a project."""

from __future__ import annotations

import logging
import re
from pathlib import Path, PurePosixPath
from typing import Iterator, Mapping

from ..core.errors import InvalidTargetPath
from ..core.models import DirSpec
from .io import atomic_write_bytes, file_mode
from .substitution import DEFAULT_DELIMS, substitute, substitute_path

logger = logging.getLogger(__name__)

IGNORED_NAMES = [
    re.compile(r".*~$"),
    re.compile(r"^#.*#$"),
    re.compile(r"^\.#.*"),
    re.compile(r"^\.DS_Store$"),
    re.compile(r".*\.py[co]$"),
]
IGNORED_DIRS = frozenset({"__pycache__"})

# Copied verbatim even when the directory is not raw.
NON_REPLACED_EXTS = frozenset(
    {
        ".jpg", ".jpeg", ".png", ".gif", ".bmp", ".ico", ".webp",
        ".pdf", ".zip", ".gz", ".tgz", ".jar", ".whl",
        ".woff", ".woff2", ".ttf", ".otf",
    }
)


def is_ignored(name: str) -> bool:
    return any(pattern.match(name) for pattern in IGNORED_NAMES)


def iter_template_files(src_root: Path) -> Iterator[str]:
    """Yield posix paths, relative to ``src_root``, of every file beneath it."""
    for path in sorted(src_root.rglob("*")):
        relative = path.relative_to(src_root)
        if IGNORED_DIRS.intersection(relative.parts[:-1]):
            continue
        if path.is_file() and not is_ignored(path.name):
            yield relative.as_posix()


def render_file(
    source: Path,
    substitutions: Mapping[str, str],
    delims: tuple[str, str],
    raw: bool,
) -> bytes:
    """Return the bytes to write for one template file."""
    data = source.read_bytes()
    if raw or source.suffix.lower() in NON_REPLACED_EXTS:
        return data
    return substitute(data.decode("utf-8"), substitutions, delims).encode("utf-8")


def file_target(
    path: str, substitutions: Mapping[str, str], delims: tuple[str, str]
) -> PurePosixPath:
    """Render one file path relative to the entry's target directory."""
    rendered = substitute_path(path, substitutions, delims)
    if not rendered.parts:
        raise InvalidTargetPath(path, "renders to an empty file name")
    return rendered


def apply_dir_spec(
    template_dir: Path,
    target_dir: Path,
    spec: DirSpec,
    substitutions: Mapping[str, str],
) -> list[Path]:
    """Copy the files one DirSpec selects from the template into the project.

    Args:
        template_dir: Root directory of the resolved template
        target_dir: Root directory of the project being created
        spec: Directory transform entry
        substitutions: Placeholder substitution map

    Returns:
        Paths written, in copy order

    Raises:
        InvalidTargetPath: if a rendered path is empty or climbs out of
            ``target_dir``
    """
    delims = spec.delims or DEFAULT_DELIMS
    src_root = template_dir / spec.src
    dest_root = target_dir.joinpath(
        *substitute_path(spec.target_path, substitutions, delims).parts
    )
    renames: dict[str, PurePosixPath] = {
        source: file_target(target, substitutions, delims)
        for source, target in (spec.files or {}).items()
    }

    if not src_root.is_dir():
        logger.warning(f"Template directory not found, nothing copied: {src_root}")
        return []

    if spec.files is not None and spec.only:
        candidates = list(spec.files)
    else:
        candidates = list(iter_template_files(src_root))

    written: list[Path] = []
    for relative in candidates:
        source = src_root / relative
        if not source.is_file():
            logger.debug(f"Skipping {relative}: not present in {src_root}")
            continue

        target_relative = renames.get(relative)
        if target_relative is None:
            target_relative = file_target(relative, substitutions, delims)
        output_path = dest_root.joinpath(*target_relative.parts)

        content = render_file(source, substitutions, delims, spec.raw)
        atomic_write_bytes(output_path, content, mode=file_mode(source))
        logger.info(f"Copied {source} → {output_path}")
        written.append(output_path)

    return written
