"""Placeholder substitution in file contents and paths."""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import PurePosixPath
from typing import Mapping

from ..core.errors import InvalidTargetPath

DEFAULT_DELIMS: tuple[str, str] = ("{{", "}}")


@lru_cache(maxsize=64)
def _pattern(keys: tuple[str, ...], open_: str, close: str) -> re.Pattern[str]:
    # Longest keys first so ``main/ns`` is not shadowed by ``main``.
    alternatives = "|".join(re.escape(key) for key in sorted(keys, key=len, reverse=True))
    return re.compile(f"{re.escape(open_)}({alternatives}){re.escape(close)}")


def substitute(
    text: str,
    substitutions: Mapping[str, str],
    delims: tuple[str, str] = DEFAULT_DELIMS,
) -> str:
    """Replace ``<open>key<close>`` for every key in ``substitutions``.

    Placeholders naming unknown keys are left as they are. Replacement
    values are not themselves rescanned.
    """
    if not substitutions:
        return text
    open_, close = delims
    pattern = _pattern(tuple(substitutions), open_, close)
    return pattern.sub(lambda match: substitutions[match.group(1)], text)


def substitute_path(
    path: str,
    substitutions: Mapping[str, str],
    delims: tuple[str, str] = DEFAULT_DELIMS,
) -> PurePosixPath:
    """Substitute placeholders in a relative path.

    A value containing ``/`` expands into nested directories. An absolute
    result is made relative.

    Raises:
        InvalidTargetPath: if the result contains a ``..`` component
    """
    rendered = PurePosixPath(substitute(path, substitutions, delims))
    if rendered.is_absolute():
        rendered = rendered.relative_to(rendered.anchor)
    if ".." in rendered.parts:
        raise InvalidTargetPath(path, f"renders to {rendered}, outside the project directory")
    return rendered
