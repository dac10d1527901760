"""Named hooks that templates reference from ``data-fn`` and ``template-fn``.

A ``data-fn`` is called as ``fn(substitutions, request)`` and returns a
mapping merged over the substitutions. A ``template-fn`` is called as
``fn(request)`` and returns a (possibly updated) CreationRequest.

Hooks come from the bundled table below, from hooks passed explicitly to
``create``, and from installed distributions declaring entry points in
the ``newt.hooks`` group.
"""

from __future__ import annotations

import logging
from importlib.metadata import entry_points
from pathlib import Path
from typing import Any, Callable, Mapping

from ..core.errors import HookNotFound
from ..core.models import CreationRequest

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "newt.hooks"

DataFn = Callable[[Mapping[str, str], CreationRequest], Mapping[str, Any]]
TemplateFn = Callable[[CreationRequest], CreationRequest]


def current_dir_target(request: CreationRequest) -> CreationRequest:
    """Write into the current directory unless a target was given."""
    if request.target_dir is not None:
        return request
    return request.model_copy(update={"target_dir": Path(".")})


def template_data(
    substitutions: Mapping[str, str], request: CreationRequest
) -> dict[str, str]:
    """Identifier and path of a template generated by the ``template`` archetype."""
    return {
        "template/id": f"{substitutions['top/ns']}/{substitutions['main/ns']}",
        "template/path": f"{substitutions['top/file']}/{substitutions['main/file']}",
    }


BUILTIN_HOOKS: Mapping[str, Callable[..., Any]] = {
    "newt/current-dir-target": current_dir_target,
    "newt/template-data": template_data,
}


def resolve_hook(
    name: str, extra: Mapping[str, Callable[..., Any]] | None = None
) -> Callable[..., Any]:
    """Look up a hook by name.

    Explicit hooks win over bundled ones, which win over entry points.

    Raises:
        HookNotFound: if nothing is registered under ``name``
    """
    if extra and name in extra:
        return extra[name]
    if name in BUILTIN_HOOKS:
        return BUILTIN_HOOKS[name]

    for entry_point in entry_points(group=ENTRY_POINT_GROUP):
        if entry_point.name == name:
            logger.debug(f"Loading hook {name} from {entry_point.value}")
            return entry_point.load()

    raise HookNotFound(name)
