"""Substitution map construction from a creation request."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from ..core.models import CreationRequest
from ..resolution.hooks import DataFn

logger = logging.getLogger(__name__)

_NS_UNSAFE = re.compile(r"[^a-z0-9_.]")
_SCM_HOSTS = ("io.github.", "com.github.")


def split_name(name: str) -> tuple[str, str]:
    """Split a project name into its group and artifact parts.

    ``acme/widget`` -> (``acme``, ``widget``), ``com.acme.widget`` ->
    (``com.acme``, ``widget``) and ``widget`` -> (``widget``, ``widget``).
    """
    name = name.strip()
    if "/" in name:
        group, _, artifact = name.rpartition("/")
        return group, artifact
    if "." in name:
        group, _, artifact = name.rpartition(".")
        return group, artifact
    return name, name


def to_ns(value: str) -> str:
    """Lowercased dotted name made of Python identifier parts."""
    parts = []
    for part in value.lower().split("."):
        part = _NS_UNSAFE.sub("_", part.replace("-", "_"))
        if part and part[0].isdigit():
            part = f"_{part}"
        parts.append(part)
    return ".".join(part for part in parts if part)


def to_file(ns: str) -> str:
    return ns.replace(".", "/")


def _scm(group: str, artifact: str) -> dict[str, str]:
    user = group
    for prefix in _SCM_HOSTS:
        if group.startswith(prefix):
            user = group[len(prefix):]
            break
    return {"scm/user": user, "scm/repo": artifact}


def default_target_dir(request: CreationRequest) -> Path:
    """Target directory used when the request does not name one."""
    if request.target_dir is not None:
        return request.target_dir
    return Path(split_name(request.name)[1])


def build_substitutions(
    request: CreationRequest,
    *,
    template_dir: Path | None = None,
    data_fn: DataFn | None = None,
) -> dict[str, str]:
    """Build the placeholder substitution map for one creation run.

    Args:
        request: Creation request; extra options become placeholders that
            the derived keys take precedence over
        template_dir: Resolved template directory, exposed as ``template-dir``
        data_fn: Optional hook whose result is merged over the base map

    Returns:
        Mapping of placeholder key to rendered string
    """
    group, artifact = split_name(request.name)
    top_ns = to_ns(group)
    main_ns = to_ns(artifact)
    namespace = f"{top_ns}.{main_ns}" if top_ns != main_ns else main_ns

    data: dict[str, str] = {
        str(key): str(value) for key, value in (request.model_extra or {}).items()
    }
    data.update({
        "name": f"{group}/{artifact}",
        "raw-name": request.name,
        "group/id": group,
        "artifact/id": artifact,
        "top": group,
        "top/ns": top_ns,
        "top/file": to_file(top_ns),
        "main": artifact,
        "main/ns": main_ns,
        "main/file": to_file(main_ns),
        "namespace": namespace,
        "namespace/file": to_file(namespace),
        "sanitized": main_ns.replace(".", "_"),
        "description": request.description,
        "developer": request.developer,
        "version": request.version,
        "now/date": request.now.isoformat(),
        "now/year": str(request.now.year),
        "year": str(request.now.year),
        "scm/domain": request.scm_domain,
        "template": request.template,
        "target-dir": str(default_target_dir(request)),
    })
    data.update(_scm(group, artifact))
    if template_dir is not None:
        data["template-dir"] = str(template_dir)

    if data_fn is not None:
        extra = data_fn(dict(data), request)
        logger.debug(f"Data hook added keys: {sorted(extra)}")
        data.update({str(key): str(value) for key, value in extra.items()})

    return data
