"""Project creation entry points.

Each function takes a mapping of options (or keyword arguments):

- ``template``: template identifier (``create`` only)
- ``name``: project name, e.g. ``acme/widget``
- ``src_dirs``: directories searched for the template before the
  installed ones
- ``target_dir``: directory to create, defaults to the artifact part of
  ``name``
- ``overwrite``: ``None``/``False`` refuses an existing target, ``True``
  writes into it, ``"delete"`` removes it first
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Any, Callable, Mapping

from .context.substitutions import build_substitutions, default_target_dir
from .core.errors import NewtError
from .core.models import CreationRequest, DirSpec
from .core.overwrite import prepare_target
from .core.settings import NewtSettings
from .manifest.loader import load_manifest
from .rendering.engine import apply_dir_spec
from .resolution.finder import Finder, find_template_root, resolve
from .resolution.hooks import resolve_hook

logger = logging.getLogger(__name__)

Options = Mapping[str, Any]


def _field_key(key: str) -> str:
    # Only field names are normalized; extra options are placeholder keys.
    normalized = key.replace("-", "_")
    return normalized if normalized in CreationRequest.model_fields else key


def build_request(
    options: Options, settings: NewtSettings | None = None
) -> CreationRequest:
    """Create a CreationRequest from user options, filling defaults from settings."""
    settings = settings or NewtSettings()
    values = {
        _field_key(str(key)): value
        for key, value in options.items()
        if value is not None
    }

    src_dirs = [Path(path) for path in values.pop("src_dirs", ())]
    src_dirs.extend(settings.src_dirs)

    values.setdefault("description", settings.description)
    values.setdefault("developer", settings.developer_name())
    values.setdefault("version", settings.version)
    values.setdefault("scm_domain", settings.scm_domain)
    return CreationRequest(src_dirs=tuple(src_dirs), **values)


def _merge(options: Options | None, overrides: Options) -> dict[str, Any]:
    merged = dict(options or {})
    merged.update(overrides)
    return merged


def create(
    options: Options | CreationRequest | None = None,
    *,
    hooks: Mapping[str, Callable[..., Any]] | None = None,
    finder: Finder = find_template_root,
    delete_tree: Callable[[Path], None] = shutil.rmtree,
    **kwargs: Any,
) -> Path:
    """Create a new project from a template.

    Args:
        options: Creation options, or a prepared CreationRequest
        hooks: Extra named hooks available to the template's manifest
        finder: Template search function
        delete_tree: Function removing a directory tree
        **kwargs: Creation options, merged over ``options``

    Returns:
        The project directory

    Raises:
        TemplateNotFound: if the template cannot be located
        ManifestUnreadable: if ``template.yaml`` is not valid YAML
        ManifestInvalid: if ``template.yaml`` does not match the schema
        TargetExists: if the target exists and overwrite is not set
        HookNotFound: if the manifest names an unknown hook
        InvalidTargetPath: if a rendered path is empty or leaves the project
    """
    if isinstance(options, CreationRequest):
        request = CreationRequest.model_validate({**options.model_dump(), **kwargs})
    else:
        request = build_request(_merge(options, kwargs))

    resolved = resolve(request.template, request.src_dirs, finder=finder)
    manifest = load_manifest(resolved.manifest_path)

    if manifest.template_fn:
        request = resolve_hook(manifest.template_fn, hooks)(request)
        if not isinstance(request, CreationRequest):
            raise NewtError(
                f"Hook {manifest.template_fn} did not return a CreationRequest"
            )

    data_fn = resolve_hook(manifest.data_fn, hooks) if manifest.data_fn else None
    substitutions = build_substitutions(
        request, template_dir=resolved.root_dir, data_fn=data_fn
    )
    target_dir = default_target_dir(request)

    prepare_target(target_dir, request.overwrite, delete_tree=delete_tree)

    print(f"Creating project from {request.template} in {target_dir}")

    specs = [DirSpec(src=manifest.root, target=""), *(manifest.transform or ())]
    written = 0
    for spec in specs:
        written += len(
            apply_dir_spec(resolved.root_dir, target_dir, spec, substitutions)
        )

    logger.info(f"Created {written} file(s) in {target_dir}")
    return target_dir


def app(options: Options | None = None, **kwargs: Any) -> Path:
    """Create an application project."""
    return create(_merge(options, kwargs), template="app")


def lib(options: Options | None = None, **kwargs: Any) -> Path:
    """Create a library project."""
    return create(_merge(options, kwargs), template="lib")


def scratch(options: Options | None = None, **kwargs: Any) -> Path:
    """Create a minimal scratch project."""
    return create(_merge(options, kwargs), template="scratch")


def template(options: Options | None = None, **kwargs: Any) -> Path:
    """Create a project that is itself a newt template."""
    return create(_merge(options, kwargs), template="template")


def pyproject(options: Options | None = None, **kwargs: Any) -> Path:
    """Create just a ``pyproject.toml``.

    ``overwrite`` defaults to true since this writes into an existing
    directory.
    """
    merged = _merge({"overwrite": True}, _merge(options, kwargs))
    return create(merged, template="pyproject")
