"""Reading template manifests from disk."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from ..core.errors import ManifestInvalid, ManifestUnreadable, SchemaViolation
from ..core.models import TemplateManifest
from .schema import conform

logger = logging.getLogger(__name__)

MANIFEST_NAME = "template.yaml"

_MERGE_TAG = "tag:yaml.org,2002:merge"


class UniqueKeyLoader(yaml.SafeLoader):
    """SafeLoader that rejects a mapping naming the same key twice."""

    def construct_mapping(self, node, deep=False):
        if isinstance(node, yaml.MappingNode):
            seen = set()
            for key_node, _ in node.value:
                if key_node.tag == _MERGE_TAG:
                    continue
                key = self.construct_object(key_node, deep=deep)
                try:
                    duplicate = key in seen
                except TypeError:
                    # Unhashable keys are reported by SafeLoader itself.
                    continue
                if duplicate:
                    raise yaml.constructor.ConstructorError(
                        "while constructing a mapping",
                        node.start_mark,
                        f"found duplicate key {key!r}",
                        key_node.start_mark,
                    )
                seen.add(key)
        return super().construct_mapping(node, deep=deep)


def read_manifest(path: Path) -> Any:
    """Parse a manifest file without validating it.

    Raises:
        ManifestUnreadable: if the file cannot be read or is not YAML
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestUnreadable(path, str(e)) from e

    try:
        data = yaml.load(text, Loader=UniqueKeyLoader)
    except yaml.YAMLError as e:
        raise ManifestUnreadable(path, f"invalid YAML: {e}") from e

    if data is None:
        raise ManifestUnreadable(path, "file is empty")
    return data


def load_manifest(path: Path) -> TemplateManifest:
    """Read and validate a template manifest.

    Args:
        path: Path to ``template.yaml``

    Returns:
        Normalized manifest with defaults applied

    Raises:
        ManifestUnreadable: if the file is not valid YAML
        ManifestInvalid: if the content does not match the schema
    """
    logger.debug(f"Loading manifest: {path}")
    data = read_manifest(path)
    try:
        return conform(data)
    except SchemaViolation as e:
        raise ManifestInvalid(path, e) from e
