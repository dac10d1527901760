"""Pytest fixtures for newt tests."""

import datetime as dt
from pathlib import Path
from typing import Callable

import pytest
import yaml

from newt.core.models import CreationRequest

TemplateFactory = Callable[..., Path]


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep NEWT_* variables from the developer's shell out of the tests."""
    for var in ("NEWT_SRC_DIRS", "NEWT_VERSION", "NEWT_DESCRIPTION", "NEWT_SCM_DOMAIN"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("NEWT_DEVELOPER", "Tester")


@pytest.fixture
def templates_root(tmp_path: Path) -> Path:
    """Search root holding test templates."""
    root = tmp_path / "templates"
    root.mkdir()
    return root


@pytest.fixture
def make_template(templates_root: Path) -> TemplateFactory:
    """Write a template under ``templates_root`` and return its directory.

    ``manifest`` is dumped as YAML unless it is already a string;
    ``files`` maps template-relative paths to text or bytes.
    """

    def factory(
        template_id: str = "acme/app",
        manifest: dict | str | None = None,
        files: dict[str, str | bytes] | None = None,
    ) -> Path:
        template_dir = templates_root.joinpath(*template_id.replace(".", "/").split("/"))
        template_dir.mkdir(parents=True, exist_ok=True)
        text = manifest if isinstance(manifest, str) else yaml.safe_dump(manifest or {})
        (template_dir / "template.yaml").write_text(text, encoding="utf-8")
        for relative, content in (files or {}).items():
            path = template_dir / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                path.write_bytes(content)
            else:
                path.write_text(content, encoding="utf-8")
        return template_dir

    return factory


@pytest.fixture
def request_factory() -> Callable[..., CreationRequest]:
    """Build CreationRequests with fixed ancillary values."""

    def factory(**overrides) -> CreationRequest:
        values = {
            "template": "acme/app",
            "name": "acme/widget",
            "developer": "Tester",
            "now": dt.date(2024, 5, 17),
        }
        values.update(overrides)
        return CreationRequest(**values)

    return factory


def read_tree(root: Path) -> dict[str, str]:
    """Map relative posix path to text for every file under ``root``."""
    return {
        path.relative_to(root).as_posix(): path.read_text(encoding="utf-8")
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }
