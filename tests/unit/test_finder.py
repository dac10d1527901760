"""Template resolution tests."""

from pathlib import Path, PurePosixPath

import pytest

from newt.core.errors import TemplateNotFound
from newt.resolution.finder import PACKAGE_ROOT, implicit_roots, resolve, template_path


@pytest.mark.parametrize(
    ("template_id", "expected"),
    [
        ("acme/app", "acme/app"),
        ("acme.templates/my-app", "acme/templates/my_app"),
        ("app", "newt/templates/app"),
    ],
)
def test_template_path(template_id, expected):
    assert template_path(template_id) == PurePosixPath(expected)


def test_resolves_from_explicit_root(make_template, templates_root: Path):
    template_dir = make_template("acme.templates/service")
    resolved = resolve("acme.templates/service", [templates_root])
    assert resolved.root_dir == template_dir
    assert resolved.manifest_path == template_dir / "template.yaml"


def test_explicit_roots_win_over_bundled(make_template, templates_root: Path):
    template_dir = make_template("newt.templates/app")
    resolved = resolve("app", [templates_root])
    assert resolved.root_dir == template_dir


def test_falls_back_to_bundled_templates(tmp_path: Path):
    resolved = resolve("app", [tmp_path])
    assert resolved.root_dir == PACKAGE_ROOT / "newt" / "templates" / "app"


def test_not_found_names_template(tmp_path: Path):
    with pytest.raises(TemplateNotFound) as exc_info:
        resolve("acme/missing", [tmp_path])
    assert "acme/missing" in str(exc_info.value)
    assert tmp_path in exc_info.value.searched


def test_uses_given_finder(tmp_path: Path):
    calls = []

    def finder(template_id, roots):
        calls.append((template_id, list(roots)))
        return tmp_path, tmp_path / "template.yaml"

    resolved = resolve("acme/app", [tmp_path], finder=finder)
    assert resolved.root_dir == tmp_path
    assert calls == [("acme/app", [tmp_path])]


def test_implicit_roots_start_with_package_root():
    assert implicit_roots()[0] == PACKAGE_ROOT
