"""CLI tests."""

from pathlib import Path

import pytest
import typer
from typer.testing import CliRunner

from newt.cli.app import app
from newt.cli.parsers import parse_assignments, parse_overwrite
from newt.core.models import OverwritePolicy

runner = CliRunner()


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_create_with_src_dir(make_template, templates_root, workdir):
    make_template("acme/app", {"root": "root"}, {"root/hello.txt": "hi {{name}}\n"})
    result = runner.invoke(
        app,
        [
            "create",
            "--template", "acme/app",
            "--name", "acme/widget",
            "--src-dir", str(templates_root),
            "--target-dir", "out",
        ],
    )
    assert result.exit_code == 0, result.output
    assert "Creating project from acme/app in out" in result.output
    assert (workdir / "out" / "hello.txt").read_text() == "hi acme/widget\n"


def test_set_adds_placeholders(make_template, templates_root, workdir):
    make_template("acme/app", {"root": "root"}, {"root/LICENSE": "{{license}} {{holder}}\n"})
    result = runner.invoke(
        app,
        [
            "create",
            "--template", "acme/app",
            "--name", "acme/widget",
            "--src-dir", str(templates_root),
            "--set", "license=MIT",
            "--set", "holder=Ada Lovelace",
        ],
    )
    assert result.exit_code == 0, result.output
    assert (workdir / "widget" / "LICENSE").read_text() == "MIT Ada Lovelace\n"


def test_malformed_set_is_rejected(workdir):
    result = runner.invoke(app, ["scratch", "--name", "acme/widget", "--set", "license"])
    assert result.exit_code != 0
    assert not (workdir / "widget").exists()


def test_app_command(workdir):
    result = runner.invoke(app, ["app", "--name", "acme/widget"])
    assert result.exit_code == 0, result.output
    assert (workdir / "widget" / "src" / "widget" / "__main__.py").is_file()


def test_existing_target_exits_non_zero(workdir):
    (workdir / "widget").mkdir()
    result = runner.invoke(app, ["lib", "--name", "acme/widget"])
    assert result.exit_code == 1
    assert "already exists" in result.output


def test_overwrite_delete(workdir):
    (workdir / "widget").mkdir()
    (workdir / "widget" / "stale.txt").write_text("x")
    result = runner.invoke(app, ["scratch", "--name", "acme/widget", "--overwrite", "delete"])
    assert result.exit_code == 0, result.output
    assert "Deleting old widget" in result.output
    assert not (workdir / "widget" / "stale.txt").exists()


def test_pyproject_defaults_to_overwrite(workdir):
    result = runner.invoke(app, ["pyproject", "--name", "acme/widget"])
    assert result.exit_code == 0, result.output
    assert (workdir / "pyproject.toml").is_file()


def test_unknown_template(workdir):
    result = runner.invoke(app, ["create", "--template", "acme/nope", "--name", "acme/widget"])
    assert result.exit_code == 1
    assert "acme/nope" in result.output


def test_bad_overwrite_value(workdir):
    result = runner.invoke(app, ["app", "--name", "acme/widget", "--overwrite", "maybe"])
    assert result.exit_code != 0
    assert not (workdir / "widget").exists()


def test_parse_overwrite():
    assert parse_overwrite("true") is OverwritePolicy.OVERWRITE
    with pytest.raises(typer.BadParameter):
        parse_overwrite("maybe")


def test_parse_assignments():
    assert parse_assignments(["a=1", "b=x=y", "c="]) == {"a": "1", "b": "x=y", "c": ""}
    assert parse_assignments(None) == {}
    with pytest.raises(typer.BadParameter):
        parse_assignments(["=value"])
