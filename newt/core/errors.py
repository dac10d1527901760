"""Errors raised while creating a project from a template."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable

from pydantic import BaseModel, Field


class Problem(BaseModel):
    """A single manifest field that does not conform to the schema."""

    path: tuple[str | int, ...] = ()
    message: str
    value: Any = None
    attempts: list[str] = Field(default_factory=list)

    @property
    def location(self) -> str:
        text = ""
        for part in self.path:
            text += f"[{part}]" if isinstance(part, int) else f".{part}"
        return text.lstrip(".") or "<manifest>"

    def describe(self) -> str:
        lines = [f"{self.location}: {self.message} (got {self.value!r})"]
        lines.extend(f"  tried {attempt}" for attempt in self.attempts)
        return "\n".join(lines)


class SchemaViolation(ValueError):
    """Raised when a parsed manifest does not match the manifest schema."""

    def __init__(self, problems: Iterable[Problem]) -> None:
        self.problems = list(problems)
        super().__init__(
            "\n".join(problem.describe() for problem in self.problems)
        )


class NewtError(Exception):
    """Base class for fatal project creation errors."""


class TemplateNotFound(NewtError):
    """Raised when no search root contains the requested template."""

    def __init__(self, template_id: str, searched: Iterable[Path] = ()) -> None:
        self.template_id = template_id
        self.searched = list(searched)
        super().__init__(f"Unable to find template.yaml for {template_id}")


class ManifestUnreadable(NewtError):
    """Raised when the manifest file is missing, empty or not valid YAML."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path} could not be read: {reason}")


class ManifestInvalid(NewtError):
    """Raised when the manifest parses but fails schema validation."""

    def __init__(self, path: Path, violation: SchemaViolation) -> None:
        self.path = path
        self.problems = violation.problems
        super().__init__(f"{path} is not a valid template file\n\n{violation}")


class TargetExists(NewtError):
    """Raised when the target directory exists and may not be overwritten."""

    def __init__(self, target_dir: Path) -> None:
        self.target_dir = target_dir
        super().__init__(
            f"{target_dir} already exists (and overwrite was not true)."
        )


class HookNotFound(NewtError):
    """Raised when a manifest names a hook that is not registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"No template hook registered under {name!r}")


class InvalidTargetPath(NewtError):
    """Raised when a rendered target path cannot be written inside the project."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Target path {path!r} {reason}")
