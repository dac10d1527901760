"""Domain models for template resolution, manifests and creation requests."""

from __future__ import annotations

import datetime as dt
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class OverwritePolicy(str, Enum):
    """How an existing target directory is handled."""

    NONE = "none"
    OVERWRITE = "true"
    DELETE = "delete"

    @classmethod
    def coerce(cls, value: Any) -> "OverwritePolicy":
        if isinstance(value, cls):
            return value
        if value is None or value is False:
            return cls.NONE
        if value is True:
            return cls.OVERWRITE
        text = str(value).strip().lower().lstrip(":")
        if text in ("", "none", "false", "no", "nil"):
            return cls.NONE
        if text in ("true", "yes", "overwrite"):
            return cls.OVERWRITE
        if text == "delete":
            return cls.DELETE
        raise ValueError(f"Unknown overwrite policy: {value!r}")


class Opt(str, Enum):
    """Option keywords allowed at the tail of a directory transform entry."""

    ONLY = "only"
    RAW = "raw"

    @classmethod
    def parse(cls, value: Any) -> "Opt | None":
        """Return the option a manifest element spells, or None."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str) and value.startswith(":"):
            try:
                return cls(value[1:])
            except ValueError:
                return None
        return None


class DirSpec(BaseModel):
    """One directory to copy from the template into the project."""

    model_config = ConfigDict(frozen=True)

    src: str = Field(..., description="Source directory, relative to the template root")
    target: str | None = Field(
        default=None, description="Target directory, relative to the project root"
    )
    files: dict[str, str] | None = Field(
        default=None, description="Source file to target path renames"
    )
    delims: tuple[str, str] | None = Field(
        default=None, description="Placeholder open/close delimiters"
    )
    opts: frozenset[Opt] = Field(default_factory=frozenset)

    @property
    def target_path(self) -> str:
        return self.src if self.target is None else self.target

    @property
    def only(self) -> bool:
        return Opt.ONLY in self.opts

    @property
    def raw(self) -> bool:
        return Opt.RAW in self.opts


class TemplateManifest(BaseModel):
    """Normalized contents of a template's ``template.yaml``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    root: str = "root"
    description: str | None = None
    data_fn: str | None = Field(default=None, alias="data-fn")
    template_fn: str | None = Field(default=None, alias="template-fn")
    transform: tuple[DirSpec, ...] | None = None


class ResolvedTemplate(BaseModel):
    """Location of a template found on the search path."""

    model_config = ConfigDict(frozen=True)

    template_id: str
    root_dir: Path
    manifest_path: Path


class CreationRequest(BaseModel):
    """Immutable input of a single project creation run.

    Options other than the fields below are kept in ``model_extra`` and
    become placeholders of the same name.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    template: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    src_dirs: tuple[Path, ...] = Field(
        default=(), validation_alias=AliasChoices("src_dirs", "src-dirs")
    )
    target_dir: Path | None = Field(
        default=None, validation_alias=AliasChoices("target_dir", "target-dir")
    )
    overwrite: OverwritePolicy = OverwritePolicy.NONE
    description: str = "FIXME: my new project."
    developer: str = "Unknown"
    version: str = "0.1.0"
    scm_domain: str = "github.com"
    now: dt.date = Field(default_factory=dt.date.today)

    @field_validator("template", "name", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> Any:
        if isinstance(value, Path):
            return str(value)
        return value

    @field_validator("overwrite", mode="before")
    @classmethod
    def _coerce_overwrite(cls, value: Any) -> OverwritePolicy:
        return OverwritePolicy.coerce(value)
