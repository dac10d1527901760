from __future__ import annotations

import getpass
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class NewtSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="NEWT_", case_sensitive=False)

    src_dirs: list[Path] = []
    developer: str | None = None
    version: str = "0.1.0"
    description: str = "FIXME: my new project."
    scm_domain: str = "github.com"

    def developer_name(self) -> str:
        if self.developer:
            return self.developer
        try:
            return getpass.getuser().capitalize()
        except (KeyError, OSError):
            return "Unknown"
