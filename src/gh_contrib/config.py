"""Settings and GitHub CLI config file lookup."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

import yaml

logger = logging.getLogger(__name__)

DEFAULT_ORG = "github"
DEFAULT_MODEL = "gpt-4o"
EXTENSION_NAME = "gh-contrib"
CONFIG_PATH_ENV = "GH_CONFIG_PATH"


class ConfigSource(Protocol):
    def org(self) -> str | None: ...

    def model(self) -> str | None: ...


def default_config_path() -> Path:
    override = os.environ.get(CONFIG_PATH_ENV)
    if override:
        return Path(override)
    return Path.home() / ".config" / "gh" / "config.yml"


class GhConfigFile:
    """Reads ``extensions.gh-contrib`` from the GitHub CLI config file."""

    def __init__(self, path: Path | str | None = None) -> None:
        self._path = Path(path) if path is not None else default_config_path()
        self._section: dict | None = None

    def _extension_section(self) -> dict:
        if self._section is not None:
            return self._section
        self._section = {}
        try:
            data = yaml.safe_load(self._path.read_text(encoding="utf-8"))
        except OSError as exc:
            logger.debug("Could not read config file %s: %s", self._path, exc)
            return self._section
        except yaml.YAMLError as exc:
            logger.debug("Could not parse config file %s: %s", self._path, exc)
            return self._section
        extensions = data.get("extensions") if isinstance(data, dict) else None
        section = extensions.get(EXTENSION_NAME) if isinstance(extensions, dict) else None
        if isinstance(section, dict):
            self._section = section
        return self._section

    def _value(self, key: str) -> str | None:
        value = self._extension_section().get(key)
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    def org(self) -> str | None:
        return self._value("org")

    def model(self) -> str | None:
        return self._value("model")


def resolve_org(flag: str | None, source: ConfigSource) -> str:
    """--org flag, then the config file, then ``DEFAULT_ORG``."""
    if flag:
        return flag
    return source.org() or DEFAULT_ORG


def resolve_model(flag: str | None, source: ConfigSource) -> str:
    """--model flag, then the config file, then ``DEFAULT_MODEL``."""
    if flag:
        return flag
    return source.model() or DEFAULT_MODEL


@dataclass(frozen=True)
class Settings:
    org: str = DEFAULT_ORG
    model: str = DEFAULT_MODEL
    since: str = ""
    debug: bool = False
    body_only: bool = False

    @classmethod
    def resolve(
        cls,
        source: ConfigSource,
        *,
        org: str | None = None,
        model: str | None = None,
        since: str = "",
        debug: bool = False,
        body_only: bool = False,
    ) -> Settings:
        return cls(
            org=resolve_org(org, source),
            model=resolve_model(model, source),
            since=since,
            debug=debug,
            body_only=body_only,
        )
