from __future__ import annotations

import os
import re
from collections.abc import Mapping
from pathlib import Path

import yaml
from expandvars import expandvars
from pydantic import BaseModel, ConfigDict, PrivateAttr, field_validator

ENV_PREFIX = "EXPECTIFY_"
_ENV_FIELDS = ("match", "verbose", "debug", "summary_path", "junit_path", "debug_log")
_ENV_NAMES = {
    "summary_path": "SUMMARY",
    "junit_path": "JUNIT",
}


class RunConfig(BaseModel):
    """Run-time settings shared by every suite of a run.

    ``match`` is a case-insensitive regular expression tested against both
    the test name and the suite type name.
    """

    model_config = ConfigDict(extra="forbid")

    match: str | None = None
    verbose: bool = False
    debug: bool = False
    summary_path: Path | None = None
    junit_path: Path | None = None
    debug_log: Path | None = None

    _pattern: re.Pattern[str] | None = PrivateAttr(default=None)

    @field_validator("match")
    @classmethod
    def match_must_compile(cls, v: str | None) -> str | None:
        if not v:
            return None
        try:
            re.compile(v, re.IGNORECASE)
        except re.error as e:
            raise ValueError(f"invalid match pattern '{v}': {e}") from e
        return v

    def model_post_init(self, __context: object) -> None:
        if self.match:
            self._pattern = re.compile(self.match, re.IGNORECASE)

    @property
    def pattern(self) -> re.Pattern[str] | None:
        return self._pattern

    def selects(self, name: str, type_name: str) -> bool:
        if self._pattern is None:
            return True
        return bool(self._pattern.search(name) or self._pattern.search(type_name))

    def merged(self, **overrides: object) -> RunConfig:
        """Return a validated copy with the non-None overrides applied."""
        values = self.model_dump()
        values.update({k: v for k, v in overrides.items() if v is not None})
        return RunConfig(**values)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> RunConfig:
        """Build a config from ``EXPECTIFY_*`` environment variables."""
        environ = os.environ if environ is None else environ
        values = {}
        for name in _ENV_FIELDS:
            key = ENV_PREFIX + _ENV_NAMES.get(name, name.upper())
            raw = environ.get(key)
            if raw:
                values[name] = raw
        return cls(**values)


def load_config(path: Path) -> RunConfig:
    """Load and validate a run config from a YAML file.

    ``${VAR}`` references are expanded before parsing.  Relative paths are
    resolved against the config file's directory.
    """
    config_dir = path.parent.resolve()

    with open(path) as f:
        raw = yaml.safe_load(expandvars(f.read())) or {}

    config = RunConfig(**raw)

    for name in ("summary_path", "junit_path", "debug_log"):
        value = getattr(config, name)
        if value is not None and not value.is_absolute():
            setattr(config, name, (config_dir / value).resolve())

    return config
