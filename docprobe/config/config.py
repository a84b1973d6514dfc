# Copyright 2026 Cisco Systems, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0

"""
Configuration class for docprobe.

Values come from, in increasing precedence: built-in defaults, a YAML file
passed to :meth:`Config.from_yaml`, explicit constructor arguments, and
``DOCPROBE_*`` environment variables for fields still at their default.
"""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from ..core.exceptions import ConfigurationError
from .constants import DocProbeConstants


def _env(name: str) -> str | None:
    return os.getenv(DocProbeConstants.ENV_PREFIX + name)


def _env_flag(name: str) -> bool | None:
    value = _env(name)
    if value is None:
        return None
    return value.strip().lower() in ("true", "1", "yes")


@dataclass
class Config:
    """
    Configuration for docprobe.
    """

    # Lineage naming convention
    unpacked_suffix: str = DocProbeConstants.UNPACKED_SUFFIX

    # Name hygiene
    max_name_length: int = DocProbeConstants.MAX_NAME_LENGTH

    # Encryption detection
    default_password: str = DocProbeConstants.DEFAULT_OFFICE_PASSWORD
    # Treat INDETERMINATE as encrypted when collapsing to a bool
    strict_encryption: bool = False

    # Directory walking
    follow_symlinks: bool = False
    skip_hidden: bool = True

    def __post_init__(self):
        """Load configuration from environment variables if not overridden."""

        if self.unpacked_suffix == DocProbeConstants.UNPACKED_SUFFIX:
            if env_suffix := _env("UNPACKED_SUFFIX"):
                self.unpacked_suffix = env_suffix

        if self.max_name_length == DocProbeConstants.MAX_NAME_LENGTH:
            if env_length := _env("MAX_NAME_LENGTH"):
                try:
                    self.max_name_length = int(env_length)
                except ValueError as e:
                    raise ConfigurationError(f"DOCPROBE_MAX_NAME_LENGTH is not an integer: {env_length!r}") from e

        if self.default_password == DocProbeConstants.DEFAULT_OFFICE_PASSWORD:
            if env_password := _env("DEFAULT_PASSWORD"):
                self.default_password = env_password

        if not self.strict_encryption and _env_flag("STRICT_ENCRYPTION"):
            self.strict_encryption = True

        if not self.follow_symlinks and _env_flag("FOLLOW_SYMLINKS"):
            self.follow_symlinks = True

        if self.skip_hidden and _env_flag("SKIP_HIDDEN") is False:
            self.skip_hidden = False

        self._validate()

    def _validate(self) -> None:
        if not self.unpacked_suffix:
            raise ConfigurationError("unpacked_suffix must not be empty")
        if any(sep and sep in self.unpacked_suffix for sep in (os.sep, os.altsep)):
            raise ConfigurationError(f"unpacked_suffix must not contain a path separator: {self.unpacked_suffix!r}")
        if self.max_name_length <= 0:
            raise ConfigurationError(f"max_name_length must be positive, got {self.max_name_length}")

    @classmethod
    def from_env(cls) -> Config:
        """
        Create configuration from environment variables.

        Returns:
            Config instance with values from environment
        """
        return cls()

    @classmethod
    def from_file(cls, config_file: Path) -> Config:
        """
        Load configuration from a .env file.

        Args:
            config_file: Path to .env file

        Returns:
            Config instance
        """
        if config_file.exists():
            load_dotenv(config_file, override=True)

        return cls.from_env()

    @classmethod
    def from_yaml(cls, path: str | Path) -> Config:
        """
        Load configuration from a YAML mapping of field names to values.

        Raises:
            ConfigurationError: missing file, invalid YAML, unknown keys or
                values of the wrong type
        """
        path = Path(path)
        if not path.exists():
            raise ConfigurationError(f"Config file not found: {path}")

        try:
            with open(path) as fh:
                raw: Any = yaml.safe_load(fh) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Cannot read config file {path}: {e}") from e

        if not isinstance(raw, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping")

        return cls._from_dict(raw, source=str(path))

    @classmethod
    def _from_dict(cls, raw: dict[str, Any], source: str = "<dict>") -> Config:
        defaults = {f.name: f.default for f in fields(cls)}

        unknown = sorted(set(raw) - set(defaults))
        if unknown:
            raise ConfigurationError(f"Unknown config keys in {source}: {', '.join(unknown)}")

        for key, value in raw.items():
            expected = type(defaults[key])
            # bool is an int subclass; keep the two apart
            if type(value) is not expected:
                raise ConfigurationError(
                    f"Config key {key!r} in {source} must be {expected.__name__}, got {type(value).__name__}"
                )

        return cls(**raw)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def to_yaml(self, path: str | Path) -> None:
        """Dump the configuration to a YAML file for editing."""
        data = self.to_dict()
        with open(path, "w") as fh:
            fh.write("# docprobe configuration\n")
            yaml.dump(data, fh, default_flow_style=False, sort_keys=False)
