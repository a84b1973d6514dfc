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
Data models for format, encryption and identity results.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

PathLike = Union[str, os.PathLike]


class FormatKind(str, Enum):
    """Container format derived from the leading byte signature."""

    OLE2 = "OLE2"
    PDF = "PDF"
    ZIP = "ZIP"
    UNKNOWN = "UNKNOWN"


class EncryptionStatus(str, Enum):
    """Outcome of an encryption check."""

    ENCRYPTED = "ENCRYPTED"
    NOT_ENCRYPTED = "NOT_ENCRYPTED"
    # Container could not be opened for a reason unrelated to encryption
    INDETERMINATE = "INDETERMINATE"


@dataclass(frozen=True)
class EncryptionResult:
    """Encryption status plus a human-readable reason.

    ``diagnostic`` is set whenever the status was reached through a soft
    failure (missing file, corrupt container, unrecognized format).
    """

    status: EncryptionStatus
    diagnostic: str | None = None

    @property
    def encrypted(self) -> bool:
        return self.status is EncryptionStatus.ENCRYPTED

    @property
    def indeterminate(self) -> bool:
        return self.status is EncryptionStatus.INDETERMINATE

    def collapse(self, strict: bool = False) -> bool:
        """Reduce to a bool for callers that only want yes/no.

        Args:
            strict: Value returned for ``INDETERMINATE``. ``False`` matches the
                    historical lenient behavior.
        """
        if self.status is EncryptionStatus.INDETERMINATE:
            return strict
        return self.encrypted

    def to_dict(self) -> dict[str, Any]:
        return {"status": self.status.value, "diagnostic": self.diagnostic}


@dataclass
class ProbeReport:
    """Everything docprobe derives for a single file."""

    path: str
    format_kind: FormatKind
    identifier: str | None
    size_bytes: int = 0
    extension: str = ""
    has_empty_zip_entry: bool = False
    # None when the format is not an office container candidate
    encryption: EncryptionResult | None = None
    parent_identifier: str | None = None
    root_identifier: str | None = None
    # Ancestor archive paths, outermost first
    lineage: list[str] = field(default_factory=list)

    @property
    def is_encrypted(self) -> bool:
        return self.encryption is not None and self.encryption.encrypted

    @property
    def is_nested(self) -> bool:
        return bool(self.lineage)

    def to_dict(self) -> dict[str, Any]:
        """Convert report to dictionary."""
        return {
            "path": self.path,
            "format": self.format_kind.value,
            "identifier": self.identifier,
            "size_bytes": self.size_bytes,
            "extension": self.extension,
            "has_empty_zip_entry": self.has_empty_zip_entry,
            "encryption": self.encryption.to_dict() if self.encryption else None,
            "parent_identifier": self.parent_identifier,
            "root_identifier": self.root_identifier,
            "lineage": list(self.lineage),
        }
