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
Short, URL-safe identifiers for files.

Path identifiers address a file by its absolute path string, not by its
bytes: the same path always yields the same 22-character id on any machine,
whether or not the file still exists.
"""

from __future__ import annotations

import base64
import hashlib
import logging
import uuid
from pathlib import Path

from ..config.constants import DocProbeConstants
from .models import PathLike

logger = logging.getLogger(__name__)


def _urlsafe_b64(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def path_identifier(absolute_path: str | None) -> str | None:
    """
    Derive the identifier of an absolute path string.

    SHA-256 of the UTF-8 bytes, URL-safe base64 without padding, first 22
    characters.

    Args:
        absolute_path: Absolute path as a string; used verbatim

    Returns:
        22-character identifier, or None if the input is not a usable string
    """
    if not isinstance(absolute_path, str):
        logger.error("Cannot derive identifier from %r", absolute_path)
        return None

    try:
        digest = hashlib.sha256(absolute_path.encode("utf-8")).digest()
    except UnicodeEncodeError as e:
        logger.error("Cannot encode path for identifier %r: %s", absolute_path, e)
        return None

    encoded = _urlsafe_b64(digest)
    length = DocProbeConstants.IDENTIFIER_LENGTH
    return encoded[:length] if len(encoded) >= length else encoded


def file_identifier(file_path: PathLike | None) -> str | None:
    """
    Derive the identifier of a file from its absolute path.

    Relative paths are made absolute against the working directory. Symlinks
    are not resolved and the file does not need to exist.
    """
    if file_path is None:
        logger.error("Cannot derive identifier: no file given")
        return None
    try:
        absolute = str(Path(file_path).absolute())
    except (TypeError, OSError) as e:
        logger.error("Cannot derive identifier from %r: %s", file_path, e)
        return None
    return path_identifier(absolute)


def random_identifier() -> str:
    """Fresh 22-character token from a random UUID.

    Never meant to be compared with path identifiers.
    """
    return _urlsafe_b64(uuid.uuid4().bytes)
