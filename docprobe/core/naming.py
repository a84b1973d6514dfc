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
File name and path hygiene.

Names produced here are safe on Windows as well as POSIX file systems, which
matters because unpacked directory names are derived from archive names and
must round-trip through the lineage naming convention.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

from ..config.constants import DocProbeConstants
from .models import PathLike

logger = logging.getLogger(__name__)

_FORBIDDEN_CHARS_RE = re.compile("[" + re.escape(DocProbeConstants.FORBIDDEN_NAME_CHARACTERS) + "]")
_CONTROL_CHARS_RE = re.compile(r"[\x00-\x1f\x7f]")


def sanitize_name(name: str | None, max_length: int = DocProbeConstants.MAX_NAME_LENGTH) -> str:
    """
    Make a single file name safe to create on any common file system.

    Steps, in order:
    1. Replace each of ``\\ / : * ? " < > |`` with ``_``
    2. Prefix ``_`` to reserved device names (CON, PRN, AUX, NUL, COM1-9, LPT1-9)
    3. Truncate to ``max_length`` characters
    4. Remove control characters, then strip surrounding whitespace

    Args:
        name: Raw file name (one path component)
        max_length: Maximum length kept in step 3

    Returns:
        The sanitized name; ``""`` for None
    """
    if name is None:
        return ""

    cleaned = _FORBIDDEN_CHARS_RE.sub("_", name)

    if cleaned.upper() in DocProbeConstants.RESERVED_DEVICE_NAMES:
        cleaned = "_" + cleaned

    if len(cleaned) > max_length:
        cleaned = cleaned[:max_length]

    return _CONTROL_CHARS_RE.sub("", cleaned).strip()


def sanitize_path(path: PathLike | None) -> Path | None:
    """Sanitize every component of a path, keeping its root or drive."""
    if path is None:
        return None

    original = Path(path)
    parts = original.parts
    if original.anchor:
        sanitized = Path(original.anchor)
        parts = parts[1:]
    else:
        sanitized = Path()

    for part in parts:
        sanitized = sanitized / sanitize_name(part)
    return sanitized


def _split_extension(name: str) -> tuple[str, str]:
    """Split at the last dot; the extension keeps its dot."""
    dot = name.rfind(".")
    if dot == -1:
        return name, ""
    return name[:dot], name[dot:]


def resolve_duplicate_name(directory: PathLike, name: str) -> str:
    """
    Pick a name that does not exist yet in ``directory``.

    Returns ``name`` unchanged when it is free, otherwise the first free
    ``base(1)ext``, ``base(2)ext``, ... The check-then-create pattern is only
    safe for a single writer per directory.

    Args:
        directory: Directory the name will be created in
        name: Desired file name

    Returns:
        A file name with no existing entry in ``directory``
    """
    if directory is None or not name:
        logger.warning("Cannot resolve duplicate name %r in %r", name, directory)
        return name or ""

    folder = Path(directory)
    if not os.path.lexists(folder / name):
        return name

    base, ext = _split_extension(name)
    count = 1
    while True:
        candidate = f"{base}({count}){ext}"
        if not os.path.lexists(folder / candidate):
            logger.debug("Resolved duplicate %s -> %s in %s", name, candidate, folder)
            return candidate
        count += 1


def resolve_duplicate_path(directory: PathLike, name: str) -> Path:
    """Like :func:`resolve_duplicate_name` but returns the full path."""
    return Path(directory) / resolve_duplicate_name(directory, name)


def file_extension(path: PathLike | None) -> str:
    """
    Lower-case extension of a file name, without the dot.

    Returns ``""`` when there is no dot, the only dot is the first character
    (``.bashrc``) or the name ends with a dot.
    """
    if path is None:
        return ""
    name = Path(path).name
    dot = name.rfind(".")
    if 0 < dot < len(name) - 1:
        return name[dot + 1 :].lower()
    return ""


def folder_size(path: PathLike | None) -> int:
    """
    Total size in bytes of all regular files below ``path``.

    Recurses depth first without cycle detection, so symlink loops must be
    prevented by the caller. Returns 0 for anything that is not a directory.
    """
    if path is None:
        return 0
    folder = Path(path)
    if not folder.is_dir():
        return 0

    total = 0
    try:
        with os.scandir(folder) as entries:
            for entry in entries:
                try:
                    if entry.is_file():
                        total += entry.stat().st_size
                    else:
                        total += folder_size(entry.path)
                except OSError as e:
                    logger.warning("Skipping %s while sizing %s: %s", entry.path, folder, e)
    except OSError as e:
        logger.warning("Cannot list %s: %s", folder, e)
    return total
