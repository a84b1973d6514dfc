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
Archive lineage from the ``<archive>_unpacked`` directory naming convention.

The unpacker extracts ``/data/a.zip`` into ``/data/a.zip_unpacked/``; a nested
``b.zip`` found there goes to ``/data/a.zip_unpacked/b.zip_unpacked/`` and so
on. Given the path of any extracted file, the archives it came from are
recovered from the path alone:

    /data/a.zip_unpacked/b.zip_unpacked/c.txt
        immediate parent -> /data/a.zip_unpacked/b.zip
        root ancestor    -> /data/a.zip

Only directory components are inspected, and only those whose whole name
ends with the marker. A file called ``report_unpacked_final.txt`` carries no
lineage. The file system is never consulted, so lineage survives deletion of
the original archives.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

from ..config.constants import DocProbeConstants
from .identity import path_identifier
from .models import PathLike
from .naming import sanitize_name

logger = logging.getLogger(__name__)

_SEPARATORS = os.sep + (os.altsep or "")
_COMPONENT_RE = re.compile("[^" + re.escape(_SEPARATORS) + "]+")


def _absolute_path_string(path: PathLike | None) -> str | None:
    """Path as an absolute string, untouched when already absolute."""
    if path is None:
        logger.error("Cannot resolve lineage: no path given")
        return None
    try:
        raw = os.fspath(path)
    except TypeError:
        logger.error("Cannot resolve lineage from %r", path)
        return None
    if not isinstance(raw, str):
        logger.error("Cannot resolve lineage from non-text path %r", raw)
        return None
    if os.path.isabs(raw):
        return raw
    return str(Path(raw).absolute())


def archive_lineage(path: PathLike | None, suffix: str = DocProbeConstants.UNPACKED_SUFFIX) -> list[str]:
    """
    Recover the paths of every archive a file was extracted from.

    Args:
        path: Path of the extracted file
        suffix: Marker appended to an archive name to form its unpacked directory

    Returns:
        Archive paths, outermost first; empty when the path has no lineage
    """
    absolute = _absolute_path_string(path)
    if absolute is None or not suffix:
        return []

    # The last component is the file itself, never an unpacked directory
    directories = list(_COMPONENT_RE.finditer(absolute))[:-1]

    archives = []
    for component in directories:
        name = component.group()
        if len(name) > len(suffix) and name.endswith(suffix):
            archives.append(absolute[: component.end() - len(suffix)])
    return archives


def lineage_identifiers(path: PathLike | None, suffix: str = DocProbeConstants.UNPACKED_SUFFIX) -> list[str]:
    """Identifiers of :func:`archive_lineage`, outermost first."""
    identifiers = []
    for archive in archive_lineage(path, suffix):
        identifier = path_identifier(archive)
        if identifier is not None:
            identifiers.append(identifier)
    return identifiers


def immediate_parent_identifier(
    path: PathLike | None, suffix: str = DocProbeConstants.UNPACKED_SUFFIX
) -> str | None:
    """
    Identifier of the archive a file was directly extracted from.

    Uses the innermost unpacked directory. Returns None when the path holds
    no unpacked directory, which is the normal case for top-level files.
    """
    archives = archive_lineage(path, suffix)
    if not archives:
        return None
    return path_identifier(archives[-1])


def root_ancestor_identifier(
    path: PathLike | None, suffix: str = DocProbeConstants.UNPACKED_SUFFIX
) -> str | None:
    """
    Identifier of the outermost archive that started the unpacking chain.

    Equal to :func:`immediate_parent_identifier` for singly nested files.
    """
    archives = archive_lineage(path, suffix)
    if not archives:
        return None
    return path_identifier(archives[0])


def unpacked_dir_name(
    archive_name: str,
    suffix: str = DocProbeConstants.UNPACKED_SUFFIX,
    max_length: int = DocProbeConstants.MAX_NAME_LENGTH,
) -> str:
    """Directory name an unpacker should extract ``archive_name`` into."""
    return sanitize_name(archive_name, max_length=max_length) + suffix
