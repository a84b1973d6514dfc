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
Container format detection from leading byte signatures.

Only the three container families the ingestion pipeline cares about are
recognized: OLE2 compound files (legacy .doc/.xls/.ppt and encrypted OOXML),
PDF, and ZIP (including OOXML packages). Everything else is ``UNKNOWN``.
"""

from __future__ import annotations

import itertools
import logging
import zipfile
from pathlib import Path

from ..config.constants import DocProbeConstants
from .models import FormatKind, PathLike

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Signatures
# ---------------------------------------------------------------------------

# Local header, empty archive and spanned archive markers: PK + {03,05,07} + {04,06,08}
_ZIP_SIGNATURES: tuple[bytes, ...] = tuple(
    DocProbeConstants.ZIP_PREFIX + bytes([third, fourth])
    for third, fourth in itertools.product(
        sorted(DocProbeConstants.ZIP_THIRD_BYTES),
        sorted(DocProbeConstants.ZIP_FOURTH_BYTES),
    )
)

# Checked in order, first match wins
_SIGNATURES: list[tuple[FormatKind, tuple[bytes, ...]]] = [
    (FormatKind.OLE2, (DocProbeConstants.OLE2_SIGNATURE,)),
    (FormatKind.PDF, (DocProbeConstants.PDF_SIGNATURE,)),
    (FormatKind.ZIP, _ZIP_SIGNATURES),
]


def _match_signature(header: bytes) -> FormatKind:
    """Match leading bytes against the known signatures."""
    for kind, signatures in _SIGNATURES:
        for signature in signatures:
            if len(header) >= len(signature) and header[: len(signature)] == signature:
                return kind
    return FormatKind.UNKNOWN


def _read_header(file_path: Path) -> bytes | None:
    """Read the leading signature bytes, or None if the file cannot be read."""
    try:
        if not file_path.is_file():
            logger.warning("Not a regular file, cannot classify: %s", file_path)
            return None
        with open(file_path, "rb") as f:
            return f.read(DocProbeConstants.MAX_SIGNATURE_LENGTH)
    except (OSError, ValueError) as e:
        logger.warning("Failed to read header of %s: %s", file_path, e)
        return None


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def classify_bytes(header: bytes) -> FormatKind:
    """
    Classify a container from bytes already in memory.

    Args:
        header: Leading bytes of the file (extra bytes are ignored)

    Returns:
        The matching FormatKind, UNKNOWN if nothing matches
    """
    if not header:
        return FormatKind.UNKNOWN
    return _match_signature(bytes(header[: DocProbeConstants.MAX_SIGNATURE_LENGTH]))


def classify(file_path: PathLike | None) -> FormatKind:
    """
    Classify a file by its leading byte signature.

    Reads at most the length of the longest known signature. Never raises:
    missing, unreadable and too-short files are UNKNOWN.

    Args:
        file_path: Path to the file to check

    Returns:
        OLE2, PDF, ZIP or UNKNOWN
    """
    if file_path is None:
        logger.warning("Cannot classify: no file given")
        return FormatKind.UNKNOWN

    try:
        path = Path(file_path)
    except TypeError:
        logger.warning("Cannot classify: not a path: %r", file_path)
        return FormatKind.UNKNOWN

    header = _read_header(path)
    if header is None:
        return FormatKind.UNKNOWN

    kind = _match_signature(header)
    logger.debug("Classified %s as %s", path, kind.value)
    return kind


def is_ole2_file(file_path: PathLike | None) -> bool:
    """Check whether a file is an OLE2 compound file (xls, doc, ppt, encrypted OOXML)."""
    return classify(file_path) is FormatKind.OLE2


def is_pdf_file(file_path: PathLike | None) -> bool:
    """Check whether a file starts with the PDF header."""
    return classify(file_path) is FormatKind.PDF


def is_zip_file(file_path: PathLike | None) -> bool:
    """Check whether a file starts with a ZIP header."""
    return classify(file_path) is FormatKind.ZIP


def has_empty_zip_entry(file_path: PathLike | None) -> bool:
    """
    Check whether a ZIP archive lists an entry with an empty or blank name.

    Well-formed archives never contain such entries, so one is treated as a
    corruption or tampering signal. Meaningful only for files classified as
    ZIP; anything that cannot be parsed as ZIP returns False.

    Args:
        file_path: Path to the ZIP archive

    Returns:
        True if any central-directory entry name is empty or whitespace-only
    """
    if file_path is None:
        return False

    try:
        path = Path(file_path)
    except TypeError:
        logger.warning("Cannot inspect ZIP: not a path: %r", file_path)
        return False

    try:
        with zipfile.ZipFile(path, "r") as zf:
            for info in zf.infolist():
                if not info.filename or not info.filename.strip():
                    logger.debug("Empty entry name in %s", file_path)
                    return True
    except (zipfile.BadZipFile, OSError, ValueError) as e:
        logger.warning("ZIP inspection failed for %s: %s", file_path, e)
        return False
    return False
