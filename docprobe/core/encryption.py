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
Encryption detection for Office documents.

Two container families are handled:

* OLE2 compound files: legacy .doc/.xls/.ppt, and password-protected OOXML,
  which Office wraps in an OLE2 container holding ``EncryptionInfo`` and
  ``EncryptedPackage`` streams. The container is opened with ``olefile``; the
  encryption header is read and the default password verified with
  ``msoffcrypto-tool``.
* Everything else is treated as an OOXML package and opened with ``zipfile``.

Results are three-way. ``INDETERMINATE`` means the container could not be
opened for a reason unrelated to encryption; :func:`is_office_file_encrypted`
collapses it for callers that only want a bool.
"""

from __future__ import annotations

import io
import logging
import struct
import zipfile
from pathlib import Path

import msoffcrypto
import olefile
from msoffcrypto import exceptions as msoffcrypto_exceptions

from ..config.constants import DocProbeConstants
from .exceptions import ContainerError, InvalidInputError
from .format_sniffer import classify
from .models import EncryptionResult, EncryptionStatus, FormatKind, PathLike

logger = logging.getLogger(__name__)

# ZIP general purpose flag bit 0: entry is encrypted
_ZIP_FLAG_ENCRYPTED = 0x1

# Raised by msoffcrypto when it cannot build a decryption context for an
# encrypted document; treated as "password required"
_ENCRYPTION_STRUCTURE_ERRORS = (
    msoffcrypto_exceptions.ParseError,
    msoffcrypto_exceptions.DecryptionError,
    struct.error,
    ValueError,
)


def _require_regular_file(file_path: PathLike | None) -> Path:
    if file_path is None:
        raise InvalidInputError("no file given")
    try:
        path = Path(file_path)
        if not path.exists():
            raise InvalidInputError(f"file does not exist: {path}")
        if not path.is_file():
            raise InvalidInputError(f"not a regular file: {path}")
    except (TypeError, ValueError, OSError) as e:
        raise InvalidInputError(f"unusable path {file_path!r}: {e}") from e
    return path


def _ensure_compound_file(path: Path) -> None:
    """Open the OLE2 container once to prove its directory is readable."""
    try:
        with olefile.OleFileIO(str(path)):
            pass
    except Exception as e:
        raise ContainerError(f"cannot open compound file: {e}") from e


def _verify_default_password(office_file, password: str) -> bool:
    """Try the default password; True if the document opens with it."""
    try:
        # OOXML checks the key against the verifier hash; the 97 formats only on decrypt
        if office_file.format == "ooxml":
            office_file.load_key(password=password, verify_password=True)
        else:
            office_file.load_key(password=password)
            office_file.decrypt(io.BytesIO())
    except msoffcrypto_exceptions.InvalidKeyError:
        return False
    return True


def _check_compound_file(path: Path, default_password: str) -> EncryptionResult:
    try:
        _ensure_compound_file(path)
    except ContainerError as e:
        logger.warning("OLE2 container unreadable %s: %s", path, e)
        return EncryptionResult(EncryptionStatus.INDETERMINATE, str(e))

    with open(path, "rb") as fp:
        try:
            office_file = msoffcrypto.OfficeFile(fp)
        except msoffcrypto_exceptions.FileFormatError as e:
            # Not a Word/Excel/PowerPoint container, nothing carries encryption info
            logger.debug("OLE2 %s has no encryption info: %s", path, e)
            return EncryptionResult(EncryptionStatus.NOT_ENCRYPTED, f"unrecognized compound file: {e}")
        except _ENCRYPTION_STRUCTURE_ERRORS as e:
            logger.debug("OLE2 encryption header refused for %s: %s", path, e)
            return EncryptionResult(EncryptionStatus.ENCRYPTED, f"encryption info unreadable: {e}")

        try:
            if not office_file.is_encrypted():
                return EncryptionResult(EncryptionStatus.NOT_ENCRYPTED)
            if _verify_default_password(office_file, default_password):
                logger.debug("OLE2 %s opens with the default password", path)
                return EncryptionResult(EncryptionStatus.NOT_ENCRYPTED, "opens with default password")
        except _ENCRYPTION_STRUCTURE_ERRORS as e:
            logger.debug("OLE2 decryption context refused for %s: %s", path, e)
            return EncryptionResult(EncryptionStatus.ENCRYPTED, f"decryption context unavailable: {e}")

    logger.debug("OLE2 encrypted document: %s", path)
    return EncryptionResult(EncryptionStatus.ENCRYPTED)


def _check_package(path: Path) -> EncryptionResult:
    try:
        with zipfile.ZipFile(path, "r") as zf:
            infos = zf.infolist()
    except (zipfile.BadZipFile, OSError, ValueError) as e:
        logger.warning("Package cannot be opened %s: %s", path, e)
        return EncryptionResult(EncryptionStatus.INDETERMINATE, f"cannot open package: {e}")

    if any(info.flag_bits & _ZIP_FLAG_ENCRYPTED for info in infos):
        logger.debug("OOXML package with encrypted entries: %s", path)
        return EncryptionResult(EncryptionStatus.ENCRYPTED, "package entries are encrypted")

    if not any(info.filename == DocProbeConstants.OOXML_CONTENT_TYPES for info in infos):
        logger.warning("Not an OOXML package (no %s): %s", DocProbeConstants.OOXML_CONTENT_TYPES, path)
        return EncryptionResult(EncryptionStatus.INDETERMINATE, "not an OOXML package")

    logger.debug("OOXML package opened: %s", path)
    return EncryptionResult(EncryptionStatus.NOT_ENCRYPTED)


def is_encrypted(
    file_path: PathLike | None,
    default_password: str = DocProbeConstants.DEFAULT_OFFICE_PASSWORD,
) -> EncryptionResult:
    """
    Check whether an Office document needs a password to open.

    Never raises. Invalid input (None, missing file, directory) is reported as
    NOT_ENCRYPTED with a diagnostic and logged as a warning.

    Args:
        file_path: Path to the document
        default_password: Password Office uses for write-protected documents;
                          a document that opens with it is not encrypted

    Returns:
        EncryptionResult with status ENCRYPTED, NOT_ENCRYPTED or INDETERMINATE
    """
    try:
        path = _require_regular_file(file_path)
    except InvalidInputError as e:
        logger.warning("Invalid file for encryption check: %s", e)
        return EncryptionResult(EncryptionStatus.NOT_ENCRYPTED, str(e))

    try:
        if classify(path) is FormatKind.OLE2:
            return _check_compound_file(path, default_password)
        return _check_package(path)
    except Exception as e:
        logger.warning("Encryption check failed for %s: %s", path, e)
        return EncryptionResult(EncryptionStatus.INDETERMINATE, f"encryption check failed: {e}")


def is_office_file_encrypted(
    file_path: PathLike | None,
    strict: bool = False,
    default_password: str = DocProbeConstants.DEFAULT_OFFICE_PASSWORD,
) -> bool:
    """
    Bool form of :func:`is_encrypted`.

    Args:
        file_path: Path to the document
        strict: Answer for documents whose status is INDETERMINATE. The
                default False keeps the historical lenient behavior.
    """
    return is_encrypted(file_path, default_password=default_password).collapse(strict=strict)
