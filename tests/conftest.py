# Copyright 2026 Cisco Systems, Inc. and its affiliates
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
Pytest configuration and shared fixtures.

This file is automatically loaded by pytest before running tests.
All fixtures defined here are available to every test module without
explicit imports.
"""

from __future__ import annotations

import os
import struct
import zipfile
import zlib
from collections.abc import Callable
from pathlib import Path

import msoffcrypto
import pytest

from docprobe.config.constants import DocProbeConstants

# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _clean_docprobe_env(monkeypatch):
    """Keep DOCPROBE_* variables from the developer's shell out of tests."""
    for key in list(os.environ):
        if key.startswith(DocProbeConstants.ENV_PREFIX):
            monkeypatch.delenv(key, raising=False)


# ---------------------------------------------------------------------------
# Raw ZIP builder
# ---------------------------------------------------------------------------

# 1980-01-01 in DOS date format
_DOS_DATE = 0x21


def build_zip(entries: list[tuple[str, bytes, int]]) -> bytes:
    """Build a stored (uncompressed) ZIP from ``(name, data, flag_bits)`` tuples.

    Written by hand so tests can produce entries ``zipfile`` refuses to
    write: empty names and the encrypted flag.
    """
    local = bytearray()
    central = bytearray()
    for name, data, flags in entries:
        encoded = name.encode("utf-8")
        crc = zlib.crc32(data)
        offset = len(local)
        local += struct.pack(
            "<4s2B4HL2L2H",
            b"PK\x03\x04", 20, 0, flags, 0, 0, _DOS_DATE,
            crc, len(data), len(data), len(encoded), 0,
        )  # fmt: skip
        local += encoded + data
        central += struct.pack(
            "<4s4B4HL2L5H2L",
            b"PK\x01\x02", 20, 0, 20, 0, flags, 0, 0, _DOS_DATE,
            crc, len(data), len(data), len(encoded), 0, 0, 0, 0, 0, offset,
        )  # fmt: skip
        central += encoded
    end = struct.pack(
        "<4s4H2LH",
        b"PK\x05\x06", 0, 0, len(entries), len(entries), len(central), len(local), 0,
    )  # fmt: skip
    return bytes(local + central + end)


@pytest.fixture
def make_zip(tmp_path) -> Callable[..., Path]:
    """Factory writing a hand-built ZIP into ``tmp_path``."""

    def _make(name: str, entries: list[tuple[str, bytes, int]]) -> Path:
        path = tmp_path / name
        path.write_bytes(build_zip(entries))
        return path

    return _make


# ---------------------------------------------------------------------------
# Office documents
# ---------------------------------------------------------------------------

CONTENT_TYPES_XML = (
    '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'
    '<Types xmlns="http://schemas.openxmlformats.org/package/2006/content-types">'
    '<Default Extension="rels" ContentType="application/vnd.openxmlformats-package.relationships+xml"/>'
    '<Default Extension="xml" ContentType="application/xml"/>'
    '<Override PartName="/word/document.xml" '
    'ContentType="application/vnd.openxmlformats-officedocument.wordprocessingml.document.main+xml"/>'
    "</Types>"
)

RELS_XML = (
    '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'
    '<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">'
    '<Relationship Id="rId1" '
    'Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/officeDocument" '
    'Target="word/document.xml"/>'
    "</Relationships>"
)

DOCUMENT_XML = (
    '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'
    '<w:document xmlns:w="http://schemas.openxmlformats.org/wordprocessingml/2006/main">'
    "<w:body>"
    + "".join(f"<w:p><w:r><w:t>Quarterly report, line {i}: revenue and headcount</w:t></w:r></w:p>" for i in range(80))
    + "</w:body>"
    "</w:document>"
)

OLE2_HEADER = DocProbeConstants.OLE2_SIGNATURE


def write_docx(path: Path) -> Path:
    # Stored, so the package stays several KB; msoffcrypto cannot round-trip tiny payloads
    with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_STORED) as zf:
        zf.writestr("[Content_Types].xml", CONTENT_TYPES_XML)
        zf.writestr("_rels/.rels", RELS_XML)
        zf.writestr("word/document.xml", DOCUMENT_XML)
    return path


def encrypt_docx(plain: Path, target: Path, password: str) -> Path:
    with open(plain, "rb") as fin, open(target, "wb") as fout:
        msoffcrypto.OfficeFile(fin).encrypt(password, fout)
    return target


@pytest.fixture
def plain_docx(tmp_path) -> Path:
    """A minimal, unprotected Word document."""
    return write_docx(tmp_path / "plain.docx")


@pytest.fixture
def encrypted_docx(tmp_path, plain_docx) -> Path:
    """The plain document saved with a real password (an OLE2 container)."""
    return encrypt_docx(plain_docx, tmp_path / "protected.docx", "Tr0ub4dor&3")


@pytest.fixture
def default_password_docx(tmp_path, plain_docx) -> Path:
    """The plain document protected only with Office's default password."""
    return encrypt_docx(plain_docx, tmp_path / "write_protected.docx", DocProbeConstants.DEFAULT_OFFICE_PASSWORD)


@pytest.fixture
def corrupt_ole2(tmp_path) -> Path:
    """OLE2 signature followed by garbage."""
    path = tmp_path / "broken.xls"
    path.write_bytes(OLE2_HEADER + b"\x00" * 100)
    return path


@pytest.fixture
def make_encrypted_docx(tmp_path, plain_docx) -> Callable[[str, str], Path]:
    """Factory protecting the plain document with an arbitrary password."""

    def _make(name: str, password: str) -> Path:
        return encrypt_docx(plain_docx, tmp_path / name, password)

    return _make


@pytest.fixture
def content_types_xml() -> bytes:
    return CONTENT_TYPES_XML.encode()
