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
Tests for result data models.
"""

import pytest

from docprobe.core.models import EncryptionResult, EncryptionStatus, FormatKind, ProbeReport


class TestEncryptionResult:
    @pytest.mark.parametrize(
        "status,lenient,strict",
        [
            (EncryptionStatus.ENCRYPTED, True, True),
            (EncryptionStatus.NOT_ENCRYPTED, False, False),
            (EncryptionStatus.INDETERMINATE, False, True),
        ],
    )
    def test_collapse(self, status, lenient, strict):
        result = EncryptionResult(status)
        assert result.collapse() is lenient
        assert result.collapse(strict=True) is strict

    def test_flags(self):
        assert EncryptionResult(EncryptionStatus.ENCRYPTED).encrypted
        assert EncryptionResult(EncryptionStatus.INDETERMINATE).indeterminate
        assert not EncryptionResult(EncryptionStatus.NOT_ENCRYPTED).indeterminate

    def test_to_dict(self):
        result = EncryptionResult(EncryptionStatus.INDETERMINATE, "cannot open package")
        assert result.to_dict() == {"status": "INDETERMINATE", "diagnostic": "cannot open package"}

    def test_frozen(self):
        result = EncryptionResult(EncryptionStatus.ENCRYPTED)
        with pytest.raises(AttributeError):
            result.status = EncryptionStatus.NOT_ENCRYPTED


class TestProbeReport:
    def test_defaults(self):
        report = ProbeReport(path="/data/a.txt", format_kind=FormatKind.UNKNOWN, identifier="x" * 22)
        assert not report.is_encrypted
        assert not report.is_nested
        assert report.encryption is None

    def test_to_dict(self):
        report = ProbeReport(
            path="/data/a.zip_unpacked/b.docx",
            format_kind=FormatKind.ZIP,
            identifier="i" * 22,
            size_bytes=1024,
            extension="docx",
            encryption=EncryptionResult(EncryptionStatus.ENCRYPTED),
            parent_identifier="p" * 22,
            root_identifier="p" * 22,
            lineage=["/data/a.zip"],
        )
        data = report.to_dict()

        assert data["format"] == "ZIP"
        assert data["encryption"] == {"status": "ENCRYPTED", "diagnostic": None}
        assert data["lineage"] == ["/data/a.zip"]
        assert report.is_encrypted
        assert report.is_nested

    def test_format_kind_is_a_string(self):
        assert FormatKind.PDF == "PDF"
