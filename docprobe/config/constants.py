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
Constants for docprobe.
"""

from .._version import __version__ as PACKAGE_VERSION


class DocProbeConstants:
    """Constants used throughout the probe."""

    VERSION = PACKAGE_VERSION

    # Binary signatures
    OLE2_SIGNATURE = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"
    PDF_SIGNATURE = b"%PDF-"
    ZIP_PREFIX = b"PK"
    ZIP_THIRD_BYTES = frozenset({0x03, 0x05, 0x07})
    ZIP_FOURTH_BYTES = frozenset({0x04, 0x06, 0x08})
    # Longest signature above; classification never reads past it
    MAX_SIGNATURE_LENGTH = 8

    # Directory holding the extracted contents of "<archive>" is "<archive>_unpacked"
    UNPACKED_SUFFIX = "_unpacked"

    # Identifiers
    IDENTIFIER_LENGTH = 22

    # Password Office applies when a document is only write-protected
    DEFAULT_OFFICE_PASSWORD = "VelvetSweatshop"

    # OPC package marker present in every OOXML file
    OOXML_CONTENT_TYPES = "[Content_Types].xml"

    # File name hygiene
    MAX_NAME_LENGTH = 240
    FORBIDDEN_NAME_CHARACTERS = '\\/:*?"<>|'
    RESERVED_DEVICE_NAMES = frozenset(
        {"CON", "PRN", "AUX", "NUL"}
        | {f"COM{i}" for i in range(1, 10)}
        | {f"LPT{i}" for i in range(1, 10)}
    )

    # Environment variable prefix for Config
    ENV_PREFIX = "DOCPROBE_"
