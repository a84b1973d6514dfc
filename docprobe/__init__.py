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
docprobe - Container sniffing, encryption detection and archive lineage for
document ingestion.
"""

from ._version import __version__

__author__ = "Cisco Systems, Inc."


def __getattr__(name: str):
    """Lazy-load public API symbols on first access.

    Keeps ``import docprobe`` free of the Office crypto stack until an
    encryption check is actually requested.
    """
    _lazy_map = {
        "Config": (".config.config", "Config"),
        "DocProbeConstants": (".config.constants", "DocProbeConstants"),
        "FormatKind": (".core.models", "FormatKind"),
        "EncryptionStatus": (".core.models", "EncryptionStatus"),
        "EncryptionResult": (".core.models", "EncryptionResult"),
        "ProbeReport": (".core.models", "ProbeReport"),
        "classify": (".core.format_sniffer", "classify"),
        "has_empty_zip_entry": (".core.format_sniffer", "has_empty_zip_entry"),
        "is_encrypted": (".core.encryption", "is_encrypted"),
        "is_office_file_encrypted": (".core.encryption", "is_office_file_encrypted"),
        "path_identifier": (".core.identity", "path_identifier"),
        "file_identifier": (".core.identity", "file_identifier"),
        "random_identifier": (".core.identity", "random_identifier"),
        "immediate_parent_identifier": (".core.lineage", "immediate_parent_identifier"),
        "root_ancestor_identifier": (".core.lineage", "root_ancestor_identifier"),
        "archive_lineage": (".core.lineage", "archive_lineage"),
        "sanitize_name": (".core.naming", "sanitize_name"),
        "resolve_duplicate_name": (".core.naming", "resolve_duplicate_name"),
        "DocumentProbe": (".core.probe", "DocumentProbe"),
        "probe_file": (".core.probe", "probe_file"),
        "probe_directory": (".core.probe", "probe_directory"),
    }
    if name in _lazy_map:
        module_path, attr = _lazy_map[name]
        import importlib

        mod = importlib.import_module(module_path, __package__)
        val = getattr(mod, attr)
        # Cache on the module so __getattr__ is only called once per symbol
        globals()[name] = val
        return val
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "Config",
    "DocProbeConstants",
    "FormatKind",
    "EncryptionStatus",
    "EncryptionResult",
    "ProbeReport",
    "classify",
    "has_empty_zip_entry",
    "is_encrypted",
    "is_office_file_encrypted",
    "path_identifier",
    "file_identifier",
    "random_identifier",
    "immediate_parent_identifier",
    "root_ancestor_identifier",
    "archive_lineage",
    "sanitize_name",
    "resolve_duplicate_name",
    "DocumentProbe",
    "probe_file",
    "probe_directory",
]
