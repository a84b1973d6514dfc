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
Per-file probe combining format, encryption, identity and lineage.

Flow for each file: classify the container, look for blank ZIP entry names,
check encryption for OLE2 and ZIP containers only, then derive the file's
identifier and those of its ancestor archives.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from ..config.config import Config
from .encryption import is_encrypted
from .format_sniffer import classify, has_empty_zip_entry
from .identity import path_identifier
from .lineage import archive_lineage, unpacked_dir_name
from .models import FormatKind, PathLike, ProbeReport
from .naming import file_extension

logger = logging.getLogger(__name__)

_OFFICE_CONTAINER_KINDS = frozenset({FormatKind.OLE2, FormatKind.ZIP})


class DocumentProbe:
    """Runs every check for a file or a directory tree.

    Stateless apart from its configuration, so one instance may be shared
    between worker threads.
    """

    def __init__(self, config: Config | None = None):
        self.config = config or Config()

    def probe(self, file_path: PathLike) -> ProbeReport:
        """
        Probe a single file.

        Never raises for a bad file: unreadable files come back as UNKNOWN
        with whatever can be derived from the path alone, and a missing or
        non-path argument gives an empty UNKNOWN report.

        Args:
            file_path: Path to the file

        Returns:
            ProbeReport for the file
        """
        try:
            absolute = str(Path(file_path).absolute())
        except (TypeError, OSError) as e:
            logger.warning("Cannot probe %r: %s", file_path, e)
            return ProbeReport(path="", format_kind=FormatKind.UNKNOWN, identifier=None)
        path = Path(absolute)

        kind = classify(path)

        size = 0
        try:
            if path.is_file():
                size = path.stat().st_size
        except OSError as e:
            logger.warning("Cannot stat %s: %s", path, e)

        encryption = None
        if kind in _OFFICE_CONTAINER_KINDS:
            encryption = is_encrypted(path, default_password=self.config.default_password)

        lineage = archive_lineage(absolute, suffix=self.config.unpacked_suffix)

        report = ProbeReport(
            path=absolute,
            format_kind=kind,
            identifier=path_identifier(absolute),
            size_bytes=size,
            extension=file_extension(path),
            has_empty_zip_entry=kind is FormatKind.ZIP and has_empty_zip_entry(path),
            encryption=encryption,
            parent_identifier=path_identifier(lineage[-1]) if lineage else None,
            root_identifier=path_identifier(lineage[0]) if lineage else None,
            lineage=lineage,
        )
        logger.debug("Probed %s: %s", absolute, report.format_kind.value)
        return report

    def is_encrypted(self, file_path: PathLike) -> bool:
        """Bool encryption answer honoring ``Config.strict_encryption``."""
        result = is_encrypted(file_path, default_password=self.config.default_password)
        return result.collapse(strict=self.config.strict_encryption)

    def unpacked_dir_name(self, archive_name: str) -> str:
        """Name of the directory ``archive_name`` should be extracted into."""
        return unpacked_dir_name(
            archive_name,
            suffix=self.config.unpacked_suffix,
            max_length=self.config.max_name_length,
        )

    def probe_directory(self, directory: str | Path, recursive: bool = True) -> list[ProbeReport]:
        """
        Probe every regular file below a directory.

        Files are visited in sorted order. One failing file never aborts the
        walk.

        Args:
            directory: Root directory
            recursive: Descend into subdirectories

        Returns:
            One ProbeReport per file
        """
        if not isinstance(directory, Path):
            directory = Path(directory)

        if not directory.is_dir():
            raise FileNotFoundError(f"Directory does not exist: {directory}")

        reports: list[ProbeReport] = []
        for file_path in self._find_files(directory, recursive):
            try:
                reports.append(self.probe(file_path))
            except Exception as e:
                logger.error("Unexpected error probing %s: %s", file_path, e)
                continue
        return reports

    def _find_files(self, directory: Path, recursive: bool) -> list[Path]:
        found: list[Path] = []
        for root, dirs, files in os.walk(directory, followlinks=self.config.follow_symlinks):
            if self.config.skip_hidden:
                dirs[:] = [d for d in dirs if not d.startswith(".")]
            dirs.sort()
            for name in sorted(files):
                if self.config.skip_hidden and name.startswith("."):
                    continue
                candidate = Path(root) / name
                if candidate.is_symlink() and not self.config.follow_symlinks:
                    continue
                found.append(candidate)
            if not recursive:
                break
        return found


def probe_file(file_path: PathLike, config: Config | None = None) -> ProbeReport:
    """
    Convenience function to probe a single file.

    Args:
        file_path: Path to the file
        config: Optional configuration

    Returns:
        ProbeReport
    """
    return DocumentProbe(config).probe(file_path)


def probe_directory(directory: str | Path, recursive: bool = True, config: Config | None = None) -> list[ProbeReport]:
    """
    Convenience function to probe every file in a directory tree.

    Args:
        directory: Root directory
        recursive: Search recursively
        config: Optional configuration

    Returns:
        One ProbeReport per file
    """
    return DocumentProbe(config).probe_directory(directory, recursive=recursive)
