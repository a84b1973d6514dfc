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

"""docprobe exceptions.

Per-file probe operations never raise: they convert failures into a safe
default and log a warning. These exceptions are raised internally between
helpers, and ``ConfigurationError`` is the one that reaches callers.

Example:
    >>> from docprobe.config.config import Config
    >>> from docprobe.core.exceptions import ConfigurationError
    >>>
    >>> try:
    ...     config = Config.from_yaml("docprobe.yaml")
    ... except ConfigurationError as e:
    ...     print(f"Bad configuration: {e}")
"""


class DocProbeError(Exception):
    """Base exception for all docprobe errors."""

    pass


class InvalidInputError(DocProbeError):
    """Raised when an argument does not name a readable regular file.

    This can indicate:
    - ``None`` or a non path-like argument
    - A path that does not exist
    - A directory or other non-regular file
    """

    pass


class ContainerError(DocProbeError):
    """Raised when a container cannot be opened for reasons other than encryption.

    This typically indicates:
    - A truncated or corrupted compound file
    - A ZIP file that is not an OOXML package
    - I/O failure while reading the container
    """

    pass


class ConfigurationError(DocProbeError):
    """Raised when a configuration file cannot be loaded.

    This indicates:
    - Missing or unreadable file
    - Invalid YAML
    - Unknown keys or values of the wrong type
    """

    pass
