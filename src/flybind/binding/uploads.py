# Copyright 2026 Firefly Software Solutions Inc.
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
"""Uploaded file parts from multipart request bodies."""

from __future__ import annotations

from pathlib import Path


class UploadedFile:
    """A file part of a ``multipart/form-data`` body, held in memory.

    Bind it by declaring a field of type ``UploadedFile`` (first part for the
    key) or ``list[UploadedFile]`` (every part for the key).

    Attributes:
        filename: Original filename from the client.
        content_type: MIME type of the uploaded file.
        size: File size in bytes.
    """

    __slots__ = ("_content", "_content_type", "_filename")

    def __init__(self, filename: str, content_type: str, content: bytes) -> None:
        self._filename = filename
        self._content_type = content_type
        self._content = content

    @property
    def filename(self) -> str:
        return self._filename

    @property
    def content_type(self) -> str:
        return self._content_type

    @property
    def size(self) -> int:
        return len(self._content)

    def read(self) -> bytes:
        return self._content

    def save(self, path: str | Path) -> None:
        """Write the file content to *path*. Parent directories must exist."""
        Path(path).write_bytes(self._content)

    def __repr__(self) -> str:
        return f"UploadedFile({self._filename!r}, {self._content_type!r}, {self.size} bytes)"
