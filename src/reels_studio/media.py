# Copyright 2026 Google LLC
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

"""Conversion of user-selected files into base64 media payloads.

Files are read off the event loop (``asyncio.to_thread``) and encoded as plain
base64 payloads with their MIME type. Data URLs coming from a browser upload
can be converted as well; only the payload after the comma is kept.
"""

import asyncio
import base64
import binascii
import mimetypes
import os
from pathlib import Path
from typing import BinaryIO

from reels_studio.error import EncodingError
from reels_studio.logging import get_logger
from reels_studio.types import EncodedImage, EncodedVideo

logger = get_logger(__name__)

DEFAULT_MIME_TYPE = 'application/octet-stream'

MediaSource = str | os.PathLike[str] | BinaryIO


def strip_data_url_prefix(url: str) -> str:
    """Strip the ``data:...;base64,`` prefix from a data URL.

    Args:
        url: A data URL string.

    Returns:
        The base64 payload after the comma.

    Raises:
        EncodingError: If the string has no comma separating prefix and payload.
    """
    comma_idx = url.find(',')
    if comma_idx < 0:
        raise EncodingError('Failed to convert file to base64 string.')
    return url[comma_idx + 1 :]


def _mime_type_of_data_url(url: str) -> str | None:
    if not url.startswith('data:'):
        return None
    header = url[len('data:') : url.find(',')]
    mime_type = header.split(';', 1)[0]
    return mime_type or None


def _guess_mime_type(name: str | None) -> str:
    if not name:
        return DEFAULT_MIME_TYPE
    guessed, _ = mimetypes.guess_type(name)
    return guessed or DEFAULT_MIME_TYPE


def _read(source: MediaSource) -> tuple[bytes, str | None]:
    if isinstance(source, (str, os.PathLike)):
        path = Path(source)
        return path.read_bytes(), path.name
    data = source.read()
    if not isinstance(data, bytes | bytearray | memoryview):
        raise EncodingError('Failed to convert file to base64 string.')
    name = getattr(source, 'name', None)
    return bytes(data), os.path.basename(name) if isinstance(name, str) else None


def _build(
    payload: str,
    mime_type: str,
    *,
    is_video: bool,
    name: str | None,
) -> EncodedImage | EncodedVideo:
    if is_video:
        return EncodedVideo(payload=payload, mime_type=mime_type, name=name)
    return EncodedImage(payload=payload, mime_type=mime_type)


async def encode_media(
    source: MediaSource,
    *,
    is_video: bool = False,
    mime_type: str | None = None,
    name: str | None = None,
) -> EncodedImage | EncodedVideo:
    """Read a file fully and encode it as base64.

    Args:
        source: A path or a binary file object.
        is_video: Produce an ``EncodedVideo`` (which keeps the file name)
            instead of an ``EncodedImage``.
        mime_type: MIME type of the file; guessed from the name if omitted.
        name: File name override for videos.

    Returns:
        The encoded media.

    Raises:
        EncodingError: If the file cannot be read or is not binary.
    """
    try:
        data, file_name = await asyncio.to_thread(_read, source)
    except EncodingError:
        raise
    except OSError as e:
        raise EncodingError(f'Failed to read file: {e.strerror or e}', cause=e) from e
    except ValueError as e:
        # Text-mode files with binary content, closed streams.
        raise EncodingError(f'Failed to read file: {e}', cause=e) from e

    file_name = name or file_name
    media = _build(
        base64.b64encode(data).decode('ascii'),
        mime_type or _guess_mime_type(file_name),
        is_video=is_video,
        name=file_name,
    )
    logger.debug('Encoded media', kind=media.kind, mime_type=media.mime_type, size=len(data))
    return media


def media_from_data_url(
    url: str,
    *,
    is_video: bool = False,
    name: str | None = None,
) -> EncodedImage | EncodedVideo:
    """Convert a data URL into encoded media.

    Raises:
        EncodingError: If the URL has no payload or the payload is not base64.
    """
    payload = strip_data_url_prefix(url)
    try:
        base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise EncodingError('Failed to convert file to base64 string.', cause=e) from e
    mime_type = _mime_type_of_data_url(url) or _guess_mime_type(name)
    return _build(payload, mime_type, is_video=is_video, name=name)
