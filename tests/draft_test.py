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

"""Tests for ReelDraft form state."""

import io

import pytest

from reels_studio.draft import ReelDraft
from reels_studio.error import EncodingError
from reels_studio.types import EncodedImage, EncodedVideo, InputMode

IMAGE = EncodedImage(payload='QUJD', mime_type='image/png')
VIDEO = EncodedVideo(payload='REVG', mime_type='video/mp4', name='context.mp4')


def test_video_mode_clears_image() -> None:
    """Choosing video context discards the starting image."""
    draft = ReelDraft('A prompt')
    draft.attach(IMAGE)

    draft.select_mode(InputMode.VIDEO_UPLOAD)

    assert draft.starting_image is None
    assert draft.input_mode is InputMode.VIDEO_UPLOAD


def test_image_mode_clears_video() -> None:
    """Choosing image mode discards the context video."""
    draft = ReelDraft('A prompt')
    draft.attach(VIDEO)

    draft.select_mode(InputMode.IMAGE_UPLOAD)

    assert draft.context_video is None
    assert draft.input_mode is InputMode.IMAGE_UPLOAD


def test_text_mode_clears_both() -> None:
    """Text-only mode holds no media."""
    draft = ReelDraft('A prompt')
    draft.attach(IMAGE)
    draft.select_mode(InputMode.TEXT_ONLY)

    assert draft.starting_image is None
    assert draft.context_video is None


def test_attach_switches_mode() -> None:
    """Attaching media of the other kind replaces the current media."""
    draft = ReelDraft('A prompt')
    draft.attach(IMAGE)
    draft.attach(VIDEO)

    assert draft.input_mode is InputMode.VIDEO_UPLOAD
    assert draft.context_video == VIDEO
    assert draft.starting_image is None


def test_request_excludes_context_video() -> None:
    """The context video is never sent to the video service."""
    draft = ReelDraft('A prompt')
    draft.attach(VIDEO)

    request = draft.to_request()

    assert request.starting_image is None
    assert request.prompt_text == 'A prompt'


def test_request_includes_image() -> None:
    """In image mode the starting image goes with the request."""
    draft = ReelDraft('A prompt')
    draft.attach(IMAGE)

    assert draft.to_request().starting_image == IMAGE


@pytest.mark.asyncio
async def test_attach_file_failure_clears_selection() -> None:
    """An unreadable file leaves no stale image behind."""
    draft = ReelDraft('A prompt')
    draft.attach(IMAGE)

    with pytest.raises(EncodingError):
        await draft.attach_file(io.StringIO('text'))

    assert draft.starting_image is None


@pytest.mark.asyncio
async def test_attach_file_encodes() -> None:
    """attach_file encodes and attaches in one step."""
    draft = ReelDraft('A prompt')
    await draft.attach_file(io.BytesIO(b'ABC'), mime_type='image/png')

    assert draft.input_mode is InputMode.IMAGE_UPLOAD
    assert draft.starting_image == IMAGE
