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

"""Form state for authoring a reel before it is submitted.

A starting image and a context video are mutually exclusive: choosing one
input mode discards the media of the other.
"""

from reels_studio.media import MediaSource, encode_media
from reels_studio.types import (
    AspectRatio,
    EncodedImage,
    EncodedMedia,
    EncodedVideo,
    GenerationRequest,
    InputMode,
    Resolution,
)


class ReelDraft:
    """Prompt, input mode, media and output options collected from the user."""

    def __init__(
        self,
        prompt_text: str = '',
        *,
        aspect_ratio: AspectRatio = AspectRatio.PORTRAIT,
        resolution: Resolution = Resolution.RESOLUTION_720P,
    ) -> None:
        self.prompt_text = prompt_text
        self.aspect_ratio = AspectRatio(aspect_ratio)
        self.resolution = Resolution(resolution)
        self.input_mode = InputMode.TEXT_ONLY
        self.starting_image: EncodedImage | None = None
        self.context_video: EncodedVideo | None = None

    def select_mode(self, mode: InputMode) -> None:
        """Switch input mode, clearing media that the new mode cannot hold."""
        mode = InputMode(mode)
        if mode is not InputMode.IMAGE_UPLOAD:
            self.starting_image = None
        if mode is not InputMode.VIDEO_UPLOAD:
            self.context_video = None
        self.input_mode = mode

    def attach(self, media: EncodedMedia) -> None:
        """Attach media, switching to the matching input mode."""
        match media:
            case EncodedImage():
                self.select_mode(InputMode.IMAGE_UPLOAD)
                self.starting_image = media
            case EncodedVideo():
                self.select_mode(InputMode.VIDEO_UPLOAD)
                self.context_video = media

    def clear_media(self) -> None:
        """Drop any attached media."""
        self.starting_image = None
        self.context_video = None

    async def attach_file(self, source: MediaSource, *, is_video: bool = False, mime_type: str | None = None) -> None:
        """Encode a file and attach it.

        The selection for that kind is cleared when encoding fails.

        Raises:
            EncodingError: If the file cannot be read or encoded.
        """
        try:
            media = await encode_media(source, is_video=is_video, mime_type=mime_type)
        except Exception:
            if is_video:
                self.context_video = None
            else:
                self.starting_image = None
            raise
        self.attach(media)

    def to_request(self) -> GenerationRequest:
        """Build the request sent to the video service.

        The context video stays local and is not part of the request.
        """
        return GenerationRequest(
            prompt_text=self.prompt_text,
            starting_image=self.starting_image if self.input_mode is InputMode.IMAGE_UPLOAD else None,
            aspect_ratio=self.aspect_ratio,
            resolution=self.resolution,
        )
