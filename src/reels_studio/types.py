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

"""Data model for reel generation requests, results and credential status."""

import base64
from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class AspectRatio(StrEnum):
    """Aspect ratios supported by Veo."""

    LANDSCAPE = '16:9'
    PORTRAIT = '9:16'
    SQUARE = '1:1'


class Resolution(StrEnum):
    """Output resolutions supported by Veo."""

    RESOLUTION_720P = '720p'
    RESOLUTION_1080P = '1080p'


class InputMode(StrEnum):
    """How the user supplies media alongside the prompt.

    A context video is only used for the user's own reference and is never sent
    to the video service.
    """

    TEXT_ONLY = 'text-only'
    IMAGE_UPLOAD = 'image-upload'
    VIDEO_UPLOAD = 'video-upload'


class SuggestionKind(StrEnum):
    """Kinds of text suggestions offered for a finished reel."""

    CAPTION = 'caption'
    MUSIC_MOOD = 'music-mood'


class GenerationState(StrEnum):
    """States of one video generation attempt."""

    IDLE = 'idle'
    SUBMITTING = 'submitting'
    POLLING = 'polling'
    SUCCEEDED = 'succeeded'
    FAILED = 'failed'

    @property
    def is_terminal(self) -> bool:
        return self in (GenerationState.SUCCEEDED, GenerationState.FAILED)


class _EncodedFile(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    payload: str = Field(description='Base64 payload without the data URL prefix.')
    mime_type: str = Field(alias='mimeType')

    def to_data_url(self) -> str:
        """Reattach the data URL prefix to the payload."""
        return f'data:{self.mime_type};base64,{self.payload}'

    def to_bytes(self) -> bytes:
        """Decode the payload back to raw bytes."""
        return base64.b64decode(self.payload)


class EncodedImage(_EncodedFile):
    """An encoded still image used as the first frame of the video."""

    kind: Literal['image'] = 'image'


class EncodedVideo(_EncodedFile):
    """An encoded video kept for context only."""

    kind: Literal['video'] = 'video'
    name: str | None = None


EncodedMedia = Annotated[EncodedImage | EncodedVideo, Field(discriminator='kind')]


class GenerationRequest(BaseModel):
    """Everything needed to start one video generation."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    prompt_text: str = Field(alias='promptText')
    starting_image: EncodedImage | None = Field(default=None, alias='startingImage')
    aspect_ratio: AspectRatio = Field(default=AspectRatio.PORTRAIT, alias='aspectRatio')
    resolution: Resolution = Resolution.RESOLUTION_720P


class GeneratedAsset(BaseModel):
    """A finished video that can be played or downloaded."""

    model_config = ConfigDict(frozen=True)

    playable_url: str
    source_uri: str


class GroundingSource(BaseModel):
    """A citation attached to generated text."""

    model_config = ConfigDict(frozen=True)

    uri: str
    title: str


class SuggestionResult(BaseModel):
    """Text suggestion plus the sources the service grounded it on."""

    model_config = ConfigDict(frozen=True)

    text: str
    sources: list[GroundingSource] = Field(default_factory=list)


class ApiKeyStatus(BaseModel):
    """Snapshot of the API key selection state."""

    model_config = ConfigDict(frozen=True)

    present: bool = False
    checking: bool = False
    last_error: str | None = None
