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

"""Reels Studio: generate short vertical videos with Veo.

Submit a prompt (optionally with a starting image), poll the long-running
operation until the video is ready, then ask Gemini for captions and music
moods that fit it.

Example:
    >>> from reels_studio import ApiKeyGate, GenerationController, GenerationRequest, ReelsClient
    >>>
    >>> client = ReelsClient()
    >>> async with GenerationController(client, ApiKeyGate()) as controller:
    ...     await controller.generate(GenerationRequest(prompt_text='A cat surfing at sunset'))
    ...     await controller.wait()
    ...     print(controller.asset.playable_url)
"""

from reels_studio.aio import RepeatingTimer
from reels_studio.client import ReelsClient, download_asset, grounding_sources
from reels_studio.config import Settings, make_settings
from reels_studio.draft import ReelDraft
from reels_studio.error import (
    EncodingError,
    IncompleteResultError,
    PollTimeoutError,
    PreconditionError,
    ReelsError,
    RemoteServiceError,
)
from reels_studio.gate import ApiKeyGate, EnvironmentCredentials, HostCredentialCapability
from reels_studio.lifecycle import GenerationController, asset_url
from reels_studio.media import encode_media, media_from_data_url, strip_data_url_prefix
from reels_studio.request import build_video_request
from reels_studio.suggestions import SuggestionBoard, SuggestionController
from reels_studio.types import (
    ApiKeyStatus,
    AspectRatio,
    EncodedImage,
    EncodedMedia,
    EncodedVideo,
    GeneratedAsset,
    GenerationRequest,
    GenerationState,
    GroundingSource,
    InputMode,
    Resolution,
    SuggestionKind,
    SuggestionResult,
)

__all__ = [
    'ApiKeyGate',
    'ApiKeyStatus',
    'AspectRatio',
    'EncodedImage',
    'EncodedMedia',
    'EncodedVideo',
    'EncodingError',
    'EnvironmentCredentials',
    'GeneratedAsset',
    'GenerationController',
    'GenerationRequest',
    'GenerationState',
    'GroundingSource',
    'HostCredentialCapability',
    'IncompleteResultError',
    'InputMode',
    'PollTimeoutError',
    'PreconditionError',
    'ReelDraft',
    'ReelsClient',
    'ReelsError',
    'RemoteServiceError',
    'RepeatingTimer',
    'Resolution',
    'Settings',
    'SuggestionBoard',
    'SuggestionController',
    'SuggestionKind',
    'SuggestionResult',
    'asset_url',
    'build_video_request',
    'download_asset',
    'encode_media',
    'grounding_sources',
    'make_settings',
    'media_from_data_url',
    'strip_data_url_prefix',
]
