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

"""Mapping of a GenerationRequest onto the Veo ``generate_videos`` call.

Two request shapes exist: prompt-only (text-to-video) and prompt plus an
inline starting image (image-to-video). Both always ask for exactly one video.
"""

from typing import Any

from google.genai import types as genai_types

from reels_studio.constants import VEO_FAST_MODEL
from reels_studio.types import AspectRatio, GenerationRequest, Resolution

NUMBER_OF_VIDEOS = 1


def build_video_config(aspect_ratio: AspectRatio, resolution: Resolution) -> genai_types.GenerateVideosConfig:
    """Build the Veo config for a single output video."""
    return genai_types.GenerateVideosConfig(
        number_of_videos=NUMBER_OF_VIDEOS,
        resolution=Resolution(resolution).value,
        aspect_ratio=AspectRatio(aspect_ratio).value,
    )


def build_video_request(request: GenerationRequest, *, model: str = VEO_FAST_MODEL) -> dict[str, Any]:
    """Build keyword arguments for ``client.aio.models.generate_videos``.

    Args:
        request: The generation request.
        model: The Veo model to call.

    Returns:
        A dict with ``model``, ``prompt``, ``config`` and, when a starting image
        is present, ``image``.
    """
    params: dict[str, Any] = {
        'model': model,
        'prompt': request.prompt_text,
        'config': build_video_config(request.aspect_ratio, request.resolution),
    }
    if request.starting_image is not None:
        params['image'] = genai_types.Image(
            image_bytes=request.starting_image.to_bytes(),
            mime_type=request.starting_image.mime_type,
        )
    return params
