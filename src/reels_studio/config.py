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

"""Settings and command-line argument parsing.

Configuration is loaded with the following priority (highest wins):

1. CLI arguments          (``--aspect-ratio``, ``--log-level``, ...)
2. Environment variables  (``export GEMINI_API_KEY=...``)
3. ``.<env>.env`` file    (e.g. ``.staging.env``)
4. ``.env`` file          (shared defaults)
5. Defaults defined in :class:`Settings`
"""

import argparse
from collections.abc import Sequence
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from reels_studio import constants as const
from reels_studio.types import AspectRatio, Resolution


def _build_env_files(env: str | None) -> tuple[str, ...]:
    """Build the list of .env files to load, most specific last."""
    files: list[str] = ['.env']
    if env:
        files.append(f'.{env}.env')
    return tuple(files)


class Settings(BaseSettings):
    """Settings loaded from environment variables and .env files."""

    model_config = SettingsConfigDict(
        env_file_encoding='utf-8',
        extra='ignore',
    )

    gemini_api_key: str = ''
    video_model: str = const.VEO_FAST_MODEL
    suggestion_model: str = const.GEMINI_FLASH_MODEL

    poll_interval: float = Field(default=const.VIDEO_GENERATION_POLL_INTERVAL, gt=0)
    # 0 disables the bound.
    poll_timeout: float = Field(default=const.VIDEO_GENERATION_POLL_TIMEOUT, ge=0)

    suggestion_temperature: float = Field(default=const.SUGGESTION_TEMPERATURE, ge=0, le=2)
    suggestion_max_output_tokens: int = Field(default=const.SUGGESTION_MAX_OUTPUT_TOKENS, gt=0)

    aspect_ratio: AspectRatio = AspectRatio.PORTRAIT
    resolution: Resolution = Resolution.RESOLUTION_720P

    log_level: str = 'info'
    log_format: Literal['console', 'json'] = 'console'


def make_settings(env: str | None = None) -> Settings:
    """Create Settings with the appropriate .env files for the environment."""
    return Settings(_env_file=_build_env_files(env))  # type: ignore[call-arg]


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments for the ``reels-studio`` tool."""
    parser = argparse.ArgumentParser(
        prog='reels-studio',
        description='Generate a short vertical video with Veo, then get caption and music ideas.',
    )
    parser.add_argument('--prompt', required=True, help='Description of the reel to generate')
    media = parser.add_mutually_exclusive_group()
    media.add_argument('--image', metavar='PATH', default=None, help='Starting image for image-to-video')
    media.add_argument(
        '--context-video',
        metavar='PATH',
        default=None,
        help='Video kept for reference only; it is not sent to the video service',
    )
    parser.add_argument(
        '--aspect-ratio',
        choices=[ratio.value for ratio in AspectRatio],
        default=None,
        help='Output aspect ratio (default from settings: 9:16)',
    )
    parser.add_argument(
        '--resolution',
        choices=[resolution.value for resolution in Resolution],
        default=None,
        help='Output resolution (default from settings: 720p)',
    )
    parser.add_argument('--output', metavar='PATH', default=None, help='Download the finished video to PATH')
    parser.add_argument('--captions', action='store_true', help='Suggest captions for the finished reel')
    parser.add_argument('--music', action='store_true', help='Suggest music moods for the finished reel')
    parser.add_argument(
        '--env',
        default=None,
        metavar='ENV',
        help='Environment name; loads .<ENV>.env on top of .env',
    )
    parser.add_argument('--log-level', default=None, help='Log level override (default from settings: info)')
    parser.add_argument(
        '--log-format',
        choices=['console', 'json'],
        default=None,
        help='Log output format (default from settings: console)',
    )
    return parser.parse_args(argv)
