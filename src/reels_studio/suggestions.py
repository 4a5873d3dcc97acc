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

"""Caption and music-mood suggestions for a finished reel.

Each kind has its own controller with its own loading flag and result, so the
two can refresh concurrently and a failure in one never touches the other.
"""

import asyncio

from reels_studio.client import ReelsClient
from reels_studio.error import get_error_message
from reels_studio.logging import get_logger
from reels_studio.types import SuggestionKind, SuggestionResult

logger = get_logger(__name__)

FAILURE_PREFIXES: dict[SuggestionKind, str] = {
    SuggestionKind.CAPTION: 'Failed to generate captions',
    SuggestionKind.MUSIC_MOOD: 'Failed to generate music moods',
}


class SuggestionController:
    """Repeatable request/response cycle for one kind of suggestion."""

    def __init__(self, kind: SuggestionKind, client: ReelsClient) -> None:
        self.kind = SuggestionKind(kind)
        self._client = client
        self.loading = False
        self.result: SuggestionResult | None = None

    async def refresh(self, prompt_text: str) -> SuggestionResult:
        """Fetch a fresh suggestion, replacing the previous one.

        A failure is stored as the result text (with no sources) instead of
        being raised.
        """
        self.loading = True
        self.result = None
        try:
            result = await self._client.fetch_suggestion(prompt_text, self.kind)
        except Exception as e:
            logger.error('Suggestion request failed', kind=self.kind.value, error=get_error_message(e))
            result = SuggestionResult(text=f'{FAILURE_PREFIXES[self.kind]}: {get_error_message(e)}')
        finally:
            self.loading = False
        self.result = result
        return result


class SuggestionBoard:
    """The caption and music-mood controllers shown next to a finished reel."""

    def __init__(self, client: ReelsClient) -> None:
        self.captions = SuggestionController(SuggestionKind.CAPTION, client)
        self.music_moods = SuggestionController(SuggestionKind.MUSIC_MOOD, client)

    def controller(self, kind: SuggestionKind) -> SuggestionController:
        if SuggestionKind(kind) is SuggestionKind.CAPTION:
            return self.captions
        return self.music_moods

    async def refresh_all(self, prompt_text: str) -> tuple[SuggestionResult, SuggestionResult]:
        """Refresh both kinds concurrently."""
        captions, music_moods = await asyncio.gather(
            self.captions.refresh(prompt_text),
            self.music_moods.refresh(prompt_text),
        )
        return captions, music_moods
