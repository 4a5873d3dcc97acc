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

"""Tests for caption and music-mood suggestions."""

import pytest

from reels_studio.error import RemoteServiceError
from reels_studio.suggestions import SuggestionBoard, SuggestionController
from reels_studio.types import GroundingSource, SuggestionKind, SuggestionResult
from tests._fakes import FakeSuggestionClient

PROMPT = 'A corgi surfing a wave at sunset'

MOODS = SuggestionResult(
    text='- Upbeat surf rock: matches the waves',
    sources=[GroundingSource(uri='https://example.com/surf-rock', title='Surf rock')],
)


class TestSuggestionController:
    """Tests for SuggestionController."""

    @pytest.mark.asyncio
    async def test_refresh_stores_result(self) -> None:
        """A successful refresh stores the service answer."""
        client = FakeSuggestionClient({SuggestionKind.MUSIC_MOOD: MOODS})
        controller = SuggestionController(SuggestionKind.MUSIC_MOOD, client)  # type: ignore[arg-type]

        result = await controller.refresh(PROMPT)

        assert result == MOODS
        assert controller.result == MOODS
        assert controller.loading is False
        assert client.calls == [(PROMPT, SuggestionKind.MUSIC_MOOD)]

    @pytest.mark.asyncio
    async def test_failure_becomes_result_text(self) -> None:
        """A failed refresh is reported as text with no sources."""
        client = FakeSuggestionClient({SuggestionKind.CAPTION: RemoteServiceError('Quota exceeded')})
        controller = SuggestionController(SuggestionKind.CAPTION, client)  # type: ignore[arg-type]

        result = await controller.refresh(PROMPT)

        assert result.text == 'Failed to generate captions: Quota exceeded'
        assert result.sources == []
        assert controller.loading is False

    @pytest.mark.asyncio
    async def test_loading_while_in_flight(self) -> None:
        """The loading flag is set only while the request runs."""
        seen: list[bool] = []

        class RecordingClient:
            async def fetch_suggestion(self, prompt_text: str, kind: SuggestionKind) -> SuggestionResult:
                seen.append(controller.loading)
                seen.append(controller.result is None)
                return SuggestionResult(text='ok')

        controller = SuggestionController(SuggestionKind.CAPTION, RecordingClient())  # type: ignore[arg-type]
        controller.result = SuggestionResult(text='stale')

        await controller.refresh(PROMPT)

        assert seen == [True, True]
        assert controller.loading is False
        assert controller.result == SuggestionResult(text='ok')


class TestSuggestionBoard:
    """Tests for SuggestionBoard."""

    @pytest.mark.asyncio
    async def test_failures_are_independent(self) -> None:
        """A caption failure leaves the music-mood result intact."""
        client = FakeSuggestionClient({
            SuggestionKind.CAPTION: RemoteServiceError('Model overloaded'),
            SuggestionKind.MUSIC_MOOD: MOODS,
        })
        board = SuggestionBoard(client)  # type: ignore[arg-type]

        captions, music_moods = await board.refresh_all(PROMPT)

        assert captions.text == 'Failed to generate captions: Model overloaded'
        assert music_moods == MOODS
        assert board.captions.result == captions
        assert board.music_moods.result == MOODS
        assert not board.captions.loading
        assert not board.music_moods.loading
        assert sorted(kind.value for _, kind in client.calls) == ['caption', 'music-mood']

    def test_controller_lookup(self) -> None:
        """controller() returns the controller for a kind."""
        board = SuggestionBoard(FakeSuggestionClient({}))  # type: ignore[arg-type]

        assert board.controller(SuggestionKind.CAPTION) is board.captions
        assert board.controller(SuggestionKind.MUSIC_MOOD) is board.music_moods
        assert board.controller('music-mood') is board.music_moods  # type: ignore[arg-type]
