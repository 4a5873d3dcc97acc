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

"""Tests for the command-line flow."""

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from rich.panel import Panel

from reels_studio import cli
from reels_studio.config import Settings, parse_args
from reels_studio.types import GenerationState, GroundingSource, SuggestionKind, SuggestionResult
from tests._fakes import FakeReelsClient, finished_operation, pending_operation


def test_render_suggestion_lists_sources() -> None:
    """Sources are rendered as links under the suggestion."""
    result = SuggestionResult(
        text='1. Surf pup 🐶',
        sources=[GroundingSource(uri='https://example.com/a', title='A')],
    )

    panel = cli.render_suggestion(SuggestionKind.CAPTION, result)

    assert isinstance(panel, Panel)
    assert panel.title == 'Caption Ideas'
    assert '[link=https://example.com/a]A[/link]' in str(panel.renderable)


def test_render_suggestion_without_sources() -> None:
    """A suggestion without sources renders its text only."""
    panel = cli.render_suggestion(SuggestionKind.MUSIC_MOOD, SuggestionResult(text='- Lo-fi'))

    assert panel.title == 'Music Moods'
    assert panel.renderable == '- Lo-fi'


@pytest.mark.asyncio
async def test_spinner_messages_stop_with_polling() -> None:
    """The loading-message task is finished when polling returns."""
    controller = SimpleNamespace(wait=AsyncMock(return_value=GenerationState.SUCCEEDED))

    state = await cli._poll_with_spinner(controller)  # type: ignore[arg-type]

    assert state is GenerationState.SUCCEEDED
    assert not [task for task in asyncio.all_tasks() if task.get_name() == cli.LOADING_MESSAGES_TASK]


class TestRun:
    """Tests for cli.run."""

    @pytest.fixture
    def settings(self, monkeypatch: pytest.MonkeyPatch) -> Settings:
        monkeypatch.delenv('GEMINI_API_KEY', raising=False)
        monkeypatch.delenv('API_KEY', raising=False)
        return Settings(gemini_api_key='test-key', poll_interval=0.01)

    @pytest.mark.asyncio
    async def test_generates_and_suggests(self, monkeypatch: pytest.MonkeyPatch, settings: Settings) -> None:
        """A full run polls to completion and prints suggestions."""
        fake = FakeReelsClient(checks=[pending_operation(), finished_operation()])
        fake.fetch_suggestion.return_value = SuggestionResult(text='1. Surf pup 🐶')
        monkeypatch.setattr(cli, 'ReelsClient', SimpleNamespace(from_settings=lambda settings, credentials: fake))

        code = await cli.run(parse_args(['--prompt', 'A corgi surfing', '--captions']), settings)

        assert code == 0
        assert fake.check_operation.await_count == 2
        fake.fetch_suggestion.assert_awaited_once_with('A corgi surfing', SuggestionKind.CAPTION)

    @pytest.mark.asyncio
    async def test_blank_prompt_fails(self, monkeypatch: pytest.MonkeyPatch, settings: Settings) -> None:
        """A blank prompt exits with an error before calling the service."""
        fake = FakeReelsClient()
        monkeypatch.setattr(cli, 'ReelsClient', SimpleNamespace(from_settings=lambda settings, credentials: fake))

        code = await cli.run(parse_args(['--prompt', '   ']), settings)

        assert code == 1
        fake.start_generation.assert_not_awaited()
