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

"""Shared test fakes for Reels Studio.

Usage::

    from tests._fakes import FakeReelsClient, finished_operation, no_sleep

    client = FakeReelsClient(checks=[pending_operation(), finished_operation()])
"""

import asyncio
from collections.abc import Callable, Iterable
from unittest.mock import AsyncMock

from google.genai import types as genai_types

from reels_studio.types import SuggestionKind, SuggestionResult

VIDEO_URI = 'https://generativelanguage.googleapis.com/v1beta/files/abc123:download?alt=media'
API_KEY = 'test-key'


def pending_operation(name: str = 'operations/1') -> genai_types.GenerateVideosOperation:
    """An operation that has not finished yet."""
    return genai_types.GenerateVideosOperation(name=name, done=False)


def finished_operation(
    uri: str | None = VIDEO_URI,
    name: str = 'operations/1',
) -> genai_types.GenerateVideosOperation:
    """A finished operation, with one generated video when ``uri`` is set."""
    videos = [genai_types.GeneratedVideo(video=genai_types.Video(uri=uri))] if uri else []
    return genai_types.GenerateVideosOperation(
        name=name,
        done=True,
        response=genai_types.GenerateVideosResponse(generated_videos=videos),
    )


class FakeReelsClient:
    """Stand-in for ReelsClient with scripted operation snapshots."""

    def __init__(self, checks: Iterable[object] = (), api_key: str | None = API_KEY) -> None:
        self.start_generation = AsyncMock(return_value=pending_operation())
        self._checks = list(checks)
        self.check_operation = AsyncMock(side_effect=self._next_check)
        self.fetch_suggestion = AsyncMock()
        self._api_key = api_key

    @property
    def api_key(self) -> str | None:
        return self._api_key

    async def _next_check(self, operation: object) -> object:
        result = self._checks.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


class FakeSuggestionClient:
    """Answers suggestion requests per kind; an exception value is raised."""

    def __init__(self, answers: dict[SuggestionKind, SuggestionResult | Exception]) -> None:
        self._answers = answers
        self.calls: list[tuple[str, SuggestionKind]] = []

    async def fetch_suggestion(self, prompt_text: str, kind: SuggestionKind) -> SuggestionResult:
        self.calls.append((prompt_text, kind))
        await asyncio.sleep(0)
        answer = self._answers[kind]
        if isinstance(answer, Exception):
            raise answer
        return answer


async def no_sleep(_seconds: float) -> None:
    """Yield to the event loop without waiting."""
    await asyncio.sleep(0)


def blocking_sleep() -> tuple[asyncio.Event, Callable[[float], object]]:
    """A sleep that only returns once the returned event is set."""
    release = asyncio.Event()

    async def sleep(_seconds: float) -> None:
        await release.wait()

    return release, sleep


