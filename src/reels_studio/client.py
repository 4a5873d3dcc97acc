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

"""Calls to the Veo and Gemini endpoints.

Every call builds a fresh ``google.genai.Client`` from the credential provider,
so a key selected between two calls takes effect on the next one.

Video generation is a long-running operation::

    ┌─────────┐  generate_videos   ┌───────────┐  operations.get  ┌─────────┐
    │ Prompt  │ ─────────────────► │ Operation │ ───────────────► │  Video  │
    │ (+image)│                    │  (name)   │       ...        │  (URI)  │
    └─────────┘                    └───────────┘                  └─────────┘

Starting and checking are separate calls; the caller decides when to check
(see ``reels_studio.lifecycle``).
"""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx
from google import genai
from google.genai import types as genai_types
from opentelemetry import trace

from reels_studio import constants as const
from reels_studio.config import Settings
from reels_studio.error import RemoteServiceError
from reels_studio.gate import CredentialProvider, EnvironmentCredentials
from reels_studio.logging import get_logger
from reels_studio.request import build_video_request
from reels_studio.types import GeneratedAsset, GenerationRequest, GroundingSource, SuggestionKind, SuggestionResult

logger = get_logger(__name__)
tracer = trace.get_tracer(__name__)

ClientFactory = Callable[[str | None], genai.Client]

SYSTEM_INSTRUCTIONS: dict[SuggestionKind, str] = {
    SuggestionKind.CAPTION: (
        'You are an Instagram Reels caption writer. Provide short, engaging, and relevant captions, '
        'including relevant emojis and hashtags, for a video described by the user. Provide 3 distinct '
        'options, each on a new line. Do not include introductory or concluding remarks.'
    ),
    SuggestionKind.MUSIC_MOOD: (
        'You are a music expert recommending background music moods/genres for Instagram Reels. '
        'Suggest 3 music moods/genres and provide a short reason for each, for a video described by '
        'the user. Format as a bulleted list. Do not include introductory or concluding remarks.'
    ),
}

USER_PROMPTS: dict[SuggestionKind, str] = {
    SuggestionKind.CAPTION: 'Generate captions for a video about: {prompt}',
    SuggestionKind.MUSIC_MOOD: 'Suggest music moods/genres for a video about: {prompt}',
}


def default_client_factory(api_key: str | None) -> genai.Client:
    """Create a Gemini Developer API client for the given key."""
    return genai.Client(api_key=api_key)


def video_uri(operation: Any) -> str | None:  # noqa: ANN401
    """Return the URI of the first generated video, if the operation has one."""
    response = getattr(operation, 'response', None) or getattr(operation, 'result', None)
    for generated in getattr(response, 'generated_videos', None) or []:
        video = getattr(generated, 'video', None)
        uri = getattr(video, 'uri', None)
        if uri:
            return str(uri)
    return None


def operation_error(operation: Any) -> str | None:  # noqa: ANN401
    """Return the upstream error message of a finished operation, if any."""
    error = getattr(operation, 'error', None)
    if not error:
        return None
    if isinstance(error, dict):
        return str(error.get('message') or error)
    return str(error)


def _source(uri: str, title: str | None) -> GroundingSource:
    return GroundingSource(uri=uri, title=title or uri)


def grounding_sources(response: genai_types.GenerateContentResponse) -> list[GroundingSource]:
    """Collect grounding citations in the order the service returned them.

    Web chunks, map chunks and the review snippets attached to map chunks are
    all kept. Nothing is deduplicated.
    """
    if not response.candidates:
        return []
    metadata = response.candidates[0].grounding_metadata
    chunks = getattr(metadata, 'grounding_chunks', None) or []

    sources: list[GroundingSource] = []
    for chunk in chunks:
        web = getattr(chunk, 'web', None)
        if web is not None and getattr(web, 'uri', None):
            sources.append(_source(web.uri, getattr(web, 'title', None)))

        maps = getattr(chunk, 'maps', None)
        if maps is None:
            continue
        if getattr(maps, 'uri', None):
            sources.append(_source(maps.uri, getattr(maps, 'title', None)))
        answer_sources = getattr(maps, 'place_answer_sources', None)
        for snippet in getattr(answer_sources, 'review_snippets', None) or []:
            uri = getattr(snippet, 'uri', None) or getattr(snippet, 'google_maps_uri', None)
            if uri:
                sources.append(_source(uri, getattr(snippet, 'title', None)))
    return sources


class ReelsClient:
    """Stateless access to video generation, operation checks and suggestions.

    Args:
        credentials: Returns the API key to use, read at every call.
        video_model: Veo model name.
        suggestion_model: Gemini model used for captions and music moods.
        temperature: Sampling temperature for suggestions.
        max_output_tokens: Output cap for suggestions.
        client_factory: Builds a ``genai.Client`` from an API key.
    """

    def __init__(
        self,
        credentials: CredentialProvider | None = None,
        *,
        video_model: str = const.VEO_FAST_MODEL,
        suggestion_model: str = const.GEMINI_FLASH_MODEL,
        temperature: float = const.SUGGESTION_TEMPERATURE,
        max_output_tokens: int = const.SUGGESTION_MAX_OUTPUT_TOKENS,
        client_factory: ClientFactory = default_client_factory,
    ) -> None:
        self._credentials = credentials or EnvironmentCredentials()
        self.video_model = video_model
        self.suggestion_model = suggestion_model
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens
        self._client_factory = client_factory

    @classmethod
    def from_settings(cls, settings: Settings, credentials: CredentialProvider | None = None) -> 'ReelsClient':
        """Create a client configured from application settings."""
        return cls(
            credentials,
            video_model=settings.video_model,
            suggestion_model=settings.suggestion_model,
            temperature=settings.suggestion_temperature,
            max_output_tokens=settings.suggestion_max_output_tokens,
        )

    @property
    def api_key(self) -> str | None:
        """The key the next call would use."""
        return self._credentials()

    def _new_client(self) -> genai.Client:
        return self._client_factory(self._credentials())

    async def start_generation(self, request: GenerationRequest) -> genai_types.GenerateVideosOperation:
        """Start a Veo generation.

        Raises:
            RemoteServiceError: If the service rejects the request or cannot be
                reached.
        """
        params = build_video_request(request, model=self.video_model)
        with tracer.start_as_current_span('generate_videos') as span:
            span.set_attribute('reels.model', self.video_model)
            span.set_attribute('reels.image_to_video', 'image' in params)
            try:
                operation = await self._new_client().aio.models.generate_videos(**params)
            except Exception as e:
                error = RemoteServiceError.from_exception(e)
                logger.error('Video generation request failed', error=error.original_message)
                raise error from e
        logger.info('Video generation started', operation=getattr(operation, 'name', None))
        return operation

    async def check_operation(
        self, operation: genai_types.GenerateVideosOperation
    ) -> genai_types.GenerateVideosOperation:
        """Fetch a fresh snapshot of a running operation.

        Raises:
            RemoteServiceError: On transport or upstream failure.
        """
        with tracer.start_as_current_span('get_videos_operation') as span:
            span.set_attribute('reels.operation', str(getattr(operation, 'name', '')))
            try:
                refreshed = await self._new_client().aio.operations.get(operation)
            except Exception as e:
                error = RemoteServiceError.from_exception(e)
                raise error from e
        logger.debug('Checked operation', operation=getattr(refreshed, 'name', None), done=refreshed.done)
        return refreshed

    async def fetch_suggestion(self, prompt_text: str, kind: SuggestionKind) -> SuggestionResult:
        """Ask Gemini for caption or music-mood ideas for a reel.

        Raises:
            RemoteServiceError: On transport or upstream failure.
        """
        kind = SuggestionKind(kind)
        config = genai_types.GenerateContentConfig(
            system_instruction=SYSTEM_INSTRUCTIONS[kind],
            temperature=self.temperature,
            max_output_tokens=self.max_output_tokens,
        )
        with tracer.start_as_current_span('generate_content') as span:
            span.set_attribute('reels.model', self.suggestion_model)
            span.set_attribute('reels.suggestion_kind', kind.value)
            try:
                response = await self._new_client().aio.models.generate_content(
                    model=self.suggestion_model,
                    contents=USER_PROMPTS[kind].format(prompt=prompt_text),
                    config=config,
                )
            except Exception as e:
                error = RemoteServiceError.from_exception(e)
                raise error from e

        return SuggestionResult(text=response.text or '', sources=grounding_sources(response))


async def download_asset(
    asset: GeneratedAsset,
    destination: Path,
    *,
    http_client: httpx.AsyncClient | None = None,
) -> Path:
    """Stream a finished video to disk.

    Raises:
        RemoteServiceError: If the download fails.
    """
    owns_client = http_client is None
    client = http_client or httpx.AsyncClient(follow_redirects=True, timeout=httpx.Timeout(60.0))
    try:
        with tracer.start_as_current_span('download_video'):
            async with client.stream('GET', asset.playable_url) as response:
                if response.status_code != 200:
                    raise RemoteServiceError(
                        f'HTTP error {response.status_code} downloading video',
                        code=response.status_code,
                    )
                destination.parent.mkdir(parents=True, exist_ok=True)
                with destination.open('wb') as f:
                    async for chunk in response.aiter_bytes():
                        f.write(chunk)
    except httpx.HTTPError as e:
        raise RemoteServiceError.from_exception(e) from e
    finally:
        if owns_client:
            await client.aclose()
    logger.info('Video downloaded', path=str(destination))
    return destination
