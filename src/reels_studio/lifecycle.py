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

"""Lifecycle of one video generation attempt.

State machine::

    IDLE ──generate()──► SUBMITTING ──started──► POLLING ──done + URI──► SUCCEEDED
      ▲                      │                    │  ▲
      │                [start failed]             │  └──[not done]──┘
      │                      ▼                    │
      └──[precondition]    FAILED ◄──[check failed | no URI | timed out]

Polling is driven by a :class:`~reels_studio.aio.RepeatingTimer` that checks
the operation every ``poll_interval`` seconds. Checks never overlap, and the
controller owns at most one armed timer: a new ``generate()`` and ``aclose()``
both disarm it before anything else happens. The timer is disarmed once, on the
first terminal observation.

Only :class:`PreconditionError` escapes ``generate()``. Every other failure
ends in ``FAILED`` with ``error`` and ``error_message`` describing it, and the
controller can be used again right away.
"""

import asyncio
import math
from types import TracebackType

import httpx
from google.genai import types as genai_types

from reels_studio import constants as const
from reels_studio.aio import RepeatingTimer, Sleep
from reels_studio.client import ReelsClient, operation_error, video_uri
from reels_studio.config import Settings
from reels_studio.error import (
    IncompleteResultError,
    PollTimeoutError,
    PreconditionError,
    ReelsError,
    RemoteServiceError,
)
from reels_studio.gate import ApiKeyGate
from reels_studio.logging import get_logger
from reels_studio.types import GeneratedAsset, GenerationRequest, GenerationState

logger = get_logger(__name__)

EMPTY_PROMPT_MESSAGE = 'Please enter a prompt for your reel.'
NO_API_KEY_MESSAGE = 'API key not selected. Please select your API key before generating.'
INVALID_API_KEY_MESSAGE = (
    'API key might be invalid or not properly configured for Veo. Please select your API key again.'
)
EXPIRED_API_KEY_STATUS = 'API key might be invalid or expired.'
NO_RESULT_MESSAGE = 'Video generation completed, but no result found (no video URI).'


def asset_url(uri: str, api_key: str) -> str:
    """Append the API key to a video URI so it can be fetched directly.

    An existing ``key`` parameter is replaced, so the key appears exactly once.
    """
    return str(httpx.URL(uri).copy_set_param('key', api_key))


class GenerationController:
    """Submits a generation request and polls it to completion.

    Args:
        client: Remote calls to the video service.
        gate: API key gate consulted before submitting, and revoked when the
            service rejects the key.
        poll_interval: Seconds between two operation checks.
        poll_timeout: Seconds after which the attempt fails with
            :class:`PollTimeoutError`; ``None`` or ``0`` polls until the
            operation finishes.
        sleep: Sleep function used by the timer, replaceable in tests.
    """

    def __init__(
        self,
        client: ReelsClient,
        gate: ApiKeyGate,
        *,
        poll_interval: float = const.VIDEO_GENERATION_POLL_INTERVAL,
        poll_timeout: float | None = const.VIDEO_GENERATION_POLL_TIMEOUT,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._client = client
        self._gate = gate
        self._timer = RepeatingTimer(poll_interval, self._check, sleep=sleep, name='reels-poll')
        self._max_polls = math.ceil(poll_timeout / poll_interval) if poll_timeout else None
        self._attempt = 0

        self.state = GenerationState.IDLE
        self.request: GenerationRequest | None = None
        self.operation: genai_types.GenerateVideosOperation | None = None
        self.asset: GeneratedAsset | None = None
        self.error: ReelsError | None = None
        self.polls = 0

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        client: ReelsClient,
        gate: ApiKeyGate,
        *,
        sleep: Sleep = asyncio.sleep,
    ) -> 'GenerationController':
        return cls(
            client,
            gate,
            poll_interval=settings.poll_interval,
            poll_timeout=settings.poll_timeout,
            sleep=sleep,
        )

    @property
    def timer(self) -> RepeatingTimer:
        return self._timer

    @property
    def error_message(self) -> str | None:
        """User-facing description of the last failure."""
        return self.error.original_message if self.error else None

    @property
    def is_busy(self) -> bool:
        return self.state in (GenerationState.SUBMITTING, GenerationState.POLLING)

    async def generate(self, request: GenerationRequest) -> GenerationState:
        """Start a new attempt, superseding any attempt still in flight.

        Returns:
            The state after submission: ``POLLING`` on success, ``FAILED`` if
            the service rejected the request.

        Raises:
            PreconditionError: If the prompt is blank or no API key is
                selected. Nothing is sent to the service.
        """
        self._timer.disarm()
        self._attempt += 1
        attempt = self._attempt
        self.request = request
        self.operation = None
        self.asset = None
        self.error = None
        self.polls = 0

        if not request.prompt_text.strip():
            raise self._reject(EMPTY_PROMPT_MESSAGE)
        if not self._gate.present:
            raise self._reject(NO_API_KEY_MESSAGE)

        self.state = GenerationState.SUBMITTING
        logger.info(
            'Submitting video generation',
            aspect_ratio=request.aspect_ratio.value,
            resolution=request.resolution.value,
            image_to_video=request.starting_image is not None,
        )
        try:
            operation = await self._client.start_generation(request)
        except Exception as e:
            if attempt == self._attempt:
                self._on_start_failed(RemoteServiceError.from_exception(e))
            return self.state

        if attempt != self._attempt:
            logger.info('Discarding superseded operation', operation=getattr(operation, 'name', None))
            return self.state

        self.operation = operation
        self.state = GenerationState.POLLING
        self._timer.arm()
        logger.info('Polling video generation', operation=getattr(operation, 'name', None))
        return self.state

    async def wait(self) -> GenerationState:
        """Wait for the current polling loop to end."""
        await self._timer.wait()
        return self.state

    async def aclose(self) -> None:
        """Tear down: stop polling and forget the in-flight attempt."""
        self._attempt += 1
        if self._timer.disarm():
            logger.info('Polling stopped on teardown', operation=getattr(self.operation, 'name', None))
        if self.is_busy:
            self.state = GenerationState.IDLE

    async def __aenter__(self) -> 'GenerationController':
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    def _reject(self, message: str) -> PreconditionError:
        error = PreconditionError(message)
        self.state = GenerationState.IDLE
        self.error = error
        logger.warning('Video generation rejected', reason=message)
        return error

    def _on_start_failed(self, error: RemoteServiceError) -> None:
        if error.is_credential_error:
            self._gate.revoke(EXPIRED_API_KEY_STATUS)
            self._fail(RemoteServiceError(INVALID_API_KEY_MESSAGE, code=error.code, cause=error))
        else:
            self._fail(
                RemoteServiceError(
                    f'Failed to generate video: {error.original_message}',
                    code=error.code,
                    cause=error,
                )
            )

    def _fail(self, error: ReelsError, *, clear_operation: bool = False) -> None:
        self._timer.disarm()
        if clear_operation:
            self.operation = None
        self.state = GenerationState.FAILED
        self.error = error
        logger.error('Video generation failed', error=error.original_message, status=error.status, polls=self.polls)

    async def _check(self) -> bool:
        """One timer tick. Returns False once the attempt is terminal."""
        if self.operation is None or self.state != GenerationState.POLLING:
            return False

        self.polls += 1
        try:
            operation = await self._client.check_operation(self.operation)
        except Exception as e:
            error = RemoteServiceError.from_exception(e)
            self._fail(
                RemoteServiceError(
                    f'Error during video processing: {error.original_message}',
                    code=error.code,
                    cause=error,
                ),
                clear_operation=True,
            )
            return False

        self.operation = operation
        try:
            return self._settle(operation)
        except Exception as e:
            error = RemoteServiceError.from_exception(e)
            self._fail(
                RemoteServiceError(f'Error during video processing: {error.original_message}', cause=error),
                clear_operation=True,
            )
            return False

    def _settle(self, operation: genai_types.GenerateVideosOperation) -> bool:
        """Act on a fresh snapshot. Returns False once the attempt is terminal."""
        if not operation.done:
            if self._max_polls is not None and self.polls >= self._max_polls:
                self._fail(
                    PollTimeoutError(f'Video generation timed out after {self.polls} status checks.'),
                    clear_operation=True,
                )
                return False
            logger.debug('Video not ready yet', polls=self.polls)
            return True

        upstream_error = operation_error(operation)
        if upstream_error:
            self._fail(RemoteServiceError(f'Error during video processing: {upstream_error}'))
            return False

        uri = video_uri(operation)
        if uri is None:
            self._fail(IncompleteResultError(NO_RESULT_MESSAGE))
            return False

        api_key = self._client.api_key
        self.asset = GeneratedAsset(playable_url=asset_url(uri, api_key) if api_key else uri, source_uri=uri)
        self._timer.disarm()
        self.state = GenerationState.SUCCEEDED
        logger.info('Video generation succeeded', polls=self.polls, uri=uri)
        return False
