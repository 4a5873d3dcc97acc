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

"""API key gate.

The gate decides whether video generation may proceed. Selecting and checking
the key are delegated to a host capability (a key picker provided by the
environment the client runs in). When no such capability exists, the key is
assumed to be supplied out of band and the gate reports it as present.

The gate owns the current :class:`ApiKeyStatus`. Only ``check_status``,
``request_selection`` and ``revoke`` change it.
"""

import os
from collections.abc import Callable
from typing import Protocol, runtime_checkable

from rich.prompt import Prompt

from reels_studio.constants import API_KEY_ENV_VARS
from reels_studio.logging import get_logger
from reels_studio.types import ApiKeyStatus

logger = get_logger(__name__)

CredentialProvider = Callable[[], str | None]
"""Returns the API key to use for the next call, read at call time."""


@runtime_checkable
class HostCredentialCapability(Protocol):
    """Key selection offered by the hosting environment."""

    async def has_selected_credential(self) -> bool:
        """Whether the user has selected an API key."""
        ...

    async def open_credential_selector(self) -> None:
        """Let the user select an API key."""
        ...


class EnvironmentCredentials:
    """Host capability backed by process environment variables.

    A key is present when one of ``env_vars`` is set. Selecting a key asks for
    it on the terminal with hidden input and stores it under the first
    variable name, so the next client created picks it up. ``default`` is used
    when none of the variables is set, e.g. a key read from a ``.env`` file.
    """

    def __init__(
        self,
        env_vars: tuple[str, ...] = API_KEY_ENV_VARS,
        *,
        default: str | None = None,
        ask: Callable[[], str] | None = None,
    ) -> None:
        self._env_vars = env_vars
        self._default = default or None
        self._ask = ask or (lambda: Prompt.ask('Gemini API key', password=True))

    def __call__(self) -> str | None:
        for name in self._env_vars:
            value = os.environ.get(name)
            if value:
                return value
        return self._default

    async def has_selected_credential(self) -> bool:
        return self() is not None

    async def open_credential_selector(self) -> None:
        key = self._ask().strip()
        if not key:
            raise ValueError('No API key entered')
        os.environ[self._env_vars[0]] = key


class ApiKeyGate:
    """Tracks whether a usable API key is selected.

    Args:
        capability: Host key picker, or ``None`` when the environment offers
            none.
        verify_after_selection: Re-query the host after a selection instead
            of assuming it succeeded.
    """

    def __init__(
        self,
        capability: HostCredentialCapability | None = None,
        *,
        verify_after_selection: bool = False,
    ) -> None:
        self._capability = capability
        self._verify_after_selection = verify_after_selection
        self._status = ApiKeyStatus(present=capability is None)

    @property
    def status(self) -> ApiKeyStatus:
        return self._status

    @property
    def present(self) -> bool:
        return self._status.present

    @property
    def has_capability(self) -> bool:
        return self._capability is not None

    async def check_status(self) -> ApiKeyStatus:
        """Ask the host whether a key is selected."""
        if self._capability is None:
            self._status = ApiKeyStatus(present=True)
            return self._status

        self._status = self._status.model_copy(update={'checking': True, 'last_error': None})
        try:
            present = await self._capability.has_selected_credential()
        except Exception as e:
            logger.error('Error checking API key', error=str(e))
            self._status = ApiKeyStatus(present=False, last_error='Failed to check API key.')
        else:
            self._status = ApiKeyStatus(present=bool(present))
        return self._status

    async def request_selection(self) -> ApiKeyStatus:
        """Open the host key picker.

        Success is assumed as soon as the host call returns, unless the gate was
        built with ``verify_after_selection=True``.
        """
        if self._capability is None:
            self._status = ApiKeyStatus(present=True)
            return self._status

        self._status = self._status.model_copy(update={'checking': True, 'last_error': None})
        try:
            await self._capability.open_credential_selector()
        except Exception as e:
            logger.error('Error opening API key selector', error=str(e))
            self._status = ApiKeyStatus(present=False, last_error='Failed to open API key selector.')
            return self._status

        if self._verify_after_selection:
            return await self.check_status()
        self._status = ApiKeyStatus(present=True)
        logger.info('API key selected')
        return self._status

    def revoke(self, message: str) -> ApiKeyStatus:
        """Mark the cached key as unusable, e.g. after the service rejected it."""
        self._status = ApiKeyStatus(present=False, last_error=message)
        logger.warning('API key revoked', reason=message)
        return self._status
