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

"""Error classes raised by the Reels Studio client."""

from typing import Literal

StatusName = Literal[
    'FAILED_PRECONDITION',
    'INVALID_ARGUMENT',
    'UNAVAILABLE',
    'UNAUTHENTICATED',
    'DEADLINE_EXCEEDED',
    'INTERNAL',
]

CREDENTIAL_ERROR_SIGNATURE = 'Requested entity was not found.'
"""Upstream message returned when the selected API key cannot reach Veo."""


class ReelsError(Exception):
    """Base error class for Reels Studio errors."""

    def __init__(
        self,
        message: str,
        *,
        status: StatusName = 'INTERNAL',
        cause: Exception | None = None,
    ) -> None:
        """Initialize a ReelsError.

        Args:
            message: The error message.
            status: The status name for this error.
            cause: Optional exception that triggered this error.
        """
        super().__init__(f'{status}: {message}')
        self.original_message = message
        self.status = status
        self.cause = cause


class PreconditionError(ReelsError):
    """Generation was attempted without a prompt or without an API key."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status='FAILED_PRECONDITION')


class EncodingError(ReelsError):
    """A selected file could not be read or encoded."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message, status='INVALID_ARGUMENT', cause=cause)


class RemoteServiceError(ReelsError):
    """A call to the generative service failed.

    Attributes:
        code: HTTP status code reported by the SDK, if any.
    """

    def __init__(self, message: str, *, code: int | None = None, cause: Exception | None = None) -> None:
        status: StatusName = 'UNAUTHENTICATED' if CREDENTIAL_ERROR_SIGNATURE in message else 'UNAVAILABLE'
        super().__init__(message, status=status, cause=cause)
        self.code = code

    @property
    def is_credential_error(self) -> bool:
        """Whether the upstream rejected the API key (invalid or misconfigured)."""
        return CREDENTIAL_ERROR_SIGNATURE in self.original_message

    @classmethod
    def from_exception(cls, exc: Exception) -> 'RemoteServiceError':
        """Wrap an SDK or transport exception, keeping the upstream message."""
        if isinstance(exc, RemoteServiceError):
            return exc
        message = getattr(exc, 'message', None) or str(exc) or 'Unknown error'
        code = getattr(exc, 'code', None)
        return cls(str(message), code=code if isinstance(code, int) else None, cause=exc)


class IncompleteResultError(ReelsError):
    """The operation finished without a usable video reference."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status='INTERNAL')


class PollTimeoutError(ReelsError):
    """The operation did not finish within the polling budget."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status='DEADLINE_EXCEEDED')


def get_error_message(error: object) -> str:
    """Extract the user-facing message from an error object.

    Args:
        error: The error to get the message from.

    Returns:
        The error message string.
    """
    if isinstance(error, ReelsError):
        return error.original_message
    message = getattr(error, 'message', None)
    if message:
        return str(message)
    return str(error) or 'Unknown error'
