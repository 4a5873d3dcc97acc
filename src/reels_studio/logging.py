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

"""Typed structlog wrapper and one-stop logging setup.

Usage:
    from reels_studio.logging import get_logger

    logger = get_logger(__name__)
    logger.info('Polling started', operation='operations/123')

Call ``setup_logging()`` once at program start. Two output formats are
supported: ``console`` (colored, Rich tracebacks) and ``json`` (one object per
line). Values of fields that look like secrets are masked before rendering, so
an API key never lands in the log output.
"""

import logging
import re
import sys
from typing import Protocol, cast

import structlog
import structlog.types
from rich.traceback import install as _install_rich_traceback


class Logger(Protocol):
    """Protocol matching the parts of structlog's BoundLogger used here."""

    def debug(self, event: str | None = None, **kw: object) -> None:
        """Log a debug message."""
        ...

    def info(self, event: str | None = None, **kw: object) -> None:
        """Log an info message."""
        ...

    def warning(self, event: str | None = None, **kw: object) -> None:
        """Log a warning message."""
        ...

    def error(self, event: str | None = None, **kw: object) -> None:
        """Log an error message."""
        ...

    def exception(self, event: str | None = None, **kw: object) -> None:
        """Log an exception with traceback."""
        ...


def get_logger(name: str | None = None) -> Logger:
    """Get a typed structlog logger.

    Args:
        name: Logger name, usually ``__name__``.

    Returns:
        A logger implementing the Logger protocol.
    """
    return cast(Logger, structlog.get_logger(name))


_SECRET_KEY_PATTERN = re.compile(r'(?i)(api[_-]?key|token|secret|password|authorization|credential)')
_URL_KEY_PATTERN = re.compile(r'([?&]key=)[^&\s]+')


def _mask_value(value: str) -> str:
    """Mask a secret value, keeping the first 4 and last 2 characters."""
    if len(value) <= 8:
        return '****'
    return f'{value[:4]}{"*" * (len(value) - 6)}{value[-2:]}'


def redact_secrets(
    _logger: structlog.types.WrappedLogger,
    _method: str,
    event_dict: structlog.types.EventDict,
) -> structlog.types.EventDict:
    """Structlog processor that masks secret fields and ``key=`` URL parameters."""
    for key, value in list(event_dict.items()):
        if not isinstance(value, str):
            continue
        if _SECRET_KEY_PATTERN.search(key):
            event_dict[key] = _mask_value(value)
        elif 'key=' in value:
            event_dict[key] = _URL_KEY_PATTERN.sub(r'\1****', value)
    return event_dict


def setup_logging(level: str | int = logging.INFO, fmt: str = 'console') -> None:
    """Configure structlog and the standard logging module.

    Args:
        level: Minimum log level, as a name (``'info'``) or a number.
        fmt: ``'console'`` for colored output or ``'json'`` for JSON lines.
    """
    if isinstance(level, str):
        level = logging.getLevelNamesMapping().get(level.upper(), logging.INFO)

    use_json = fmt.lower() == 'json'
    if not use_json:
        _install_rich_traceback(show_locals=False, width=120, extra_lines=3)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        redact_secrets,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt='iso'),
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if use_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    # The SDK and its transport log every request at INFO.
    for noisy_logger in ('httpx', 'httpcore', 'google_genai'):
        logging.getLogger(noisy_logger).setLevel(logging.WARNING)
