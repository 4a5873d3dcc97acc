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

r"""Command-line entry point.

CLI Usage::

    reels-studio --prompt "A neon-lit street at night, rain reflections"
    reels-studio --prompt "My cat waking up" --image cat.png --output reel.mp4
    reels-studio --prompt "Sunrise hike" --captions --music
    reels-studio --prompt "City timelapse" --aspect-ratio 16:9 --resolution 1080p
    python -m reels_studio --env staging --log-format json --prompt "..."
"""

import argparse
import asyncio
import contextlib
import itertools
from collections.abc import Sequence
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.status import Status

from reels_studio import constants as const
from reels_studio.client import ReelsClient, download_asset
from reels_studio.config import Settings, make_settings, parse_args
from reels_studio.draft import ReelDraft
from reels_studio.error import EncodingError, PreconditionError, RemoteServiceError
from reels_studio.gate import ApiKeyGate, EnvironmentCredentials
from reels_studio.lifecycle import GenerationController
from reels_studio.logging import get_logger, setup_logging
from reels_studio.suggestions import SuggestionController
from reels_studio.types import GenerationState, SuggestionKind, SuggestionResult

logger = get_logger(__name__)

console = Console()

LOADING_MESSAGES_TASK = 'reels-loading-messages'

SUGGESTION_TITLES: dict[SuggestionKind, str] = {
    SuggestionKind.CAPTION: 'Caption Ideas',
    SuggestionKind.MUSIC_MOOD: 'Music Moods',
}


async def rotate_messages(
    status: Status,
    messages: Sequence[str] = const.VIDEO_GENERATION_LOADING_MESSAGES,
    interval: float = const.LOADING_MESSAGE_INTERVAL,
) -> None:
    """Cycle the spinner text until cancelled."""
    for message in itertools.cycle(messages):
        status.update(message)
        await asyncio.sleep(interval)


def render_suggestion(kind: SuggestionKind, result: SuggestionResult) -> Panel:
    """Render a suggestion and its sources as a Rich panel."""
    body = result.text
    if result.sources:
        links = '\n'.join(f'• [link={source.uri}]{source.title}[/link]' for source in result.sources)
        body = f'{body}\n\n[bold]Sources[/bold]\n{links}'
    return Panel(body, title=SUGGESTION_TITLES[kind], expand=False)


async def _ensure_api_key(gate: ApiKeyGate) -> bool:
    status = await gate.check_status()
    if status.present:
        return True
    console.print(
        'Select a Gemini API key to generate reels. '
        f'Billing for Gemini API usage: {const.BILLING_DOCUMENTATION_URL}'
    )
    status = await gate.request_selection()
    if not status.present:
        console.print(f'[red]Error:[/red] {status.last_error} Please try selecting your API key again.')
    return status.present


async def _poll_with_spinner(controller: GenerationController) -> GenerationState:
    with console.status(const.VIDEO_GENERATION_LOADING_MESSAGES[0], spinner='dots') as status:
        rotator = asyncio.create_task(rotate_messages(status), name=LOADING_MESSAGES_TASK)
        try:
            return await controller.wait()
        finally:
            rotator.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await rotator


async def run(args: argparse.Namespace, settings: Settings) -> int:
    """Generate one reel as described by the parsed arguments.

    Returns:
        The process exit code.
    """
    credentials = EnvironmentCredentials(default=settings.gemini_api_key)
    gate = ApiKeyGate(credentials)
    if not await _ensure_api_key(gate):
        return 1

    client = ReelsClient.from_settings(settings, credentials)
    draft = ReelDraft(
        args.prompt,
        aspect_ratio=args.aspect_ratio or settings.aspect_ratio,
        resolution=args.resolution or settings.resolution,
    )
    try:
        if args.image:
            await draft.attach_file(args.image)
        elif args.context_video:
            await draft.attach_file(args.context_video, is_video=True)
    except EncodingError as e:
        console.print(f'[red]Error:[/red] {e.original_message}')
        return 1

    async with GenerationController.from_settings(settings, client, gate) as controller:
        try:
            state = await controller.generate(draft.to_request())
        except PreconditionError as e:
            console.print(f'[red]Error:[/red] {e.original_message}')
            return 1
        if state is GenerationState.POLLING:
            state = await _poll_with_spinner(controller)

        if state is not GenerationState.SUCCEEDED or controller.asset is None:
            console.print(f'[red]Error:[/red] {controller.error_message or "Video generation did not finish."}')
            return 1
        asset = controller.asset

    console.print(f'[green]Your reel is ready:[/green] {asset.source_uri}')
    if args.output:
        try:
            path = await download_asset(asset, Path(args.output))
        except RemoteServiceError as e:
            console.print(f'[red]Error:[/red] {e.original_message}')
            return 1
        console.print(f'Saved to {path}')

    wanted = {SuggestionKind.CAPTION: args.captions, SuggestionKind.MUSIC_MOOD: args.music}
    kinds = [kind for kind, selected in wanted.items() if selected]
    controllers = [SuggestionController(kind, client) for kind in kinds]
    results = await asyncio.gather(*(controller.refresh(args.prompt) for controller in controllers))
    for kind, result in zip(kinds, results, strict=True):
        console.print(render_suggestion(kind, result))
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Console script entry point."""
    args = parse_args(argv)
    settings = make_settings(args.env)
    setup_logging(args.log_level or settings.log_level, args.log_format or settings.log_format)
    try:
        return asyncio.run(run(args, settings))
    except KeyboardInterrupt:
        logger.info('Interrupted')
        return 130
