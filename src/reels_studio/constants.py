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

"""Model names, timings and messages shared across the package."""

VEO_FAST_MODEL = 'veo-3.1-fast-generate-preview'
VEO_MODEL = 'veo-3.1-generate-preview'
GEMINI_FLASH_MODEL = 'gemini-2.5-flash'

VIDEO_GENERATION_POLL_INTERVAL = 5.0
"""Seconds between two operation checks."""

VIDEO_GENERATION_POLL_TIMEOUT = 600.0
"""Seconds after which a generation attempt is abandoned."""

LOADING_MESSAGE_INTERVAL = 3.0

SUGGESTION_TEMPERATURE = 0.8
SUGGESTION_MAX_OUTPUT_TOKENS = 200

API_KEY_ENV_VARS = ('GEMINI_API_KEY', 'API_KEY')

BILLING_DOCUMENTATION_URL = 'https://ai.google.dev/gemini-api/docs/billing'

VIDEO_GENERATION_LOADING_MESSAGES = (
    'Crafting your cinematic masterpiece...',
    'Generating frames with AI magic...',
    'Synthesizing your vision into motion...',
    'Adding a touch of AI brilliance...',
    'Polishing pixels for perfection...',
    'Almost there! Your reel is brewing...',
    'Infusing creativity into every second...',
    'Bringing your prompt to life, frame by frame...',
    'Our AI director is hard at work...',
    'Expect cinematic quality, delivered by AI.',
)
