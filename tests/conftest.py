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

"""Pytest fixtures shared by the Reels Studio tests."""

import pytest

from reels_studio.gate import ApiKeyGate
from reels_studio.types import GenerationRequest


@pytest.fixture
def reel_request() -> GenerationRequest:
    """A valid text-to-video request."""
    return GenerationRequest(prompt_text='A corgi surfing a wave at sunset')


@pytest.fixture
def gate() -> ApiKeyGate:
    """A gate without host capability, so the key counts as present."""
    return ApiKeyGate()
