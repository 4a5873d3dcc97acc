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

"""Tests for the secret-redacting log processor."""

from reels_studio.logging import redact_secrets


def test_masks_secret_fields() -> None:
    """Fields named like secrets are masked."""
    event = redact_secrets(None, 'info', {'event': 'call', 'api_key': 'AIzaSyExampleKey42', 'token': 'short'})

    assert event['api_key'] == 'AIza************42'
    assert event['token'] == '****'
    assert event['event'] == 'call'


def test_masks_key_query_parameter() -> None:
    """API keys embedded in URLs are masked."""
    url = 'https://example.com/files/abc:download?alt=media&key=secret-value'

    event = redact_secrets(None, 'info', {'event': 'download', 'url': url})

    assert event['url'] == 'https://example.com/files/abc:download?alt=media&key=****'


def test_leaves_other_values() -> None:
    """Non-secret values and non-strings pass through."""
    event = redact_secrets(None, 'info', {'event': 'poll', 'attempt': 3, 'operation': 'operations/1'})

    assert event == {'event': 'poll', 'attempt': 3, 'operation': 'operations/1'}
