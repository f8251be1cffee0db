# Copyright 2025 Google LLC
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

"""Tests for the action registry."""

import pytest

from actionhub.core.action import Action, ActionRequest, ActionResponse
from actionhub.core.registry import Registry


class NoopAction(Action):
    name = 'noop'
    label = 'Noop'

    async def execute(self, request: ActionRequest) -> ActionResponse:
        return ActionResponse()


def test_register_and_lookup() -> None:
    registry = Registry()
    action = NoopAction()

    assert registry.add_action(action) is action
    assert registry.lookup_action('noop') is action
    assert registry.lookup_action('missing') is None
    assert registry.list_actions() == [action]


def test_duplicate_names_are_rejected() -> None:
    registry = Registry()
    registry.add_action(NoopAction())

    with pytest.raises(ValueError, match='noop already registered'):
        registry.add_action(NoopAction())
