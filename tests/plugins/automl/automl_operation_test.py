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

"""Tests for waiting on long-running operations."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from pydantic import ValidationError

from actionhub.core.error import OperationCancelledError, OperationTimeoutError
from actionhub.plugins.automl.operation import PollPolicy, wait_for_operation

FAST = PollPolicy(initial_delay=0.001, max_delay=0.002)


def _operation(done: list[bool] | bool, result: object = None) -> MagicMock:
    operation = MagicMock()
    if isinstance(done, list):
        operation.done = AsyncMock(side_effect=done)
    else:
        operation.done = AsyncMock(return_value=done)
    operation.result = AsyncMock(return_value=result)
    operation.cancel = AsyncMock()
    return operation


@pytest.mark.asyncio
async def test_returns_result_once_done() -> None:
    operation = _operation([False, False, True], result='imported')

    assert await wait_for_operation(operation, policy=FAST) == 'imported'
    assert operation.done.await_count == 3
    operation.result.assert_awaited_once()
    operation.cancel.assert_not_awaited()


@pytest.mark.asyncio
async def test_raises_remote_failure() -> None:
    operation = _operation(True)
    operation.result.side_effect = Exception('error importing ds')

    with pytest.raises(Exception, match='error importing ds'):
        await wait_for_operation(operation, policy=FAST)


@pytest.mark.asyncio
async def test_times_out() -> None:
    operation = _operation(False)
    policy = PollPolicy(initial_delay=0.005, max_delay=0.01, timeout=0.03)

    with pytest.raises(OperationTimeoutError, match='did not finish within 0.03 seconds'):
        await wait_for_operation(operation, policy=policy)

    operation.result.assert_not_awaited()


@pytest.mark.asyncio
async def test_cancel_before_first_pause() -> None:
    operation = _operation(False)
    cancel = asyncio.Event()
    cancel.set()

    with pytest.raises(OperationCancelledError):
        await wait_for_operation(operation, policy=FAST, cancel=cancel)

    operation.cancel.assert_awaited_once()
    operation.result.assert_not_awaited()


@pytest.mark.asyncio
async def test_cancel_interrupts_long_pause() -> None:
    operation = _operation(False)
    cancel = asyncio.Event()
    policy = PollPolicy(initial_delay=30, max_delay=60, timeout=None)

    async def cancel_soon() -> None:
        await asyncio.sleep(0.01)
        cancel.set()

    canceller = asyncio.create_task(cancel_soon())
    with pytest.raises(OperationCancelledError):
        await asyncio.wait_for(wait_for_operation(operation, policy=policy, cancel=cancel), timeout=5)
    await canceller

    operation.cancel.assert_awaited_once()


@pytest.mark.parametrize(
    'kwargs',
    [
        {'initial_delay': 0},
        {'max_delay': -1},
        {'multiplier': 0.5},
        {'timeout': 0},
    ],
)
def test_policy_rejects_invalid_values(kwargs: dict[str, float]) -> None:
    with pytest.raises(ValidationError):
        PollPolicy(**kwargs)


def test_policy_defaults_are_bounded() -> None:
    policy = PollPolicy()

    assert policy.timeout == 4 * 60 * 60
    assert policy.initial_delay <= policy.max_delay
