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

"""Waiting on long-running AutoML operations.

Dataset creation and data import return a long-running operation handle.
``wait_for_operation`` polls it until the remote job reaches a terminal
state, backing off between polls:

    ┌──────────┐  not done   ┌──────────────┐  delay elapsed  ┌──────────┐
    │ done()?  │ ──────────► │ pause(delay) │ ──────────────► │ done()?  │ ...
    └──────────┘             └──────────────┘                 └──────────┘
         │ done                  │ cancel set      │ deadline passed
         ▼                       ▼                 ▼
     result()            OperationCancelledError  OperationTimeoutError

``result()`` raises the remote error when the job itself failed.
"""

import asyncio
import time
from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict, Field

from actionhub.core.error import OperationCancelledError, OperationTimeoutError
from actionhub.core.logging import get_logger
from actionhub.plugins.automl.constants import DEFAULT_OPERATION_TIMEOUT_SECONDS

logger = get_logger(__name__)


class PollableOperation(Protocol):
    """The subset of ``google.api_core.operation_async.AsyncOperation`` used here."""

    async def done(self) -> bool:
        """Refresh the operation and report whether it finished."""
        ...

    async def result(self) -> Any:
        """Return the operation result or raise its error."""
        ...

    async def cancel(self) -> Any:
        """Ask the server to cancel the operation."""
        ...


class PollPolicy(BaseModel):
    """Backoff and deadline for polling a long-running operation.

    Attributes:
        initial_delay: Seconds to wait after the first unfinished poll.
        max_delay: Upper bound for the delay between polls.
        multiplier: Factor applied to the delay after each poll.
        timeout: Seconds after which waiting gives up, or None to wait
            until the operation finishes.
    """

    model_config = ConfigDict(frozen=True)

    initial_delay: float = Field(default=1.0, gt=0)
    max_delay: float = Field(default=60.0, gt=0)
    multiplier: float = Field(default=1.5, ge=1.0)
    timeout: float | None = Field(default=DEFAULT_OPERATION_TIMEOUT_SECONDS, gt=0)


DEFAULT_POLL_POLICY = PollPolicy()


async def _pause(delay: float, cancel: asyncio.Event | None) -> None:
    if cancel is None:
        await asyncio.sleep(delay)
        return
    try:
        await asyncio.wait_for(cancel.wait(), timeout=delay)
    except asyncio.TimeoutError:
        pass


async def wait_for_operation(
    operation: PollableOperation,
    *,
    policy: PollPolicy = DEFAULT_POLL_POLICY,
    cancel: asyncio.Event | None = None,
) -> Any:
    """Poll a long-running operation until it reaches a terminal state.

    Args:
        operation: The operation handle returned by the client.
        policy: Backoff and deadline for polling.
        cancel: Optional event; once set, the operation is cancelled
            remotely and waiting stops.

    Returns:
        The operation result.

    Raises:
        OperationCancelledError: If ``cancel`` was set before completion.
        OperationTimeoutError: If the policy deadline passed first.
        Exception: Whatever the operation reports as its failure.
    """
    deadline = None if policy.timeout is None else time.monotonic() + policy.timeout
    delay = policy.initial_delay
    polls = 0

    while not await operation.done():
        polls += 1
        if cancel is not None and cancel.is_set():
            logger.info('cancelling long-running operation', polls=polls)
            await operation.cancel()
            raise OperationCancelledError('waiting for the operation was cancelled')
        if deadline is not None and time.monotonic() >= deadline:
            raise OperationTimeoutError(f'operation did not finish within {policy.timeout:g} seconds')

        if deadline is not None:
            await _pause(min(delay, max(deadline - time.monotonic(), 0)), cancel)
        else:
            await _pause(delay, cancel)
        delay = min(delay * policy.multiplier, policy.max_delay)

    logger.debug('long-running operation finished', polls=polls)
    return await operation.result()
