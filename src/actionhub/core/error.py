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

"""Base error classes and message extraction for action hub actions.

Every action catches failures at its own boundary and turns them into an
``ActionResponse`` or an ``ActionForm`` error. The helpers at the bottom of
this module are the only place where an arbitrary exception is reduced to
the text a user sees.

Error taxonomy:
    ┌────────────────────────────────┬──────────────────────┬───────────────────────────────────┐
    │ Error                          │ Status               │ Raised when                       │
    ├────────────────────────────────┼──────────────────────┼───────────────────────────────────┤
    │ MissingConfigurationError      │ FAILED_PRECONDITION  │ a required action setting is unset│
    │ MissingFormInputError          │ INVALID_ARGUMENT     │ a required form value is unset    │
    │ NoDatasetsFoundError           │ NOT_FOUND            │ the dataset listing is empty      │
    │ UpstreamError                  │ UNAVAILABLE          │ a collaborator reported a failure │
    │ OperationTimeoutError          │ DEADLINE_EXCEEDED    │ a remote job outlived its policy  │
    │ OperationCancelledError        │ CANCELLED            │ the caller cancelled the wait     │
    └────────────────────────────────┴──────────────────────┴───────────────────────────────────┘
"""

from typing import Any, Literal

StatusName = Literal[
    'OK',
    'CANCELLED',
    'UNKNOWN',
    'INVALID_ARGUMENT',
    'DEADLINE_EXCEEDED',
    'NOT_FOUND',
    'FAILED_PRECONDITION',
    'UNAVAILABLE',
    'INTERNAL',
]


class ActionHubError(Exception):
    """Base error class for action hub errors."""

    status: StatusName = 'INTERNAL'

    def __init__(
        self,
        message: str,
        *,
        status: StatusName | None = None,
        cause: Exception | None = None,
    ) -> None:
        """Initialize an ActionHubError.

        Args:
            message: The error message shown to the user.
            status: Optional status name overriding the class default.
            cause: Optional underlying exception.
        """
        super().__init__(message)
        self.message = message
        if status:
            self.status = status
        self.cause = cause


class MissingConfigurationError(ActionHubError):
    """A required action setting was not supplied."""

    status: StatusName = 'FAILED_PRECONDITION'


class MissingFormInputError(ActionHubError):
    """A required end-user form value was not supplied."""

    status: StatusName = 'INVALID_ARGUMENT'


class NoDatasetsFoundError(ActionHubError):
    """The vendor API returned no datasets for the project and region."""

    status: StatusName = 'NOT_FOUND'


class UpstreamError(ActionHubError):
    """A collaborator reported a failure; its message is relayed verbatim."""

    status: StatusName = 'UNAVAILABLE'


class OperationTimeoutError(ActionHubError):
    """A long-running remote operation did not finish within its wait policy."""

    status: StatusName = 'DEADLINE_EXCEEDED'


class OperationCancelledError(ActionHubError):
    """Waiting on a long-running remote operation was cancelled."""

    status: StatusName = 'CANCELLED'


def get_error_message(error: Any) -> str:
    """Extract a human-readable message from an error object.

    Errors carrying a ``message`` attribute (ours, and Google API call errors)
    use it; anything else is stringified.

    Args:
        error: The error to get the message from.

    Returns:
        The error message string.
    """
    message = getattr(error, 'message', None)
    if isinstance(message, str) and message:
        return message
    return str(error) or repr(error)


def form_error_message(error: Any, context: str) -> str:
    """Render an error for the ``error`` member of a form.

    Messages relayed from a collaborator are shown as-is; anything raised
    locally or by a vendor SDK is tagged with ``Error:`` so the two sources
    stay distinguishable.

    Args:
        error: The error raised while building the form.
        context: Fixed prefix naming what was being done.

    Returns:
        The prefixed error text.
    """
    if isinstance(error, UpstreamError):
        rendered = error.message
    else:
        rendered = f'Error: {get_error_message(error)}'
    return f'{context}: {rendered}'
