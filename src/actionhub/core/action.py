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

"""Action contract shared with the action hub host.

An action moves exported data to a destination. The host asks an action
which inputs it needs (``form``) and later submits a job with the filled-in
values (``execute``). Both entry points receive an ``ActionRequest`` and
must never let an exception escape.

Overview:
    ┌─────────────────────────────────────────────────────────────────────────┐
    │                      Action Lifecycle                                   │
    ├─────────────────────────────────────────────────────────────────────────┤
    │                                                                         │
    │  ┌──────────┐      ┌──────────────────┐      ┌──────────────────┐       │
    │  │ Register │ ───► │ validate_and_    │ ───► │ validate_and_    │       │
    │  │  Action  │      │ fetch_form       │      │ execute          │       │
    │  └──────────┘      └──────────────────┘      └──────────────────┘       │
    │                            │                         │                  │
    │                            ▼                         ▼                  │
    │                      ActionForm                ActionResponse           │
    │                   {fields, error?}          {success, message?}         │
    └─────────────────────────────────────────────────────────────────────────┘

Example:
    ```python
    class EchoAction(Action):
        name = 'echo'
        label = 'Echo'
        params = [ActionParam(name='token', label='Token', required=True)]

        async def execute(self, request: ActionRequest) -> ActionResponse:
            return ActionResponse(success=True)
    ```
"""

import abc
import sys
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

from actionhub.core.error import MissingConfigurationError, get_error_message

if sys.version_info < (3, 11):
    from strenum import StrEnum
else:
    from enum import StrEnum


class ActionType(StrEnum):
    """Kinds of content an action can be attached to."""

    DASHBOARD = 'dashboard'
    QUERY = 'query'


class ActionParam(BaseModel):
    """A setting configured once per destination by an administrator."""

    model_config = ConfigDict(frozen=True)

    name: str
    label: str
    required: bool = False
    sensitive: bool = False
    description: str | None = None


class FormOption(BaseModel):
    """One choice of a select field."""

    model_config = ConfigDict(frozen=True)

    name: str
    label: str


class ActionFormField(BaseModel):
    """Declarative description of one user-fillable input."""

    model_config = ConfigDict(extra='forbid')

    name: str
    label: str | None = None
    required: bool | None = None
    description: str | None = None
    options: list[FormOption] | None = None
    type: str | None = None
    default: str | None = None

    def as_json(self) -> dict[str, Any]:
        """Returns the field without unset members."""
        return self.model_dump(exclude_none=True)


class ActionForm(BaseModel):
    """The set of inputs the host renders before execution.

    Either ``fields`` is populated or ``error`` is set and ``fields`` is empty.
    """

    fields: list[ActionFormField] = Field(default_factory=list)
    error: str | None = None

    def as_json(self) -> dict[str, Any]:
        """Returns the form without unset members."""
        return self.model_dump(exclude_none=True)


class ActionAttachment(BaseModel):
    """Exported data delivered with an execution request."""

    data_buffer: bytes | None = None
    file_name: str | None = None
    mime_type: str | None = None


class ActionRequest(BaseModel):
    """A form render or execution request from the host.

    Attributes:
        params: Action settings keyed by param name.
        form_params: End-user form values keyed by field name.
        attachment: The exported data, for executions.
        type: The kind of content the action was invoked from.
    """

    params: dict[str, str] = Field(default_factory=dict)
    form_params: dict[str, str] = Field(default_factory=dict)
    attachment: ActionAttachment | None = None
    type: ActionType | None = None

    def suggested_filename(self) -> str | None:
        """Returns the file name declared by the attachment, if any."""
        if self.attachment is None:
            return None
        return self.attachment.file_name


class ActionResponse(BaseModel):
    """The sole externally observable result of an execution."""

    success: bool = True
    message: str | None = None

    @classmethod
    def from_error(cls, error: Any) -> 'ActionResponse':
        """Build a failed response from any error value.

        Args:
            error: The error caught at the action boundary.

        Returns:
            A response with ``success=False`` and the extracted message.
        """
        return cls(success=False, message=get_error_message(error))

    def as_json(self) -> dict[str, Any]:
        """Returns the response without unset members."""
        return self.model_dump(exclude_none=True)


class Action(abc.ABC):
    """Abstract base class for action hub actions.

    Subclasses declare their metadata as class attributes and implement
    ``execute``; actions that need user input also override ``form``.
    """

    name: ClassVar[str]
    label: ClassVar[str]
    description: ClassVar[str] = ''
    icon_name: ClassVar[str | None] = None
    supported_action_types: ClassVar[list[ActionType]] = []
    uses_streaming: ClassVar[bool] = False
    params: ClassVar[list[ActionParam]] = []

    @abc.abstractmethod
    async def execute(self, request: ActionRequest) -> ActionResponse:
        """Run the action against the submitted request.

        Args:
            request: The execution request.

        Returns:
            ActionResponse: The outcome of the execution.
        """
        ...

    async def form(self, request: ActionRequest) -> ActionForm:
        """Describe the inputs this action needs.

        Args:
            request: The form request.

        Returns:
            ActionForm: The fields to render, or an error.
        """
        return ActionForm()

    @property
    def has_form(self) -> bool:
        """Whether the action overrides ``form``."""
        return type(self).form is not Action.form

    def check_required_params(self, request: ActionRequest) -> None:
        """Raise if a required action setting is missing from the request.

        Args:
            request: The request to inspect.

        Raises:
            MissingConfigurationError: For the first missing required param.
        """
        for param in self.params:
            if param.required and not request.params.get(param.name):
                raise MissingConfigurationError(f'Required setting "{param.label}" not specified in action settings.')

    async def validate_and_fetch_form(self, request: ActionRequest) -> ActionForm:
        """Check the action settings, then build the form."""
        try:
            self.check_required_params(request)
        except MissingConfigurationError as e:
            return ActionForm(error=e.message)
        return await self.form(request)

    async def validate_and_execute(self, request: ActionRequest) -> ActionResponse:
        """Check the action settings, then execute."""
        try:
            self.check_required_params(request)
        except MissingConfigurationError as e:
            return ActionResponse.from_error(e)
        return await self.execute(request)

    def metadata(self) -> dict[str, Any]:
        """Returns the description the host uses to list this action.

        Returns:
            A JSON-serializable mapping.
        """
        return {
            'name': self.name,
            'label': self.label,
            'description': self.description,
            'icon_name': self.icon_name,
            'supported_action_types': [str(t) for t in self.supported_action_types],
            'uses_streaming': self.uses_streaming,
            'has_form': self.has_form,
            'params': [p.model_dump(exclude_none=True) for p in self.params],
        }
