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

"""Action hub actions that stage exports and import them into Google Cloud AutoML."""

from actionhub.core.action import (
    Action,
    ActionAttachment,
    ActionForm,
    ActionFormField,
    ActionParam,
    ActionRequest,
    ActionResponse,
    ActionType,
    FormOption,
)
from actionhub.core.error import ActionHubError
from actionhub.core.registry import Registry

__version__ = '0.1.0'

__all__ = [
    Action.__name__,
    ActionAttachment.__name__,
    ActionForm.__name__,
    ActionFormField.__name__,
    ActionHubError.__name__,
    ActionParam.__name__,
    ActionRequest.__name__,
    ActionResponse.__name__,
    ActionType.__name__,
    FormOption.__name__,
    Registry.__name__,
]
