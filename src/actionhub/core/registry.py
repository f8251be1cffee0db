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

"""Registry of the actions a host can discover.

Example:
    >>> registry = Registry()
    >>> registry.add_action(GoogleAutomlDatasetAction())
    >>> action = registry.lookup_action('google_automl')
"""

import threading

from actionhub.core.action import Action
from actionhub.core.logging import get_logger

logger = get_logger(__name__)


class Registry:
    """Name-keyed store of action instances.

    This class is thread-safe and can be safely shared between multiple threads.
    """

    def __init__(self) -> None:
        """Initialize an empty Registry instance."""
        self._entries: dict[str, Action] = {}
        self._lock = threading.RLock()

    def add_action(self, action: Action) -> Action:
        """Register an action under its name.

        Args:
            action: The action instance to register.

        Returns:
            The registered action.

        Raises:
            ValueError: If an action with the same name is already registered.
        """
        with self._lock:
            if action.name in self._entries:
                raise ValueError(f'Action {action.name} already registered')
            self._entries[action.name] = action
        logger.debug('action registered', action=action.name)
        return action

    def lookup_action(self, name: str) -> Action | None:
        """Look up an action by name.

        Args:
            name: The action name.

        Returns:
            The action if registered, None otherwise.
        """
        with self._lock:
            return self._entries.get(name)

    def list_actions(self) -> list[Action]:
        """Returns all registered actions in registration order."""
        with self._lock:
            return list(self._entries.values())
