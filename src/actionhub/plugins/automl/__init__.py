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

"""Google Cloud AutoML actions.

Provides ``GoogleAutomlDatasetAction``, which stages an export in Google
Cloud Storage and imports it into an existing AutoML dataset.

Example:
    ```python
    from actionhub.core.registry import Registry
    from actionhub.plugins import automl

    registry = Registry()
    automl.register(registry)
    ```
"""

from actionhub.core.registry import Registry
from actionhub.plugins.automl.client import AutoMlDatasets, DatasetDescriptor, create_automl_client
from actionhub.plugins.automl.config import AutoMlSettings, DatasetImportForm
from actionhub.plugins.automl.dataset import GoogleAutomlDatasetAction
from actionhub.plugins.automl.operation import PollPolicy, wait_for_operation
from actionhub.plugins.automl.storage import GcsStorageStager, StorageStager


def package_name() -> str:
    """Get the package name for the AutoML plugin.

    Returns:
        The fully qualified package name as a string.
    """
    return 'actionhub.plugins.automl'


def register(registry: Registry) -> GoogleAutomlDatasetAction:
    """Register the AutoML dataset action with a registry."""
    return registry.add_action(GoogleAutomlDatasetAction())


__all__ = [
    package_name.__name__,
    register.__name__,
    AutoMlDatasets.__name__,
    AutoMlSettings.__name__,
    DatasetDescriptor.__name__,
    DatasetImportForm.__name__,
    GcsStorageStager.__name__,
    GoogleAutomlDatasetAction.__name__,
    PollPolicy.__name__,
    StorageStager.__name__,
    create_automl_client.__name__,
    wait_for_operation.__name__,
]
