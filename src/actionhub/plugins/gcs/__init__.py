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

"""Google Cloud Storage action.

Provides ``GoogleCloudStorageAction``, which writes exported data to a
bucket. The AutoML actions use it to stage files before an import.
"""

from actionhub.core.registry import Registry
from actionhub.plugins.gcs.action import GoogleCloudStorageAction, create_storage_client
from actionhub.plugins.gcs.credentials import ServiceAccountSettings, build_credentials


def package_name() -> str:
    """Get the package name for the Google Cloud Storage plugin.

    Returns:
        The fully qualified package name as a string.
    """
    return 'actionhub.plugins.gcs'


def register(registry: Registry) -> GoogleCloudStorageAction:
    """Register the storage action with a registry."""
    return registry.add_action(GoogleCloudStorageAction())


__all__ = [
    package_name.__name__,
    register.__name__,
    GoogleCloudStorageAction.__name__,
    ServiceAccountSettings.__name__,
    build_credentials.__name__,
    create_storage_client.__name__,
]
