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

"""Storage collaborator used to stage exports before an import.

The dataset action does not write to storage itself. It needs two things
from a storage collaborator: a bucket selection field for its form, and a
way to stage the attachment. ``GcsStorageStager`` provides both by composing
the Google Cloud Storage action.
"""

from typing import Protocol

from actionhub.core.action import ActionFormField, ActionRequest
from actionhub.core.error import UpstreamError, get_error_message
from actionhub.plugins.gcs.action import GoogleCloudStorageAction


class StorageStager(Protocol):
    """What the dataset action needs from a storage collaborator."""

    async def stage_file(self, request: ActionRequest) -> str | None:
        """Write the request's attachment to storage.

        Args:
            request: The execution request; bucket, file name and overwrite
                toggle come from its form values.

        Returns:
            The ``gs://`` URI actually written, or None when it is the one
            named by the form values.
        """
        ...

    async def bucket_field(self, request: ActionRequest) -> ActionFormField:
        """Produce the bucket selection field for the form."""
        ...


class GcsStorageStager:
    """Storage collaborator backed by ``GoogleCloudStorageAction``."""

    def __init__(self, storage_action: GoogleCloudStorageAction | None = None) -> None:
        """Initializes the stager.

        Args:
            storage_action: The storage action to delegate to.
        """
        self.storage_action = storage_action or GoogleCloudStorageAction()

    async def stage_file(self, request: ActionRequest) -> str | None:
        """Upload the attachment through the storage action.

        Raises:
            UpstreamError: With the storage action's message, if it fails.
        """
        try:
            self.storage_action.check_required_params(request)
            return await self.storage_action.upload(request)
        except Exception as e:
            raise UpstreamError(get_error_message(e), cause=e) from e

    async def bucket_field(self, request: ActionRequest) -> ActionFormField:
        """Take the bucket field from the storage action's form.

        Raises:
            UpstreamError: If the storage form reports an error or has no
                bucket field.
        """
        form = await self.storage_action.validate_and_fetch_form(request)
        if form.error:
            raise UpstreamError(form.error)
        for field in form.fields:
            if field.name == 'bucket':
                return field
        raise UpstreamError('storage form has no bucket field')


__all__ = [
    GcsStorageStager.__name__,
    StorageStager.__name__,
]
