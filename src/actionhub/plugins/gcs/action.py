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

Writes the exported data to an object in a bucket the user picks. The
``google-cloud-storage`` client is synchronous, so every call that reaches
the network runs in a worker thread.
"""

import asyncio
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import PurePosixPath

from google.cloud import storage

from actionhub.core.action import (
    Action,
    ActionForm,
    ActionFormField,
    ActionParam,
    ActionRequest,
    ActionResponse,
    ActionType,
    FormOption,
)
from actionhub.core.error import MissingFormInputError, get_error_message
from actionhub.core.logging import get_logger
from actionhub.plugins.gcs.credentials import CREDENTIALS_URL, ServiceAccountSettings, build_credentials

logger = get_logger(__name__)

OVERWRITE_DESCRIPTION = (
    'If Overwrite is enabled, will use the title or filename and overwrite existing data.'
    ' If disabled, a date time will be appended to the name to make the file unique.'
)

StorageClientFactory = Callable[[ServiceAccountSettings], storage.Client]


def create_storage_client(settings: ServiceAccountSettings) -> storage.Client:
    """Build a storage client from the action settings."""
    return storage.Client(project=settings.project_id, credentials=build_credentials(settings))


def overwrite_field() -> ActionFormField:
    """The yes/no overwrite selector shared by the storage-backed forms."""
    return ActionFormField(
        name='overwrite',
        label='Overwrite',
        options=[FormOption(label='Yes', name='yes'), FormOption(label='No', name='no')],
        default='yes',
        description=OVERWRITE_DESCRIPTION,
    )


def unique_filename(filename: str, now: datetime | None = None) -> str:
    """Append a UTC timestamp to a file name, before its extension.

    Args:
        filename: The requested object name.
        now: Timestamp to use; defaults to the current time.

    Returns:
        The object name with the timestamp inserted.
    """
    stamp = (now or datetime.now(timezone.utc)).strftime('%Y-%m-%dT%H-%M-%S')
    path = PurePosixPath(filename)
    return str(path.with_name(f'{path.stem}_{stamp}{path.suffix}'))


class GoogleCloudStorageAction(Action):
    """Writes data files to a Google Cloud Storage bucket."""

    name = 'google_cloud_storage'
    label = 'Google Cloud Storage'
    icon_name = 'google/gcs/google_cloud_storage.svg'
    description = 'Write data files to a Google Cloud Storage bucket.'
    supported_action_types = [ActionType.DASHBOARD, ActionType.QUERY]
    params = [
        ActionParam(
            name='client_email',
            label='Client Email',
            required=True,
            sensitive=False,
            description=f'Your client email for GCS from {CREDENTIALS_URL}',
        ),
        ActionParam(
            name='private_key',
            label='Private Key',
            required=True,
            sensitive=True,
            description=f'Your private key for GCS from {CREDENTIALS_URL}',
        ),
        ActionParam(
            name='project_id',
            label='Project Id',
            required=True,
            sensitive=False,
            description=f'The Project Id for your GCS project from {CREDENTIALS_URL}',
        ),
    ]

    def __init__(self, client_factory: StorageClientFactory | None = None) -> None:
        """Initializes the action.

        Args:
            client_factory: Builds the storage client from the settings.
                Defaults to ``create_storage_client``.
        """
        self._client_factory = client_factory or create_storage_client

    async def form(self, request: ActionRequest) -> ActionForm:
        """Offer the buckets of the account, a file name and the overwrite toggle."""
        form = ActionForm()
        try:
            client = self._client_factory(ServiceAccountSettings.from_params(request.params))
            try:
                buckets = await asyncio.to_thread(lambda: list(client.list_buckets()))
            finally:
                client.close()
        except Exception as e:
            logger.warning('listing buckets failed', error=get_error_message(e))
            form.error = (
                'An error occurred while fetching the bucket list. Your Google Cloud Storage '
                f'credentials may be incorrect. Google SDK Error: "{get_error_message(e)}"'
            )
            return form

        if not buckets:
            form.error = 'No buckets in account.'
            return form

        form.fields = [
            ActionFormField(
                name='bucket',
                label='Bucket',
                required=True,
                options=[FormOption(name=b.name, label=b.name) for b in buckets],
                type='select',
                default=buckets[0].name,
            ),
            ActionFormField(name='filename', label='Filename', type='string'),
            overwrite_field(),
        ]
        return form

    async def execute(self, request: ActionRequest) -> ActionResponse:
        """Upload the attachment to the chosen bucket."""
        try:
            await self.upload(request)
        except Exception as e:
            logger.warning('upload to Google Cloud Storage failed', error=get_error_message(e))
            return ActionResponse.from_error(e)
        return ActionResponse(success=True)

    async def upload(self, request: ActionRequest) -> str:
        """Write the attachment to the bucket named in the form values.

        Args:
            request: The execution request.

        Returns:
            The ``gs://`` URI of the written object.

        Raises:
            MissingFormInputError: If the bucket, a file name or the data is missing.
        """
        bucket_name = request.form_params.get('bucket')
        if not bucket_name:
            raise MissingFormInputError('Need Google Cloud Storage bucket.')

        filename = request.form_params.get('filename') or request.suggested_filename()
        if not filename:
            raise MissingFormInputError('Cannot determine a filename.')

        if request.attachment is None or request.attachment.data_buffer is None:
            raise MissingFormInputError('No attached data to upload.')

        if request.form_params.get('overwrite') == 'no':
            filename = unique_filename(filename)

        client = self._client_factory(ServiceAccountSettings.from_params(request.params))
        try:
            blob = client.bucket(bucket_name).blob(filename)
            await asyncio.to_thread(
                blob.upload_from_string,
                request.attachment.data_buffer,
                content_type=request.attachment.mime_type,
            )
        finally:
            client.close()

        uri = f'gs://{bucket_name}/{filename}'
        logger.info('uploaded export to Google Cloud Storage', uri=uri, size=len(request.attachment.data_buffer))
        return uri
