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

"""Google Cloud AutoML dataset import action.

Stages an export in Google Cloud Storage and imports it into an existing
AutoML dataset.

Form:
    ┌───┬──────────────┬──────────────────────────────────────────────────────┐
    │ # │ Field        │ Source                                               │
    ├───┼──────────────┼──────────────────────────────────────────────────────┤
    │ 1 │ dataset_id   │ datasets listed for project_id/region; first default │
    │ 2 │ filename     │ free text                                            │
    │ 3 │ overwrite    │ yes/no, default yes                                  │
    │ 4 │ bucket       │ storage collaborator                                 │
    └───┴──────────────┴──────────────────────────────────────────────────────┘

Execute:
    validate ──► stage file ──► import_data ──► wait_for_operation ──► success

Any failure ends the run with ``success=False`` and the failure's message.
Nothing is rolled back; a staged object stays in the bucket when the import
fails.
"""

import asyncio
from collections.abc import Callable

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
from actionhub.core.error import (
    MissingConfigurationError,
    MissingFormInputError,
    NoDatasetsFoundError,
    form_error_message,
    get_error_message,
)
from actionhub.core.logging import get_logger
from actionhub.plugins.automl.client import AutoMlDatasets, create_automl_client
from actionhub.plugins.automl.config import AutoMlSettings, DatasetImportForm
from actionhub.plugins.automl.constants import (
    FILENAME_DESCRIPTION,
    FORM_ERROR_CONTEXT,
    MANDATORY_FIELDS_MESSAGE,
    MISSING_PROJECT_OR_REGION_MESSAGE,
    NO_DATASETS_MESSAGE,
)
from actionhub.plugins.automl.operation import DEFAULT_POLL_POLICY, PollPolicy, wait_for_operation
from actionhub.plugins.automl.storage import GcsStorageStager, StorageStager
from actionhub.plugins.gcs.action import overwrite_field
from actionhub.plugins.gcs.credentials import CREDENTIALS_URL

logger = get_logger(__name__)

AutoMlClientFactory = Callable[[AutoMlSettings], AutoMlDatasets]


class GoogleAutomlDatasetAction(Action):
    """Imports exported data into a Google Cloud AutoML dataset."""

    name = 'google_automl'
    label = 'Google Cloud AutoML'
    icon_name = 'google/automl/google_automl.png'
    description = 'Import your data into a Google AutoML dataset'
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
        ActionParam(
            name='region',
            label='Region',
            required=True,
            sensitive=False,
            description='the region will be used to manage the datasets (us-central1)',
        ),
    ]

    def __init__(
        self,
        storage: StorageStager | None = None,
        client_factory: AutoMlClientFactory | None = None,
        poll_policy: PollPolicy = DEFAULT_POLL_POLICY,
    ) -> None:
        """Initializes the action.

        Args:
            storage: Collaborator that stages files and offers buckets.
                Defaults to the Google Cloud Storage action.
            client_factory: Builds the AutoML client from the settings.
            poll_policy: Backoff and deadline for the import operation.
        """
        self.storage = storage or GcsStorageStager()
        self._client_factory = client_factory or create_automl_client
        self.poll_policy = poll_policy

    async def form(self, request: ActionRequest) -> ActionForm:
        """Build the dataset, file name, overwrite and bucket fields.

        Args:
            request: The form request.

        Returns:
            The populated form, or an empty one carrying the error.
        """
        try:
            fields = await self._form_fields(request)
        except Exception as e:
            logger.warning('populating form fields failed', action=self.name, error=get_error_message(e))
            return ActionForm(error=form_error_message(e, FORM_ERROR_CONTEXT))
        return ActionForm(fields=fields)

    async def _form_fields(self, request: ActionRequest) -> list[ActionFormField]:
        settings = AutoMlSettings.from_params(request.params)
        if not settings.project_id or not settings.region:
            raise MissingConfigurationError(MISSING_PROJECT_OR_REGION_MESSAGE)

        client = self._client_factory(settings)
        async with client:
            datasets = await client.list_datasets()
        if not datasets:
            raise NoDatasetsFoundError(NO_DATASETS_MESSAGE)

        options = [FormOption(name=d.name, label=d.label) for d in datasets]
        bucket = await self.storage.bucket_field(request)

        return [
            ActionFormField(
                name='dataset_id',
                label='Dataset',
                required=True,
                options=options,
                type='select',
                default=options[0].name,
            ),
            ActionFormField(
                name='filename',
                label='File Name',
                required=True,
                description=FILENAME_DESCRIPTION,
            ),
            overwrite_field(),
            bucket,
        ]

    async def execute(self, request: ActionRequest, cancel: asyncio.Event | None = None) -> ActionResponse:
        """Stage the attachment and import it into the chosen dataset.

        Args:
            request: The execution request.
            cancel: Optional event that stops waiting on the import job.

        Returns:
            ``success=True`` once the import job finished, otherwise the
            failure message.
        """
        try:
            await self._import(request, cancel)
        except Exception as e:
            logger.warning('dataset import failed', action=self.name, error=get_error_message(e))
            return ActionResponse.from_error(e)
        return ActionResponse(success=True)

    async def _import(self, request: ActionRequest, cancel: asyncio.Event | None) -> None:
        settings = AutoMlSettings.from_params(request.params)
        values = DatasetImportForm.from_form_params(request.form_params)
        if not settings.project_id or not settings.region or not values.dataset_id:
            raise MissingFormInputError(MANDATORY_FIELDS_MESSAGE)

        staged_uri = await self.storage.stage_file(request) or values.staged_uri

        client = self._client_factory(settings)
        async with client:
            operation = await client.import_data(values.dataset_id, [staged_uri])
            await wait_for_operation(operation, policy=self.poll_policy, cancel=cancel)
        logger.info('dataset import finished', dataset=values.dataset_id, uri=staged_uri)
