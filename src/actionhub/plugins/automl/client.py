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

"""AutoML client factory.

Builds service account credentials from the action settings and wraps an
``AutoMlAsyncClient`` bound to one project and region. Nothing here talks to
the network until one of the ``AutoMlDatasets`` coroutines is awaited. The
wrapper owns the client's channel; use it as an async context manager so
the channel is closed.
"""

from collections.abc import Iterable
from typing import Any

from google.api_core.operation_async import AsyncOperation
from google.cloud import automl_v1
from pydantic import BaseModel, ConfigDict

from actionhub.core.error import MissingConfigurationError
from actionhub.core.logging import get_logger
from actionhub.plugins.automl.config import AutoMlSettings
from actionhub.plugins.automl.constants import MISSING_PROJECT_OR_REGION_MESSAGE
from actionhub.plugins.gcs.credentials import build_credentials

logger = get_logger(__name__)


class DatasetDescriptor(BaseModel):
    """An existing AutoML dataset.

    Attributes:
        name: Full resource name, ``projects/*/locations/*/datasets/*``.
        label: Display name.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    label: str


class AutoMlDatasets:
    """Dataset operations of the AutoML API for one project and region."""

    def __init__(self, client: automl_v1.AutoMlAsyncClient, project_id: str, region: str) -> None:
        """Initializes the wrapper.

        Args:
            client: The AutoML async client.
            project_id: Project that owns the datasets.
            region: Location of the datasets.
        """
        self._client = client
        self.project_id = project_id
        self.region = region

    async def __aenter__(self) -> 'AutoMlDatasets':
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the gRPC channel of the wrapped client."""
        await self._client.transport.close()

    @property
    def parent(self) -> str:
        """Location path used as parent for listing and creation."""
        return automl_v1.AutoMlClient.common_location_path(self.project_id, self.region)

    def dataset_path(self, dataset_id: str) -> str:
        """Expand a bare dataset id to its resource name.

        Full resource names, as returned by ``list_datasets``, pass through.
        """
        if dataset_id.startswith('projects/'):
            return dataset_id
        return automl_v1.AutoMlClient.dataset_path(self.project_id, self.region, dataset_id)

    async def list_datasets(self) -> list[DatasetDescriptor]:
        """List the datasets under the project and region."""
        logger.debug('listing AutoML datasets', parent=self.parent)
        pager = await self._client.list_datasets(request={'parent': self.parent})
        return [DatasetDescriptor(name=dataset.name, label=dataset.display_name) async for dataset in pager]

    async def create_dataset(self, display_name: str, **metadata: Any) -> AsyncOperation:
        """Start creating a dataset.

        Args:
            display_name: Display name of the new dataset.
            **metadata: Problem-type metadata, e.g.
                ``tables_dataset_metadata={}`` or
                ``translation_dataset_metadata={...}``.

        Returns:
            The long-running creation operation.
        """
        dataset = {'display_name': display_name, **metadata}
        logger.info('creating AutoML dataset', parent=self.parent, display_name=display_name)
        return await self._client.create_dataset(request={'parent': self.parent, 'dataset': dataset})

    async def import_data(self, dataset_id: str, input_uris: Iterable[str]) -> AsyncOperation:
        """Start importing staged objects into a dataset.

        Args:
            dataset_id: Dataset resource name or bare id.
            input_uris: ``gs://`` URIs of the objects to import.

        Returns:
            The long-running import operation.
        """
        name = self.dataset_path(dataset_id)
        uris = list(input_uris)
        request = {'name': name, 'input_config': {'gcs_source': {'input_uris': uris}}}
        logger.info('importing data into AutoML dataset', dataset=name, input_uris=uris)
        return await self._client.import_data(request=request)


def create_automl_client(settings: AutoMlSettings) -> AutoMlDatasets:
    """Build an AutoML dataset client from the action settings.

    Args:
        settings: Parsed action settings.

    Returns:
        A client bound to the settings' credentials, project and region.

    Raises:
        MissingConfigurationError: If a setting needed for the client is unset.
    """
    if not settings.project_id or not settings.region:
        raise MissingConfigurationError(MISSING_PROJECT_OR_REGION_MESSAGE)
    credentials = build_credentials(settings)
    client = automl_v1.AutoMlAsyncClient(credentials=credentials)
    return AutoMlDatasets(client, project_id=settings.project_id, region=settings.region)
