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

"""Tests for the AutoML client factory and dataset wrapper."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from google.cloud import automl_v1

from actionhub.core.error import MissingConfigurationError
from actionhub.plugins.automl.client import AutoMlDatasets, DatasetDescriptor, create_automl_client
from actionhub.plugins.automl.config import AutoMlSettings

SETTINGS = {
    'client_email': 'sa@proj.iam.gserviceaccount.com',
    'private_key': 'key',
    'project_id': 'proj',
    'region': 'us-central1',
}


class FakePager:
    """Async iterable standing in for ``ListDatasetsAsyncPager``."""

    def __init__(self, items: list[automl_v1.Dataset]) -> None:
        self._items = items

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for item in self._items:
            yield item


@pytest.fixture
def async_client() -> MagicMock:
    return MagicMock(spec=automl_v1.AutoMlAsyncClient)


@pytest.fixture
def datasets(async_client: MagicMock) -> AutoMlDatasets:
    return AutoMlDatasets(async_client, project_id='proj', region='us-central1')


@patch('actionhub.plugins.automl.client.automl_v1.AutoMlAsyncClient')
@patch('actionhub.plugins.automl.client.build_credentials')
def test_create_automl_client(mock_build_credentials: MagicMock, mock_client_cls: MagicMock) -> None:
    client = create_automl_client(AutoMlSettings.from_params(SETTINGS))

    mock_client_cls.assert_called_once_with(credentials=mock_build_credentials.return_value)
    assert client.project_id == 'proj'
    assert client.region == 'us-central1'
    assert client.parent == 'projects/proj/locations/us-central1'


@pytest.mark.parametrize('missing', ['project_id', 'region'])
@patch('actionhub.plugins.automl.client.automl_v1.AutoMlAsyncClient')
@patch('actionhub.plugins.automl.client.build_credentials')
def test_create_automl_client_requires_project_and_region(
    mock_build_credentials: MagicMock, mock_client_cls: MagicMock, missing: str
) -> None:
    params = {k: v for k, v in SETTINGS.items() if k != missing}

    with pytest.raises(MissingConfigurationError, match='project id and region are required'):
        create_automl_client(AutoMlSettings.from_params(params))

    mock_build_credentials.assert_not_called()
    mock_client_cls.assert_not_called()


@patch('actionhub.plugins.automl.client.automl_v1.AutoMlAsyncClient')
def test_create_automl_client_requires_credentials(mock_client_cls: MagicMock) -> None:
    params = {k: v for k, v in SETTINGS.items() if k != 'private_key'}

    with pytest.raises(MissingConfigurationError, match='client email and private key are required'):
        create_automl_client(AutoMlSettings.from_params(params))

    mock_client_cls.assert_not_called()


@pytest.mark.asyncio
async def test_list_datasets(datasets: AutoMlDatasets, async_client: MagicMock) -> None:
    async_client.list_datasets = AsyncMock(
        return_value=FakePager([
            automl_v1.Dataset(name='projects/proj/locations/us-central1/datasets/TBL1', display_name='sales'),
            automl_v1.Dataset(name='projects/proj/locations/us-central1/datasets/TBL2', display_name='churn'),
        ])
    )

    result = await datasets.list_datasets()

    assert result == [
        DatasetDescriptor(name='projects/proj/locations/us-central1/datasets/TBL1', label='sales'),
        DatasetDescriptor(name='projects/proj/locations/us-central1/datasets/TBL2', label='churn'),
    ]
    async_client.list_datasets.assert_awaited_once_with(request={'parent': 'projects/proj/locations/us-central1'})


@pytest.mark.asyncio
async def test_list_datasets_empty(datasets: AutoMlDatasets, async_client: MagicMock) -> None:
    async_client.list_datasets = AsyncMock(return_value=FakePager([]))

    assert await datasets.list_datasets() == []


@pytest.mark.asyncio
async def test_import_data_with_resource_name(datasets: AutoMlDatasets, async_client: MagicMock) -> None:
    operation = MagicMock()
    async_client.import_data = AsyncMock(return_value=operation)

    result = await datasets.import_data('projects/proj/locations/us-central1/datasets/TBL1', ['gs://exports/a.csv'])

    assert result is operation
    async_client.import_data.assert_awaited_once_with(
        request={
            'name': 'projects/proj/locations/us-central1/datasets/TBL1',
            'input_config': {'gcs_source': {'input_uris': ['gs://exports/a.csv']}},
        }
    )


@pytest.mark.asyncio
async def test_import_data_expands_bare_dataset_id(datasets: AutoMlDatasets, async_client: MagicMock) -> None:
    async_client.import_data = AsyncMock()

    await datasets.import_data('TBL1', iter(['gs://exports/a.csv', 'gs://exports/b.csv']))

    request = async_client.import_data.await_args.kwargs['request']
    assert request['name'] == 'projects/proj/locations/us-central1/datasets/TBL1'
    assert request['input_config']['gcs_source']['input_uris'] == ['gs://exports/a.csv', 'gs://exports/b.csv']


@pytest.mark.asyncio
async def test_create_dataset(datasets: AutoMlDatasets, async_client: MagicMock) -> None:
    operation = MagicMock()
    async_client.create_dataset = AsyncMock(return_value=operation)

    result = await datasets.create_dataset('sales', tables_dataset_metadata={})

    assert result is operation
    async_client.create_dataset.assert_awaited_once_with(
        request={
            'parent': 'projects/proj/locations/us-central1',
            'dataset': {'display_name': 'sales', 'tables_dataset_metadata': {}},
        }
    )


@pytest.mark.asyncio
async def test_context_manager_closes_transport(datasets: AutoMlDatasets, async_client: MagicMock) -> None:
    async_client.transport.close = AsyncMock()

    async with datasets as entered:
        assert entered is datasets

    async_client.transport.close.assert_awaited_once_with()


@pytest.mark.asyncio
async def test_context_manager_closes_transport_on_error(datasets: AutoMlDatasets, async_client: MagicMock) -> None:
    async_client.transport.close = AsyncMock()
    async_client.list_datasets = AsyncMock(side_effect=Exception('403 Permission denied'))

    with pytest.raises(Exception, match='403 Permission denied'):
        async with datasets:
            await datasets.list_datasets()

    async_client.transport.close.assert_awaited_once_with()
