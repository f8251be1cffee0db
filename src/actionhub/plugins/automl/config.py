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

"""Typed settings and form values for the AutoML actions."""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from actionhub.core.error import MissingFormInputError
from actionhub.plugins.automl.constants import MISSING_STAGED_LOCATION_MESSAGE
from actionhub.plugins.gcs.credentials import ServiceAccountSettings, blank_to_none


class AutoMlSettings(ServiceAccountSettings):
    """Action settings for the AutoML actions.

    Attributes:
        region: Location of the datasets, e.g. ``us-central1``.
    """

    region: str | None = None


class DatasetImportForm(BaseModel):
    """End-user values submitted with a dataset import.

    Only presence is checked here. ``overwrite`` is passed to the storage
    collaborator as submitted, which treats anything other than ``no`` as
    overwrite.

    Attributes:
        dataset_id: Full resource name of the target dataset.
        filename: Name of the object written to the bucket.
        bucket: Bucket the export is staged into.
        overwrite: Whether an existing object of the same name is replaced.
    """

    model_config = ConfigDict(frozen=True, extra='ignore')

    dataset_id: str | None = None
    filename: str | None = None
    bucket: str | None = None
    overwrite: str = 'yes'

    @field_validator('dataset_id', 'filename', 'bucket', mode='before')
    @classmethod
    def _strip_blank(cls, value: Any) -> Any:
        return blank_to_none(value)

    @field_validator('overwrite', mode='before')
    @classmethod
    def _default_overwrite(cls, value: Any) -> Any:
        return blank_to_none(value) or 'yes'

    @classmethod
    def from_form_params(cls, form_params: Mapping[str, str]) -> 'DatasetImportForm':
        """Parse the host's form values mapping."""
        return cls.model_validate(dict(form_params))

    @property
    def staged_uri(self) -> str:
        """Storage location of the staged export.

        Raises:
            MissingFormInputError: If the bucket or the file name is unset.
        """
        if not self.bucket or not self.filename:
            raise MissingFormInputError(MISSING_STAGED_LOCATION_MESSAGE)
        return f'gs://{self.bucket}/{self.filename}'
