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

"""Constants for the Google Cloud AutoML actions."""

FORM_ERROR_CONTEXT = 'error populating form fields'
MANDATORY_FIELDS_MESSAGE = 'project_id, region and dataset are mandatory'
MISSING_PROJECT_OR_REGION_MESSAGE = 'project id and region are required'
NO_DATASETS_MESSAGE = 'no datasets found in this account'
MISSING_STAGED_LOCATION_MESSAGE = 'bucket and filename are required to locate the staged file'

FILENAME_DESCRIPTION = 'the name of the file that will be created in the Google storage'

# AutoML imports of large tables can run for hours.
DEFAULT_OPERATION_TIMEOUT_SECONDS = 4 * 60 * 60
