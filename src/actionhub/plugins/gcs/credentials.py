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

"""Service account settings shared by the Google Cloud actions.

The host stores a service account as three settings: the client e-mail, the
private key and the project id. They are parsed once into
``ServiceAccountSettings``; blank strings are treated as absent so presence
checks are plain truthiness tests.
"""

from collections.abc import Mapping
from typing import Any, TypeVar

from google.oauth2 import service_account
from pydantic import BaseModel, ConfigDict, SecretStr, field_validator

from actionhub.core.error import MissingConfigurationError

CLOUD_PLATFORM_OAUTH_SCOPE = 'https://www.googleapis.com/auth/cloud-platform'
GOOGLE_TOKEN_URI = 'https://oauth2.googleapis.com/token'
CREDENTIALS_URL = 'https://console.cloud.google.com/apis/credentials'

_S = TypeVar('_S', bound='ServiceAccountSettings')


def blank_to_none(value: Any) -> Any:
    """Map blank strings to None, leaving anything else untouched."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


def normalize_private_key(private_key: str) -> str:
    """Turn literal ``\\n`` escape sequences into real newlines.

    Keys pasted into a single-line settings box arrive with their PEM line
    breaks escaped.

    Args:
        private_key: The key as stored in the action settings.

    Returns:
        The PEM-formatted key.
    """
    return private_key.replace('\\n', '\n')


class ServiceAccountSettings(BaseModel):
    """Service account settings of a Google Cloud action.

    Attributes:
        client_email: Service account e-mail.
        private_key: Service account private key.
        project_id: Google Cloud project to work in.
    """

    model_config = ConfigDict(frozen=True, extra='ignore')

    client_email: str | None = None
    private_key: SecretStr | None = None
    project_id: str | None = None

    @field_validator('*', mode='before')
    @classmethod
    def _strip_blank(cls, value: Any) -> Any:
        return blank_to_none(value)

    @classmethod
    def from_params(cls: type[_S], params: Mapping[str, str]) -> _S:
        """Parse the host's settings mapping."""
        return cls.model_validate(dict(params))

    @property
    def normalized_private_key(self) -> str | None:
        """The private key with escaped newlines restored."""
        if self.private_key is None:
            return None
        return normalize_private_key(self.private_key.get_secret_value())


def build_credentials(settings: ServiceAccountSettings) -> service_account.Credentials:
    """Create service account credentials from the action settings.

    The key is parsed locally; no token is fetched until the credentials
    are first used.

    Args:
        settings: Parsed action settings.

    Returns:
        Credentials scoped to the cloud platform.

    Raises:
        MissingConfigurationError: If the e-mail or the private key is unset.
    """
    if not settings.client_email or settings.private_key is None:
        raise MissingConfigurationError('client email and private key are required')

    info = {
        'type': 'service_account',
        'client_email': settings.client_email,
        'private_key': settings.normalized_private_key,
        'token_uri': GOOGLE_TOKEN_URI,
        'project_id': settings.project_id,
    }
    return service_account.Credentials.from_service_account_info(info, scopes=[CLOUD_PLATFORM_OAUTH_SCOPE])
