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

"""Tests for logging setup."""

import json
import logging
from collections.abc import Iterator

import pytest
import structlog

from actionhub.core.logging import configure_logging, get_logger


@pytest.fixture
def restore_logging() -> Iterator[None]:
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    structlog.reset_defaults()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


def test_json_logging_renders_key_values(restore_logging: None, capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging(level=logging.INFO, json=True)

    get_logger('actionhub.test').info('dataset import started', dataset='ds')

    line = capsys.readouterr().out.strip().splitlines()[-1]
    record = json.loads(line)
    assert record['event'] == 'dataset import started'
    assert record['dataset'] == 'ds'
    assert record['level'] == 'info'
    assert record['logger'] == 'actionhub.test'


def test_level_filters_lower_records(restore_logging: None, capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging(level=logging.WARNING)

    get_logger('actionhub.test').info('hidden')
    logging.getLogger('thirdparty').warning('shown')

    out = capsys.readouterr().out
    assert 'hidden' not in out
    assert 'shown' in out
