"""
    Copyright 2018 EPAM Systems, Inc.

    Licensed under the Apache License, Version 2.0 (the "License");
    you may not use this file except in compliance with the License.
    You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

    Unless required by applicable law or agreed to in writing, software
    distributed under the License is distributed on an "AS IS" BASIS,
    WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
    See the License for the specific language governing permissions and
    limitations under the License.
"""
import os

import yaml

from policyctl.commons.log_helper import get_logger
from policyctl.core.conf.validator import (REGION_CFG, AWS_ACCESS_KEY_ID_CFG,
                                           AWS_SECRET_ACCESS_KEY_CFG,
                                           AWS_SESSION_TOKEN_CFG,
                                           STATE_PATH_CFG, ConfigValidator)
from policyctl.core.constants import DEFAULT_REGION
from policyctl.exceptions import ConfigurationError

CONFIG_FILE_NAME = 'policyctl.yml'

_LOG = get_logger(__name__)


class ConfigHolder:
    def __init__(self, dir_path):
        con_path_yml = os.path.join(dir_path, CONFIG_FILE_NAME)
        con_path_yaml = os.path.join(dir_path,
                                     CONFIG_FILE_NAME.replace('yml', 'yaml'))
        con_path = con_path_yml if \
            os.path.exists(con_path_yml) else con_path_yaml
        self._dir_path = dir_path
        self._config_path = con_path
        if os.path.isfile(con_path):
            config_content = load_yaml_file_content(file_path=con_path)
        else:
            _LOG.debug(f'{CONFIG_FILE_NAME} does not exist inside '
                       f'{dir_path} folder, the default configuration '
                       f'will be used')
            config_content = {}
        if not isinstance(config_content, dict):
            raise ConfigurationError(
                f'{self._config_path} must contain a mapping, not '
                f'{type(config_content).__name__}')

        validator = ConfigValidator(config_content)
        self._assert_no_errors(validator.validate())
        self._config_dict = config_content

    def _assert_no_errors(self, errors: dict):
        if errors:
            raise ConfigurationError(f'The following error occurred '
                                     f'while {self._config_path} '
                                     f'parsing: {errors}')

    def _resolve_variable(self, variable_name):
        return self._config_dict.get(variable_name)

    @property
    def region(self):
        return self._resolve_variable(REGION_CFG) or DEFAULT_REGION

    @property
    def aws_access_key_id(self):
        return self._resolve_variable(AWS_ACCESS_KEY_ID_CFG)

    @property
    def aws_secret_access_key(self):
        return self._resolve_variable(AWS_SECRET_ACCESS_KEY_CFG)

    @property
    def aws_session_token(self):
        return self._resolve_variable(AWS_SESSION_TOKEN_CFG)

    @property
    def state_path(self):
        return self._resolve_variable(STATE_PATH_CFG) or self._dir_path


def load_yaml_file_content(file_path):
    if not os.path.isfile(file_path):
        raise ConfigurationError(f'There is no file by path: {file_path}')
    with open(file_path, 'r') as yaml_file:
        try:
            return yaml.safe_load(yaml_file) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f'Cannot parse {file_path}: {e}') from e
