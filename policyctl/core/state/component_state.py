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
import re
from copy import deepcopy

import yaml

from policyctl.commons.log_helper import get_logger
from policyctl.core.constants import STATE_FOLDER_NAME, STATE_FILE_EXTENSION
from policyctl.exceptions import ComponentStateError, InvalidValueError

INSTANCE_NAME_PATTERN = '^[A-Za-z0-9_.-]+$'

_LOG = get_logger(__name__)


class ComponentState:
    """ Persisted state of a single component instance. The file is read once
    on construction; every save rewrites it completely, so it always holds the
    last successfully reconciled resource.
    """

    def __init__(self, state_path: str, instance_name: str):
        if not instance_name or not re.match(INSTANCE_NAME_PATTERN,
                                             instance_name):
            raise InvalidValueError(
                f'Invalid instance name \'{instance_name}\'. It may contain '
                f'only letters, digits and the characters \'_.-\'')
        self.instance_name = instance_name
        self.state_path = os.path.join(
            state_path, STATE_FOLDER_NAME,
            f'{instance_name}{STATE_FILE_EXTENSION}')
        self._dict = self.__load_state_file()

    @property
    def dct(self) -> dict:
        return deepcopy(self._dict)

    def __load_state_file(self) -> dict:
        if not os.path.isfile(self.state_path):
            _LOG.debug(f'State file {self.state_path} does not exist, '
                       f'starting from the empty state')
            return {}
        with open(self.state_path) as state_file:
            try:
                content = yaml.safe_load(state_file)
            except yaml.YAMLError as e:
                raise ComponentStateError(
                    f'Cannot parse the state file {self.state_path}: '
                    f'{e}') from e
        if content is None:
            return {}
        if not isinstance(content, dict):
            raise ComponentStateError(
                f'The state file {self.state_path} must contain a mapping, '
                f'not {type(content).__name__}')
        return content

    def save(self, state: dict = None):
        """ Replaces the persisted state with the given one.

        :type state: dict
        """
        self._dict = deepcopy(state) if state else {}
        os.makedirs(os.path.dirname(self.state_path), exist_ok=True)
        with open(self.state_path, 'w') as state_file:
            yaml.safe_dump(self._dict, state_file, sort_keys=False)
        _LOG.debug(f'State of \'{self.instance_name}\' saved to '
                   f'{self.state_path}')

    @staticmethod
    def list_instances(state_path: str) -> list:
        folder = os.path.join(state_path, STATE_FOLDER_NAME)
        if not os.path.isdir(folder):
            return []
        return sorted(
            name[:-len(STATE_FILE_EXTENSION)] for name in os.listdir(folder)
            if name.endswith(STATE_FILE_EXTENSION))
