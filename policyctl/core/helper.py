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
import json
import logging
import os
from functools import wraps

import click
from click import BadParameter

from policyctl.commons.log_helper import get_logger, LOG_NAME, USER_LOG_NAME
from policyctl.core.conf.validator import ALL_REGIONS
from policyctl.core.constants import DEFAULT_JSON_INDENT

_LOG = get_logger(__name__)

FILE_REFERENCE_PREFIX = '@'


def prettify_json(obj):
    return json.dumps(obj, indent=DEFAULT_JSON_INDENT)


class ValidRegionParamType(click.types.StringParamType):
    name = 'region'

    def convert(self, value, param, ctx):
        value = super().convert(value, param, ctx)
        _LOG.info(f"Checking whether {value} is a valid region...")
        if value not in ALL_REGIONS:
            _LOG.error(f"Invalid region '{value}' was given")
            self.fail(f"Value '{value}' is not a valid region. Try one of "
                      f"these: {ALL_REGIONS}", param, ctx)
        return value

    def get_metavar(self, param, *args, **kwargs):
        shorten_regions = [ALL_REGIONS[0], "...", ALL_REGIONS[-1]]
        return f"[{'|'.join(shorten_regions)}]"


class PolicyDocumentParamType(click.types.StringParamType):
    """ Accepts a policy document as a JSON string or as a path to a JSON
    file prefixed with '@'.
    """
    name = 'policy'

    def convert(self, value, param, ctx):
        if isinstance(value, dict):
            return value
        value = super().convert(value, param, ctx)
        if value.startswith(FILE_REFERENCE_PREFIX):
            path = value[len(FILE_REFERENCE_PREFIX):]
            if not os.path.isfile(path):
                self.fail(f"Policy file '{path}' does not exist", param, ctx)
            _LOG.info(f'Reading the policy document from {path}')
            with open(path) as policy_file:
                value = policy_file.read()
        try:
            document = json.loads(value)
        except ValueError as e:
            raise BadParameter(f'Policy document is not a valid JSON: {e}',
                               ctx=ctx, param=param)
        if not isinstance(document, dict):
            raise BadParameter('Policy document must be a JSON object',
                               ctx=ctx, param=param)
        return document

    def get_metavar(self, param, *args, **kwargs):
        return f'JSON|{FILE_REFERENCE_PREFIX}FILE'


def set_debug_log_level(ctx, param, value):
    if value:
        loggers = [logging.getLogger(name) for name in
                   logging.root.manager.loggerDict if
                   name.startswith(LOG_NAME) or
                   name.startswith(USER_LOG_NAME)]

        console_handler = logging.getLogger(USER_LOG_NAME).handlers[0]

        for logger in loggers:
            if not logger.isEnabledFor(logging.DEBUG):
                logger.setLevel(logging.DEBUG)
                if logger.name == LOG_NAME:
                    logger.addHandler(console_handler)
        _LOG.debug('The logs level was set to DEBUG')


def verbose_option(func):
    @click.option('--verbose', '-v', is_flag=True,
                  callback=set_debug_log_level, expose_value=False,
                  is_eager=True, help="Enable logging verbose mode.")
    @wraps(func)
    def wrapper(*args, **kwargs):
        return func(*args, **kwargs)

    return wrapper
