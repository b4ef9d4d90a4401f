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

from policyctl.commons.log_helper import get_logger
from policyctl.connection import ConnectionProvider
from policyctl.core.conf.processor import ConfigHolder

_LOG = get_logger(__name__)

SESSION_TOKEN = 'aws_session_token'
SECRET_KEY = 'aws_secret_access_key'
ACCESS_KEY = 'aws_access_key_id'

# CONF VARS ===================================================================
CONF_PATH = os.environ.get('POLICYCTL_CONF')
CONFIG: ConfigHolder = None
CONN: ConnectionProvider = None
CREDENTIALS = None


def initialize_connection():
    """ Reads the configuration and prepares the connection provider. If no
    keys are configured boto3 resolves credentials by its default chain.
    """
    global CONFIG
    global CONN
    global CREDENTIALS

    CONFIG = ConfigHolder(CONF_PATH or os.getcwd())
    CREDENTIALS = {
        'region': CONFIG.region
    }
    if CONFIG.aws_access_key_id and CONFIG.aws_secret_access_key:
        _LOG.debug('Credentials access')
        CREDENTIALS[ACCESS_KEY] = CONFIG.aws_access_key_id
        CREDENTIALS[SECRET_KEY] = CONFIG.aws_secret_access_key
        if CONFIG.aws_session_token:
            CREDENTIALS[SESSION_TOKEN] = CONFIG.aws_session_token
    else:
        _LOG.debug('No credentials configured, the default boto3 '
                   'credentials chain will be used')
    CONN = ConnectionProvider(CREDENTIALS)
    _LOG.debug('policyctl has been initialized')
