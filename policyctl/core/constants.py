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
DEPLOY_ACTION = 'deploy'
REMOVE_ACTION = 'remove'
STATUS_ACTION = 'status'

# == DEFAULTS =================================================================
DEFAULT_REGION = 'us-east-1'
DEFAULT_POLICY_DOCUMENT = {
    'Version': '2012-10-17',
    'Statement': [
        {
            'Effect': 'Allow',
            'Action': ['iam:GetPolicyVersion'],
            'Resource': '*'
        }
    ]
}
DEFAULT_POLICY_NAME_PREFIX = 'policy-'
DEFAULT_POLICY_DESCRIPTION = 'A policy created by policyctl'
DEFAULT_POLICY_PATH = '/'
DEFAULT_POLICY_VERSION = 'v1'

# == INPUT KEYS ===============================================================
REGION_PARAM = 'region'
POLICY_PARAM = 'policy'
NAME_PARAM = 'name'
DESCRIPTION_PARAM = 'description'
PATH_PARAM = 'path'

# == STATE KEYS ===============================================================
STATE_ID = 'id'
STATE_NAME = 'name'
STATE_ARN = 'arn'
STATE_VERSION = 'version'
STATE_POLICY = 'policy'
STATE_PATH = 'path'
STATE_LAST_POLICY_ARN = 'lastPolicyArn'

STATE_FOLDER_NAME = '.policyctl'
STATE_FILE_EXTENSION = '.yml'

DEFAULT_JSON_INDENT = 2

OK_RETURN_CODE = 0
FAILED_RETURN_CODE = 1
ABORTED_RETURN_CODE = 2
