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
from urllib.parse import unquote

from boto3 import client

from policyctl.commons.log_helper import get_logger
from policyctl.connection.helper import (apply_methods_decorator,
                                         translate_not_found)

_LOG = get_logger(__name__)


def parse_policy_document(document):
    """ IAM returns policy documents URL-encoded. boto3 usually decodes them
    into a dict already, but a raw string may still come back.

    :type document: dict or str
    :rtype: dict
    """
    if isinstance(document, str):
        return json.loads(unquote(document))
    return document


@apply_methods_decorator(translate_not_found())
class IAMConnection(object):
    """ IAM connection class."""

    def __init__(self, region=None, aws_access_key_id=None,
                 aws_secret_access_key=None, aws_session_token=None):
        self.client = client('iam', region,
                             aws_access_key_id=aws_access_key_id,
                             aws_secret_access_key=aws_secret_access_key,
                             aws_session_token=aws_session_token)
        _LOG.debug('Opened new IAM connection.')

    def get_policy(self, arn):
        """
        :type arn: str
        :raises ResourceNotFoundError: if there is no such policy
        """
        return self.client.get_policy(PolicyArn=arn)['Policy']

    def get_policy_version(self, arn, version_id):
        """ Returns the policy version with its document parsed into a dict.

        :type arn: str
        :type version_id: str
        """
        version = self.client.get_policy_version(
            PolicyArn=arn, VersionId=version_id)['PolicyVersion']
        version['Document'] = parse_policy_document(version.get('Document'))
        return version

    def create_policy(self, policy_name, policy_document, description=None,
                      path=None):
        """
        :type policy_name: str
        :type policy_document: dict or str
        :type description: str
        :type path: str
        """
        if isinstance(policy_document, dict):
            policy_document = json.dumps(policy_document)
        params = dict(PolicyName=policy_name,
                      PolicyDocument=policy_document)
        if description:
            params['Description'] = description
        if path:
            params['Path'] = path
        return self.client.create_policy(**params)['Policy']

    def create_policy_version(self, policy_arn, policy_document,
                              set_as_default=None):
        if isinstance(policy_document, dict):
            policy_document = json.dumps(policy_document)
        params = dict(PolicyArn=policy_arn,
                      PolicyDocument=policy_document)
        if set_as_default:
            params['SetAsDefault'] = set_as_default
        return self.client.create_policy_version(**params)['PolicyVersion']

    def delete_policy_version(self, policy_arn, version_id):
        self.client.delete_policy_version(
            PolicyArn=policy_arn,
            VersionId=version_id
        )

    def delete_policy(self, policy_arn):
        self.client.delete_policy(PolicyArn=policy_arn)
