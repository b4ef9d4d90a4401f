import json
import unittest
from unittest.mock import MagicMock

from botocore.exceptions import ClientError

from policyctl.core.resources.iam_policy_resource import IamPolicyResource

ACCOUNT_ID = '123456789012'
POLICY_A = {
    'Version': '2012-10-17',
    'Statement': [
        {
            'Effect': 'Allow',
            'Action': ['s3:GetObject'],
            'Resource': '*'
        }
    ]
}
POLICY_B = {
    'Version': '2012-10-17',
    'Statement': [
        {
            'Effect': 'Allow',
            'Action': ['s3:GetObject', 's3:PutObject'],
            'Resource': '*'
        }
    ]
}


def build_arn(name):
    return f'arn:aws:iam::{ACCOUNT_ID}:policy/{name}'


def canonical(document):
    return json.dumps(document, sort_keys=True, separators=(',', ':'))


def client_error(code, operation_name):
    return ClientError({'Error': {'Code': code, 'Message': code}},
                       operation_name)


class TestIamPolicyResource(unittest.TestCase):

    def setUp(self) -> None:
        self.iam_conn = MagicMock()
        self.conn_provider = MagicMock()
        self.conn_provider.iam.return_value = self.iam_conn
        self.saved_states = []
        self.resource = IamPolicyResource(
            conn_provider=self.conn_provider,
            save_state=self.saved_states.append,
            default_region='us-east-1')
        self.iam_conn.create_policy.side_effect = self._create_policy

    @staticmethod
    def policy_response(name, version='v1'):
        return {
            'PolicyName': name,
            'PolicyId': f'ANPA{name.upper()}EXAMPLE',
            'Arn': build_arn(name),
            'Path': '/',
            'DefaultVersionId': version,
            'AttachmentCount': 0
        }

    def _create_policy(self, policy_name, policy_document, description=None,
                       path=None):
        return self.policy_response(policy_name)

    def stub_existing_policy(self, name, document, version='v1'):
        self.iam_conn.get_policy.return_value = self.policy_response(
            name, version)
        self.iam_conn.get_policy_version.return_value = {
            'Document': document,
            'VersionId': version,
            'IsDefaultVersion': True
        }

    def deployed_state(self, name='p1', document=None, version='v1'):
        return {
            'id': f'ANPA{name.upper()}EXAMPLE',
            'name': name,
            'arn': build_arn(name),
            'version': version,
            'policy': document or POLICY_A,
            'path': '/'
        }

    def remote_calls(self):
        return [each[0] for each in self.iam_conn.method_calls]
