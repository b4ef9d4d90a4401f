import json
import unittest
from urllib.parse import quote

from botocore.exceptions import ClientError
from botocore.stub import Stubber

from policyctl.connection import ConnectionProvider
from policyctl.connection.helper import is_not_found_error
from policyctl.connection.iam_connection import IAMConnection
from policyctl.exceptions import ResourceNotFoundError

ARN = 'arn:aws:iam::123456789012:policy/p1'
DOCUMENT = {
    'Version': '2012-10-17',
    'Statement': [{'Effect': 'Allow', 'Action': 's3:GetObject',
                   'Resource': '*'}]
}
POLICY = {
    'PolicyName': 'p1',
    'PolicyId': 'ANPAEXAMPLE1234567890',
    'Arn': ARN,
    'Path': '/',
    'DefaultVersionId': 'v1'
}


class TestIAMConnection(unittest.TestCase):

    def setUp(self) -> None:
        self.conn = IAMConnection(region='us-east-1',
                                  aws_access_key_id='AKIAEXAMPLEEXAMPLE',
                                  aws_secret_access_key='secret')
        self.stubber = Stubber(self.conn.client)
        self.stubber.activate()

    def tearDown(self) -> None:
        self.stubber.deactivate()

    def test_get_policy(self):
        self.stubber.add_response('get_policy', {'Policy': POLICY},
                                  {'PolicyArn': ARN})

        self.assertEqual(self.conn.get_policy(ARN)['DefaultVersionId'], 'v1')
        self.stubber.assert_no_pending_responses()

    def test_get_policy_not_found(self):
        self.stubber.add_client_error('get_policy',
                                      service_error_code='NoSuchEntity',
                                      http_status_code=404)

        with self.assertRaises(ResourceNotFoundError):
            self.conn.get_policy(ARN)

    def test_other_errors_are_not_translated(self):
        self.stubber.add_client_error('delete_policy',
                                      service_error_code='DeleteConflict',
                                      http_status_code=409)

        with self.assertRaises(ClientError) as context:
            self.conn.delete_policy(ARN)
        self.assertNotIsInstance(context.exception, ResourceNotFoundError)

    def test_not_found_message_is_not_inspected(self):
        self.stubber.add_client_error(
            'delete_policy', service_error_code='DeleteConflict',
            service_message='Policy does not exist in this form',
            http_status_code=409)

        with self.assertRaises(ClientError):
            self.conn.delete_policy(ARN)

    def test_get_policy_version_decodes_document(self):
        self.stubber.add_response(
            'get_policy_version',
            {'PolicyVersion': {'Document': quote(json.dumps(DOCUMENT)),
                               'VersionId': 'v1',
                               'IsDefaultVersion': True}},
            {'PolicyArn': ARN, 'VersionId': 'v1'})

        version = self.conn.get_policy_version(ARN, 'v1')

        self.assertEqual(version['Document'], DOCUMENT)
        self.assertEqual(version['VersionId'], 'v1')

    def test_create_policy(self):
        self.stubber.add_response(
            'create_policy', {'Policy': POLICY},
            {'PolicyName': 'p1', 'PolicyDocument': json.dumps(DOCUMENT),
             'Description': 'description', 'Path': '/'})

        policy = self.conn.create_policy('p1', DOCUMENT,
                                         description='description', path='/')

        self.assertEqual(policy['Arn'], ARN)
        self.stubber.assert_no_pending_responses()

    def test_create_policy_version(self):
        self.stubber.add_response(
            'create_policy_version',
            {'PolicyVersion': {'VersionId': 'v2', 'IsDefaultVersion': True}},
            {'PolicyArn': ARN, 'PolicyDocument': '{}', 'SetAsDefault': True})

        version = self.conn.create_policy_version(ARN, '{}',
                                                  set_as_default=True)

        self.assertEqual(version['VersionId'], 'v2')

    def test_delete_policy_version(self):
        self.stubber.add_response('delete_policy_version', {},
                                  {'PolicyArn': ARN, 'VersionId': 'v1'})

        self.conn.delete_policy_version(ARN, 'v1')
        self.stubber.assert_no_pending_responses()


class TestErrorClassification(unittest.TestCase):

    def test_is_not_found_error(self):
        not_found = ClientError({'Error': {'Code': 'NoSuchEntity'}},
                                'GetPolicy')
        conflict = ClientError({'Error': {'Code': 'DeleteConflict',
                                          'Message': 'does not exist'}},
                               'DeletePolicy')

        self.assertTrue(is_not_found_error(not_found))
        self.assertTrue(is_not_found_error(ResourceNotFoundError()))
        self.assertFalse(is_not_found_error(conflict))
        self.assertFalse(is_not_found_error(ValueError('does not exist')))


class TestConnectionProvider(unittest.TestCase):

    def test_region_override(self):
        provider = ConnectionProvider({'region': 'us-east-1'})

        default_conn = provider.iam()
        regional_conn = provider.iam('eu-west-1')

        self.assertIsNot(default_conn, regional_conn)
        self.assertIs(provider.iam('eu-west-1'), regional_conn)
