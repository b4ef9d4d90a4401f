import json
import os
import shutil
import tempfile
import unittest
from unittest import mock
from unittest.mock import MagicMock

from botocore.exceptions import ClientError
from click.testing import CliRunner

from policyctl.core.handlers import policyctl
from policyctl.core.state.component_state import ComponentState

ARN = 'arn:aws:iam::123456789012:policy/p1'
DOCUMENT = {'Version': '2012-10-17', 'Statement': []}


class TestHandlers(unittest.TestCase):

    def setUp(self) -> None:
        self.conf_path = tempfile.mkdtemp()
        self.iam_conn = MagicMock()
        self.iam_conn.create_policy.return_value = {
            'PolicyName': 'p1',
            'PolicyId': 'ANPAEXAMPLE1234567890',
            'Arn': ARN,
            'Path': '/',
            'DefaultVersionId': 'v1'
        }
        provider = MagicMock()
        provider.iam.return_value = self.iam_conn
        patchers = [
            mock.patch('policyctl.core.CONF_PATH', self.conf_path),
            mock.patch('policyctl.core.ConnectionProvider',
                       return_value=provider)
        ]
        for patcher in patchers:
            patcher.start()
            self.addCleanup(patcher.stop)
        self.runner = CliRunner()

    def tearDown(self) -> None:
        shutil.rmtree(self.conf_path, ignore_errors=True)

    def invoke(self, *args):
        return self.runner.invoke(policyctl, list(args))

    def state(self, instance='reader'):
        return ComponentState(self.conf_path, instance).dct

    def test_deploy(self):
        result = self.invoke('deploy', '-i', 'reader', '--name', 'p1',
                             '--policy', json.dumps(DOCUMENT))

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(json.loads(result.output)['arn'], ARN)
        self.assertEqual(self.state()['arn'], ARN)
        self.assertEqual(self.state()['policy'], DOCUMENT)

    def test_deploy_policy_from_file(self):
        policy_file = os.path.join(self.conf_path, 'policy.json')
        with open(policy_file, 'w') as f:
            json.dump(DOCUMENT, f)

        result = self.invoke('deploy', '-i', 'reader', '--name', 'p1',
                             '--policy', f'@{policy_file}')

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(
            self.iam_conn.create_policy.call_args.kwargs['policy_document'],
            '{"Statement":[],"Version":"2012-10-17"}')

    def test_deploy_invalid_policy(self):
        result = self.invoke('deploy', '-i', 'reader', '--policy', '{oops')

        self.assertNotEqual(result.exit_code, 0)
        self.iam_conn.create_policy.assert_not_called()

    def test_deploy_failure(self):
        self.iam_conn.create_policy.side_effect = ClientError(
            {'Error': {'Code': 'AccessDenied'}}, 'CreatePolicy')

        result = self.invoke('deploy', '-i', 'reader', '--name', 'p1')

        self.assertEqual(result.exit_code, 1)
        self.assertEqual(self.state(), {})

    def test_remove(self):
        self.invoke('deploy', '-i', 'reader', '--name', 'p1')

        result = self.invoke('remove', '-i', 'reader')

        self.assertEqual(result.exit_code, 0, result.output)
        self.iam_conn.delete_policy.assert_called_once_with(ARN)
        self.assertEqual(self.state(), {})

    def test_remove_unknown_instance(self):
        result = self.invoke('remove', '-i', 'unknown')

        self.assertEqual(result.exit_code, 0, result.output)
        self.iam_conn.delete_policy.assert_not_called()

    def test_status(self):
        self.invoke('deploy', '-i', 'reader', '--name', 'p1')

        result = self.invoke('status')

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn('reader', result.output)
        self.assertIn(ARN, result.output)

    def test_status_without_instances(self):
        result = self.invoke('status')
        self.assertEqual(result.exit_code, 2)
