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
from copy import deepcopy

from botocore.exceptions import BotoCoreError, ClientError

from policyctl.commons.log_helper import get_logger, get_user_logger
from policyctl.core.constants import (DEFAULT_POLICY_VERSION, STATE_ID,
                                      STATE_NAME, STATE_ARN, STATE_VERSION,
                                      STATE_POLICY, STATE_PATH,
                                      STATE_LAST_POLICY_ARN, NAME_PARAM,
                                      POLICY_PARAM, REGION_PARAM,
                                      DESCRIPTION_PARAM, PATH_PARAM)
from policyctl.core.resources.helper import (build_defaults,
                                             canonical_policy_document,
                                             resolve_inputs)
from policyctl.exceptions import (PolicyCtlBaseError, ResourceNotFoundError,
                                  ResourceProcessingError)

_LOG = get_logger(__name__)
USER_LOG = get_user_logger()

REMOTE_ERRORS = (ClientError, BotoCoreError, PolicyCtlBaseError)


class IamPolicyResource:
    """ Reconciles a single IAM managed policy with its desired definition.

    The state of the component instance is passed explicitly into every
    operation and the new state is returned together with the outputs.
    `save_state` is called with the new state before an operation returns.
    """

    def __init__(self, conn_provider, save_state, default_region=None):
        self.conn_provider = conn_provider
        self.save_state = save_state
        self.default_region = default_region

    def deploy(self, state: dict, inputs: dict = None):
        """ Creates the policy, puts a new default version to it if the
        document has changed or leaves it as is.

        :type state: dict
        :type inputs: dict
        :returns: a tuple of outputs and the new state
        """
        USER_LOG.info('Deploying')
        state = deepcopy(state or {})
        inputs = inputs or {}
        params = resolve_inputs(build_defaults(self.default_region),
                                state, inputs)
        policy_document = canonical_policy_document(params[POLICY_PARAM])
        name = params[NAME_PARAM]
        iam_conn = self.conn_provider.iam(params.get(REGION_PARAM))

        last_policy_arn = state.pop(STATE_LAST_POLICY_ARN, None)
        if last_policy_arn:
            self._delete_orphaned_policy(iam_conn, name, last_policy_arn)

        pending_policy_arn = None
        policy = None
        arn = state.get(STATE_ARN)
        requested_name = inputs.get(NAME_PARAM)
        if arn and requested_name and requested_name != state.get(STATE_NAME):
            _LOG.debug(f'New policy required for {name}')
            if not self._delete_renamed_policy(iam_conn, name, arn):
                pending_policy_arn = arn
        elif arn:
            policy = self._describe_policy(iam_conn, name, arn)

        if policy and canonical_policy_document(
                policy['Document']) != policy_document:
            policy = self._update_policy_version(iam_conn, name, policy,
                                                 policy_document)
        elif policy:
            _LOG.debug(f'No policy changes required for {name}')

        if not policy:
            policy = self._create_policy(
                iam_conn, name=name, policy_document=policy_document,
                description=params.get(DESCRIPTION_PARAM),
                path=params.get(PATH_PARAM))

        outputs = {
            STATE_ID: policy.get('PolicyId'),
            STATE_NAME: policy.get('PolicyName'),
            STATE_ARN: policy.get('Arn'),
            STATE_VERSION: (policy.get('VersionId') or
                            policy.get('DefaultVersionId') or
                            DEFAULT_POLICY_VERSION),
            STATE_POLICY: json.loads(policy_document),
            STATE_PATH: policy.get('Path')
        }
        new_state = deepcopy(outputs)
        if pending_policy_arn:
            outputs[STATE_LAST_POLICY_ARN] = pending_policy_arn
            new_state[STATE_LAST_POLICY_ARN] = pending_policy_arn

        self.save_state(new_state)
        return outputs, new_state

    def remove(self, state: dict, inputs: dict = None):
        """ Removes the policy the state points to. A policy which does
        not exist anymore is considered removed.

        :type state: dict
        :type inputs: dict
        :returns: a tuple of empty outputs and the empty state
        """
        arn = (state or {}).get(STATE_ARN)
        if not arn:
            _LOG.debug('There is no policy arn in the state, nothing to '
                       'remove')
            self.save_state({})
            return {}, {}

        inputs = inputs or {}
        iam_conn = self.conn_provider.iam(inputs.get(REGION_PARAM))
        try:
            iam_conn.delete_policy(arn)
            USER_LOG.info(f'IAM policy {arn} was removed.')
        except ResourceNotFoundError:
            _LOG.warning(f'IAM policy {arn} is not found')
        except REMOTE_ERRORS as e:
            raise ResourceProcessingError(
                f'Failed to remove IAM policy {arn}: {e}') from e

        self.save_state({})
        return {}, {}

    @staticmethod
    def _delete_orphaned_policy(iam_conn, name, arn):
        try:
            _LOG.debug(f'Deleting old policy for {name} {arn}')
            iam_conn.delete_policy(arn)
        except REMOTE_ERRORS as e:
            _LOG.debug(f'Could not delete old policy {name} {arn}: {e}')

    @staticmethod
    def _delete_renamed_policy(iam_conn, name, arn):
        try:
            _LOG.debug(f'Deleting old policy for {name} {arn}')
            iam_conn.delete_policy(arn)
            return True
        except REMOTE_ERRORS as e:
            _LOG.debug(f'Could not delete old policy {name} {arn}. '
                       f'It will be attempted next run: {e}')
            return False

    @staticmethod
    def _describe_policy(iam_conn, name, arn):
        try:
            policy = iam_conn.get_policy(arn)
            version = iam_conn.get_policy_version(
                arn, policy['DefaultVersionId'])
        except (KeyError, *REMOTE_ERRORS) as e:
            _LOG.debug(f'Could not fetch current policy {name} {arn}: {e}')
            return None
        if not version.get('Document'):
            _LOG.debug(f'Default version of policy {name} {arn} has no '
                       f'document')
            return None
        return {
            **policy,
            'VersionId': version.get('VersionId'),
            'Document': version['Document']
        }

    @staticmethod
    def _update_policy_version(iam_conn, name, policy, policy_document):
        """ IAM keeps at most five versions of a policy, so the previous
        default version is removed once the new one is in place. A policy
        must never be left without versions, hence create goes first.
        """
        arn = policy['Arn']
        previous_version_id = policy.get('VersionId') or \
            policy.get('DefaultVersionId')
        _LOG.debug(f'Creating new policy version {name}')
        try:
            version = iam_conn.create_policy_version(
                policy_arn=arn, policy_document=policy_document,
                set_as_default=True)
        except REMOTE_ERRORS as e:
            _LOG.debug(f'Could not create policy {name} - {arn} version: '
                       f'{e}')
            return None

        if previous_version_id:
            try:
                iam_conn.delete_policy_version(arn, previous_version_id)
            except REMOTE_ERRORS as e:
                _LOG.debug(f'Could not delete policy {arn} version '
                           f'{previous_version_id}: {e}')
                return None

        return {
            **policy,
            'VersionId': version.get('VersionId'),
            'DefaultVersionId': version.get('VersionId'),
            'Document': json.loads(policy_document)
        }

    @staticmethod
    def _create_policy(iam_conn, name, policy_document, description, path):
        USER_LOG.info(f'Creating new policy {name}')
        try:
            return iam_conn.create_policy(policy_name=name,
                                          policy_document=policy_document,
                                          description=description,
                                          path=path)
        except REMOTE_ERRORS as e:
            raise ResourceProcessingError(
                f'Failed to create IAM policy {name}: {e}') from e
