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
import click
from tabulate import tabulate

from policyctl import __version__
from policyctl.commons.log_helper import get_logger, get_user_logger
from policyctl.core import initialize_connection
from policyctl.core.constants import (DEPLOY_ACTION, REMOVE_ACTION,
                                      STATUS_ACTION, OK_RETURN_CODE,
                                      ABORTED_RETURN_CODE, NAME_PARAM,
                                      POLICY_PARAM, DESCRIPTION_PARAM,
                                      PATH_PARAM, REGION_PARAM, STATE_ID,
                                      STATE_NAME, STATE_ARN, STATE_VERSION,
                                      STATE_PATH, STATE_LAST_POLICY_ARN)
from policyctl.core.decorators import return_code_manager
from policyctl.core.helper import (ValidRegionParamType,
                                   PolicyDocumentParamType, prettify_json,
                                   verbose_option)
from policyctl.core.resources.iam_policy_resource import IamPolicyResource
from policyctl.core.state.component_state import ComponentState

_LOG = get_logger(__name__)
USER_LOG = get_user_logger()

STATUS_HEADERS = ('instance', STATE_NAME, STATE_ARN, STATE_VERSION,
                  STATE_PATH, STATE_ID, STATE_LAST_POLICY_ARN)


def _component_state(instance):
    from policyctl.core import CONFIG
    return ComponentState(state_path=CONFIG.state_path,
                          instance_name=instance)


def _iam_policy_resource(component_state):
    from policyctl.core import CONFIG, CONN
    return IamPolicyResource(conn_provider=CONN,
                             save_state=component_state.save,
                             default_region=CONFIG.region)


@click.group(name='policyctl')
@return_code_manager
@click.version_option(version=__version__)
def policyctl():
    """Manages the lifecycle of AWS IAM managed policies"""
    initialize_connection()


@policyctl.command(name=DEPLOY_ACTION)
@return_code_manager
@click.option('--instance', '-i', required=True, type=str,
              help='Name of the component instance the state is kept for')
@click.option('--name', '-n', type=str,
              help='Policy name. Changing it for an existing instance '
                   'recreates the policy')
@click.option('--policy', '-p', type=PolicyDocumentParamType(),
              help='Policy document as a JSON string or @path to a JSON file')
@click.option('--description', '-d', type=str, help='Policy description')
@click.option('--path', type=str, help='Policy path')
@click.option('--region', '-r', type=ValidRegionParamType(),
              help='The region to use instead of the configured one')
@verbose_option
def deploy(instance, name, policy, description, path, region):
    """
    Creates the policy or brings the existing one up to date
    """
    component_state = _component_state(instance)
    inputs = {
        NAME_PARAM: name,
        POLICY_PARAM: policy,
        DESCRIPTION_PARAM: description,
        PATH_PARAM: path,
        REGION_PARAM: region
    }
    inputs = {k: v for k, v in inputs.items() if v is not None}
    resource = _iam_policy_resource(component_state)
    outputs, _ = resource.deploy(state=component_state.dct, inputs=inputs)
    click.echo(prettify_json(outputs))
    return OK_RETURN_CODE


@policyctl.command(name=REMOVE_ACTION)
@return_code_manager
@click.option('--instance', '-i', required=True, type=str,
              help='Name of the component instance to remove')
@click.option('--region', '-r', type=ValidRegionParamType(),
              help='The region to use instead of the configured one')
@verbose_option
def remove(instance, region):
    """
    Removes the policy and clears the state of the instance
    """
    component_state = _component_state(instance)
    state = component_state.dct
    resource = _iam_policy_resource(component_state)
    resource.remove(state=state, inputs={REGION_PARAM: region})
    if state.get(STATE_ARN):
        USER_LOG.info(f'Instance \'{instance}\' was removed')
    else:
        USER_LOG.info(f'Instance \'{instance}\' has nothing to remove')
    return OK_RETURN_CODE


@policyctl.command(name=STATUS_ACTION)
@return_code_manager
@click.option('--instance', '-i', type=str,
              help='Show only the given component instance')
@verbose_option
def status(instance):
    """
    Shows the persisted state of the component instances
    """
    from policyctl.core import CONFIG
    instances = [instance] if instance else \
        ComponentState.list_instances(CONFIG.state_path)
    if not instances:
        USER_LOG.warning('There are no component instances')
        return ABORTED_RETURN_CODE
    rows = []
    for each in instances:
        state = _component_state(each).dct
        rows.append([each] + [state.get(key) for key in STATUS_HEADERS[1:]])
    click.echo(tabulate(rows, headers=STATUS_HEADERS))
    return OK_RETURN_CODE
