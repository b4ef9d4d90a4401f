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
import uuid

from policyctl.commons import deep_merge
from policyctl.core.constants import (DEFAULT_REGION, DEFAULT_POLICY_DOCUMENT,
                                      DEFAULT_POLICY_NAME_PREFIX,
                                      DEFAULT_POLICY_DESCRIPTION,
                                      DEFAULT_POLICY_PATH, REGION_PARAM,
                                      POLICY_PARAM, NAME_PARAM,
                                      DESCRIPTION_PARAM, PATH_PARAM)
from policyctl.exceptions import InvalidValueError

# replaced as a whole instead of being merged key by key
ATOMIC_PARAMS = (POLICY_PARAM,)


def generate_policy_name():
    return f'{DEFAULT_POLICY_NAME_PREFIX}{uuid.uuid4().hex[:10]}'


def build_defaults(region=None):
    return {
        REGION_PARAM: region or DEFAULT_REGION,
        POLICY_PARAM: DEFAULT_POLICY_DOCUMENT,
        NAME_PARAM: generate_policy_name(),
        DESCRIPTION_PARAM: DEFAULT_POLICY_DESCRIPTION,
        PATH_PARAM: DEFAULT_POLICY_PATH
    }


def resolve_inputs(defaults: dict, state: dict, inputs: dict) -> dict:
    """ Resolves the effective inputs from three layers. Precedence:
    explicit inputs > prior state > built-in defaults. Keys with a None
    value in a layer are treated as absent in that layer.

    :type defaults: dict
    :type state: dict
    :type inputs: dict
    :rtype: dict
    """
    layers = [_drop_none(layer) for layer in (defaults, state, inputs)]
    resolved = {}
    for layer in layers:
        resolved = deep_merge(resolved, layer)
    for param in ATOMIC_PARAMS:
        for layer in reversed(layers):
            if param in layer:
                resolved[param] = layer[param]
                break
    return resolved


def _drop_none(layer):
    return {k: v for k, v in (layer or {}).items() if v is not None}


def canonical_policy_document(document) -> str:
    """ Returns the canonical serialized form of a policy document so that
    documents can be compared regardless of key order or whitespace.

    :type document: dict or str
    :rtype: str
    """
    if isinstance(document, str):
        try:
            document = json.loads(document)
        except ValueError as e:
            raise InvalidValueError(
                f'Policy document is not a valid JSON: {e}') from e
    if not isinstance(document, dict):
        raise InvalidValueError(
            f'Policy document must be a JSON object, not '
            f'{type(document).__name__}')
    return json.dumps(document, sort_keys=True, separators=(',', ':'))
