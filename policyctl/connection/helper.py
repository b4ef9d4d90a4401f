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
from functools import wraps

from botocore.exceptions import ClientError

from policyctl.commons import deep_get
from policyctl.commons.log_helper import get_logger
from policyctl.exceptions import ResourceNotFoundError

_LOG = get_logger(__name__)

NOT_FOUND_ERROR_CODES = ('NoSuchEntity', 'NoSuchEntityException')


def apply_methods_decorator(decorator):
    # static methods become plain functions after decoration, so they must
    # not be declared on the decorated classes
    def decorate(cls):
        for attr in cls.__dict__:
            if callable(getattr(cls, attr)):
                setattr(cls, attr, decorator(getattr(cls, attr)))
        return cls

    return decorate


def get_error_code(error: ClientError) -> str:
    return deep_get(error.response, ['Error', 'Code'], '') or ''


def is_not_found_error(error: Exception) -> bool:
    if isinstance(error, ResourceNotFoundError):
        return True
    if isinstance(error, ClientError):
        return get_error_code(error) in NOT_FOUND_ERROR_CODES
    return False


def translate_not_found():
    """ Decorator that turns AWS 'entity does not exist' client errors into
    ResourceNotFoundError. The error code from the response is checked,
    the message text is never inspected.
    """

    def decorator(handler_func):
        @wraps(handler_func)
        def wrapper(*args, **kwargs):
            """ Wrapper func."""
            try:
                return handler_func(*args, **kwargs)
            except ClientError as e:
                if not is_not_found_error(e):
                    raise
                _LOG.debug(f'{handler_func.__name__}: the requested entity '
                           f'does not exist. Error: {e}')
                raise ResourceNotFoundError(str(e)) from e
        return wrapper
    return decorator
