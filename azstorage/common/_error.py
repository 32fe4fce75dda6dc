#-------------------------------------------------------------------------
# Copyright (c) Microsoft.  All rights reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#   http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#--------------------------------------------------------------------------
from azure.common import (
    AzureHttpError,
    AzureConflictHttpError,
    AzureMissingResourceHttpError,
    AzureException,
)

_ERROR_VALUE_NONE = '{0} should not be None.'
_ERROR_VALUE_OUT_OF_RANGE = 'The argument is out of range. Argument name: {0}, Value passed: {1}.'
_ERROR_VALUE_SHOULD_BE_BYTES = '{0} should be of type bytes.'
_ERROR_STORAGE_MISSING_INFO = \
    'You need to provide an account name and either an account_key or sas_token when creating a storage service.'
_ERROR_UNEXPECTED_CONTINUATION_TYPE = \
    'The continuation type passed in is unexpected. Please verify that the correct continuation type ' + \
    'is passed in. Expected {0}, found {1}.'
_ERROR_PRIMARY_ONLY_COMMAND = 'This operation can only be executed against the primary storage location.'
_ERROR_SECONDARY_ONLY_COMMAND = 'This operation can only be executed against the secondary storage location.'
_ERROR_STORAGE_URI_MISSING_LOCATION = \
    'The URI for the target storage location is not specified. Please consider changing the request\'s location mode.'
_ERROR_UNKNOWN_LOCATION_MODE = 'Unknown location mode: {0}.'
_ERROR_SNAPSHOT_LISTING = \
    'Listing snapshots is only supported in flat mode (no delimiter). Consider removing the delimiter.'
_ERROR_TOO_MANY_ACCESS_POLICIES = \
    'Too many access policies provided. The server does not support setting more than {0} access policies ' + \
    'on a single resource.'
_ERROR_INVALID_LEASE_DURATION = 'lease_duration param needs to be between 15 and 60 or -1.'
_ERROR_INVALID_LEASE_BREAK_PERIOD = 'lease_break_period param needs to be between 0 and 60.'


def _dont_fail_on_exist(error):
    ''' don't throw exception if the resource exists.
    This is called by create_* APIs with fail_on_exist=False'''
    if isinstance(error, AzureConflictHttpError):
        return False
    else:
        raise error


def _dont_fail_not_exist(error):
    ''' don't throw exception if the resource doesn't exist.
    This is called by delete_* APIs with fail_not_exist=False'''
    if isinstance(error, AzureMissingResourceHttpError):
        return False
    else:
        raise error


def _convert_http_error(http_error):
    '''
    Converts a failed response into the AzureHttpError raised to the caller,
    carrying the status code and the service error code.
    '''
    message = str(http_error)
    error_code = None

    if http_error.respheader and 'x-ms-error-code' in http_error.respheader:
        error_code = http_error.respheader['x-ms-error-code']
        message += ' ErrorCode: ' + error_code

    if http_error.respbody is not None:
        message += '\n' + http_error.respbody.decode('utf-8-sig')

    ex = AzureHttpError(message, http_error.status)
    ex.error_code = error_code

    return ex


def _wrap_exception(ex, desired_type):
    msg = ''
    if len(ex.args) > 0:
        msg = ex.args[0]
    return desired_type('{}: {}'.format(ex.__class__.__name__, msg))


def _validate_not_none(param_name, param):
    if param is None:
        raise ValueError(_ERROR_VALUE_NONE.format(param_name))


def _validate_positive_or_none(param_name, param):
    if param is not None and param <= 0:
        raise ValueError(_ERROR_VALUE_OUT_OF_RANGE.format(param_name, param))


def _validate_continuation_type(token, expected_type):
    '''
    Raises if a continuation token issued by one kind of listing is handed to
    another kind. A missing token is always accepted.
    '''
    if token is not None and token.continuation_type != expected_type:
        raise ValueError(_ERROR_UNEXPECTED_CONTINUATION_TYPE.format(
            expected_type, token.continuation_type))


def _validate_access_policies(identifiers, max_identifiers):
    if identifiers and len(identifiers) > max_identifiers:
        raise AzureException(_ERROR_TOO_MANY_ACCESS_POLICIES.format(max_identifiers))


class AzureSigningError(AzureException):
    '''
    Represents a fatal error when attempting to sign a request.
    In general, the cause of this exception is user error. For example, the given account key is not valid.
    Please visit https://docs.microsoft.com/en-us/azure/storage/common/storage-create-storage-account for more info.
    '''
    pass
