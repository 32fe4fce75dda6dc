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
from .models import RequestLocationMode


class _RetryableFailure(object):
    '''
    Returned by a pre-processing function instead of a result when the response
    means the attempt failed, but in an expected way which should be handed to
    the retry policy rather than raised. For example a 404 is a normal outcome
    of an exists check, while any other unexpected status is a _RetryableFailure.

    :ivar int status:
        The HTTP status code which failed the attempt.
    :ivar str message:
        An optional description of the failure.
    '''

    def __init__(self, status, message=None):
        self.status = status
        self.message = message


class _StorageRequest(object):
    '''
    Describes how to run one storage operation. The execution engine calls
    these functions for every attempt, in this order: build_request,
    set_headers, sign_request, pre_process_response and, once an attempt
    succeeds, post_process_response.

    :ivar function(location) build_request:
        Returns the :class:`~azstorage.common._http.HTTPRequest` of an attempt
        against the given :class:`~azstorage.common.models.LocationMode`.
    :ivar function(request) set_headers:
        Optionally adds operation specific headers, such as metadata.
    :ivar function(request) sign_request:
        Signs the request. Defaults to the client's authentication. Runs after
        every header and the body are final.
    :ivar function(response) pre_process_response:
        Inspects the response and returns the result, or a _RetryableFailure.
        Defaults to succeeding with None on a 2xx status code.
    :ivar function(response, result) post_process_response:
        Optionally completes the result, usually by parsing the response body.
        Only runs once the attempt succeeded and is never retried.
    :ivar location_mode:
        The :class:`~azstorage.common.models.RequestLocationMode` of the
        operation, or a function returning it. A function is evaluated once,
        when the operation starts.
    :ivar str current_location:
        The :class:`~azstorage.common.models.LocationMode` of the attempt in progress.
    '''

    def __init__(self, build_request, pre_process_response=None, post_process_response=None,
                 set_headers=None, sign_request=None, location_mode=RequestLocationMode.PRIMARY_ONLY):
        self.build_request = build_request
        self.pre_process_response = pre_process_response or _pre_process_success
        self.post_process_response = post_process_response
        self.set_headers = set_headers
        self.sign_request = sign_request
        self.location_mode = location_mode
        self.current_location = None

    def get_location_mode(self):
        if callable(self.location_mode):
            return self.location_mode()
        return self.location_mode


class _SegmentedStorageRequest(object):
    '''
    Holds the continuation token of a listing between its pages. A listing
    owns its own instance; it is never shared between two enumerations.

    :ivar ResultContinuation token:
        The token to resume the listing from, or None.
    '''

    def __init__(self, token=None):
        self.token = token


def _pre_process_success(response):
    if 200 <= response.status < 300:
        return None
    return _RetryableFailure(response.status)


def _expect_status(*statuses):
    '''
    Returns a pre-processing function succeeding with None on the given status
    codes and reporting any other status as a retryable failure.
    '''
    def pre_process_response(response):
        if response.status in statuses:
            return None
        return _RetryableFailure(response.status)

    return pre_process_response
