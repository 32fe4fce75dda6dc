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


class _list(list):
    '''Used so that a continuation token can be set on the return object'''
    pass


class _dict(dict):
    '''Used so that additional properties can be set on the return dictionary'''
    pass


class LocationMode(object):
    '''
    Specifies the location the request should be sent to. This mode only applies
    for RA-GRS accounts which allow secondary read access. All other account types
    must use PRIMARY.
    '''

    PRIMARY = 'primary'
    ''' Requests should be sent to the primary location. '''

    SECONDARY = 'secondary'
    ''' Requests should be sent to the secondary location, if possible. '''


class RequestLocationMode(object):
    '''
    Declares which locations a single operation may be sent to. Writes can only
    go to the primary location; most reads may go to either.
    '''

    PRIMARY_ONLY = 'primary_only'
    ''' The operation can only be executed against the primary location. '''

    SECONDARY_ONLY = 'secondary_only'
    ''' The operation can only be executed against the secondary location. '''

    PRIMARY_OR_SECONDARY = 'primary_or_secondary'
    ''' The operation can be executed against either location. '''


class ResultContinuationType(object):
    '''
    Tags a continuation token with the kind of listing that produced it.
    '''

    CONTAINER = 'container'
    BLOB = 'blob'


class ResultContinuation(object):
    '''
    An opaque cursor marking where a multi-page listing should resume.

    :ivar str next_marker:
        The marker value returned by the service for the next page.
    :ivar str continuation_type:
        The :class:`~azstorage.common.models.ResultContinuationType` of the
        listing which issued this token. A token may only be passed back to
        the same kind of listing.
    :ivar str target_location:
        The :class:`~azstorage.common.models.LocationMode` which returned this
        token. Subsequent pages are requested from the same location.
    '''

    def __init__(self, next_marker=None, continuation_type=None, target_location=None):
        self.next_marker = next_marker
        self.continuation_type = continuation_type
        self.target_location = target_location

    def __repr__(self):
        return 'ResultContinuation(next_marker={!r}, continuation_type={!r}, target_location={!r})'.format(
            self.next_marker, self.continuation_type, self.target_location)


class ListGenerator(object):
    '''
    A lazy, single-use iterator over the items of a paged listing.

    Each page is fetched by calling ``fetch_page(segmented_request, max_results)``,
    which runs one request through the execution engine and replaces the token
    held by ``segmented_request`` with the one returned by the service. A page
    is only requested once every item of the previous page has been consumed,
    and no page is requested after the service stops returning a token.

    :ivar ResultContinuation next_marker:
        The continuation token of the last page fetched, or None if the listing
        is complete. Pass it as the marker of a new listing call to resume
        an abandoned enumeration.
    '''

    def __init__(self, fetch_page, segmented_request, num_results=None):
        self._fetch_page = fetch_page
        self._segmented_request = segmented_request
        self._num_results = num_results
        self._items = self._iterate()

    @property
    def next_marker(self):
        return self._segmented_request.token

    def __iter__(self):
        return self

    def __next__(self):
        return next(self._items)

    def _iterate(self):
        yielded = 0
        while True:
            max_results = None
            if self._num_results is not None:
                max_results = self._num_results - yielded

                # if we've reached num_results, return
                if max_results <= 0:
                    return

            # get the next segment
            segment = self._fetch_page(self._segmented_request, max_results)

            for item in segment:
                yielded += 1
                yield item

            # if no more results on the service, return
            if self._segmented_request.token is None:
                return


class RequestResult(object):
    '''
    Describes a single attempt made while executing an operation.

    :ivar int status:
        The HTTP status code of the response, or None if no response was received.
    :ivar str target_location:
        The :class:`~azstorage.common.models.LocationMode` the attempt was sent to.
    :ivar Exception exception:
        The error which failed the attempt, if any.
    :ivar str service_request_id:
        The x-ms-request-id returned by the service.
    :ivar float start_time:
        The time the attempt started, as returned by time.time().
    :ivar float end_time:
        The time the attempt completed, as returned by time.time().
    '''

    def __init__(self, target_location=None):
        self.status = None
        self.target_location = target_location
        self.exception = None
        self.service_request_id = None
        self.start_time = None
        self.end_time = None


class _OperationContext(object):
    '''
    Contains information that lasts the lifetime of an operation. This operation
    may span multiple calls to the Azure service, for example the pages of a
    listing or the retries of a single request.

    :ivar str client_request_id:
        A client request id sent with every attempt of the operation, or None
        to generate one per request.
    :ivar list request_results:
        A :class:`~azstorage.common.models.RequestResult` for every attempt
        made, in order.
    '''

    def __init__(self, client_request_id=None):
        self.client_request_id = client_request_id
        self.request_results = []

    @property
    def last_result(self):
        return self.request_results[-1] if self.request_results else None


class AccessPolicy(object):
    '''
    Access Policy class used by the set and get acl methods in each service.

    A stored access policy can specify the start time, expiry time, and
    permissions for the Shared Access Signatures with which it's associated.

    :param str permission:
        The permissions associated with the shared access signature. The
        user is restricted to operations allowed by the permissions.
    :param expiry:
        The time at which the shared access signature becomes invalid.
        Azure will always convert values to UTC. If a date is passed in
        without timezone info, it is assumed to be UTC.
    :type expiry: datetime or str
    :param start:
        The time at which the shared access signature becomes valid. If
        omitted, start time for this call is assumed to be the time when the
        storage service receives the request.
    :type start: datetime or str
    '''

    def __init__(self, permission=None, expiry=None, start=None):
        self.start = start
        self.expiry = expiry
        self.permission = permission
