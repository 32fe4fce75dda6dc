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
from ._error import (
    _ERROR_PRIMARY_ONLY_COMMAND,
    _ERROR_SECONDARY_ONLY_COMMAND,
    _ERROR_STORAGE_URI_MISSING_LOCATION,
    _ERROR_UNKNOWN_LOCATION_MODE,
)
from .models import (
    LocationMode,
    RequestLocationMode,
)


def _validate_request_location_mode(request_location_mode):
    if request_location_mode not in (RequestLocationMode.PRIMARY_ONLY,
                                     RequestLocationMode.SECONDARY_ONLY,
                                     RequestLocationMode.PRIMARY_OR_SECONDARY):
        raise ValueError(_ERROR_UNKNOWN_LOCATION_MODE.format(request_location_mode))


def _is_location_allowed(request_location_mode, location):
    if request_location_mode == RequestLocationMode.PRIMARY_ONLY:
        return location == LocationMode.PRIMARY
    if request_location_mode == RequestLocationMode.SECONDARY_ONLY:
        return location == LocationMode.SECONDARY
    return location in (LocationMode.PRIMARY, LocationMode.SECONDARY)


def _get_initial_location(request_location_mode, location_mode, host_locations):
    '''
    Picks the location of the first attempt of an operation.

    :param str request_location_mode:
        The :class:`~azstorage.common.models.RequestLocationMode` declared by
        the operation.
    :param str location_mode:
        The client's preferred :class:`~azstorage.common.models.LocationMode`,
        used when the operation may go to either location.
    :param dict host_locations:
        Maps each :class:`~azstorage.common.models.LocationMode` to a host.
    :return: The location to send the first attempt to.
    :rtype: str
    '''
    _validate_request_location_mode(request_location_mode)

    if request_location_mode == RequestLocationMode.PRIMARY_ONLY:
        location = LocationMode.PRIMARY
    elif request_location_mode == RequestLocationMode.SECONDARY_ONLY:
        location = LocationMode.SECONDARY
    else:
        location = location_mode

    if not host_locations.get(location):
        if request_location_mode == RequestLocationMode.PRIMARY_ONLY:
            raise ValueError(_ERROR_PRIMARY_ONLY_COMMAND)
        if request_location_mode == RequestLocationMode.SECONDARY_ONLY:
            raise ValueError(_ERROR_SECONDARY_ONLY_COMMAND)
        raise ValueError(_ERROR_STORAGE_URI_MISSING_LOCATION)

    return location


def _get_next_location(request_location_mode, previous_location, proposed_location, host_locations):
    '''
    Picks the location of a retry. The retry policy proposes a location; it is
    only honored if the operation allows it and the client has a host for it.
    Otherwise the retry goes back to the location of the failed attempt.

    :param str request_location_mode:
        The :class:`~azstorage.common.models.RequestLocationMode` declared by
        the operation.
    :param str previous_location:
        The location the failed attempt was sent to.
    :param str proposed_location:
        The location the retry policy chose for the next attempt.
    :param dict host_locations:
        Maps each :class:`~azstorage.common.models.LocationMode` to a host.
    :rtype: str
    '''
    if _is_location_allowed(request_location_mode, proposed_location) \
            and host_locations.get(proposed_location):
        return proposed_location

    return previous_location


def _get_listing_location_mode(token):
    '''
    Continuation tokens record the location which returned them. The next page
    of a listing must come from that same location, since the replicas are
    not guaranteed to agree on the marker.

    :param ResultContinuation token:
        The continuation token of the listing, or None for the first page.
    :rtype: str
    '''
    if token is None or token.target_location is None:
        return RequestLocationMode.PRIMARY_OR_SECONDARY

    if token.target_location == LocationMode.PRIMARY:
        return RequestLocationMode.PRIMARY_ONLY

    return RequestLocationMode.SECONDARY_ONLY
