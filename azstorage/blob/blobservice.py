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
from azure.common import AzureHttpError

from ..common._auth import (
    _StorageNoAuthentication,
    _StorageSASAuthentication,
    _StorageSharedKeyAuthentication,
)
from ..common._common_conversion import (
    _int_or_none,
    _str_or_none,
)
from ..common._connection import _ServiceParameters
from ..common._constants import (
    DEFAULT_PROTOCOL,
    SERVICE_HOST_BASE,
    _MAX_SIGNED_IDENTIFIERS,
)
from ..common._deserialization import (
    _convert_xml_to_signed_identifiers,
    _parse_metadata,
    _parse_properties,
)
from ..common._error import (
    _ERROR_INVALID_LEASE_BREAK_PERIOD,
    _ERROR_INVALID_LEASE_DURATION,
    _ERROR_SNAPSHOT_LISTING,
    _dont_fail_not_exist,
    _dont_fail_on_exist,
    _validate_access_policies,
    _validate_continuation_type,
    _validate_not_none,
    _validate_positive_or_none,
)
from ..common._http import HTTPRequest
from ..common._location import _get_listing_location_mode
from ..common._request import (
    _RetryableFailure,
    _SegmentedStorageRequest,
    _StorageRequest,
    _expect_status,
)
from ..common._serialization import (
    _add_metadata_headers,
    _convert_signed_identifiers_to_xml,
    _datetime_to_utc_string,
    _get_request_body,
)
from ..common.models import (
    ListGenerator,
    RequestLocationMode,
    ResultContinuation,
    ResultContinuationType,
)
from ..common.storageclient import StorageClient
from ._deserialization import (
    _convert_xml_to_blob_list,
    _convert_xml_to_containers,
    _parse_container,
    _parse_lease_id,
    _parse_lease_time,
)
from ._serialization import _get_path
from .models import (
    ContainerProperties,
    Include,
    LeaseActions,
)


class BlobService(StorageClient):
    '''
    This is the main class managing Blob resources.

    The Blob service stores text and binary data as blobs in the cloud.
    Containers organize the blobs of an account. Every operation is executed by
    the retrying execution engine of :class:`~azstorage.common.storageclient.StorageClient`.
    Reads are sent to the location chosen by :attr:`location_mode` and may fail
    over to the other location when the retry policy allows it, while writes
    are only ever sent to the primary location.
    '''

    def __init__(self, account_name=None, account_key=None, sas_token=None,
                 protocol=DEFAULT_PROTOCOL, endpoint_suffix=SERVICE_HOST_BASE,
                 custom_domain=None, custom_secondary_domain=None, request_session=None):
        '''
        :param str account_name:
            The storage account name. This is used to authenticate requests 
            signed with an account key and to construct the storage endpoint. It 
            is required unless a custom domain is used with anonymous authentication.
        :param str account_key:
            The storage account key. This is used for shared key authentication. 
        :param str sas_token:
             A shared access signature token to use to authenticate requests 
             instead of the account key. If account key and sas token are both 
             specified, account key will be used to sign.
        :param str protocol:
            The protocol to use for requests. Defaults to https.
        :param str endpoint_suffix:
            The host base component of the url, minus the account name. Defaults 
            to Azure (core.windows.net). Override this to use the China cloud 
            (core.chinacloudapi.cn).
        :param str custom_domain:
            The custom domain to use. This can be set in the Azure Portal. For 
            example, 'www.mydomain.com'.
        :param str custom_secondary_domain:
            The secondary host to use together with a custom domain. Without it,
            a client using a custom domain has no secondary location.
        :param requests.Session request_session:
            The session object to use for http requests.
        '''
        service_params = _ServiceParameters.get_service_parameters(
            'blob',
            account_name=account_name,
            account_key=account_key,
            sas_token=sas_token,
            protocol=protocol,
            endpoint_suffix=endpoint_suffix,
            custom_domain=custom_domain,
            custom_secondary_domain=custom_secondary_domain,
            request_session=request_session)

        super(BlobService, self).__init__(service_params)

        if self.account_key:
            self.authentication = _StorageSharedKeyAuthentication(
                self.account_name,
                self.account_key,
            )
        elif self.sas_token:
            self.authentication = _StorageSASAuthentication(self.sas_token)
        else:
            self.authentication = _StorageNoAuthentication()

    def make_container_url(self, container_name, protocol=None, secondary=False):
        '''
        Creates the url to access a container.

        :param str container_name:
            Name of container.
        :param str protocol:
            Protocol to use: 'http' or 'https'. If not specified, uses the
            protocol specified when BlobService was initialized.
        :param bool secondary:
            Whether to address the secondary location.
        :return: A container access URL.
        :rtype: str
        '''
        return '{}://{}{}'.format(
            protocol or self.protocol,
            self.secondary_endpoint if secondary else self.primary_endpoint,
            _get_path(container_name),
        )

    def list_containers(self, prefix=None, num_results=None, include_metadata=False,
                        marker=None, timeout=None):
        '''
        Returns a generator to list the containers under the specified account.
        The generator will lazily follow the continuation tokens returned by
        the service and stop when all containers have been returned or num_results 
        is reached. A page is only requested once every container of the previous
        page has been consumed.

        If num_results is specified and the account has more than that number of 
        containers, the generator will have a populated next_marker field once it 
        finishes. This marker can be used to create a new generator if more 
        results are desired.

        :param str prefix:
            Filters the results to return only containers whose names
            begin with the specified prefix.
        :param int num_results:
            Specifies the maximum number of containers to return.
        :param bool include_metadata:
            Specifies that container metadata be returned in the response.
        :param ~azstorage.common.models.ResultContinuation marker:
            A continuation token returned by a previous listing of containers.
            The listing resumes where that one stopped, against the location
            which issued the token.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        :return: A lazy generator of :class:`~azstorage.blob.models.Container`.
        :rtype: ~azstorage.common.models.ListGenerator
        '''
        _validate_continuation_type(marker, ResultContinuationType.CONTAINER)
        _validate_positive_or_none('num_results', num_results)

        def fetch_page(segmented_request, max_results):
            return self._list_containers(segmented_request, prefix, max_results, include_metadata, timeout)

        return ListGenerator(fetch_page, _SegmentedStorageRequest(marker), num_results)

    def list_containers_segmented(self, prefix=None, max_results=None, include_metadata=False,
                                  marker=None, timeout=None):
        '''
        Returns a single page of containers.

        :param str prefix:
            Filters the results to return only containers whose names
            begin with the specified prefix.
        :param int max_results:
            The maximum number of containers the page may hold.
        :param bool include_metadata:
            Specifies that container metadata be returned in the response.
        :param ~azstorage.common.models.ResultContinuation marker:
            The continuation token of the previous page, or None for the first page.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        :return: 
            A list of :class:`~azstorage.blob.models.Container` whose next_marker
            is the continuation token of the next page, or None on the last page.
        :rtype: list(:class:`~azstorage.blob.models.Container`)
        '''
        _validate_continuation_type(marker, ResultContinuationType.CONTAINER)
        return self._list_containers(_SegmentedStorageRequest(marker), prefix, max_results,
                                     include_metadata, timeout)

    def _list_containers(self, segmented_request, prefix, max_results, include_metadata, timeout):
        _validate_positive_or_none('max_results', max_results)

        def build_request(location):
            token = segmented_request.token
            request = HTTPRequest()
            request.method = 'GET'
            request.path = _get_path()
            request.query = {
                'comp': 'list',
                'prefix': _str_or_none(prefix),
                'marker': token.next_marker if token else None,
                'maxresults': _int_or_none(max_results),
                'include': 'metadata' if include_metadata else None,
                'timeout': _int_or_none(timeout),
            }
            return request

        def post_process_response(response, result):
            containers = _convert_xml_to_containers(response)
            return _set_continuation(containers, segmented_request, ResultContinuationType.CONTAINER,
                                     storage_request.current_location)

        storage_request = _StorageRequest(
            build_request,
            pre_process_response=_expect_status(200),
            post_process_response=post_process_response,
            location_mode=lambda: _get_listing_location_mode(segmented_request.token))

        return self._perform_request(storage_request)

    def create_container(self, container_name, metadata=None, public_access=None,
                         fail_on_exist=False, timeout=None):
        '''
        Creates a new container under the specified account. If the container
        with the same name already exists, the operation fails if
        fail_on_exist is True.

        :param str container_name:
            Name of container to create.
        :param metadata:
            A dict with name_value pairs to associate with the
            container as metadata. Example:{'Category':'test'}
        :type metadata: dict(str, str)
        :param ~azstorage.blob.models.PublicAccess public_access:
            Possible values include: container, blob.
        :param bool fail_on_exist:
            Specify whether to throw an exception when the container exists.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        :return: True if container is created, False if container already exists.
        :rtype: bool
        '''
        _validate_not_none('container_name', container_name)

        def build_request(location):
            request = HTTPRequest()
            request.method = 'PUT'
            request.path = _get_path(container_name)
            request.query = {
                'restype': 'container',
                'timeout': _int_or_none(timeout),
            }
            request.headers = {'x-ms-blob-public-access': _str_or_none(public_access)}
            return request

        storage_request = _StorageRequest(
            build_request,
            pre_process_response=_expect_status(201),
            set_headers=lambda request: _add_metadata_headers(metadata, request))

        if not fail_on_exist:
            try:
                self._perform_request(storage_request)
                return True
            except AzureHttpError as ex:
                _dont_fail_on_exist(ex)
                return False
        else:
            self._perform_request(storage_request)
            return True

    def delete_container(self, container_name, fail_not_exist=False, lease_id=None,
                         if_modified_since=None, if_unmodified_since=None, timeout=None):
        '''
        Marks the specified container for deletion. The container and any blobs
        contained within it are later deleted during garbage collection.

        :param str container_name:
            Name of container to delete.
        :param bool fail_not_exist:
            Specify whether to throw an exception when the container doesn't
            exist.
        :param str lease_id:
            If specified, delete_container only succeeds if the
            container's lease is active and matches this ID.
            Required if the container has an active lease.
        :param datetime if_modified_since:
            A DateTime value. Azure expects the date value passed in to be UTC.
            If timezone is included, any non-UTC datetimes will be converted to UTC.
            If a date is passed in without timezone info, it is assumed to be UTC.
            Specify this header to perform the operation only
            if the resource has been modified since the specified time.
        :param datetime if_unmodified_since:
            A DateTime value. Azure expects the date value passed in to be UTC.
            If timezone is included, any non-UTC datetimes will be converted to UTC.
            If a date is passed in without timezone info, it is assumed to be UTC.
            Specify this header to perform the operation only if
            the resource has not been modified since the specified date/time.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        :return: True if container is deleted, False container doesn't exist.
        :rtype: bool
        '''
        _validate_not_none('container_name', container_name)

        def build_request(location):
            request = HTTPRequest()
            request.method = 'DELETE'
            request.path = _get_path(container_name)
            request.query = {
                'restype': 'container',
                'timeout': _int_or_none(timeout),
            }
            request.headers = {
                'x-ms-lease-id': _str_or_none(lease_id),
                'If-Modified-Since': _datetime_to_utc_string(if_modified_since),
                'If-Unmodified-Since': _datetime_to_utc_string(if_unmodified_since),
            }
            return request

        storage_request = _StorageRequest(build_request, pre_process_response=_expect_status(202))

        if not fail_not_exist:
            try:
                self._perform_request(storage_request)
                return True
            except AzureHttpError as ex:
                _dont_fail_not_exist(ex)
                return False
        else:
            self._perform_request(storage_request)
            return True

    def exists(self, container_name, primary_only=False, timeout=None):
        '''
        Returns a boolean indicating whether the container exists. A missing
        container is a regular outcome of this call and is not raised.

        :param str container_name:
            Name of a container.
        :param bool primary_only:
            Only check the primary location, even if the client reads from
            the secondary location.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        :return: A boolean indicating whether the container exists.
        :rtype: bool
        '''
        _validate_not_none('container_name', container_name)

        def build_request(location):
            request = HTTPRequest()
            request.method = 'HEAD'
            request.path = _get_path(container_name)
            request.query = {
                'restype': 'container',
                'timeout': _int_or_none(timeout),
            }
            return request

        def pre_process_response(response):
            if response.status == 200:
                return True
            if response.status == 404:
                return False
            return _RetryableFailure(response.status)

        storage_request = _StorageRequest(
            build_request,
            pre_process_response=pre_process_response,
            location_mode=RequestLocationMode.PRIMARY_ONLY if primary_only
            else RequestLocationMode.PRIMARY_OR_SECONDARY)

        return self._perform_request(storage_request)

    def get_container_properties(self, container_name, lease_id=None, timeout=None):
        '''
        Returns all user-defined metadata and system properties for the specified
        container. The data returned does not include the container's list of blobs.

        :param str container_name:
            Name of existing container.
        :param str lease_id:
            If specified, get_container_properties only succeeds if the
            container's lease is active and matches this ID.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        :return: properties for the specified container within a container object.
        :rtype: :class:`~azstorage.blob.models.Container`
        '''
        _validate_not_none('container_name', container_name)

        storage_request = _StorageRequest(
            self._get_container_request_builder(container_name, None, lease_id, timeout),
            pre_process_response=_expect_status(200),
            post_process_response=lambda response, result: _parse_container(container_name, response),
            location_mode=RequestLocationMode.PRIMARY_OR_SECONDARY)

        return self._perform_request(storage_request)

    def get_container_metadata(self, container_name, lease_id=None, timeout=None):
        '''
        Returns all user-defined metadata for the specified container.

        :param str container_name:
            Name of existing container.
        :param str lease_id:
            If specified, get_container_metadata only succeeds if the
            container's lease is active and matches this ID.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        :return:
            A dictionary representing the container metadata name, value pairs.
        :rtype: dict(str, str)
        '''
        _validate_not_none('container_name', container_name)

        storage_request = _StorageRequest(
            self._get_container_request_builder(container_name, 'metadata', lease_id, timeout),
            pre_process_response=_expect_status(200),
            post_process_response=lambda response, result: _parse_metadata(response),
            location_mode=RequestLocationMode.PRIMARY_OR_SECONDARY)

        return self._perform_request(storage_request)

    def set_container_metadata(self, container_name, metadata=None, lease_id=None,
                               if_modified_since=None, timeout=None):
        '''
        Sets one or more user-defined name-value pairs for the specified
        container. Each call to this operation replaces all existing metadata
        attached to the container. To remove all metadata from the container,
        call this operation with no metadata dict.

        :param str container_name:
            Name of existing container.
        :param metadata:
            A dict containing name-value pairs to associate with the container as 
            metadata. Example: {'category':'test'}
        :type metadata: dict(str, str)
        :param str lease_id:
            If specified, set_container_metadata only succeeds if the
            container's lease is active and matches this ID.
        :param datetime if_modified_since:
            A DateTime value. Azure expects the date value passed in to be UTC.
            If timezone is included, any non-UTC datetimes will be converted to UTC.
            If a date is passed in without timezone info, it is assumed to be UTC.
            Specify this header to perform the operation only
            if the resource has been modified since the specified time.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        :return: ETag and last modified properties for the updated Container
        :rtype: :class:`~azstorage.blob.models.ContainerProperties`
        '''
        _validate_not_none('container_name', container_name)

        storage_request = _StorageRequest(
            self._get_container_request_builder(container_name, 'metadata', lease_id, timeout, 'PUT',
                                                if_modified_since=if_modified_since),
            pre_process_response=_expect_status(200),
            post_process_response=lambda response, result: _parse_properties(response, ContainerProperties),
            set_headers=lambda request: _add_metadata_headers(metadata, request))

        return self._perform_request(storage_request)

    def get_container_acl(self, container_name, lease_id=None, timeout=None):
        '''
        Gets the permissions for the specified container.
        The permissions indicate whether container data may be accessed publicly.

        :param str container_name:
            Name of existing container.
        :param lease_id:
            If specified, get_container_acl only succeeds if the
            container's lease is active and matches this ID.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        :return: A dictionary of access policies associated with the container.
            The public access level of the container is set as its public_access attribute.
        :rtype: dict(str, :class:`~azstorage.common.models.AccessPolicy`)
        '''
        _validate_not_none('container_name', container_name)

        def post_process_response(response, result):
            acl = _convert_xml_to_signed_identifiers(response)
            acl.public_access = response.headers.get('x-ms-blob-public-access')
            return acl

        storage_request = _StorageRequest(
            self._get_container_request_builder(container_name, 'acl', lease_id, timeout),
            pre_process_response=_expect_status(200),
            post_process_response=post_process_response,
            location_mode=RequestLocationMode.PRIMARY_OR_SECONDARY)

        return self._perform_request(storage_request)

    def set_container_acl(self, container_name, signed_identifiers=None, public_access=None,
                          lease_id=None, if_modified_since=None, if_unmodified_since=None,
                          timeout=None):
        '''
        Sets the permissions for the specified container or stored access 
        policies that may be used with Shared Access Signatures. The permissions
        indicate whether blobs in a container may be accessed publicly.

        :param str container_name:
            Name of existing container.
        :param signed_identifiers:
            A dictionary of access policies to associate with the container. The 
            dictionary may contain up to 5 elements. An empty dictionary 
            will clear the access policies set on the service. 
        :type signed_identifiers: dict(str, :class:`~azstorage.common.models.AccessPolicy`)
        :param ~azstorage.blob.models.PublicAccess public_access:
            Possible values include: container, blob.
        :param str lease_id:
            If specified, set_container_acl only succeeds if the
            container's lease is active and matches this ID.
        :param datetime if_modified_since:
            A DateTime value. Azure expects the date value passed in to be UTC.
            If timezone is included, any non-UTC datetimes will be converted to UTC.
            If a date is passed in without timezone info, it is assumed to be UTC.
            Specify this header to perform the operation only
            if the resource has been modified since the specified time.
        :param datetime if_unmodified_since:
            A DateTime value. Azure expects the date value passed in to be UTC.
            If timezone is included, any non-UTC datetimes will be converted to UTC.
            If a date is passed in without timezone info, it is assumed to be UTC.
            Specify this header to perform the operation only if
            the resource has not been modified since the specified date/time.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        :return: ETag and last modified properties for the updated Container
        :rtype: :class:`~azstorage.blob.models.ContainerProperties`
        '''
        _validate_not_none('container_name', container_name)
        _validate_access_policies(signed_identifiers, _MAX_SIGNED_IDENTIFIERS)

        build_container_request = self._get_container_request_builder(
            container_name, 'acl', lease_id, timeout, 'PUT',
            if_modified_since=if_modified_since, if_unmodified_since=if_unmodified_since)

        def build_request(location):
            request = build_container_request(location)
            request.headers['x-ms-blob-public-access'] = _str_or_none(public_access)
            request.body = _get_request_body(_convert_signed_identifiers_to_xml(signed_identifiers))
            return request

        storage_request = _StorageRequest(
            build_request,
            pre_process_response=_expect_status(200),
            post_process_response=lambda response, result: _parse_properties(response, ContainerProperties))

        return self._perform_request(storage_request)

    def acquire_container_lease(
            self, container_name, lease_duration=-1, proposed_lease_id=None,
            if_modified_since=None, if_unmodified_since=None, timeout=None):
        '''
        Requests a new lease. If the container does not have an active lease,
        the Blob service creates a lease on the container and returns a new
        lease ID.

        :param str container_name:
            Name of existing container.
        :param int lease_duration:
            Specifies the duration of the lease, in seconds, or negative one
            (-1) for a lease that never expires. A non-infinite lease can be
            between 15 and 60 seconds. A lease duration cannot be changed
            using renew or change. Default is -1 (infinite lease).
        :param str proposed_lease_id:
            Proposed lease ID, in a GUID string format. The Blob service returns
            400 (Invalid request) if the proposed lease ID is not in the correct format.
        :param datetime if_modified_since:
            A DateTime value. Azure expects the date value passed in to be UTC.
            Specify this header to perform the operation only
            if the resource has been modified since the specified time.
        :param datetime if_unmodified_since:
            A DateTime value. Azure expects the date value passed in to be UTC.
            Specify this header to perform the operation only if
            the resource has not been modified since the specified date/time.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        :return: the lease ID of the newly created lease.
        :rtype: str
        '''
        _validate_not_none('lease_duration', lease_duration)
        if lease_duration != -1 and \
                (lease_duration < 15 or lease_duration > 60):
            raise ValueError(_ERROR_INVALID_LEASE_DURATION)

        return self._lease_container_impl(container_name,
                                          LeaseActions.Acquire,
                                          None,  # lease_id
                                          lease_duration,
                                          None,  # lease_break_period
                                          proposed_lease_id,
                                          if_modified_since,
                                          if_unmodified_since,
                                          timeout,
                                          201,
                                          _parse_lease_id)

    def renew_container_lease(self, container_name, lease_id,
                              if_modified_since=None, if_unmodified_since=None, timeout=None):
        '''
        Renews the lease. The lease can be renewed if the lease ID specified
        matches that associated with the container. Note that
        the lease may be renewed even if it has expired as long as the container
        has not been leased again since the expiration of that lease. When you
        renew a lease, the lease duration clock resets.

        :param str container_name:
            Name of existing container.
        :param str lease_id:
            Lease ID for active lease.
        :param datetime if_modified_since:
            Perform the operation only if the resource has been modified since
            the specified UTC time.
        :param datetime if_unmodified_since:
            Perform the operation only if the resource has not been modified
            since the specified UTC time.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        :return: the lease ID of the renewed lease.
        :rtype: str
        '''
        _validate_not_none('lease_id', lease_id)

        return self._lease_container_impl(container_name,
                                          LeaseActions.Renew,
                                          lease_id,
                                          None,  # lease_duration
                                          None,  # lease_break_period
                                          None,  # proposed_lease_id
                                          if_modified_since,
                                          if_unmodified_since,
                                          timeout,
                                          200,
                                          _parse_lease_id)

    def release_container_lease(self, container_name, lease_id,
                                if_modified_since=None, if_unmodified_since=None, timeout=None):
        '''
        Release the lease. The lease may be released if the lease_id specified matches
        that associated with the container. Releasing the lease allows another client
        to immediately acquire the lease for the container as soon as the release is complete.

        :param str container_name:
            Name of existing container.
        :param str lease_id:
            Lease ID for active lease.
        :param datetime if_modified_since:
            Perform the operation only if the resource has been modified since
            the specified UTC time.
        :param datetime if_unmodified_since:
            Perform the operation only if the resource has not been modified
            since the specified UTC time.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        '''
        _validate_not_none('lease_id', lease_id)

        self._lease_container_impl(container_name,
                                   LeaseActions.Release,
                                   lease_id,
                                   None,  # lease_duration
                                   None,  # lease_break_period
                                   None,  # proposed_lease_id
                                   if_modified_since,
                                   if_unmodified_since,
                                   timeout,
                                   200,
                                   lambda response: None)

    def break_container_lease(self, container_name, lease_break_period=None,
                              if_modified_since=None, if_unmodified_since=None, timeout=None):
        '''
        Break the lease, if the container has an active lease. Once a lease is
        broken, it cannot be renewed. Any authorized request can break the lease;
        the request is not required to specify a matching lease ID. When a lease
        is broken, the lease break period is allowed to elapse, during which time
        no lease operation except break and release can be performed on the container.
        When a lease is successfully broken, the response indicates the interval
        in seconds until a new lease can be acquired.

        :param str container_name:
            Name of existing container.
        :param int lease_break_period:
            This is the proposed duration of seconds that the lease
            should continue before it is broken, between 0 and 60 seconds. This
            break period is only used if it is shorter than the time remaining
            on the lease. If longer, the time remaining on the lease is used.
            If this header does not appear with a break
            operation, a fixed-duration lease breaks after the remaining lease
            period elapses, and an infinite lease breaks immediately.
        :param datetime if_modified_since:
            Perform the operation only if the resource has been modified since
            the specified UTC time.
        :param datetime if_unmodified_since:
            Perform the operation only if the resource has not been modified
            since the specified UTC time.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        :return: Approximate time remaining in the lease period, in seconds.
        :rtype: int
        '''
        if (lease_break_period is not None) and (lease_break_period < 0 or lease_break_period > 60):
            raise ValueError(_ERROR_INVALID_LEASE_BREAK_PERIOD)

        return self._lease_container_impl(container_name,
                                          LeaseActions.Break,
                                          None,  # lease_id
                                          None,  # lease_duration
                                          lease_break_period,
                                          None,  # proposed_lease_id
                                          if_modified_since,
                                          if_unmodified_since,
                                          timeout,
                                          202,
                                          _parse_lease_time)

    def change_container_lease(self, container_name, lease_id, proposed_lease_id,
                               if_modified_since=None, if_unmodified_since=None, timeout=None):
        '''
        Change the lease ID of an active lease. A change must include the current
        lease ID and a new lease ID.

        :param str container_name:
            Name of existing container.
        :param str lease_id:
            Lease ID for active lease.
        :param str proposed_lease_id:
            Proposed lease ID, in a GUID string format. The Blob service returns 400
            (Invalid request) if the proposed lease ID is not in the correct format.
        :param datetime if_modified_since:
            Perform the operation only if the resource has been modified since
            the specified UTC time.
        :param datetime if_unmodified_since:
            Perform the operation only if the resource has not been modified
            since the specified UTC time.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        :return: the new lease ID.
        :rtype: str
        '''
        _validate_not_none('lease_id', lease_id)
        _validate_not_none('proposed_lease_id', proposed_lease_id)

        return self._lease_container_impl(container_name,
                                          LeaseActions.Change,
                                          lease_id,
                                          None,  # lease_duration
                                          None,  # lease_break_period
                                          proposed_lease_id,
                                          if_modified_since,
                                          if_unmodified_since,
                                          timeout,
                                          200,
                                          _parse_lease_id)

    def list_blobs(self, container_name, prefix=None, num_results=None, include=None,
                   delimiter=None, marker=None, timeout=None):
        '''
        Returns a generator to list the blobs under the specified container.
        The generator will lazily follow the continuation tokens returned by
        the service and stop when all blobs have been returned or num_results is reached.

        If num_results is specified and the account has more than that number of 
        blobs, the generator will have a populated next_marker field once it 
        finishes. This marker can be used to create a new generator if more 
        results are desired.

        :param str container_name:
            Name of existing container.
        :param str prefix:
            Filters the results to return only blobs whose names
            begin with the specified prefix.
        :param int num_results:
            Specifies the maximum number of blobs to return,
            including all :class:`~azstorage.blob.models.BlobPrefix` elements.
        :param ~azstorage.blob.models.Include include:
            Specifies one or more additional datasets to include in the response.
            Snapshots can only be listed without a delimiter.
        :param str delimiter:
            When the request includes this parameter, the operation
            returns a :class:`~azstorage.blob.models.BlobPrefix` element in the
            result list that acts as a placeholder for all blobs whose names begin
            with the same substring up to the appearance of the delimiter character.
            The delimiter may be a single character or a string.
        :param ~azstorage.common.models.ResultContinuation marker:
            A continuation token returned by a previous listing of blobs.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        :return: A lazy generator of :class:`~azstorage.blob.models.Blob` and
            :class:`~azstorage.blob.models.BlobPrefix`.
        :rtype: ~azstorage.common.models.ListGenerator
        '''
        _validate_not_none('container_name', container_name)
        _validate_continuation_type(marker, ResultContinuationType.BLOB)
        _validate_positive_or_none('num_results', num_results)
        _validate_flat_snapshot_listing(include, delimiter)

        def fetch_page(segmented_request, max_results):
            return self._list_blobs(segmented_request, container_name, prefix, max_results,
                                    include, delimiter, timeout)

        return ListGenerator(fetch_page, _SegmentedStorageRequest(marker), num_results)

    def list_blobs_segmented(self, container_name, prefix=None, max_results=None, include=None,
                             delimiter=None, marker=None, timeout=None):
        '''
        Returns a single page of blobs under the specified container.

        :param str container_name:
            Name of existing container.
        :param str prefix:
            Filters the results to return only blobs whose names
            begin with the specified prefix.
        :param int max_results:
            The maximum number of blobs and blob prefixes the page may hold.
        :param ~azstorage.blob.models.Include include:
            Specifies one or more additional datasets to include in the response.
        :param str delimiter:
            Groups blobs sharing a name prefix up to the delimiter into a 
            :class:`~azstorage.blob.models.BlobPrefix`.
        :param ~azstorage.common.models.ResultContinuation marker:
            The continuation token of the previous page, or None for the first page.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        :return: 
            A list of blobs and blob prefixes whose next_marker is the
            continuation token of the next page, or None on the last page.
        :rtype: list
        '''
        _validate_not_none('container_name', container_name)
        _validate_continuation_type(marker, ResultContinuationType.BLOB)
        _validate_flat_snapshot_listing(include, delimiter)

        return self._list_blobs(_SegmentedStorageRequest(marker), container_name, prefix,
                                max_results, include, delimiter, timeout)

    def _list_blobs(self, segmented_request, container_name, prefix, max_results, include,
                    delimiter, timeout):
        _validate_positive_or_none('max_results', max_results)

        def build_request(location):
            token = segmented_request.token
            request = HTTPRequest()
            request.method = 'GET'
            request.path = _get_path(container_name)
            request.query = {
                'restype': 'container',
                'comp': 'list',
                'prefix': _str_or_none(prefix),
                'delimiter': _str_or_none(delimiter),
                'marker': token.next_marker if token else None,
                'maxresults': _int_or_none(max_results),
                'include': str(include) if include else None,
                'timeout': _int_or_none(timeout),
            }
            return request

        def post_process_response(response, result):
            blobs = _convert_xml_to_blob_list(response)
            return _set_continuation(blobs, segmented_request, ResultContinuationType.BLOB,
                                     storage_request.current_location)

        storage_request = _StorageRequest(
            build_request,
            pre_process_response=_expect_status(200),
            post_process_response=post_process_response,
            location_mode=lambda: _get_listing_location_mode(segmented_request.token))

        return self._perform_request(storage_request)

    def _lease_container_impl(self, container_name, lease_action, lease_id, lease_duration,
                              lease_break_period, proposed_lease_id, if_modified_since,
                              if_unmodified_since, timeout, expected_status, parse_response):
        '''
        Establishes and manages a lease on a container.
        The Lease Container operation can be called in one of five modes
            Acquire, to request a new lease
            Renew, to renew an existing lease
            Change, to change the ID of an existing lease
            Release, to free the lease if it is no longer needed so that another
                client may immediately acquire a lease against the container
            Break, to end the lease but ensure that another client cannot acquire
                a new lease until the current lease period has expired
        '''
        _validate_not_none('container_name', container_name)
        _validate_not_none('lease_action', lease_action)

        def build_request(location):
            request = HTTPRequest()
            request.method = 'PUT'
            request.path = _get_path(container_name)
            request.query = {
                'restype': 'container',
                'comp': 'lease',
                'timeout': _int_or_none(timeout),
            }
            request.headers = {
                'x-ms-lease-id': _str_or_none(lease_id),
                'x-ms-lease-action': _str_or_none(lease_action),
                'x-ms-lease-duration': _str_or_none(lease_duration),
                'x-ms-lease-break-period': _str_or_none(lease_break_period),
                'x-ms-proposed-lease-id': _str_or_none(proposed_lease_id),
                'If-Modified-Since': _datetime_to_utc_string(if_modified_since),
                'If-Unmodified-Since': _datetime_to_utc_string(if_unmodified_since),
            }
            return request

        storage_request = _StorageRequest(
            build_request,
            pre_process_response=_expect_status(expected_status),
            post_process_response=lambda response, result: parse_response(response))

        return self._perform_request(storage_request)

    def _get_container_request_builder(self, container_name, comp, lease_id, timeout, method='GET',
                                       if_modified_since=None, if_unmodified_since=None):
        def build_request(location):
            request = HTTPRequest()
            request.method = method
            request.path = _get_path(container_name)
            request.query = {
                'restype': 'container',
                'comp': comp,
                'timeout': _int_or_none(timeout),
            }
            request.headers = {
                'x-ms-lease-id': _str_or_none(lease_id),
                'If-Modified-Since': _datetime_to_utc_string(if_modified_since),
                'If-Unmodified-Since': _datetime_to_utc_string(if_unmodified_since),
            }
            return request

        return build_request


def _validate_flat_snapshot_listing(include, delimiter):
    if include and delimiter and Include(_str=str(include)).snapshots:
        raise ValueError(_ERROR_SNAPSHOT_LISTING)


def _set_continuation(results, segmented_request, continuation_type, location):
    '''
    Replaces the listing's continuation token with the one of the page just
    received. The token remembers the location which returned the page.
    '''
    if results.next_marker:
        segmented_request.token = ResultContinuation(results.next_marker, continuation_type, location)
    else:
        segmented_request.token = None

    results.next_marker = segmented_request.token
    return results
