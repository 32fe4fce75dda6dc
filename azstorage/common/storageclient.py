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
import logging
import re
from time import (
    sleep,
    time,
)

import requests
from azure.common import AzureException

from ._constants import _SOCKET_TIMEOUT
from ._error import (
    AzureSigningError,
    _convert_http_error,
    _wrap_exception,
)
from ._http import HTTPError
from ._http.httpclient import _HTTPClient
from ._location import (
    _get_initial_location,
    _get_next_location,
)
from ._request import _RetryableFailure
from ._serialization import (
    _add_date_header,
    _update_request,
)
from .models import (
    LocationMode,
    RequestResult,
    _OperationContext,
)
from .retry import (
    ExponentialRetry,
    RetryContext,
    _retries_build_errors,
)

logger = logging.getLogger(__name__)

_SIGNATURE_QUERY = re.compile(r'(?<=[?&]sig=)[^&]*')


class StorageClient(object):
    '''
    This is the base class for service objects. Service objects are used to do 
    all requests to Storage. This class cannot be instantiated directly.

    :ivar str account_name:
        The storage account name. This is used to authenticate requests 
        signed with an account key and to construct the storage endpoint. It 
        is required unless a custom domain is used with anonymous authentication.
    :ivar str account_key:
        The storage account key. This is used for shared key authentication. 
        If neither account key or sas token is specified, anonymous access 
        will be used.
    :ivar str sas_token:
        A shared access signature token to use to authenticate requests 
        instead of the account key. If account key and sas token are both 
        specified, account key will be used to sign. If neither are 
        specified, anonymous access will be used.
    :ivar str primary_endpoint:
        The endpoint to send storage requests to.
    :ivar str secondary_endpoint:
        The secondary endpoint to read storage data from. This will only be a 
        valid endpoint if the storage account used is RA-GRS and thus allows 
        reading from secondary.
    :ivar function(context) retry:
        A function which determines whether to retry. Takes as a parameter a 
        :class:`~azstorage.common.retry.RetryContext` object. Returns the number
        of seconds to wait before retrying the request, or None to indicate not 
        to retry.
    :ivar ~azstorage.common.models.LocationMode location_mode:
        The host location to use to make requests. Defaults to LocationMode.PRIMARY.
        Note that this setting only applies to RA-GRS accounts as other account 
        types do not allow reading from secondary. If the location_mode is set to 
        LocationMode.SECONDARY, read requests will be sent to the secondary endpoint. 
        Write requests will continue to be sent to primary.
    :ivar function(request) request_callback:
        A function called immediately before each request is sent. This function 
        takes as a parameter the request object and returns nothing. It may be 
        used to added custom headers or log request data.
    :ivar function(response) response_callback:
        A function called immediately after each response is received. This 
        function takes as a parameter the response object and returns nothing. 
        It may be used to log response data.
    :ivar function(retry_context) retry_callback:
        A function called immediately after retry evaluation is performed, when
        a retry is going to be made. This function takes as a parameter the
        retry context object and returns nothing. It may be used to detect
        retries and log context information.
    '''

    def __init__(self, connection_params):
        '''
        :param obj connection_params: The parameters to use to construct the client.
        '''
        self.account_name = connection_params.account_name
        self.account_key = connection_params.account_key
        self.sas_token = connection_params.sas_token

        self.primary_endpoint = connection_params.primary_endpoint
        self.secondary_endpoint = connection_params.secondary_endpoint

        protocol = connection_params.protocol
        request_session = connection_params.request_session or requests.Session()
        self._httpclient = _HTTPClient(
            protocol=protocol,
            session=request_session,
            timeout=_SOCKET_TIMEOUT,
        )

        self.retry = ExponentialRetry().retry
        self.location_mode = LocationMode.PRIMARY

        self.request_callback = None
        self.response_callback = None
        self.retry_callback = None

    @property
    def socket_timeout(self):
        return self._httpclient.timeout

    @socket_timeout.setter
    def socket_timeout(self, value):
        self._httpclient.timeout = value

    @property
    def protocol(self):
        return self._httpclient.protocol

    @protocol.setter
    def protocol(self, value):
        self._httpclient.protocol = value

    @property
    def request_session(self):
        return self._httpclient.session

    @request_session.setter
    def request_session(self, value):
        self._httpclient.session = value

    def set_proxy(self, host, port, user=None, password=None):
        '''
        Sets the proxy server host and port for the HTTP CONNECT Tunnelling.

        :param str host: Address of the proxy. Ex: '192.168.0.100'
        :param int port: Port of the proxy. Ex: 6000
        :param str user: User for proxy authorization.
        :param str password: Password for proxy authorization.
        '''
        self._httpclient.set_proxy(host, port, user, password)

    def _get_host_locations(self):
        host_locations = {}
        if self.primary_endpoint:
            host_locations[LocationMode.PRIMARY] = self.primary_endpoint
        if self.secondary_endpoint:
            host_locations[LocationMode.SECONDARY] = self.secondary_endpoint
        return host_locations

    def _build_request(self, storage_request, location, host, operation_context, request_callback):
        request = storage_request.build_request(location)
        request.host = request.host or host

        if operation_context.client_request_id:
            request.headers['x-ms-client-request-id'] = operation_context.client_request_id

        _update_request(request)

        if request_callback:
            request_callback(request)

        if storage_request.set_headers:
            storage_request.set_headers(request)

        # Add date and auth after the callback so date doesn't get too old and 
        # authentication is still correct if signed headers are added in the request 
        # callback
        _add_date_header(request)
        self._sign_request(storage_request, request)
        return request

    def _sign_request(self, storage_request, request):
        sign_request = storage_request.sign_request or self.authentication.sign_request
        try:
            sign_request(request)
        except AzureSigningError:
            raise
        except Exception as ex:
            raise _wrap_exception(ex, AzureSigningError) from ex

    def _send_request(self, request):
        try:
            return self._httpclient.perform_request(request)
        except Exception as ex:
            # Network level failures are handed to the retry policy like any
            # other failed attempt
            raise _wrap_exception(ex, AzureException) from ex

    def _pre_process_response(self, storage_request, response):
        try:
            return storage_request.pre_process_response(response)
        except AzureException:
            raise
        except Exception as ex:
            raise _wrap_exception(ex, AzureException) from ex

    def _post_process_response(self, storage_request, response, result):
        if not storage_request.post_process_response:
            return result

        try:
            return storage_request.post_process_response(response, result)
        except AzureException:
            raise
        except Exception as ex:
            raise _wrap_exception(ex, AzureException) from ex

    def _perform_request(self, storage_request, operation_context=None, retry=None):
        '''
        Executes a storage request, retrying failed attempts as the retry policy
        allows, and returns the result of the first successful attempt.

        :param ~azstorage.common._request._StorageRequest storage_request:
            Describes how to build, sign and interpret each attempt.
        :param ~azstorage.common.models._OperationContext operation_context:
            Collects a :class:`~azstorage.common.models.RequestResult` per attempt.
        :param function(context) retry:
            Overrides the client's retry policy for this call.
        :return: The processed result of the successful attempt.
        '''
        # The client settings are read once so a change made while the
        # operation is in flight only applies to the next operation.
        retry = retry or self.retry
        request_callback = self.request_callback
        response_callback = self.response_callback
        retry_callback = self.retry_callback
        retry_build_errors = _retries_build_errors(retry)
        host_locations = self._get_host_locations()
        operation_context = operation_context or _OperationContext()

        request_location_mode = storage_request.get_location_mode()
        location = _get_initial_location(request_location_mode, self.location_mode, host_locations)

        retry_context = RetryContext()
        retry_context.request_location_mode = request_location_mode
        retry_count = 0

        while True:
            storage_request.current_location = location
            retry_context.location_mode = location
            retry_context.request = None
            retry_context.response = None
            retry_context.exception = None

            request_result = RequestResult(location)
            request_result.start_time = time()
            operation_context.request_results.append(request_result)
            client_request_id_prefix = 'Client-Request-ID={}'.format(operation_context.client_request_id)

            try:
                retry_context.request = self._build_request(storage_request, location,
                                                            host_locations[location], operation_context,
                                                            request_callback)
                request = retry_context.request
                client_request_id_prefix = 'Client-Request-ID={}'.format(
                    request.headers['x-ms-client-request-id'])

                if logger.isEnabledFor(logging.INFO):
                    logger.info("%s Outgoing request: Method=%s, Location=%s, Path=%s, Query=%s, Headers=%s.",
                                client_request_id_prefix,
                                request.method,
                                location,
                                _SIGNATURE_QUERY.sub('*****', request.path),
                                _scrub_query(request.query),
                                _scrub_headers(request.headers))

                retry_context.response = self._send_request(request)
                response = retry_context.response
                request_result.service_request_id = response.headers.get('x-ms-request-id')

                logger.info("%s Receiving Response: Server-Timestamp=%s, Server-Request-ID=%s, "
                            "HTTP Status Code=%s, Message=%s, Headers=%s.",
                            client_request_id_prefix,
                            response.headers.get('date'),
                            response.headers.get('x-ms-request-id'),
                            response.status,
                            response.message,
                            response.headers)

                if response_callback:
                    response_callback(response)
                request_result.status = response.status

                result = self._pre_process_response(storage_request, response)
            except AzureSigningError as ex:
                _complete_request_result(request_result, ex)
                logger.error("%s Signing the request failed: Exception=%s.", client_request_id_prefix, ex)
                raise
            except Exception as ex:
                _complete_request_result(request_result, ex)

                # A request which could not be built is only handed to the
                # retry policy if the policy asks for it
                if retry_context.request is None and not retry_build_errors:
                    logger.error("%s Building the request failed: Exception=%s.", client_request_id_prefix, ex)
                    raise

                if isinstance(ex, AzureException):
                    failure = ex
                else:
                    failure = _wrap_exception(ex, AzureException)
                    failure.__cause__ = ex
            else:
                request_result.end_time = time()
                if not isinstance(result, _RetryableFailure):
                    logger.info("%s Operation completed successfully.", client_request_id_prefix)
                    return self._post_process_response(storage_request, response, result)

                # The response reported a retryable failure without raising;
                # the policy judges it by the response alone
                failure = result

            retry_context.exception = None if isinstance(failure, _RetryableFailure) else failure
            retry_context.count = retry_count

            # Determine whether a retry should be performed and if so, how
            # long to wait before performing retry.
            retry_interval = retry(retry_context)
            if retry_interval is None:
                if isinstance(failure, _RetryableFailure):
                    failure = _convert_http_error(HTTPError(failure.status,
                                                            failure.message or response.message,
                                                            response.headers,
                                                            response.body))
                    request_result.exception = failure

                logger.error("%s Retry policy did not allow for a retry: "
                             "HTTP status code=%s, Exception=%s.",
                             client_request_id_prefix,
                             request_result.status if request_result.status is not None else 'Unknown',
                             str(failure).replace('\n', ''))
                raise failure

            retry_count += 1
            retry_context.count = retry_count

            if retry_callback:
                retry_callback(retry_context)

            location = _get_next_location(request_location_mode, location,
                                          retry_context.location_mode, host_locations)

            logger.info("%s Retry policy is allowing a retry: Retry count=%s, Interval=%s, Next location=%s.",
                        client_request_id_prefix,
                        retry_context.count,
                        retry_interval,
                        location)

            # Sleep for the desired retry interval
            sleep(retry_interval)


def _complete_request_result(request_result, ex):
    request_result.exception = ex
    request_result.end_time = time()
    status_code = getattr(ex, 'status_code', None)
    if status_code is not None:
        request_result.status = status_code


def _scrub_headers(headers):
    return dict((name, '*****' if name.lower() == 'authorization' else value)
                for name, value in headers.items())


def _scrub_query(query):
    return dict((name, '*****' if name.lower() == 'sig' else value)
                for name, value in query.items())
