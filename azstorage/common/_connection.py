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
from ._constants import (
    DEFAULT_PROTOCOL,
    SERVICE_HOST_BASE,
    _SECONDARY_SUFFIX,
)
from ._error import _ERROR_STORAGE_MISSING_INFO


class _ServiceParameters(object):
    '''
    Resolves the account, credentials and the primary and secondary hosts of
    a storage service from the client's constructor arguments.
    '''

    def __init__(self, service, account_name=None, account_key=None, sas_token=None,
                 protocol=DEFAULT_PROTOCOL, endpoint_suffix=SERVICE_HOST_BASE,
                 custom_domain=None, custom_secondary_domain=None, request_session=None):

        self.account_name = account_name
        self.account_key = account_key
        self.sas_token = sas_token
        self.protocol = protocol or DEFAULT_PROTOCOL
        self.request_session = request_session

        if custom_domain:
            parsed_url = custom_domain.split('://', 1)[-1].rstrip('/')
            self.primary_endpoint = parsed_url
            self.secondary_endpoint = custom_secondary_domain.split('://', 1)[-1].rstrip('/') \
                if custom_secondary_domain else None
        else:
            if not self.account_name:
                raise ValueError(_ERROR_STORAGE_MISSING_INFO)

            self.primary_endpoint = '{}.{}.{}'.format(self.account_name, service, endpoint_suffix)
            self.secondary_endpoint = '{}{}.{}.{}'.format(self.account_name, _SECONDARY_SUFFIX,
                                                          service, endpoint_suffix)

    @staticmethod
    def get_service_parameters(service, account_name=None, account_key=None, sas_token=None,
                               protocol=None, endpoint_suffix=None, custom_domain=None,
                               custom_secondary_domain=None, request_session=None):
        return _ServiceParameters(service,
                                  account_name=account_name,
                                  account_key=account_key,
                                  sas_token=sas_token,
                                  protocol=protocol,
                                  endpoint_suffix=endpoint_suffix or SERVICE_HOST_BASE,
                                  custom_domain=custom_domain,
                                  custom_secondary_domain=custom_secondary_domain,
                                  request_session=request_session)
