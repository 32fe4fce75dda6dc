# -------------------------------------------------------------------------
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
# --------------------------------------------------------------------------
import unittest
from datetime import datetime
from urllib.parse import (
    parse_qs,
    urlparse,
)

from azure.common import (
    AzureConflictHttpError,
    AzureException,
    AzureHttpError,
    AzureMissingResourceHttpError,
)
from dateutil.tz import tzoffset

from azstorage.blob import (
    BlobPrefix,
    BlobService,
    Include,
    PublicAccess,
)
from azstorage.common import (
    AccessPolicy,
    ExponentialRetry,
    LocationMode,
    ResultContinuation,
    ResultContinuationType,
)
from tests.testcase import StorageTestCase


# --Helpers-----------------------------------------------------------------------
def _container_list(names, next_marker=None):
    containers = ''.join(
        '<Container><Name>{}</Name><Properties>'
        '<Last-Modified>Wed, 19 Oct 2016 20:39:01 GMT</Last-Modified>'
        '<Etag>"0x8D3F8606D4C2A96"</Etag>'
        '<LeaseStatus>unlocked</LeaseStatus><LeaseState>available</LeaseState>'
        '</Properties><Metadata><hello>world</hello></Metadata></Container>'.format(name)
        for name in names)
    return ('<?xml version="1.0" encoding="utf-8"?>'
            '<EnumerationResults ServiceEndpoint="https://storagename.blob.core.windows.net/">'
            '<Containers>{}</Containers><NextMarker>{}</NextMarker>'
            '</EnumerationResults>').format(containers, next_marker or '').encode('utf-8')


def _blob_list(names, prefixes=(), next_marker=None):
    blobs = ''.join(
        '<Blob><Name>{}</Name><Properties>'
        '<Last-Modified>Wed, 19 Oct 2016 20:39:01 GMT</Last-Modified>'
        '<Etag>0x8D3F8606D4C2A96</Etag>'
        '<Content-Length>1024</Content-Length>'
        '<Content-Type>application/octet-stream</Content-Type>'
        '<Content-Encoding />'
        '<BlobType>BlockBlob</BlobType>'
        '<LeaseStatus>unlocked</LeaseStatus>'
        '</Properties></Blob>'.format(name)
        for name in names)
    blob_prefixes = ''.join('<BlobPrefix><Name>{}</Name></BlobPrefix>'.format(prefix) for prefix in prefixes)
    return ('<?xml version="1.0" encoding="utf-8"?>'
            '<EnumerationResults ServiceEndpoint="https://storagename.blob.core.windows.net/" '
            'ContainerName="mycontainer">'
            '<Blobs>{}{}</Blobs><NextMarker>{}</NextMarker>'
            '</EnumerationResults>').format(blobs, blob_prefixes, next_marker or '').encode('utf-8')


_SIGNED_IDENTIFIERS = b'''<?xml version="1.0" encoding="utf-8"?>
<SignedIdentifiers>
  <SignedIdentifier>
    <Id>testid</Id>
    <AccessPolicy>
      <Start>2011-10-11T00:00:00.0000000Z</Start>
      <Expiry>2011-10-12T00:00:00.0000000Z</Expiry>
      <Permission>r</Permission>
    </AccessPolicy>
  </SignedIdentifier>
</SignedIdentifiers>'''


def _query(request):
    return dict((name, values[0]) for name, values in parse_qs(urlparse(request.url).query).items())


# --Test Class -----------------------------------------------------------------
class StorageContainerTest(StorageTestCase):
    def setUp(self):
        super(StorageContainerTest, self).setUp()
        self.bs = self._create_storage_service(BlobService, self.settings)
        self.container_name = self.get_resource_name('utcontainer')

    # --Test cases for containers -----------------------------------------
    def test_create_container(self):
        # Arrange
        self.adapter.add_response(201)

        # Act
        created = self.bs.create_container(self.container_name, metadata={'hello': 'world'},
                                           public_access=PublicAccess.Blob)

        # Assert
        self.assertTrue(created)
        request = self.adapter.requests[0]
        self.assertEqual('PUT', request.method)
        self.assertEqual('/' + self.container_name, urlparse(request.url).path)
        self.assertEqual({'restype': 'container'}, _query(request))
        self.assertEqual('world', request.headers['x-ms-meta-hello'])
        self.assertEqual('blob', request.headers['x-ms-blob-public-access'])
        self.assertEqual('0', request.headers['Content-Length'])

    def test_create_container_with_already_existing_container(self):
        # Arrange
        self.adapter.add_response(409, headers={'x-ms-error-code': 'ContainerAlreadyExists'})

        # Act
        created = self.bs.create_container(self.container_name)

        # Assert
        self.assertFalse(created)
        self.assertEqual(1, len(self.adapter.requests))

    def test_create_container_with_already_existing_container_fail_on_exist(self):
        # Arrange
        self.adapter.add_response(409, headers={'x-ms-error-code': 'ContainerAlreadyExists'})

        # Act
        with self.assertRaises(AzureConflictHttpError) as e:
            self.bs.create_container(self.container_name, fail_on_exist=True)

        # Assert
        self.assertEqual(409, e.exception.status_code)
        self.assertEqual('ContainerAlreadyExists', e.exception.error_code)

    def test_delete_container_with_existing_container(self):
        # Arrange
        self.adapter.add_response(202)

        # Act
        deleted = self.bs.delete_container(self.container_name, lease_id='lease')

        # Assert
        self.assertTrue(deleted)
        self.assertEqual('DELETE', self.adapter.requests[0].method)
        self.assertEqual('lease', self.adapter.requests[0].headers['x-ms-lease-id'])

    def test_delete_container_with_non_existing_container(self):
        # Arrange
        self.adapter.add_response(404)

        # Act
        deleted = self.bs.delete_container(self.container_name)

        # Assert
        self.assertFalse(deleted)

    def test_delete_container_with_non_existing_container_fail_not_exist(self):
        # Arrange
        self.adapter.add_response(404, headers={'x-ms-error-code': 'ContainerNotFound'})

        # Act
        with self.assertRaises(AzureMissingResourceHttpError) as e:
            self.bs.delete_container(self.container_name, fail_not_exist=True)

        # Assert
        self.assertEqual('ContainerNotFound', e.exception.error_code)

    def test_container_exists(self):
        # Arrange
        self.adapter.add_response(200)

        # Act
        exists = self.bs.exists(self.container_name)

        # Assert
        self.assertTrue(exists)
        self.assertEqual('HEAD', self.adapter.requests[0].method)

    def test_container_not_exists(self):
        # Arrange
        self.adapter.add_response(404)

        # Act
        exists = self.bs.exists(self.container_name)

        # Assert
        # A missing container is an answer, not a failure to retry
        self.assertFalse(exists)
        self.assertEqual(1, len(self.adapter.requests))
        self.sleep.assert_not_called()

    def test_container_exists_retries_unexpected_status(self):
        # Arrange
        self.adapter.add_response(503)
        self.adapter.add_response(200)

        # Act
        exists = self.bs.exists(self.container_name)

        # Assert
        self.assertTrue(exists)
        self.assertEqual(2, len(self.adapter.requests))

    def test_container_exists_reads_secondary(self):
        # Arrange
        self.bs.location_mode = LocationMode.SECONDARY
        self.adapter.add_response(200)
        self.adapter.add_response(200)

        # Act
        self.bs.exists(self.container_name)
        self.bs.exists(self.container_name, primary_only=True)

        # Assert
        self.assertEqual([self.secondary_host(), self.primary_host()], self.adapter.hosts)

    def test_get_container_properties(self):
        # Arrange
        self.adapter.add_response(200, headers={
            'ETag': '"0x8D3F8606D4C2A96"',
            'Last-Modified': 'Wed, 19 Oct 2016 20:39:01 GMT',
            'x-ms-lease-status': 'unlocked',
            'x-ms-lease-state': 'available',
            'x-ms-blob-public-access': 'container',
            'x-ms-meta-hello': 'world',
        })

        # Act
        container = self.bs.get_container_properties(self.container_name)

        # Assert
        self.assertEqual(self.container_name, container.name)
        self.assertEqual('"0x8D3F8606D4C2A96"', container.properties.etag)
        self.assertEqual(2016, container.properties.last_modified.year)
        self.assertEqual('unlocked', container.properties.lease.status)
        self.assertEqual('available', container.properties.lease.state)
        self.assertEqual(PublicAccess.Container, container.properties.public_access)
        self.assertEqual({'hello': 'world'}, container.metadata)

    def test_get_container_metadata(self):
        # Arrange
        self.adapter.add_response(200, headers={'x-ms-meta-hello': 'world', 'x-ms-meta-number': '42'})

        # Act
        metadata = self.bs.get_container_metadata(self.container_name)

        # Assert
        self.assertDictEqual({'hello': 'world', 'number': '42'}, metadata)
        self.assertEqual({'restype': 'container', 'comp': 'metadata'}, _query(self.adapter.requests[0]))

    def test_set_container_metadata(self):
        # Arrange
        self.adapter.add_response(200, headers={'ETag': '"etag"'})

        # Act
        properties = self.bs.set_container_metadata(self.container_name, {'hello': 'world'})

        # Assert
        request = self.adapter.requests[0]
        self.assertEqual('PUT', request.method)
        self.assertEqual('world', request.headers['x-ms-meta-hello'])
        self.assertEqual('"etag"', properties.etag)

    def test_get_container_acl(self):
        # Arrange
        self.adapter.add_response(200, _SIGNED_IDENTIFIERS, headers={'x-ms-blob-public-access': 'blob'})

        # Act
        acl = self.bs.get_container_acl(self.container_name)

        # Assert
        self.assertEqual(1, len(acl))
        self.assertEqual('r', acl['testid'].permission)
        self.assertEqual(2011, acl['testid'].expiry.year)
        self.assertEqual(PublicAccess.Blob, acl.public_access)

    def test_set_container_acl(self):
        # Arrange
        self.adapter.add_response(200)
        identifiers = {'testid': AccessPolicy(permission='r', expiry='2011-10-12', start='2011-10-11')}

        # Act
        self.bs.set_container_acl(self.container_name, identifiers)

        # Assert
        request = self.adapter.requests[0]
        self.assertIn(b'<Id>testid</Id>', request.body)
        self.assertIn(b'<Permission>r</Permission>', request.body)
        self.assertEqual(str(len(request.body)), request.headers['Content-Length'])

    def test_set_container_acl_with_too_many_identifiers(self):
        # Arrange
        identifiers = dict(('id{}'.format(i), AccessPolicy()) for i in range(6))

        # Act
        with self.assertRaises(AzureException):
            self.bs.set_container_acl(self.container_name, identifiers)

        # Assert
        self.assertEqual([], self.adapter.requests)

    def test_delete_container_with_access_conditions(self):
        # Arrange
        self.adapter.add_response(202)

        # Act
        self.bs.delete_container(self.container_name,
                                 if_modified_since=datetime(2016, 10, 19, 20, 39, 1),
                                 if_unmodified_since=datetime(2016, 10, 19, 21, 39, 1, tzinfo=tzoffset(None, 3600)))

        # Assert
        request = self.adapter.requests[0]
        self.assertEqual('Wed, 19 Oct 2016 20:39:01 GMT', request.headers['If-Modified-Since'])
        self.assertEqual('Wed, 19 Oct 2016 20:39:01 GMT', request.headers['If-Unmodified-Since'])

    def test_delete_container_with_failed_access_condition(self):
        # Arrange
        self.adapter.add_response(412, headers={'x-ms-error-code': 'ConditionNotMet'})

        # Act
        with self.assertRaises(AzureHttpError) as e:
            self.bs.delete_container(self.container_name, fail_not_exist=True,
                                     if_unmodified_since=datetime(2016, 10, 19, 20, 39, 1))

        # Assert
        self.assertEqual(412, e.exception.status_code)
        self.assertEqual('ConditionNotMet', e.exception.error_code)

    def test_set_container_metadata_with_if_modified_since(self):
        # Arrange
        self.adapter.add_response(200)

        # Act
        self.bs.set_container_metadata(self.container_name, {'hello': 'world'},
                                       if_modified_since=datetime(2016, 10, 19, 20, 39, 1))

        # Assert
        request = self.adapter.requests[0]
        self.assertEqual('Wed, 19 Oct 2016 20:39:01 GMT', request.headers['If-Modified-Since'])
        self.assertNotIn('If-Unmodified-Since', request.headers)

    def test_set_container_acl_with_access_conditions(self):
        # Arrange
        self.adapter.add_response(200)

        # Act
        self.bs.set_container_acl(self.container_name,
                                  if_modified_since=datetime(2016, 10, 19, 20, 39, 1),
                                  if_unmodified_since='Thu, 20 Oct 2016 08:00:00 GMT')

        # Assert
        request = self.adapter.requests[0]
        self.assertEqual('Wed, 19 Oct 2016 20:39:01 GMT', request.headers['If-Modified-Since'])
        self.assertEqual('Thu, 20 Oct 2016 08:00:00 GMT', request.headers['If-Unmodified-Since'])

    # --Test cases for leases ----------------------------------------------
    def test_acquire_container_lease(self):
        # Arrange
        self.adapter.add_response(201, headers={'x-ms-lease-id': 'lease'})

        # Act
        lease_id = self.bs.acquire_container_lease(self.container_name, lease_duration=15,
                                                   proposed_lease_id='proposed')

        # Assert
        self.assertEqual('lease', lease_id)
        request = self.adapter.requests[0]
        self.assertEqual('PUT', request.method)
        self.assertEqual({'restype': 'container', 'comp': 'lease'}, _query(request))
        self.assertEqual('acquire', request.headers['x-ms-lease-action'])
        self.assertEqual('15', request.headers['x-ms-lease-duration'])
        self.assertEqual('proposed', request.headers['x-ms-proposed-lease-id'])
        self.assertNotIn('x-ms-lease-id', request.headers)

    def test_acquire_container_lease_defaults_to_infinite(self):
        # Arrange
        self.adapter.add_response(201, headers={'x-ms-lease-id': 'lease'})

        # Act
        self.bs.acquire_container_lease(self.container_name)

        # Assert
        self.assertEqual('-1', self.adapter.requests[0].headers['x-ms-lease-duration'])

    def test_acquire_container_lease_with_invalid_duration(self):
        # Act
        with self.assertRaises(ValueError):
            self.bs.acquire_container_lease(self.container_name, lease_duration=10)
        with self.assertRaises(ValueError):
            self.bs.acquire_container_lease(self.container_name, lease_duration=61)

        # Assert
        self.assertEqual([], self.adapter.requests)

    def test_acquire_container_lease_is_only_sent_to_primary(self):
        # Arrange
        self.bs.location_mode = LocationMode.SECONDARY
        self.adapter.add_response(201, headers={'x-ms-lease-id': 'lease'})

        # Act
        self.bs.acquire_container_lease(self.container_name)

        # Assert
        self.assertEqual([self.primary_host()], self.adapter.hosts)

    def test_acquire_container_lease_retries_unexpected_status(self):
        # Arrange
        self.adapter.add_response(200)
        self.adapter.add_response(201, headers={'x-ms-lease-id': 'lease'})

        # Act
        lease_id = self.bs.acquire_container_lease(self.container_name)

        # Assert
        self.assertEqual('lease', lease_id)
        self.assertEqual(2, len(self.adapter.requests))

    def test_acquire_container_lease_on_leased_container(self):
        # Arrange
        self.adapter.add_response(409, headers={'x-ms-error-code': 'LeaseAlreadyPresent'})

        # Act
        with self.assertRaises(AzureConflictHttpError) as e:
            self.bs.acquire_container_lease(self.container_name)

        # Assert
        self.assertEqual('LeaseAlreadyPresent', e.exception.error_code)
        self.assertEqual(1, len(self.adapter.requests))

    def test_renew_container_lease(self):
        # Arrange
        self.adapter.add_response(200, headers={'x-ms-lease-id': 'lease'})

        # Act
        lease_id = self.bs.renew_container_lease(self.container_name, 'lease',
                                                 if_modified_since=datetime(2016, 10, 19, 20, 39, 1))

        # Assert
        self.assertEqual('lease', lease_id)
        request = self.adapter.requests[0]
        self.assertEqual('renew', request.headers['x-ms-lease-action'])
        self.assertEqual('lease', request.headers['x-ms-lease-id'])
        self.assertEqual('Wed, 19 Oct 2016 20:39:01 GMT', request.headers['If-Modified-Since'])

    def test_release_container_lease(self):
        # Arrange
        self.adapter.add_response(200)

        # Act
        result = self.bs.release_container_lease(self.container_name, 'lease')

        # Assert
        self.assertIsNone(result)
        request = self.adapter.requests[0]
        self.assertEqual('release', request.headers['x-ms-lease-action'])
        self.assertEqual('lease', request.headers['x-ms-lease-id'])

    def test_release_container_lease_requires_lease_id(self):
        # Act
        with self.assertRaises(ValueError):
            self.bs.release_container_lease(self.container_name, None)

        # Assert
        self.assertEqual([], self.adapter.requests)

    def test_break_container_lease(self):
        # Arrange
        self.adapter.add_response(202, headers={'x-ms-lease-time': '12'})

        # Act
        lease_time = self.bs.break_container_lease(self.container_name, lease_break_period=30)

        # Assert
        self.assertEqual(12, lease_time)
        request = self.adapter.requests[0]
        self.assertEqual('break', request.headers['x-ms-lease-action'])
        self.assertEqual('30', request.headers['x-ms-lease-break-period'])

    def test_break_container_lease_without_lease_time(self):
        # Arrange
        self.adapter.add_response(202)

        # Act
        lease_time = self.bs.break_container_lease(self.container_name)

        # Assert
        self.assertIsNone(lease_time)
        self.assertNotIn('x-ms-lease-break-period', self.adapter.requests[0].headers)

    def test_break_container_lease_with_invalid_period(self):
        # Act
        with self.assertRaises(ValueError):
            self.bs.break_container_lease(self.container_name, lease_break_period=61)
        with self.assertRaises(ValueError):
            self.bs.break_container_lease(self.container_name, lease_break_period=-1)

        # Assert
        self.assertEqual([], self.adapter.requests)

    def test_change_container_lease(self):
        # Arrange
        self.adapter.add_response(200, headers={'x-ms-lease-id': 'new'})

        # Act
        lease_id = self.bs.change_container_lease(self.container_name, 'lease', 'new')

        # Assert
        self.assertEqual('new', lease_id)
        request = self.adapter.requests[0]
        self.assertEqual('change', request.headers['x-ms-lease-action'])
        self.assertEqual('lease', request.headers['x-ms-lease-id'])
        self.assertEqual('new', request.headers['x-ms-proposed-lease-id'])

    # --Test cases for listing ---------------------------------------------
    def test_list_containers(self):
        # Arrange
        self.adapter.add_response(200, _container_list(['a', 'b'], next_marker='c'))
        self.adapter.add_response(200, _container_list(['c']))

        # Act
        containers = list(self.bs.list_containers(prefix='utcontainer', include_metadata=True))

        # Assert
        self.assertEqual(['a', 'b', 'c'], [container.name for container in containers])
        self.assertEqual({'hello': 'world'}, containers[0].metadata)
        self.assertEqual('unlocked', containers[0].properties.lease.status)
        first, second = [_query(request) for request in self.adapter.requests]
        self.assertEqual({'comp': 'list', 'prefix': 'utcontainer', 'include': 'metadata'}, first)
        self.assertEqual('c', second['marker'])

    def test_list_containers_is_lazy(self):
        # Arrange
        self.adapter.add_response(200, _container_list(['a', 'b'], next_marker='c'))

        # Act
        generator = self.bs.list_containers()
        requests_before_iteration = len(self.adapter.requests)
        first = next(generator)
        second = next(generator)

        # Assert
        self.assertEqual(0, requests_before_iteration)
        self.assertEqual(['a', 'b'], [first.name, second.name])
        self.assertEqual(1, len(self.adapter.requests))

    def test_list_containers_with_num_results(self):
        # Arrange
        self.adapter.add_response(200, _container_list(['a', 'b'], next_marker='c'))

        # Act
        generator = self.bs.list_containers(num_results=2)
        containers = list(generator)

        # Assert
        self.assertEqual(2, len(containers))
        self.assertEqual('2', _query(self.adapter.requests[0])['maxresults'])
        self.assertEqual('c', generator.next_marker.next_marker)

    def test_list_containers_segmented(self):
        # Arrange
        self.adapter.add_response(200, _container_list(['a', 'b'], next_marker='c'))
        self.adapter.add_response(200, _container_list(['c']))

        # Act
        first_page = self.bs.list_containers_segmented(max_results=2)
        second_page = self.bs.list_containers_segmented(max_results=2, marker=first_page.next_marker)

        # Assert
        self.assertEqual(['a', 'b'], [container.name for container in first_page])
        self.assertEqual('c', first_page.next_marker.next_marker)
        self.assertEqual(ResultContinuationType.CONTAINER, first_page.next_marker.continuation_type)
        self.assertEqual(LocationMode.PRIMARY, first_page.next_marker.target_location)
        self.assertEqual(['c'], [container.name for container in second_page])
        self.assertIsNone(second_page.next_marker)

    def test_list_containers_pages_stay_on_location(self):
        # Arrange
        self.bs.location_mode = LocationMode.SECONDARY
        self.adapter.add_response(200, _container_list(['a'], next_marker='b'))
        self.adapter.add_response(200, _container_list(['b']))
        generator = self.bs.list_containers()
        first = next(generator)

        # Act
        # Later pages come from the location which issued the token
        self.bs.location_mode = LocationMode.PRIMARY
        rest = list(generator)

        # Assert
        self.assertEqual(['a', 'b'], [first.name] + [container.name for container in rest])
        self.assertEqual([self.secondary_host(), self.secondary_host()], self.adapter.hosts)

    def test_list_containers_retries_page_on_same_location(self):
        # Arrange
        self.bs.retry = ExponentialRetry(retry_to_secondary=True).retry
        self.adapter.add_response(200, _container_list(['a'], next_marker='b'))
        self.adapter.add_response(503)
        self.adapter.add_response(200, _container_list(['b']))

        # Act
        containers = list(self.bs.list_containers())

        # Assert
        self.assertEqual(['a', 'b'], [container.name for container in containers])
        self.assertEqual([self.primary_host()] * 3, self.adapter.hosts)

    def test_list_containers_with_blob_marker(self):
        # Arrange
        marker = ResultContinuation('marker', ResultContinuationType.BLOB, LocationMode.PRIMARY)

        # Act
        with self.assertRaises(ValueError):
            self.bs.list_containers(marker=marker)
        with self.assertRaises(ValueError):
            self.bs.list_containers_segmented(marker=marker)

        # Assert
        self.assertEqual([], self.adapter.requests)

    def test_list_blobs(self):
        # Arrange
        self.adapter.add_response(200, _blob_list(['blob1', 'blob2'], next_marker='blob3'))
        self.adapter.add_response(200, _blob_list(['blob3']))

        # Act
        blobs = list(self.bs.list_blobs(self.container_name, include=Include.METADATA))

        # Assert
        self.assertEqual(['blob1', 'blob2', 'blob3'], [blob.name for blob in blobs])
        self.assertEqual(1024, blobs[0].properties.content_length)
        self.assertEqual('BlockBlob', blobs[0].properties.blob_type)
        self.assertEqual('application/octet-stream', blobs[0].properties.content_settings.content_type)
        self.assertIsNone(blobs[0].properties.content_settings.content_encoding)
        self.assertEqual('unlocked', blobs[0].properties.lease.status)
        first, second = [_query(request) for request in self.adapter.requests]
        self.assertEqual({'restype': 'container', 'comp': 'list', 'include': 'metadata'}, first)
        self.assertEqual('blob3', second['marker'])

    def test_list_blobs_with_delimiter(self):
        # Arrange
        self.adapter.add_response(200, _blob_list(['a'], prefixes=['a/', 'b/']))

        # Act
        blobs = list(self.bs.list_blobs(self.container_name, delimiter='/'))

        # Assert
        self.assertEqual(['a/', 'b/', 'a'], [blob.name for blob in blobs])
        self.assertIsInstance(blobs[0], BlobPrefix)
        self.assertEqual('/', _query(self.adapter.requests[0])['delimiter'])

    def test_list_blobs_snapshots_with_delimiter(self):
        # Act
        with self.assertRaises(ValueError):
            self.bs.list_blobs(self.container_name, include=Include.SNAPSHOTS, delimiter='/')
        with self.assertRaises(ValueError):
            self.bs.list_blobs_segmented(self.container_name, include='snapshots,metadata', delimiter='/')

        # Assert
        self.assertEqual([], self.adapter.requests)

    def test_list_blobs_segmented_round_trip(self):
        # Arrange
        self.adapter.add_response(200, _blob_list(['blob1'], next_marker='blob2'))
        self.adapter.add_response(200, _blob_list(['blob2']))

        # Act
        first_page = self.bs.list_blobs_segmented(self.container_name, max_results=1)
        second_page = self.bs.list_blobs_segmented(self.container_name, max_results=1,
                                                   marker=first_page.next_marker)

        # Assert
        self.assertEqual(ResultContinuationType.BLOB, first_page.next_marker.continuation_type)
        self.assertEqual(['blob1', 'blob2'], [blob.name for blob in first_page + second_page])
        self.assertEqual('blob2', _query(self.adapter.requests[1])['marker'])

    def test_list_blobs_with_container_marker(self):
        # Arrange
        marker = ResultContinuation('marker', ResultContinuationType.CONTAINER, LocationMode.PRIMARY)

        # Act
        with self.assertRaises(ValueError):
            self.bs.list_blobs_segmented(self.container_name, marker=marker)


# ------------------------------------------------------------------------------
if __name__ == '__main__':
    unittest.main()
