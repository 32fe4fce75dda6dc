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


class Container(object):
    '''
    Blob container class.

    :ivar str name:
        The name of the container.
    :ivar metadata:
        A dict containing name-value pairs associated with the container as metadata.
        This var is set to None unless the include=metadata param was included
        for the list containers operation. If this parameter was specified but the
        container has no metadata, metadata will be set to an empty dictionary.
    :vartype metadata: dict(str, str)
    :ivar ContainerProperties properties:
        System properties for the container.
    '''

    def __init__(self, name=None, props=None, metadata=None):
        self.name = name
        self.properties = props or ContainerProperties()
        self.metadata = metadata


class ContainerProperties(object):
    '''
    Blob container's properties class.

    :ivar datetime last_modified:
        A datetime object representing the last time the container was modified.
    :ivar str etag:
        The ETag contains a value that you can use to perform operations
        conditionally.
    :ivar LeaseProperties lease:
        Stores all the lease information for the container.
    :ivar str public_access:
        The :class:`~azstorage.blob.models.PublicAccess` level of the container.
    '''

    def __init__(self):
        self.last_modified = None
        self.etag = None
        self.lease = LeaseProperties()
        self.public_access = None


class Blob(object):
    '''
    Blob class.

    :ivar str name:
        Name of blob.
    :ivar str snapshot:
        A DateTime value that uniquely identifies the snapshot. The value of
        this header indicates the snapshot version, and may be used in
        subsequent requests to access the snapshot.
    :ivar BlobProperties properties:
        Stores all the system properties for the blob.
    :ivar metadata:
        Name-value pairs associated with the blob as metadata.
    '''

    def __init__(self, name=None, snapshot=None, props=None, metadata=None):
        self.name = name
        self.snapshot = snapshot
        self.properties = props or BlobProperties()
        self.metadata = metadata


class BlobProperties(object):
    '''
    Blob Properties

    :ivar str blob_type:
        String indicating this blob's type.
    :ivar datetime last_modified:
        A datetime object representing the last time the blob was modified.
    :ivar str etag:
        The ETag contains a value that you can use to perform operations
        conditionally.
    :ivar int content_length:
        The length of the content returned.
    :ivar int page_blob_sequence_number:
        (For Page Blobs) Sequence number for page blob used for coordinating
        concurrent writes.
    :ivar ~azstorage.blob.models.CopyProperties copy:
        Stores all the copy properties for the blob.
    :ivar ~azstorage.blob.models.ContentSettings content_settings:
        Stores all the content settings for the blob.
    :ivar ~azstorage.blob.models.LeaseProperties lease:
        Stores all the lease information for the blob.
    '''

    def __init__(self):
        self.blob_type = None
        self.last_modified = None
        self.etag = None
        self.content_length = None
        self.page_blob_sequence_number = None
        self.copy = CopyProperties()
        self.content_settings = ContentSettings()
        self.lease = LeaseProperties()


class BlobPrefix(object):
    '''
    BlobPrefix objects may potentially returned in the blob list when
    list_blobs is used with a delimiter. Prefixes can be thought of as
    virtual blob directories.

    :ivar str name: The name of the blob prefix.
    '''

    def __init__(self, name=None):
        self.name = name


class ContentSettings(object):
    '''
    Used to store the content settings of a blob.
    '''

    def __init__(
            self, content_type=None, content_encoding=None,
            content_language=None, content_disposition=None,
            cache_control=None, content_md5=None):
        self.content_type = content_type
        self.content_encoding = content_encoding
        self.content_language = content_language
        self.content_disposition = content_disposition
        self.cache_control = cache_control
        self.content_md5 = content_md5


class CopyProperties(object):
    '''
    Blob Copy Properties.
    '''

    def __init__(self):
        self.id = None
        self.source = None
        self.status = None
        self.progress = None
        self.completion_time = None
        self.status_description = None


class LeaseProperties(object):
    '''
    Blob Lease Properties.

    :ivar str status:
        The lease status of the blob or container. Possible values: locked|unlocked
    :ivar str state:
        Lease state of the blob or container.
        Possible values: available|leased|expired|breaking|broken
    :ivar str duration:
        When a blob or container is leased, specifies whether the lease is of
        infinite or fixed duration.
    '''

    def __init__(self):
        self.status = None
        self.state = None
        self.duration = None


class LeaseActions(object):
    '''Actions for a lease'''

    Acquire = 'acquire'
    '''Acquire the lease.'''

    Renew = 'renew'
    '''Renew the lease.'''

    Release = 'release'
    '''Release the lease.'''

    Break = 'break'
    '''Break the lease.'''

    Change = 'change'
    '''Change the lease ID.'''


class PublicAccess(object):
    '''
    Specifies whether data in the container may be accessed publicly and the level of access.
    '''

    OFF = 'off'
    '''
    Specifies that there is no public read access for both the container and blobs within the container.
    Clients cannot enumerate the containers within the storage account as well as the blobs within the container.
    '''

    Blob = 'blob'
    '''
    Specifies public read access for blobs. Blob data within this container can be read 
    via anonymous request, but container data is not available. Clients cannot enumerate 
    blobs within the container via anonymous request.
    '''

    Container = 'container'
    '''
    Specifies full public read access for container and blob data. Clients can enumerate 
    blobs within the container via anonymous request, but cannot enumerate containers 
    within the storage account.
    '''


class Include(object):
    '''
    Specifies the datasets to include in the blob list response.

    :ivar ~azstorage.blob.models.Include Include.COPY: 
        Specifies that metadata related to any current or previous Copy Blob operation 
        should be included in the response.
    :ivar ~azstorage.blob.models.Include Include.METADATA: 
        Specifies that metadata be returned in the response.
    :ivar ~azstorage.blob.models.Include Include.SNAPSHOTS: 
        Specifies that snapshots should be included in the enumeration.
    :ivar ~azstorage.blob.models.Include Include.UNCOMMITTED_BLOBS: 
        Specifies that blobs for which blocks have been uploaded, but which have 
        not been committed using Put Block List, be included in the response.
    '''

    def __init__(self, snapshots=False, metadata=False, uncommitted_blobs=False,
                 copy=False, _str=None):
        '''
        :param bool snapshots:
             Specifies that snapshots should be included in the enumeration.
        :param bool metadata:
            Specifies that blob metadata be returned in the response.
        :param bool uncommitted_blobs:
            Specifies that blobs for which blocks have been uploaded, but which have
            not been committed using Put Block List, be included in the response.
        :param bool copy: 
            Specifies that metadata related to any current or previous Copy Blob 
            operation should be included in the response. 
        :param str _str: 
            A string representing the includes.
        '''
        if not _str:
            _str = ''
        components = _str.split(',')
        self.snapshots = snapshots or ('snapshots' in components)
        self.metadata = metadata or ('metadata' in components)
        self.uncommitted_blobs = uncommitted_blobs or ('uncommittedblobs' in components)
        self.copy = copy or ('copy' in components)

    def __or__(self, other):
        return Include(_str=str(self) + ',' + str(other))

    def __add__(self, other):
        return Include(_str=str(self) + ',' + str(other))

    def __str__(self):
        include = (('snapshots,' if self.snapshots else '') +
                   ('metadata,' if self.metadata else '') +
                   ('uncommittedblobs,' if self.uncommitted_blobs else '') +
                   ('copy,' if self.copy else ''))
        return include.rstrip(',')


Include.COPY = Include(copy=True)
Include.METADATA = Include(metadata=True)
Include.SNAPSHOTS = Include(snapshots=True)
Include.UNCOMMITTED_BLOBS = Include(uncommitted_blobs=True)
