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

from azstorage.common._error import (
    _ERROR_PRIMARY_ONLY_COMMAND,
    _ERROR_SECONDARY_ONLY_COMMAND,
    _ERROR_STORAGE_URI_MISSING_LOCATION,
)
from azstorage.common._location import (
    _get_initial_location,
    _get_listing_location_mode,
    _get_next_location,
)
from azstorage.common.models import (
    LocationMode,
    RequestLocationMode,
    ResultContinuation,
    ResultContinuationType,
)

_BOTH = {
    LocationMode.PRIMARY: 'account.blob.core.windows.net',
    LocationMode.SECONDARY: 'account-secondary.blob.core.windows.net',
}
_PRIMARY = {LocationMode.PRIMARY: 'account.blob.core.windows.net'}
_SECONDARY = {LocationMode.SECONDARY: 'account-secondary.blob.core.windows.net'}


class StorageLocationTest(unittest.TestCase):

    def test_initial_location_follows_declared_mode(self):
        # Act
        primary_only = _get_initial_location(RequestLocationMode.PRIMARY_ONLY, LocationMode.SECONDARY, _BOTH)
        secondary_only = _get_initial_location(RequestLocationMode.SECONDARY_ONLY, LocationMode.PRIMARY, _BOTH)

        # Assert
        self.assertEqual(LocationMode.PRIMARY, primary_only)
        self.assertEqual(LocationMode.SECONDARY, secondary_only)

    def test_initial_location_uses_client_location_mode(self):
        # Act
        primary = _get_initial_location(RequestLocationMode.PRIMARY_OR_SECONDARY, LocationMode.PRIMARY, _BOTH)
        secondary = _get_initial_location(RequestLocationMode.PRIMARY_OR_SECONDARY, LocationMode.SECONDARY, _BOTH)

        # Assert
        self.assertEqual(LocationMode.PRIMARY, primary)
        self.assertEqual(LocationMode.SECONDARY, secondary)

    def test_initial_location_without_host(self):
        # Act
        with self.assertRaises(ValueError) as primary_only:
            _get_initial_location(RequestLocationMode.PRIMARY_ONLY, LocationMode.PRIMARY, _SECONDARY)
        with self.assertRaises(ValueError) as secondary_only:
            _get_initial_location(RequestLocationMode.SECONDARY_ONLY, LocationMode.PRIMARY, _PRIMARY)
        with self.assertRaises(ValueError) as either:
            _get_initial_location(RequestLocationMode.PRIMARY_OR_SECONDARY, LocationMode.SECONDARY, _PRIMARY)

        # Assert
        self.assertEqual(_ERROR_PRIMARY_ONLY_COMMAND, str(primary_only.exception))
        self.assertEqual(_ERROR_SECONDARY_ONLY_COMMAND, str(secondary_only.exception))
        self.assertEqual(_ERROR_STORAGE_URI_MISSING_LOCATION, str(either.exception))

    def test_initial_location_unknown_mode(self):
        # Act
        with self.assertRaises(ValueError):
            _get_initial_location('anywhere', LocationMode.PRIMARY, _BOTH)

    def test_next_location_never_leaves_declared_mode(self):
        # Act
        locations = set()
        for attempt in range(10):
            proposed = LocationMode.SECONDARY if attempt % 2 == 0 else LocationMode.PRIMARY
            locations.add(_get_next_location(RequestLocationMode.PRIMARY_ONLY, LocationMode.PRIMARY,
                                             proposed, _BOTH))

        # Assert
        self.assertEqual({LocationMode.PRIMARY}, locations)
        self.assertEqual(LocationMode.SECONDARY, _get_next_location(
            RequestLocationMode.SECONDARY_ONLY, LocationMode.SECONDARY, LocationMode.PRIMARY, _BOTH))

    def test_next_location_follows_policy(self):
        # Act
        to_secondary = _get_next_location(RequestLocationMode.PRIMARY_OR_SECONDARY, LocationMode.PRIMARY,
                                          LocationMode.SECONDARY, _BOTH)
        to_primary = _get_next_location(RequestLocationMode.PRIMARY_OR_SECONDARY, LocationMode.SECONDARY,
                                        LocationMode.PRIMARY, _BOTH)

        # Assert
        self.assertEqual(LocationMode.SECONDARY, to_secondary)
        self.assertEqual(LocationMode.PRIMARY, to_primary)

    def test_next_location_requires_host(self):
        # Act
        location = _get_next_location(RequestLocationMode.PRIMARY_OR_SECONDARY, LocationMode.PRIMARY,
                                      LocationMode.SECONDARY, _PRIMARY)

        # Assert
        self.assertEqual(LocationMode.PRIMARY, location)

    def test_listing_location_mode_from_token(self):
        # Arrange
        primary_token = ResultContinuation('marker', ResultContinuationType.BLOB, LocationMode.PRIMARY)
        secondary_token = ResultContinuation('marker', ResultContinuationType.BLOB, LocationMode.SECONDARY)

        # Act
        first_page = _get_listing_location_mode(None)
        unpinned = _get_listing_location_mode(ResultContinuation('marker', ResultContinuationType.BLOB))
        primary = _get_listing_location_mode(primary_token)
        secondary = _get_listing_location_mode(secondary_token)

        # Assert
        self.assertEqual(RequestLocationMode.PRIMARY_OR_SECONDARY, first_page)
        self.assertEqual(RequestLocationMode.PRIMARY_OR_SECONDARY, unpinned)
        self.assertEqual(RequestLocationMode.PRIMARY_ONLY, primary)
        self.assertEqual(RequestLocationMode.SECONDARY_ONLY, secondary)


# ------------------------------------------------------------------------------
if __name__ == '__main__':
    unittest.main()
