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
import random

from .models import (
    LocationMode,
    RequestLocationMode,
)


class RetryContext(object):
    '''
    Retry context contains the request, response, and other data which can be
    used to determine whether or not to retry. A new context is created for
    every operation and is discarded once the operation completes.

    :ivar HTTPRequest request:
        The request of the failed attempt, or None if building it failed.
    :ivar HTTPResponse response:
        The response of the failed attempt, or None if no response was received.
    :ivar str location_mode:
        The location the failed attempt was sent to. A retry policy may change
        this to choose the location of the next attempt.
    :ivar str request_location_mode:
        The :class:`~azstorage.common.models.RequestLocationMode` declared by the
        operation. Policies must not choose a location it does not allow.
    :ivar Exception exception:
        The error which failed the attempt, or None when the response itself
        reported a retryable failure. The response status then decides.
    :ivar int count:
        The number of retries performed so far. It is maintained by the client;
        retry policies read it and do not change it.
    '''

    def __init__(self):
        self.request = None
        self.response = None
        self.location_mode = None
        self.request_location_mode = None
        self.exception = None
        self.count = 0


class _Retry(object):
    '''
    The base class for Exponential and Linear retries containing shared code.
    '''

    def __init__(self, max_attempts, retry_to_secondary, retry_build_errors=False):
        '''
        Constructs a base retry object.

        :param int max_attempts:
            The maximum number of retry attempts.
        :param bool retry_to_secondary:
            Whether the request should be retried to secondary, if able. This should
            only be enabled of RA-GRS accounts are used and potentially stale data
            can be handled.
        :param bool retry_build_errors:
            Whether a failure to build the request is evaluated like any other
            failure. By default such failures are raised without a retry.
        '''
        self.max_attempts = max_attempts
        self.retry_to_secondary = retry_to_secondary
        self.retry_build_errors = retry_build_errors

    def _should_retry(self, context):
        '''
        A function which determines whether or not to retry.

        :param ~azstorage.common.retry.RetryContext context:
            The retry context. This contains the request, response, and other data
            which can be used to determine whether or not to retry.
        :return:
            A boolean indicating whether or not to retry the request.
        :rtype: bool
        '''
        # If max attempts are reached, do not retry.
        if context.count >= self.max_attempts:
            return False

        status = None
        if context.response and context.response.status:
            status = context.response.status

        if status is None:
            '''
            If status is None, retry as this request triggered an exception. For
            example, network issues would trigger this.
            '''
            return True
        elif 200 <= status < 300:
            '''
            A success code only gets here when the operation did not expect it,
            for example a 200 where a create expects 201. Retry.
            '''
            return True
        elif 300 <= status < 500:
            '''
            An exception occured, but in most cases it was expected. Examples could
            include a 409 Conflict or 412 Precondition Failed.
            '''
            if status == 404 and context.location_mode == LocationMode.SECONDARY:
                # Response code 404 should be retried if secondary was used.
                return True
            if status == 408:
                # Response code 408 is a timeout and should be retried.
                return True
            return False
        elif status >= 500:
            '''
            Response codes above 500 with the exception of 501 Not Implemented and
            505 Version Not Supported indicate a server issue and should be retried.
            '''
            if status == 501 or status == 505:
                return False
            return True
        else:
            # If something else happened, it's unexpected. Retry.
            return True

    def _set_next_location(self, context):
        '''
        Alternates the location of the next attempt, if the operation allows
        both locations. Every retry switches location.
        '''
        if context.request_location_mode != RequestLocationMode.PRIMARY_OR_SECONDARY:
            return

        if context.location_mode == LocationMode.PRIMARY:
            context.location_mode = LocationMode.SECONDARY
        else:
            context.location_mode = LocationMode.PRIMARY

    def _retry(self, context, backoff):
        '''
        A function which determines whether and how to retry.

        :param ~azstorage.common.retry.RetryContext context:
            The retry context. This contains the request, response, and other data
            which can be used to determine whether or not to retry.
        :param function() backoff:
            A function which returns the backoff time if a retry is to be performed.
        :return:
            An integer indicating how long to wait before retrying the request,
            or None to indicate no retry should be performed.
        :rtype: int or None
        '''
        # Determine whether to retry, and if so modify the request as desired,
        # and return the backoff.
        if self._should_retry(context):
            backoff_interval = backoff(context)

            # If retry to secondary is enabled, attempt to change the host if the
            # request allows it
            if self.retry_to_secondary:
                self._set_next_location(context)

            return backoff_interval

        return None


class ExponentialRetry(_Retry):
    '''
    Exponential retry.
    '''

    def __init__(self, initial_backoff=15, increment_base=3, max_attempts=3,
                 retry_to_secondary=False, random_jitter_range=3, retry_build_errors=False):
        '''
        Constructs an Exponential retry object. The initial_backoff is used for
        the first retry. Subsequent retries are retried after initial_backoff +
        increment_power^retry_count seconds. For example, by default the first retry
        occurs after 15 seconds, the second after (15+3^1) = 18 seconds, and the
        third after (15+3^2) = 24 seconds.

        :param int initial_backoff:
            The initial backoff interval, in seconds, for the first retry.
        :param int increment_base:
            The base, in seconds, to increment the initial_backoff by after the
            first retry.
        :param int max_attempts:
            The maximum number of retry attempts.
        :param bool retry_to_secondary:
            Whether the request should be retried to secondary, if able. This should
            only be enabled of RA-GRS accounts are used and potentially stale data
            can be handled.
        :param int random_jitter_range:
            A number in seconds which indicates a range to jitter/randomize for the back-off interval.
            For example, a random_jitter_range of 3 results in the back-off interval x to vary between x+3 and x-3.
        :param bool retry_build_errors:
            Whether a failure to build the request should be retried.
        '''
        self.initial_backoff = initial_backoff
        self.increment_base = increment_base
        self.random_jitter_range = random_jitter_range
        super(ExponentialRetry, self).__init__(max_attempts, retry_to_secondary, retry_build_errors)

    '''
    A function which determines whether and how to retry.

    :param ~azstorage.common.retry.RetryContext context:
        The retry context. This contains the request, response, and other data
        which can be used to determine whether or not to retry.
    :return:
        An integer indicating how long to wait before retrying the request,
        or None to indicate no retry should be performed.
    :rtype: int or None
    '''

    def retry(self, context):
        return self._retry(context, self._backoff)

    '''
    Calculates how long to sleep before retrying.

    :return:
        An integer indicating how long to wait before retrying the request,
        or None to indicate no retry should be performed.
    :rtype: int or None
    '''

    def _backoff(self, context):
        random_generator = random.Random()
        backoff = self.initial_backoff + (0 if context.count == 0 else pow(self.increment_base, context.count))
        random_range_start = backoff - self.random_jitter_range if backoff > self.random_jitter_range else 0
        random_range_end = backoff + self.random_jitter_range
        return random_generator.uniform(random_range_start, random_range_end)


class LinearRetry(_Retry):
    '''
    Linear retry.
    '''

    def __init__(self, backoff=15, max_attempts=3, retry_to_secondary=False, random_jitter_range=3,
                 retry_build_errors=False):
        '''
        Constructs a Linear retry object.

        :param int backoff:
            The backoff interval, in seconds, between retries.
        :param int max_attempts:
            The maximum number of retry attempts.
        :param bool retry_to_secondary:
            Whether the request should be retried to secondary, if able. This should
            only be enabled of RA-GRS accounts are used and potentially stale data
            can be handled.
        :param int random_jitter_range:
            A number in seconds which indicates a range to jitter/randomize for the back-off interval.
            For example, a random_jitter_range of 3 results in the back-off interval x to vary between x+3 and x-3.
        :param bool retry_build_errors:
            Whether a failure to build the request should be retried.
        '''
        self.backoff = backoff
        self.max_attempts = max_attempts
        self.random_jitter_range = random_jitter_range
        super(LinearRetry, self).__init__(max_attempts, retry_to_secondary, retry_build_errors)

    '''
    A function which determines whether and how to retry.

    :param ~azstorage.common.retry.RetryContext context:
        The retry context. This contains the request, response, and other data
        which can be used to determine whether or not to retry.
    :return:
        An integer indicating how long to wait before retrying the request,
        or None to indicate no retry should be performed.
    :rtype: int or None
    '''

    def retry(self, context):
        return self._retry(context, self._backoff)

    '''
    Calculates how long to sleep before retrying.

    :return:
        An integer indicating how long to wait before retrying the request,
        or None to indicate no retry should be performed.
    :rtype: int or None
    '''

    def _backoff(self, context):
        random_generator = random.Random()
        # the backoff interval normally does not change, however there is the possibility
        # that it was modified by accessing the property directly after initializing the object
        random_range_start = self.backoff - self.random_jitter_range \
            if self.backoff > self.random_jitter_range else 0
        random_range_end = self.backoff + self.random_jitter_range
        return random_generator.uniform(random_range_start, random_range_end)


def no_retry(context):
    '''
    Specifies never to retry.

    :param ~azstorage.common.retry.RetryContext context:
        The retry context.
    :return:
        Always returns None to indicate never to retry.
    :rtype: None
    '''
    return None


def _retries_build_errors(retry):
    '''
    Whether a retry function asks for request build failures to be evaluated.
    Retry functions are usually the bound retry method of a policy object.
    '''
    policy = getattr(retry, '__self__', retry)
    return bool(getattr(policy, 'retry_build_errors', False))
