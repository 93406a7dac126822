import asyncio
import logging
from unittest import IsolatedAsyncioTestCase, TestCase
from unittest.mock import AsyncMock, call, patch

from pydantic import ValidationError

from cexio.core.utils.async_retry import AllTriesFailedException, RetryPolicy, async_retry
from test.logger_mixin_for_test import LoggerMixinForTest


class RetryPolicyTest(TestCase):

    def test_delay_grows_by_factor_until_max_timeout(self):
        policy = RetryPolicy(retries=5, factor=2, min_timeout=1, max_timeout=5)

        self.assertEqual([1, 2, 4, 5, 5], [policy.delay_for(attempt) for attempt in range(1, 6)])

    def test_default_policy(self):
        policy = RetryPolicy()

        self.assertEqual(3, policy.retries)
        self.assertEqual(2.0, policy.factor)
        self.assertEqual(1.0, policy.min_timeout)
        self.assertEqual(30.0, policy.max_timeout)

    def test_negative_retries_rejected(self):
        with self.assertRaises(ValidationError):
            RetryPolicy(retries=-1)

    def test_policy_is_immutable(self):
        policy = RetryPolicy()

        with self.assertRaises(ValidationError):
            policy.retries = 10


class AsyncRetryTest(IsolatedAsyncioTestCase, LoggerMixinForTest):

    def setUp(self) -> None:
        super().setUp()
        self.retry_logger = logging.getLogger("test_async_retry")
        self.set_loggers(self.retry_logger)
        sleep_patcher = patch("cexio.core.utils.async_retry._sleep", new_callable=AsyncMock)
        self.sleep_mock = sleep_patcher.start()
        self.addCleanup(sleep_patcher.stop)

    async def test_returns_without_retry_on_success(self):
        fn = AsyncMock(return_value="result")
        decorated = async_retry(policy=RetryPolicy(retries=2), logger=self.retry_logger)(fn)

        result = await decorated("arg", key="value")

        self.assertEqual("result", result)
        fn.assert_awaited_once_with("arg", key="value")
        self.sleep_mock.assert_not_awaited()

    async def test_retries_once_then_succeeds(self):
        fn = AsyncMock(side_effect=[IOError("connection reset"), "result"])
        fn.__name__ = "fetch"
        decorated = async_retry(policy=RetryPolicy(retries=1, min_timeout=0.5),
                                exception_types=[IOError],
                                logger=self.retry_logger)(fn)

        result = await decorated()

        self.assertEqual("result", result)
        self.assertEqual(2, fn.await_count)
        self.sleep_mock.assert_awaited_once_with(0.5)
        self.assertTrue(self.is_logged(
            logging.INFO,
            "Exception raised for OSError('connection reset'): fetch. Retrying 1/1 in 0.50s."))

    async def test_raises_last_failure_after_all_attempts(self):
        last_error = asyncio.TimeoutError()
        fn = AsyncMock(side_effect=[IOError("first"), IOError("second"), last_error])
        fn.__name__ = "fetch"
        decorated = async_retry(policy=RetryPolicy(retries=2, factor=3, min_timeout=1, max_timeout=10),
                                exception_types=[IOError, asyncio.TimeoutError],
                                logger=self.retry_logger)(fn)

        with self.assertRaises(AllTriesFailedException) as context:
            await decorated()

        self.assertIs(last_error, context.exception.__cause__)
        self.assertEqual(3, fn.await_count)
        self.assertEqual([call(1), call(3)], self.sleep_mock.await_args_list)

    async def test_does_not_retry_unlisted_exceptions(self):
        fn = AsyncMock(side_effect=ValueError("bad payload"))
        decorated = async_retry(policy=RetryPolicy(retries=3), exception_types=[IOError], logger=self.retry_logger)(fn)

        with self.assertRaises(ValueError):
            await decorated()

        fn.assert_awaited_once()
        self.sleep_mock.assert_not_awaited()

    async def test_zero_retries_makes_a_single_attempt(self):
        fn = AsyncMock(side_effect=IOError("down"))
        fn.__name__ = "fetch"
        decorated = async_retry(policy=RetryPolicy(retries=0), exception_types=[IOError], logger=self.retry_logger)(fn)

        with self.assertRaises(AllTriesFailedException):
            await decorated()

        fn.assert_awaited_once()
        self.sleep_mock.assert_not_awaited()
