import asyncio
import logging
from asyncio import wait_for
from copy import deepcopy
from typing import Any, Dict, List, Optional

import aiohttp

from cexio.core.utils.async_retry import RetryPolicy, async_retry
from cexio.core.web_assistant.auth import AuthBase
from cexio.core.web_assistant.connections.data_types import RESTMethod, RESTRequest
from cexio.core.web_assistant.connections.rest_connection import RESTConnection
from cexio.core.web_assistant.rest_pre_processors import RESTPreProcessorBase
from cexio.logger import CexioLogger

TRANSPORT_EXCEPTIONS = [IOError, aiohttp.ClientError, asyncio.TimeoutError]


class RESTAssistant:
    """A helper class to contain all REST-related logic.

    The class can be injected with additional functionality by passing a list of objects inheriting from
    the `RESTPreProcessorBase` class. The pre-processors are applied to a request before it is authenticated.

    Requests are authenticated once per call, so every retried attempt carries the same signature and nonce.
    Only transport failures (connection errors, timeouts, HTTP error statuses) are retried; a decoded payload
    is returned as is and judged by the caller.
    """
    _logger: Optional[CexioLogger] = None

    @classmethod
    def logger(cls) -> CexioLogger:
        if cls._logger is None:
            cls._logger = logging.getLogger(__name__)
        return cls._logger

    def __init__(
        self,
        connection: RESTConnection,
        rest_pre_processors: Optional[List[RESTPreProcessorBase]] = None,
        auth: Optional[AuthBase] = None,
        retry_policy: Optional[RetryPolicy] = None,
    ):
        self._connection = connection
        self._rest_pre_processors = rest_pre_processors or []
        self._auth = auth
        self._retry_policy = retry_policy or RetryPolicy()

    async def execute_request(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        data: Optional[Dict[str, Any]] = None,
        method: RESTMethod = RESTMethod.GET,
        is_auth_required: bool = False,
        timeout: Optional[float] = None,
        headers: Optional[Dict[str, Any]] = None,
    ) -> Any:
        request = RESTRequest(
            method=method,
            url=url,
            params=params,
            data=data,
            headers=dict(headers or {}),
            is_auth_required=is_auth_required,
        )
        request = await self._pre_process_request(deepcopy(request))
        request = await self._authenticate(request)
        self.logger().debug(f"{method} {url} params={params}")

        @async_retry(policy=self._retry_policy, exception_types=TRANSPORT_EXCEPTIONS, logger=self.logger())
        async def send_request():
            return await self._call(request=request, timeout=timeout)

        return await send_request()

    async def _call(self, request: RESTRequest, timeout: Optional[float] = None) -> Any:
        response = await wait_for(self._connection.call(request), timeout)
        if 400 <= response.status:
            error_response = await response.text()
            error_text = "N/A" if "<html" in error_response else error_response
            self.logger().network(f"{request.method} {request.url} responded with HTTP status {response.status}.")
            raise IOError(f"Error executing request {request.method} {request.url}. "
                          f"HTTP status is {response.status}. Error: {error_text}")
        return await response.json()

    async def _pre_process_request(self, request: RESTRequest) -> RESTRequest:
        for pre_processor in self._rest_pre_processors:
            request = await pre_processor.pre_process(request)
        return request

    async def _authenticate(self, request: RESTRequest) -> RESTRequest:
        if self._auth is not None and request.is_auth_required:
            request = await self._auth.rest_authenticate(request)
        return request
