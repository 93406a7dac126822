from typing import List, Optional

from cexio.core.utils.async_retry import RetryPolicy
from cexio.core.web_assistant.auth import AuthBase
from cexio.core.web_assistant.connections.connections_factory import ConnectionsFactory
from cexio.core.web_assistant.connections.rest_connection import RESTConnection
from cexio.core.web_assistant.rest_assistant import RESTAssistant
from cexio.core.web_assistant.rest_pre_processors import RESTPreProcessorBase


class WebAssistantsFactory:
    """Creates `RESTAssistant` instances.

    The assistants share the same authenticator, pre-processors and retry policy. Unless a connection is
    injected, they all send through the aiohttp session owned by the internal `ConnectionsFactory`.
    """
    def __init__(
        self,
        rest_pre_processors: Optional[List[RESTPreProcessorBase]] = None,
        auth: Optional[AuthBase] = None,
        retry_policy: Optional[RetryPolicy] = None,
        connection: Optional[RESTConnection] = None,
    ):
        self._connections_factory = ConnectionsFactory()
        self._rest_pre_processors = rest_pre_processors or []
        self._auth = auth
        self._retry_policy = retry_policy
        self._connection = connection

    async def get_rest_assistant(self) -> RESTAssistant:
        connection = self._connection or await self._connections_factory.get_rest_connection()
        assistant = RESTAssistant(
            connection=connection,
            rest_pre_processors=self._rest_pre_processors,
            auth=self._auth,
            retry_policy=self._retry_policy,
        )
        return assistant

    async def close(self):
        await self._connections_factory.close()
