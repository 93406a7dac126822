from typing import Optional

import aiohttp

from cexio.core.web_assistant.connections.rest_connection import RESTConnection


class ConnectionsFactory:
    """This class is a thin wrapper around the underlying REST library.

    It hides the aiohttp session behind `RESTConnection` so the rest of the client never touches aiohttp directly.
    The session is created on first use and shared by every connection handed out by this factory.
    """

    def __init__(self):
        self._shared_client: Optional[aiohttp.ClientSession] = None

    async def get_rest_connection(self) -> RESTConnection:
        shared_client = await self._get_shared_client()
        connection = RESTConnection(aiohttp_client_session=shared_client)
        return connection

    async def close(self):
        if self._shared_client is not None and not self._shared_client.closed:
            await self._shared_client.close()
        self._shared_client = None

    async def _get_shared_client(self) -> aiohttp.ClientSession:
        if self._shared_client is None or self._shared_client.closed:
            self._shared_client = aiohttp.ClientSession()
        return self._shared_client
