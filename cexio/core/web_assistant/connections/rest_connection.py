import aiohttp

from cexio.core.web_assistant.connections.data_types import RESTRequest, RESTResponse


class RESTConnection:
    """
    Transport adapter executing a `RESTRequest` through a shared aiohttp session.

    Anything exposing the same `call` coroutine can be passed to `RESTAssistant` in its place.
    """
    def __init__(self, aiohttp_client_session: aiohttp.ClientSession):
        self._client_session = aiohttp_client_session

    async def call(self, request: RESTRequest) -> RESTResponse:
        aiohttp_resp = await self._client_session.request(
            method=request.method.value,
            url=request.url,
            params=request.params,
            data=request.data,
            headers=request.headers,
        )

        resp = await self._build_resp(aiohttp_resp)
        return resp

    @staticmethod
    async def _build_resp(aiohttp_resp: aiohttp.ClientResponse) -> RESTResponse:
        resp = RESTResponse(aiohttp_resp)
        return resp
