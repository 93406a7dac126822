from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional

import aiohttp


class RESTMethod(Enum):
    GET = "GET"
    POST = "POST"

    def __str__(self):
        return self.value


@dataclass
class RESTRequest:
    method: RESTMethod
    url: Optional[str] = None
    params: Optional[Mapping[str, Any]] = None
    data: Any = None
    headers: Optional[Mapping[str, str]] = None
    is_auth_required: bool = False


class RESTResponse:
    def __init__(self, aiohttp_response: aiohttp.ClientResponse):
        self._aiohttp_response = aiohttp_response

    @property
    def status(self) -> int:
        status_ = int(self._aiohttp_response.status)
        return status_

    async def json(self) -> Any:
        # the exchange does not always label its JSON bodies as application/json
        json_ = await self._aiohttp_response.json(content_type=None)
        return json_

    async def text(self) -> str:
        text_ = await self._aiohttp_response.text()
        return text_
