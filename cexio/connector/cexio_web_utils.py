from typing import Optional

import cexio.connector.cexio_constants as CONSTANTS
from cexio.core.utils.async_retry import RetryPolicy
from cexio.core.web_assistant.auth import AuthBase
from cexio.core.web_assistant.connections.data_types import RESTRequest
from cexio.core.web_assistant.connections.rest_connection import RESTConnection
from cexio.core.web_assistant.rest_pre_processors import RESTPreProcessorBase
from cexio.core.web_assistant.web_assistants_factory import WebAssistantsFactory
from cexio.exceptions import CexioConfigurationError


class HeadersContentRESTPreProcessor(RESTPreProcessorBase):
    async def pre_process(self, request: RESTRequest) -> RESTRequest:
        request.headers = request.headers or {}
        request.headers["User-Agent"] = CONSTANTS.USER_AGENT
        request.headers["Content-Type"] = CONSTANTS.FORM_CONTENT_TYPE
        return request


def rest_url(path_url: str) -> str:
    """
    Creates a full URL for provided REST endpoint
    :param path_url: an endpoint path relative to the API root
    :return: the full URL to the endpoint
    """
    return CONSTANTS.REST_URL + path_url


def pair_path_url(path_url: str, ccy1: Optional[str], ccy2: Optional[str]) -> str:
    """
    Appends the currency pair to an endpoint path, e.g. ("ticker", "BTC", "EUR") -> "ticker/BTC/EUR"
    """
    if not ccy1 or not ccy2:
        raise CexioConfigurationError(
            f"A currency pair is required for {path_url}. Pass ccy1/ccy2 or set "
            f"{CONSTANTS.ENV_CCY_1}/{CONSTANTS.ENV_CCY_2}.")
    return "/".join([path_url, ccy1, ccy2])


def build_api_factory(
        auth: Optional[AuthBase] = None,
        retry_policy: Optional[RetryPolicy] = None,
        connection: Optional[RESTConnection] = None) -> WebAssistantsFactory:
    api_factory = WebAssistantsFactory(
        auth=auth,
        retry_policy=retry_policy,
        connection=connection,
        rest_pre_processors=[
            HeadersContentRESTPreProcessor(),
        ])
    return api_factory
