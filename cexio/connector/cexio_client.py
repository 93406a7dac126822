import json
import logging
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Union

import cexio.connector.cexio_constants as CONSTANTS
import cexio.connector.cexio_web_utils as web_utils
from cexio.connector.cexio_auth import CexioAuth
from cexio.connector.cexio_utils import CexioConfigMap, format_decimal, is_success_status, parse_numeric_strings
from cexio.core.web_assistant.connections.data_types import RESTMethod
from cexio.core.web_assistant.connections.rest_connection import RESTConnection
from cexio.exceptions import CexioAPIError, CexioConfigurationError, CexioResponseFormatError
from cexio.logger import CexioLogger

Number = Union[int, float]


class CexioClient:
    """
    Asynchronous client for the CEX.io REST API.

    Settings not passed explicitly are read from the CEXIO_* environment variables, see `CexioConfigMap`.
    Numbers the exchange encodes as strings are returned as ints and floats.
    """
    _logger: Optional[CexioLogger] = None

    @classmethod
    def logger(cls) -> CexioLogger:
        if cls._logger is None:
            cls._logger = logging.getLogger(__name__)
        return cls._logger

    def __init__(self,
                 config: Optional[CexioConfigMap] = None,
                 connection: Optional[RESTConnection] = None,
                 **kwargs):
        """
        :param config: complete client settings; when omitted they are built from `kwargs`
        :param connection: transport to send requests through instead of the default aiohttp session
        :param kwargs: `CexioConfigMap` fields (client_id, api_key, api_secret, ccy1, ccy2, retry_policy)
        """
        self._config = config if config is not None else CexioConfigMap(**kwargs)
        self._auth = CexioAuth(
            client_id=self._config.client_id,
            api_key=self._config.secret_value("api_key"),
            secret_key=self._config.secret_value("api_secret"),
        )
        self._api_factory = web_utils.build_api_factory(
            auth=self._auth,
            retry_policy=self._config.retry_policy,
            connection=connection,
        )

    @property
    def config(self) -> CexioConfigMap:
        return self._config

    async def close(self):
        await self._api_factory.close()

    async def __aenter__(self) -> "CexioClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    # Public API

    async def currency_limits(self) -> Dict[str, Any]:
        payload = await self._api_get(path_url=CONSTANTS.CURRENCY_LIMITS_PATH_URL)
        return parse_numeric_strings(self._envelope_data(payload, CONSTANTS.CURRENCY_LIMITS_PATH_URL))

    async def ticker(self, ccy1: Optional[str] = None, ccy2: Optional[str] = None) -> Dict[str, Any]:
        payload = await self._api_get(path_url=self._pair_path_url(CONSTANTS.TICKER_PATH_URL, ccy1, ccy2))
        return parse_numeric_strings(payload)

    async def last_price(self, ccy1: Optional[str] = None, ccy2: Optional[str] = None) -> Number:
        path_url = self._pair_path_url(CONSTANTS.LAST_PRICE_PATH_URL, ccy1, ccy2)
        payload = await self._api_get(path_url=path_url)
        return parse_numeric_strings(self._field(payload, "lprice", path_url))

    async def ohlcv(self,
                    date_string: Union[str, date],
                    ccy1: Optional[str] = None,
                    ccy2: Optional[str] = None) -> Dict[str, Any]:
        """
        Fetches the historical 1 minute, 1 hour and 1 day candles of a single day.
        :param date_string: the day as YYYYMMDD, or a date
        :return: the payload with its candle series decoded into lists of numbers, other fields untouched
        """
        if isinstance(date_string, date):
            date_string = date_string.strftime("%Y%m%d")
        path_url = self._pair_path_url(CONSTANTS.OHLCV_PATH_URL.format(date_string), ccy1, ccy2)
        payload = await self._api_get(path_url=path_url)
        if not isinstance(payload, dict):
            raise CexioResponseFormatError(f"Unexpected candles response from {path_url}.", data=payload)
        candles = dict(payload)
        for series_field in CONSTANTS.OHLCV_SERIES_FIELDS:
            series = candles.get(series_field)
            if isinstance(series, str):
                try:
                    series = json.loads(series)
                except ValueError as e:
                    raise CexioResponseFormatError(
                        f"Could not decode {series_field} from {path_url}.", data=payload) from e
            if series_field in candles:
                candles[series_field] = parse_numeric_strings(series)
        return candles

    async def order_book(self,
                         depth: Optional[int] = None,
                         ccy1: Optional[str] = None,
                         ccy2: Optional[str] = None) -> Dict[str, Any]:
        params = {"depth": depth} if depth is not None else None
        payload = await self._api_get(path_url=self._pair_path_url(CONSTANTS.ORDER_BOOK_PATH_URL, ccy1, ccy2),
                                      params=params)
        return parse_numeric_strings(payload)

    async def convert(self, amount: Union[Number, str], ccy1: Optional[str] = None, ccy2: Optional[str] = None) -> Number:
        path_url = self._pair_path_url(CONSTANTS.CONVERT_PATH_URL, ccy1, ccy2)
        payload = await self._api_post(path_url=path_url, data={"amnt": format_decimal(amount)})
        return parse_numeric_strings(self._field(payload, "amnt", path_url))

    async def price_stats(self,
                          last_hours: int = CONSTANTS.DEFAULT_PRICE_STATS_HOURS,
                          max_resp_arr_size: int = CONSTANTS.DEFAULT_PRICE_STATS_MAX_ITEMS,
                          ccy1: Optional[str] = None,
                          ccy2: Optional[str] = None) -> List[Dict[str, Number]]:
        payload = await self._api_post(
            path_url=self._pair_path_url(CONSTANTS.PRICE_STATS_PATH_URL, ccy1, ccy2),
            data={"lastHours": last_hours, "maxRespArrSize": max_resp_arr_size},
        )
        return parse_numeric_strings(payload)

    # Private API

    async def balance(self) -> Dict[str, Any]:
        payload = await self._api_post(path_url=CONSTANTS.BALANCE_PATH_URL)
        return parse_numeric_strings(payload)

    async def open_orders(self, ccy1: Optional[str] = None, ccy2: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Lists the open orders of one pair when both currencies are given, of every pair otherwise.
        """
        path_url = CONSTANTS.OPEN_ORDERS_PATH_URL
        if ccy1 and ccy2:
            path_url = web_utils.pair_path_url(path_url, ccy1, ccy2)
        payload = await self._api_post(path_url=path_url)
        return parse_numeric_strings(payload)

    async def active_orders_status(self, orders_list: Iterable[Union[str, int]]) -> List[List[Number]]:
        payload = await self._api_post(
            path_url=CONSTANTS.ACTIVE_ORDERS_STATUS_PATH_URL,
            data={"orders_list": [str(order_id) for order_id in orders_list]},
        )
        return parse_numeric_strings(self._envelope_data(payload, CONSTANTS.ACTIVE_ORDERS_STATUS_PATH_URL))

    async def open_positions(self, ccy1: Optional[str] = None, ccy2: Optional[str] = None) -> List[Dict[str, Any]]:
        path_url = self._pair_path_url(CONSTANTS.OPEN_POSITIONS_PATH_URL, ccy1, ccy2)
        payload = await self._api_post(path_url=path_url, status_required=True)
        return parse_numeric_strings(self._envelope_data(payload, path_url))

    async def close_position(self,
                             position_id: Union[str, int],
                             ccy1: Optional[str] = None,
                             ccy2: Optional[str] = None) -> Dict[str, Any]:
        path_url = self._pair_path_url(CONSTANTS.CLOSE_POSITION_PATH_URL, ccy1, ccy2)
        self.logger().info(f"Closing position {position_id} on {path_url}.")
        payload = await self._api_post(path_url=path_url, data={"id": position_id}, status_required=True)
        return parse_numeric_strings(self._envelope_data(payload, path_url))

    async def open_position(self,
                            amount: Union[Number, str],
                            ptype: str = CONSTANTS.POSITION_TYPE_LONG,
                            leverage: int = CONSTANTS.DEFAULT_LEVERAGE,
                            eoprice: Optional[Union[Number, str]] = None,
                            stop_loss_price: Optional[Union[Number, str]] = None,
                            symbol: Optional[str] = None,
                            msymbol: Optional[str] = None,
                            any_slippage: bool = True,
                            ccy1: Optional[str] = None,
                            ccy2: Optional[str] = None) -> Dict[str, Any]:
        """
        Opens a margin position.
        :param amount: position amount, in `symbol`
        :param ptype: "long" or "short"
        :param leverage: position leverage
        :param eoprice: estimated open price
        :param stop_loss_price: left out of the request when not given
        :param symbol: currency of the position, defaults to ccy1
        :param msymbol: currency of the margin, defaults to ccy1
        :param any_slippage: whether the position may open at any price
        """
        base_currency = ccy1 or self._config.ccy1
        symbol = symbol or base_currency
        msymbol = msymbol or base_currency
        if not symbol or not msymbol:
            raise CexioConfigurationError(
                f"open_position needs the position and margin currencies. Pass symbol/msymbol or ccy1, "
                f"or set {CONSTANTS.ENV_CCY_1}.")
        params = {
            "amount": format_decimal(amount),
            "symbol": symbol,
            "msymbol": msymbol,
            "ptype": ptype.lower(),
            "anySlippage": "true" if any_slippage else "false",
            "leverage": str(leverage),
        }
        if eoprice is not None:
            params["eoprice"] = format_decimal(eoprice)
        if stop_loss_price is not None:
            params["stopLossPrice"] = format_decimal(stop_loss_price)

        path_url = self._pair_path_url(CONSTANTS.OPEN_POSITION_PATH_URL, ccy1, ccy2)
        self.logger().info(f"Opening {params['ptype']} position of {params['amount']} {params['symbol']} "
                           f"at leverage {params['leverage']} on {path_url}.")
        payload = await self._api_post(path_url=path_url, data=params, status_required=True)
        return parse_numeric_strings(self._envelope_data(payload, path_url))

    async def _api_get(self, path_url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        rest_assistant = await self._api_factory.get_rest_assistant()
        payload = await rest_assistant.execute_request(
            url=web_utils.rest_url(path_url),
            params=params,
            method=RESTMethod.GET,
        )
        return self._validate(payload, path_url)

    async def _api_post(self,
                        path_url: str,
                        data: Optional[Dict[str, Any]] = None,
                        status_required: bool = False) -> Any:
        rest_assistant = await self._api_factory.get_rest_assistant()
        payload = await rest_assistant.execute_request(
            url=web_utils.rest_url(path_url),
            data=data,
            method=RESTMethod.POST,
            is_auth_required=True,
        )
        return self._validate(payload, path_url, status_required=status_required)

    def _pair_path_url(self, path_url: str, ccy1: Optional[str], ccy2: Optional[str]) -> str:
        return web_utils.pair_path_url(path_url, ccy1 or self._config.ccy1, ccy2 or self._config.ccy2)

    @staticmethod
    def _validate(payload: Any, path_url: str, status_required: bool = False) -> Any:
        if payload is None or payload == "":
            raise CexioAPIError(f"Empty response from {path_url}.", data=payload)
        if isinstance(payload, dict):
            if status_required and "ok" not in payload:
                raise CexioAPIError(f"Request to {path_url} was not confirmed by the exchange.", data=payload)
            if not is_success_status(payload):
                reason = payload.get("error", payload.get("ok"))
                raise CexioAPIError(f"Request to {path_url} failed: {reason}", data=payload)
        elif status_required:
            raise CexioAPIError(f"Request to {path_url} was not confirmed by the exchange.", data=payload)
        return payload

    @staticmethod
    def _field(payload: Any, field_name: str, path_url: str) -> Any:
        if not isinstance(payload, dict) or field_name not in payload:
            raise CexioResponseFormatError(f"Response from {path_url} has no {field_name} field.", data=payload)
        return payload[field_name]

    @classmethod
    def _envelope_data(cls, payload: Any, path_url: str) -> Any:
        return cls._field(payload, "data", path_url)
