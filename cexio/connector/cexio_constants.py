REST_URL = "https://cex.io/api/"

USER_AGENT = "Mozilla/4.0 (Python CEXIO client)"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

# Environment variables read for settings not given explicitly
ENV_CLIENT_ID = "CEXIO_CLIENT_ID"
ENV_API_KEY = "CEXIO_KEY"
ENV_API_SECRET = "CEXIO_SECRET"
ENV_CCY_1 = "CEXIO_CCY_1"
ENV_CCY_2 = "CEXIO_CCY_2"

# Status sentinel of enveloped responses ({"e": ..., "ok": "ok", "data": ...})
SUCCESS_STATUS = "ok"

MAX_DECIMAL_PLACES = 8

# Public API endpoints
CURRENCY_LIMITS_PATH_URL = "currency_limits"
TICKER_PATH_URL = "ticker"
LAST_PRICE_PATH_URL = "last_price"
OHLCV_PATH_URL = "ohlcv/hd/{}"
ORDER_BOOK_PATH_URL = "order_book"

# Private API endpoints
CONVERT_PATH_URL = "convert"
PRICE_STATS_PATH_URL = "price_stats"
BALANCE_PATH_URL = "balance/"
OPEN_ORDERS_PATH_URL = "open_orders"
ACTIVE_ORDERS_STATUS_PATH_URL = "active_orders_status"
OPEN_POSITIONS_PATH_URL = "open_positions"
CLOSE_POSITION_PATH_URL = "close_position"
OPEN_POSITION_PATH_URL = "open_position"

# Candle series returned by ohlcv as JSON encoded strings
OHLCV_SERIES_FIELDS = ("data1m", "data1h", "data1d")

POSITION_TYPE_LONG = "long"
DEFAULT_LEVERAGE = 3
DEFAULT_PRICE_STATS_HOURS = 24
DEFAULT_PRICE_STATS_MAX_ITEMS = 200
