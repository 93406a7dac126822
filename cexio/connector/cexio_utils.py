import os
import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr, model_validator

import cexio.connector.cexio_constants as CONSTANTS
from cexio.core.utils.async_retry import RetryPolicy

NUMERIC_STRING_REGEX = re.compile(r"^\s*[+-]?(?:\d+(?P<fraction>\.\d*)?|(?P<bare_fraction>\.\d+))(?P<exponent>[eE][+-]?\d+)?\s*$")

ENVIRONMENT_FALLBACKS = {
    "client_id": CONSTANTS.ENV_CLIENT_ID,
    "api_key": CONSTANTS.ENV_API_KEY,
    "api_secret": CONSTANTS.ENV_API_SECRET,
    "ccy1": CONSTANTS.ENV_CCY_1,
    "ccy2": CONSTANTS.ENV_CCY_2,
}


class CexioConfigMap(BaseModel):
    """
    Client settings. Every field left out (or given empty) is read from its CEXIO_* environment variable.
    """
    model_config = ConfigDict(frozen=True, extra="forbid", title="cexio")

    client_id: Optional[str] = None
    api_key: Optional[SecretStr] = None
    api_secret: Optional[SecretStr] = None
    ccy1: Optional[str] = None
    ccy2: Optional[str] = None
    retry_policy: RetryPolicy = Field(default_factory=RetryPolicy)

    @model_validator(mode="before")
    @classmethod
    def fill_from_environment(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for field_name, env_var in ENVIRONMENT_FALLBACKS.items():
            if not data.get(field_name):
                data[field_name] = os.environ.get(env_var) or None
        return data

    def secret_value(self, field_name: str) -> Optional[str]:
        secret: Optional[SecretStr] = getattr(self, field_name)
        return secret.get_secret_value() if secret is not None else None


def format_decimal(value: Any, max_decimal_places: int = CONSTANTS.MAX_DECIMAL_PLACES) -> Any:
    """
    Renders an amount with exactly `max_decimal_places` fractional digits, e.g. 650.3232 -> "650.32320000".
    Values that are not finite numbers are returned untouched. Booleans are not amounts and raise `TypeError`.
    """
    if isinstance(value, bool):
        raise TypeError(f"Cannot format {value!r} as a decimal amount.")
    try:
        decimal_value = Decimal(str(value).strip())
    except InvalidOperation:
        return value
    if not decimal_value.is_finite():
        return value
    quantum = Decimal(1).scaleb(-max_decimal_places)
    with localcontext() as context:
        context.prec = max(context.prec, decimal_value.adjusted() + max_decimal_places + 2)
        rounded = decimal_value.quantize(quantum, rounding=ROUND_HALF_UP)
    return f"{rounded:f}"


def parse_numeric_string(value: str) -> Any:
    match = NUMERIC_STRING_REGEX.match(value)
    if match is None:
        return value
    try:
        if match.group("fraction") or match.group("bare_fraction") or match.group("exponent"):
            return float(value)
        return int(value)
    except ValueError:
        # digit strings past the interpreter conversion limit
        return value


def parse_numeric_strings(value: Any) -> Any:
    """
    Walks a decoded response and turns every string holding a number into an int or a float.
    Lists keep their order and dicts their keys; anything else is returned as is.
    """
    if isinstance(value, dict):
        return {key: parse_numeric_strings(item) for key, item in value.items()}
    if isinstance(value, list):
        return [parse_numeric_strings(item) for item in value]
    if isinstance(value, str):
        return parse_numeric_string(value)
    return value


def is_success_status(payload: Dict[str, Any]) -> bool:
    return payload.get("ok", CONSTANTS.SUCCESS_STATUS) == CONSTANTS.SUCCESS_STATUS and "error" not in payload
