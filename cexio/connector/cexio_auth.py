import hashlib
import hmac
from typing import Any, Dict, Optional
from urllib.parse import urlencode

import cexio.connector.cexio_constants as CONSTANTS
from cexio.core.utils.tracking_nonce import NonceCreator
from cexio.core.web_assistant.auth import AuthBase
from cexio.core.web_assistant.connections.data_types import RESTRequest
from cexio.exceptions import CexioConfigurationError


class CexioAuth(AuthBase):
    def __init__(self, client_id: Optional[str], api_key: Optional[str], secret_key: Optional[str]):
        self.client_id = client_id
        self.api_key = api_key
        self.secret_key = secret_key
        self._nonce_creator = NonceCreator.for_milliseconds()

    async def rest_authenticate(self, request: RESTRequest) -> RESTRequest:
        """
        Replaces the request parameters with the signed form body expected by private endpoints
        :param request: the request to be configured for authenticated interaction, with its endpoint
        parameters (if any) in `data`
        """
        body = urlencode(self.generate_auth_dict(request.data), doseq=True)
        headers = dict(request.headers or {})
        headers["Content-Type"] = CONSTANTS.FORM_CONTENT_TYPE
        headers["Content-Length"] = str(len(body))
        request.data = body
        request.headers = headers
        return request

    def generate_auth_dict(self, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Generates a fresh nonce and the signature for it
        :param params: endpoint parameters, they never override nonce or key
        :return: the request parameters including nonce, key and signature
        """
        self._check_credentials()
        nonce = str(self._nonce_creator.get_tracking_nonce())
        auth_dict = {
            "nonce": nonce,
            "key": self.api_key,
        }
        for key, value in (params or {}).items():
            auth_dict.setdefault(key, value)
        auth_dict["signature"] = self._generate_signature(nonce)
        return auth_dict

    def _generate_signature(self, nonce: str) -> str:
        message = nonce + self.client_id + self.api_key
        return hmac.new(
            self.secret_key.encode("utf-8"),
            message.encode("utf-8"),
            hashlib.sha256).hexdigest().upper()

    def _check_credentials(self):
        missing = [name for name, value in (("client id", self.client_id),
                                            ("API key", self.api_key),
                                            ("API secret", self.secret_key)) if not value]
        if missing:
            raise CexioConfigurationError(f"Authenticated requests need the CEX.io {', '.join(missing)}.")
