"""
Transport: signed HTTP calls against the adcirc.live service.

Every call asks the Signer for a new header set, so a signature is never
reused. There is no retry or backoff: one logical call is one request.
"""

import json
from dataclasses import dataclass
from typing import Any

import requests

from adcirclive.config import DEFAULT_BASE_URL, ClientConfig
from adcirclive.errors import RemoteError, TransportError, UnexpectedResponseError
from adcirclive.logging_utils import get_logger
from adcirclive.signer import Signer

logger = get_logger(__name__)

MESHES_PATH = "/api/meshes"
ASGS_CONFIG_PATH = "/spa/models/ASGS/api/file/config"
XDMF_STATIC_PATH = "/spa/paraview/XDMF/api/file/static"
XDMF_TIMEVARYING_PATH = "/spa/paraview/XDMF/api/file/timevarying"


@dataclass(frozen=True)
class ApiResponse:
    """Outcome of one HTTP call."""
    ok: bool
    status: int
    body: str
    url: str = ""

    def json(self) -> Any:
        """Decode the body. Malformed JSON raises ValueError."""
        return json.loads(self.body)

    @property
    def content(self) -> str:
        """
        The generated file text the service returns under 'content'.

        Raises:
            UnexpectedResponseError: The body is not an object carrying a
                string 'content' field.
        """
        data = self.json()
        if not isinstance(data, dict) or "content" not in data:
            raise UnexpectedResponseError(self.url, "response has no 'content' field", self.body)
        value = data["content"]
        if not isinstance(value, str):
            raise UnexpectedResponseError(self.url, "'content' field is not text", self.body)
        return value

    def raise_for_status(self) -> "ApiResponse":
        """Raise RemoteError unless the response is successful."""
        if not self.ok:
            raise RemoteError(self.status, self.url, self.body)
        return self


class Transport:
    """
    HTTP client bound to one base URL and one Signer.

    Usage:
        transport = Transport(Signer(credentials))
        response = transport.get("/api/meshes")
        response = transport.post("/spa/...", {"mesh": {...}})
    """

    def __init__(
        self,
        signer: Signer,
        base_url: str = DEFAULT_BASE_URL,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ):
        self.signer = signer
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    @classmethod
    def from_config(cls, config: ClientConfig) -> "Transport":
        """Build a Transport from loaded configuration (credentials required)."""
        signer = Signer(config.require_credentials(), api_version=config.api_version)
        return cls(signer, base_url=config.base_url, timeout=config.timeout)

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def get(self, path: str) -> ApiResponse:
        return self._request("GET", path)

    def post(self, path: str, payload: Any = None) -> ApiResponse:
        body = json.dumps(payload) if payload is not None else None
        return self._request("POST", path, body)

    def close(self) -> None:
        self._session.close()

    def _request(self, method: str, path: str, body: str | None = None) -> ApiResponse:
        url = self.url_for(path)
        headers = self.signer.headers()
        logger.debug("%s %s (nonce %s)", method, url, headers.get("x-auth-nonce"))

        try:
            response = self._session.request(
                method,
                url,
                data=body,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise TransportError(method, url, e) from e

        logger.debug("%s %s -> %d", method, url, response.status_code)
        return ApiResponse(
            ok=response.ok,
            status=response.status_code,
            body=response.text,
            url=url,
        )

    def __enter__(self) -> "Transport":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
