"""
Request signing for the adcirc.live API.

Each request proves possession of the shared secret without sending it:

    nonce         = int(now * 100000)
    signature     = sha256_hex(str(nonce) + secret)
    Authorization = base64("{key}:{signature}")

The nonce travels in the x-auth-nonce header so the server can recompute
the signature. Nonces follow the wall clock; two calls within the same
10 microsecond tick produce the same nonce.
"""

import base64
import hashlib
import time
from dataclasses import dataclass
from typing import Callable

from adcirclive.config import DEFAULT_API_VERSION, Credentials
from adcirclive.logging_utils import get_logger

logger = get_logger(__name__)

NONCE_SCALE = 100000

API_VERSION_HEADER = "x-adcirclive-api-version"
NONCE_HEADER = "x-auth-nonce"
AUTHORIZATION_HEADER = "Authorization"
CONTENT_TYPE_HEADER = "Content-Type"
JSON_CONTENT_TYPE = "application/json"


def make_nonce(now: float) -> int:
    """Scale a POSIX timestamp into the integer nonce."""
    return int(now * NONCE_SCALE)


def compute_signature(nonce: int, api_secret: str) -> str:
    """Hex SHA-256 over the nonce followed by the secret."""
    return hashlib.sha256(f"{nonce}{api_secret}".encode("utf-8")).hexdigest()


def build_authorization(api_key: str, signature: str) -> str:
    """Base64 of 'key:signature'."""
    return base64.b64encode(f"{api_key}:{signature}".encode("utf-8")).decode("ascii")


@dataclass(frozen=True)
class SignedRequestContext:
    """Authentication material for exactly one request."""
    nonce: int
    signature: str
    authorization: str
    api_version: str = DEFAULT_API_VERSION

    def headers(self) -> dict[str, str]:
        return {
            API_VERSION_HEADER: self.api_version,
            NONCE_HEADER: str(self.nonce),
            AUTHORIZATION_HEADER: self.authorization,
            CONTENT_TYPE_HEADER: JSON_CONTENT_TYPE,
        }


class Signer:
    """
    Produces a fresh SignedRequestContext per request.

    Usage:
        signer = Signer(Credentials("key", "secret"))
        headers = signer.headers()  # new nonce every call
    """

    def __init__(
        self,
        credentials: Credentials,
        clock: Callable[[], float] = time.time,
        api_version: str = DEFAULT_API_VERSION,
    ):
        """
        Args:
            credentials: API key/secret pair.
            clock: Source of the current time in seconds (sub-second resolution).
            api_version: Value of the API version header.
        """
        self.credentials = credentials
        self.clock = clock
        self.api_version = api_version
        self._last_nonce: int | None = None

    def sign(self) -> SignedRequestContext:
        """Sign at the current clock reading."""
        nonce = make_nonce(self.clock())
        if self._last_nonce is not None and nonce <= self._last_nonce:
            # Clock did not advance a full tick; the server may see a replay.
            logger.debug("Nonce %d does not exceed previous nonce %d", nonce, self._last_nonce)
        self._last_nonce = nonce

        signature = compute_signature(nonce, self.credentials.api_secret)
        return SignedRequestContext(
            nonce=nonce,
            signature=signature,
            authorization=build_authorization(self.credentials.api_key, signature),
            api_version=self.api_version,
        )

    def headers(self) -> dict[str, str]:
        """Header set for one outgoing request."""
        return self.sign().headers()
