"""
Exception hierarchy for the adcirclive client.

Every error the client raises on purpose derives from AdcircLiveError and
carries the process exit code main() should return for it.
"""

from typing import Any


class AdcircLiveError(Exception):
    """Base class for all client errors."""

    exit_code = 1


class ConfigurationError(AdcircLiveError):
    """Configuration file or credentials are missing or unusable."""


class MissingOptionsError(AdcircLiveError):
    """One or more required command-line options were not supplied."""

    exit_code = 2

    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__(f"missing required options: {', '.join(self.missing)}")


class UnknownForcingKindError(AdcircLiveError):
    """The requested met kind has no bundled defaults record."""

    exit_code = 2

    def __init__(self, met_kind: str, known: list[str]):
        self.met_kind = met_kind
        self.known = list(known)
        super().__init__(
            f"unknown met_kind '{met_kind}' (expected one of: {', '.join(self.known)})"
        )


class TransportError(AdcircLiveError):
    """The HTTP request could not be performed at all."""

    def __init__(self, method: str, url: str, cause: Exception):
        self.method = method
        self.url = url
        self.cause = cause
        super().__init__(f"{method} {url} failed: {cause}")


class RemoteError(AdcircLiveError):
    """The service answered with an unsuccessful HTTP status."""

    def __init__(self, status: int, url: str, body: str = ""):
        self.status = status
        self.url = url
        self.body = body
        excerpt = body[:200]
        message = f"{url} returned HTTP {status}"
        if excerpt:
            message += f": {excerpt}"
        super().__init__(message)


class MeshNotFoundError(AdcircLiveError):
    """The named mesh is not in the remote catalog."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"mesh '{name}' not found in catalog")


class UnexpectedResponseError(AdcircLiveError):
    """A successful response lacks the data the command needs."""

    def __init__(self, url: str, reason: str, body: str = ""):
        self.url = url
        self.reason = reason
        self.body = body
        message = f"{url}: {reason}"
        if body:
            message += f": {body[:200]}"
        super().__init__(message)


class CatalogEntryError(AdcircLiveError):
    """A mesh catalog entry cannot be read."""

    def __init__(self, entry: Any, reason: str):
        self.entry = entry
        self.reason = reason
        super().__init__(f"bad mesh catalog entry {entry!r}: {reason}")
