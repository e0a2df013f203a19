from __future__ import annotations


class OandaError(RuntimeError):
    """Base class for failures talking to the OANDA REST API."""


class CredentialsError(OandaError):
    pass


class TransportError(OandaError):
    pass


class ResponseDecodeError(OandaError):
    pass


class MissingPriceLevelError(OandaError):
    pass


class ApiStatusError(OandaError):
    def __init__(self, message: str, status_code: int, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body
