from typing import Optional


class ConbeeError(Exception):
    """Base class for everything this package raises."""


class ConfigurationError(ConbeeError):
    pass


class BridgeConnectionError(ConbeeError):
    """The bridge could not be reached or the body could not be read."""


class BridgeDecodeError(ConbeeError):
    """The bridge answered, but not with the JSON shape we expected."""


class BridgeStatusError(ConbeeError):
    """The bridge answered with a non-2xx status code.

    deCONZ reports most failures (unknown light, bad key, ...) as a JSON
    array of error records, so those are decoded and kept on the exception
    when the body allows it.
    """

    def __init__(self, status_code: int, url: str, responses: Optional[list] = None):
        self.status_code = status_code
        self.url = url
        self.responses = responses or []
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        message = f"bridge returned HTTP {self.status_code} for {self.url}"
        descriptions = [r.error.description for r in self.responses if r.error is not None]
        if descriptions:
            message += ": " + "; ".join(descriptions)
        return message
