import os
from typing import Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel

from conbeekit.api.errors import ConfigurationError

HOST_VAR = "CONBEE_HOST"
API_KEY_VAR = "CONBEE_API_KEY"
TIMEOUT_VAR = "CONBEE_TIMEOUT"


class BridgeSettings(BaseModel):
    host: str
    api_key: str
    timeout: Optional[float] = None  # seconds, None = wait forever

    @classmethod
    def from_env(cls, dotenv: bool = True, *, host: Optional[str] = None, api_key: Optional[str] = None,
                 timeout: Optional[float] = None) -> "BridgeSettings":
        """Reads CONBEE_HOST / CONBEE_API_KEY / CONBEE_TIMEOUT.

        A ``.env`` file found upwards from the working directory is loaded
        first; variables already set in the process environment win. Any
        argument that is not None wins over both.
        """
        if dotenv:
            load_dotenv(find_dotenv(usecwd=True))

        host = host or os.getenv(HOST_VAR)
        api_key = api_key or os.getenv(API_KEY_VAR)
        if not host or not api_key:
            raise ConfigurationError(f"{HOST_VAR} and {API_KEY_VAR} must be set")

        if timeout is None:
            raw_timeout = os.getenv(TIMEOUT_VAR)
            if raw_timeout:
                try:
                    timeout = float(raw_timeout)
                except ValueError:
                    raise ConfigurationError(f"{TIMEOUT_VAR} is not a number: {raw_timeout!r}") from None

        return cls(host=host, api_key=api_key, timeout=timeout)
