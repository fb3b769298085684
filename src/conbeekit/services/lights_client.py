import logging
from typing import Optional

from pydantic import TypeAdapter, ValidationError

from conbeekit.api.errors import BridgeDecodeError
from conbeekit.api.http_client import HttpClient
from conbeekit.config.settings import BridgeSettings
from conbeekit.models.api_response import ApiResponse
from conbeekit.models.light import Light, State

logger = logging.getLogger(__name__)

_LIGHT_MAP = TypeAdapter(dict[str, Light])
_RESPONSES = TypeAdapter(list[ApiResponse])


class LightsClient:
    """Reads and changes lights through the bridge REST API.

    Endpoints (relative to ``http://{host}/api/{api_key}``):
        GET lights               -> {"<id>": <light>, ...}
        GET lights/<id>          -> <light>
        PUT lights/<id>          -> [<api response>, ...]
        PUT lights/<id>/state    -> [<api response>, ...]
    """

    def __init__(self, hostname: str, api_key: str, *, timeout: Optional[float] = None):
        self._hostname = hostname
        self._api_key = api_key
        self._http = HttpClient(f"http://{hostname}/api/{api_key}", timeout=timeout, secret=api_key)

    @classmethod
    def from_settings(cls, settings: BridgeSettings) -> "LightsClient":
        return cls(settings.host, settings.api_key, timeout=settings.timeout)

    @classmethod
    def from_env(cls) -> "LightsClient":
        return cls.from_settings(BridgeSettings.from_env())

    @property
    def hostname(self) -> str:
        return self._hostname

    @property
    def api_key(self) -> str:
        return self._api_key

    def __repr__(self) -> str:
        return f"<LightsClient {self._hostname}>"

    def fetch_light(self, light_id: int) -> Light:
        body = self._http.get(f"lights/{light_id}")
        light = self._decode(Light, body, f"light {light_id}")
        # the id in the URL is the one that counts
        light.id = light_id
        return light

    def fetch_all_lights(self) -> list[Light]:
        body = self._http.get("lights")
        by_key = self._decode(_LIGHT_MAP, body, "light list")

        lights = []
        for key, light in by_key.items():
            try:
                light.id = int(key)
            except ValueError:
                raise BridgeDecodeError(f"light list: key {key!r} is not a light id") from None
            lights.append(light)

        # the bridge returns an object, so there is no order to rely on
        lights.sort(key=lambda light: light.id)
        logger.debug("fetched %d lights from %s", len(lights), self._hostname)
        return lights

    def set_light_name(self, light_id: int, name: str) -> list[ApiResponse]:
        body = self._http.put(f"lights/{light_id}", {"name": name})
        return self._decode(_RESPONSES, body, f"rename of light {light_id}")

    def set_light_state(self, light_id: int, state: State) -> list[ApiResponse]:
        body = self._http.put(f"lights/{light_id}/state", state.to_payload())
        return self._decode(_RESPONSES, body, f"state change of light {light_id}")

    @staticmethod
    def _decode(target, body, what: str):
        try:
            if isinstance(target, TypeAdapter):
                return target.validate_python(body)
            return target.model_validate(body)
        except ValidationError as e:
            raise BridgeDecodeError(f"{what}: unexpected response shape: {e}") from e
