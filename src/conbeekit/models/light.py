from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional

LABEL_WIDTH = 17


def _line(label: str, value) -> str:
    return f"{label + ':':<{LABEL_WIDTH}}{value}\n"


def _flag(value: bool) -> str:
    return "true" if value else "false"


class State(BaseModel):
    """Desired or observed state of a light.

    Every field is optional and ``None`` means "not specified": only the
    fields a caller actually set end up in the PUT body, so ``on=False`` or
    ``bri=0`` are sent while untouched fields are left alone by the bridge.
    Ranges below are what the bridge accepts; nothing is checked locally.
    """

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    on: Optional[bool] = None
    hue: Optional[int] = None  # 0 - 65535
    effect: Optional[str] = None
    bri: Optional[int] = None  # min = 1, max = 254
    sat: Optional[int] = None
    ct: Optional[int] = None  # min = 154, max = 500
    xy: Optional[tuple[float, float]] = None
    alert: Optional[str] = None
    reachable: Optional[bool] = None
    color_mode: Optional[str] = Field(None, alias="colormode")
    color_loop_speed: Optional[int] = Field(None, alias="colorloopspeed")
    transition_time: Optional[int] = Field(None, alias="transitiontime")

    @field_validator("effect", "alert", "color_mode", mode="before")
    @classmethod
    def _empty_as_absent(cls, value):
        # an empty string carries no information for these
        return value or None

    def set_power(self, on: bool) -> "State":
        self.on = on
        return self

    def set_color_temperature(self, bri: int, ct: int) -> "State":
        """Sets brightness and color temperature (mired), leaves ``on`` alone."""
        self.bri = bri
        self.ct = ct
        return self

    def set_xy(self, x: float, y: float) -> "State":
        self.xy = (x, y)
        return self

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def __str__(self) -> str:
        lines = []
        if self.on is not None:
            lines.append(_line("On", _flag(self.on)))
        if self.hue is not None:
            lines.append(_line("Hue", self.hue))
        if self.effect:
            lines.append(_line("Effect", self.effect))
        if self.bri is not None:
            lines.append(_line("Bri", self.bri))
        if self.sat is not None:
            lines.append(_line("Sat", self.sat))
        # CT, TransitionTime and ColorLoopSpeed are hidden when zero
        if self.ct is not None and self.ct > 0:
            lines.append(_line("CT", self.ct))
        if self.xy is not None:
            x, y = self.xy
            lines.append(_line("XY", f"{x!r}, {y!r}"))
        if self.alert:
            lines.append(_line("Alert", self.alert))
        if self.transition_time is not None and self.transition_time > 0:
            lines.append(_line("TransitionTime", self.transition_time))
        if self.reachable is not None:
            lines.append(_line("Reachable", _flag(self.reachable)))
        if self.color_mode:
            lines.append(_line("ColorMode", self.color_mode))
        if self.color_loop_speed is not None and self.color_loop_speed > 0:
            lines.append(_line("ColorLoopSpeed", self.color_loop_speed))
        return "".join(lines)


class Light(BaseModel):
    """Snapshot of a single light as reported by the bridge.

    ``id`` is not part of the bridge's light body; the client fills it in
    from the URL or the key of the ``/lights`` mapping.
    """

    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    name: str = ""
    id: int = 0
    etag: str = ""
    state: State = Field(default_factory=State)
    has_color: bool = Field(False, alias="hascolor")
    type: str = ""
    manufacturer: str = ""
    model_id: str = Field("", alias="modelid")
    unique_id: str = Field("", alias="uniqueid")
    sw_version: str = Field("", alias="swversion")

    # Some devices report null for these; treat it like a missing key.
    @field_validator("name", "etag", "type", "manufacturer", "model_id", "unique_id", "sw_version",
                     mode="before")
    @classmethod
    def _null_as_empty(cls, value):
        return "" if value is None else value

    @field_validator("has_color", mode="before")
    @classmethod
    def _null_as_false(cls, value):
        return False if value is None else value

    @field_validator("state", mode="before")
    @classmethod
    def _null_as_blank_state(cls, value):
        return {} if value is None else value

    def __str__(self) -> str:
        return (
            _line("ID", self.id)
            + _line("UUID", self.unique_id)
            + _line("Name", self.name)
            + _line("Type", self.type)
            + _line("ModelId", self.model_id)
            + _line("SwVersion", self.sw_version)
            + "State:\n"
            + str(self.state)
        )
