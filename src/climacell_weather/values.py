"""Optional value wrappers for ClimaCell response fields.

Every measured field in a ClimaCell response arrives as a small object such
as ``{"value": 10.5, "units": "C"}``. A field can also be missing from the
response (it was not requested) or sent with a ``null`` value (no data for
that time and place). The wrappers in this module keep those three states
apart while giving callers one way to read them:

    >>> temp, ok = record.weather.temp.get_value()
    >>> if not ok:
    ...     ...  # absent or null, either way there is no reading

``get_value`` never raises. ``FloatValue.value_of(ref)`` does the same for a
reference that may itself be ``None``.
"""

from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import Any, ClassVar, Generic, Optional, Tuple, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .parsers import ZERO_TIME, parse_timestamp

T = TypeVar("T")


class Presence(str, Enum):
    """How a field appeared in the decoded payload."""

    ABSENT = "absent"
    NULL = "null"
    PRESENT = "present"


class OptionalValue(BaseModel, Generic[T]):
    """A decoded field with an optional value and unit of measure.

    Attributes:
        value: The decoded value, None unless presence is PRESENT.
        units: Unit of measure as sent by the API, empty when not sent.
        presence: Whether the field was absent, null or populated.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    ZERO: ClassVar[Any] = None
    # JSON value types accepted as-is; anything else fails decoding
    VALUE_TYPES: ClassVar[Tuple[type, ...]] = ()

    value: Optional[T] = None
    units: str = ""
    presence: Presence = Field(default=Presence.ABSENT, exclude=True)

    @model_validator(mode="before")
    @classmethod
    def detect_presence(cls, data: Any) -> Any:
        """Derive the presence tag from the raw JSON shape."""
        if data is None:
            return {"presence": Presence.ABSENT}
        if not isinstance(data, dict):
            return data
        value = data.get("value")
        units = data.get("units")
        if value is not None and cls.VALUE_TYPES and (
            isinstance(value, bool) or not isinstance(value, cls.VALUE_TYPES)
        ):
            raise ValueError(
                f"{cls.__name__} value must be {' or '.join(t.__name__ for t in cls.VALUE_TYPES)}, "
                f"got {type(value).__name__}"
            )
        return {
            "value": value,
            "units": "" if units is None else units,
            "presence": Presence.NULL if value is None else Presence.PRESENT,
        }

    @classmethod
    def absent(cls):
        """Build the wrapper for a field that was not in the payload."""
        return cls.model_validate(None)

    @classmethod
    def value_of(cls, wrapper: Optional["OptionalValue[T]"]) -> Tuple[T, bool]:
        """Read a wrapper that may itself be None."""
        if wrapper is None:
            return cls.ZERO, False
        return wrapper.get_value()

    @property
    def is_present(self) -> bool:
        return self.presence is Presence.PRESENT

    @property
    def is_null(self) -> bool:
        return self.presence is Presence.NULL

    @property
    def is_absent(self) -> bool:
        return self.presence is Presence.ABSENT

    def get_value(self) -> Tuple[T, bool]:
        """Return ``(value, True)`` if populated, else ``(zero, False)``."""
        if self.presence is not Presence.PRESENT or self.value is None:
            return self.ZERO, False
        return self.value, True


class StringValue(OptionalValue[str]):
    """A text field, e.g. ``precipitation_type`` or ``moon_phase``."""

    ZERO: ClassVar[Any] = ""
    VALUE_TYPES: ClassVar[Tuple[type, ...]] = (str,)


class FloatValue(OptionalValue[float]):
    """A floating-point measurement such as ``temp`` or ``humidity``."""

    ZERO: ClassVar[Any] = 0.0
    VALUE_TYPES: ClassVar[Tuple[type, ...]] = (int, float)


class IntValue(OptionalValue[int]):
    """An integer field such as ``epa_aqi``."""

    ZERO: ClassVar[Any] = 0
    VALUE_TYPES: ClassVar[Tuple[type, ...]] = (int,)


class TimeValue(OptionalValue[dt.datetime]):
    """A timestamp field such as ``sunrise``, sent as RFC 3339 text."""

    ZERO: ClassVar[Any] = ZERO_TIME
    VALUE_TYPES: ClassVar[Tuple[type, ...]] = (str, dt.datetime)

    @field_validator("value", mode="before")
    @classmethod
    def parse_value(cls, v: Any) -> Any:
        if isinstance(v, str):
            return parse_timestamp(v)
        return v


__all__ = [
    "Presence",
    "OptionalValue",
    "StringValue",
    "FloatValue",
    "IntValue",
    "TimeValue",
]
