"""Common reader interface for emulator data sources."""

from __future__ import annotations

import abc
from dataclasses import dataclass, field

import numpy as np

#: Floating point type of the values served to the emulator fields.
FIELD_DTYPE = np.float64

DEFAULT_STEP_COUNT_LIMIT = 100


class EmulatorError(Exception):
    """Base error raised by the emulator."""


class ConfigError(EmulatorError):
    """Raised when an emulator configuration cannot be used."""


def parse_param(param: str) -> tuple[str, str, str]:
    """Split a ``"<shortName>,<levtype>,<level>"`` parameter string."""
    parts = param.split(",")
    if len(parts) < 3 or not parts[0]:
        raise EmulatorError(
            f"Parameter '{param}' must be formatted as '<shortName>,<levtype>,<level>'"
        )
    short_name, levtype, level = parts[:3]
    return short_name, levtype, level


@dataclass
class Message:
    """Raw values of one level of one field, with the metadata that places them."""

    short_name: str
    levtype: str
    level: str
    data: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=FIELD_DTYPE))

    @property
    def param(self) -> str:
        """The parameter string this message belongs to."""
        return f"{self.short_name},{self.levtype},{self.level}"


class DataReader(abc.ABC):
    """Base class for the data sources feeding the emulator.

    Parameters are described by strings of the form ``"<shortName>,<levtype>,<level>"``.
    """

    def __init__(self, step_count_limit: int = DEFAULT_STEP_COUNT_LIMIT) -> None:
        self.grid_name: str = ""
        self.params: list[str] = []
        self.step_count_limit = step_count_limit
        self.step = 0
        self.index = 0

    def set_reader_area(self, lonlat) -> None:
        """Set the lon/lat points this reader generates data for."""
        raise NotImplementedError("This data reader does not support area definition")

    @abc.abstractmethod
    def next_message(self) -> Message | None:
        """Return the next message of the current step, or None once the step is complete."""

    @abc.abstractmethod
    def done(self) -> bool:
        """Return True once data has been provided for every step."""