"""Provides emulator fields, step by step, from a data reader."""

from __future__ import annotations

import enum
import logging
import re
from collections.abc import Iterable

import numpy as np

from .config_reader import ConfigReader
from .reader import FIELD_DTYPE, DataReader, EmulatorError, parse_param

log = logging.getLogger(__name__)

_GRID_PATTERN = re.compile(r"([FNO])([1-9][0-9]*)")
_LEVTYPE_PRIORITY = {"sfc": 0, "ml": 1}


class DataSourceType(enum.Enum):
    """Kinds of data source the emulator can be fed from."""

    GRIB = "grib"
    CONFIG = "config"
    INVALID = "invalid"


def sort_level_types(levtypes: Iterable[str]) -> list[str]:
    """Order level types as ``sfc``, then ``ml``, then the others alphabetically."""
    return sorted(levtypes, key=lambda levtype: (_LEVTYPE_PRIORITY.get(levtype, 2), levtype))


def _gaussian_latitudes(n: int) -> np.ndarray:
    nodes, _ = np.polynomial.legendre.leggauss(2 * n)
    return np.degrees(np.arcsin(nodes))[::-1]


def _grid_points(grid_name: str) -> np.ndarray:
    """Lon/lat points of a Gaussian grid, north to south and west to east.

    ``F<n>`` and ``N<n>`` grids are served on the full Gaussian grid of
    ``4n`` longitudes per latitude; ``O<n>`` grids are octahedral.
    """
    match = _GRID_PATTERN.fullmatch(grid_name)
    if match is None:
        raise EmulatorError(f"Grid '{grid_name}' is not supported")
    kind, n = match.group(1), int(match.group(2))
    latitudes = _gaussian_latitudes(n)
    rows = []
    for index, lat in enumerate(latitudes):
        if kind == "O":
            from_pole = index + 1 if index < n else 2 * n - index
            nlon = 4 * from_pole + 16
        else:
            nlon = 4 * n
        lons = 360.0 * np.arange(nlon) / nlon
        rows.append(np.column_stack([lons, np.full(nlon, lat)]))
    return np.concatenate(rows)


class NWPDataProvider:
    """Requests model data from a reader and serves it as ``(points, levels)`` fields.

    ``params`` maps each field to its level types and their levels, e.g.
    ``{"u": {"sfc": ["0"], "ml": ["1", "137"]}}``.
    """

    def __init__(self, source_type, path, lonlat=None, rng=None) -> None:
        self.source_type = DataSourceType(source_type)
        self.reader: DataReader = self._make_reader(self.source_type, path, rng)
        self.grid_name = self.reader.grid_name
        log.info("Grid name %s, params %s", self.grid_name, self.reader.params)

        self.params: dict[str, dict[str, list[str]]] = {}
        for param in self.reader.params:
            short_name, levtype, level = parse_param(param)
            self.params.setdefault(short_name, {}).setdefault(levtype, []).append(level)

        self.levels = max(
            [1, *(sum(len(levels) for levels in levtypes.values()) for levtypes in self.params.values())]
        )

        if lonlat is None:
            points = _grid_points(self.grid_name)
        else:
            points = np.array(lonlat, dtype=float, copy=True)
            if points.ndim != 2 or points.shape[1] != 2:
                raise EmulatorError("lonlat must be an (n, 2) array of lon, lat points")
        self.lonlat = points
        self.reader.set_reader_area(self.lonlat)

        self.fields: dict[str, np.ndarray] = {}
        self.level_order: dict[str, list[str]] = {}
        for name in sorted(self.params):
            levtypes = self.params[name]
            three_d = len(levtypes) > 1 or len(next(iter(levtypes.values()))) > 1
            nlevels = self.levels if three_d else 1
            self.fields[name] = np.zeros((self.lonlat.shape[0], nlevels), dtype=FIELD_DTYPE)
            self.level_order[name] = sort_level_types(levtypes)
            log.info("Created field '%s' with shape %s", name, self.fields[name].shape)

    @staticmethod
    def _make_reader(source_type: DataSourceType, path, rng) -> DataReader:
        if source_type is DataSourceType.CONFIG:
            log.info("Emulator will use config as source type from %s", path)
            return ConfigReader(path, rng=rng)
        raise EmulatorError(f"Emulator source type '{source_type.value}' not supported")

    @property
    def step(self) -> int:
        """The number of steps the reader has completed."""
        return self.reader.step

    def get_step_data(self) -> bool:
        """Populate the fields for the next step; False once every step has been provided."""
        if self.reader.done():
            return False
        while (message := self.reader.next_message()) is not None:
            field = self.fields[message.short_name]
            level_index = self.find_level_index(message.short_name, message.levtype, message.level)
            field[:, level_index] = message.data
        return True

    def find_level_index(self, name: str, levtype: str, level: str) -> int:
        """Column of field ``name`` that holds ``level`` of ``levtype``.

        Levels of the types that come earlier in the level order are counted first.
        """
        try:
            levtypes = self.params[name]
            index = levtypes[levtype].index(str(level))
        except (KeyError, ValueError):
            raise EmulatorError(f"Field '{name}' has no level '{levtype},{level}'") from None
        for previous in self.level_order[name]:
            if previous == levtype:
                break
            index += len(levtypes[previous])
        return index