"""Rectangular focus areas on the globe."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class FocusArea:
    """A lon/lat box; longitudes in [0, 360], latitudes in [-90, 90].

    The west longitude may exceed the east one when the box spans longitude 0/360.
    """

    west: float
    east: float
    south: float
    north: float

    def contains(self, lon, lat):
        """Whether the point(s) lie in the box. Accepts scalars or numpy arrays."""
        lon = np.asarray(lon, dtype=float)
        lat = np.asarray(lat, dtype=float)
        in_lat = (lat >= self.south) & (lat <= self.north)
        if self.west < self.east:
            in_lon = (lon >= self.west) & (lon <= self.east)
        else:
            in_lon = ((lon >= self.west) & (lon <= 360.0)) | (lon <= self.east)
        result = in_lat & in_lon
        return bool(result) if result.ndim == 0 else result


def validate_area(area: Sequence[float]) -> bool:
    """Check an area is ``[NW_lat, NW_lon, SE_lat, SE_lon]`` with valid ranges."""
    if len(area) != 4:
        return False
    if any(not -180.0 <= area[i] <= 180.0 for i in (1, 3)):
        return False
    if any(not -90.0 <= area[i] <= 90.0 for i in (0, 2)):
        return False
    return area[0] >= area[2]


def focus_area_from_options(
    options: Mapping,
    default_area: Sequence[float] | None,
    step: int,
) -> FocusArea | None:
    """Build the focus area for a function at a given step.

    The area comes from the options, else from the emulator-wide default; a
    translation, if present, moves it by ``translation * step``. Returns None
    when the whole globe is to be used.
    """
    lat_shift, lon_shift = 0.0, 0.0
    if "translation" in options:
        translation = list(options["translation"])
        lat_shift = translation[0] * step
        lon_shift = translation[1] * step

    if "area" in options:
        coords = list(options["area"])
    elif default_area is not None:
        coords = list(default_area)
    else:
        coords = []
    if not coords:
        return None

    north = max(-90.0, min(90.0, coords[0] + lat_shift))
    south = max(-90.0, min(90.0, coords[2] + lat_shift))
    west = math.fmod(coords[1] + lon_shift + 180.0, 360.0)
    east = math.fmod(coords[3] + lon_shift + 180.0, 360.0)
    if west < 1e-6:
        west += 360.0
    if east < 1e-6:
        east += 360.0
    return FocusArea(west, east, south, north)