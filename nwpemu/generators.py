"""Functions that generate synthetic field values on lon/lat points.

Every ``apply_*`` function fills ``values`` in place for the points of
``lonlat`` that lie in the function's focus area, leaves the other points
untouched, and returns ``values``. ``lonlat`` is an ``(n, 2)`` array holding
longitudes (in [0, 360]) in its first column and latitudes in its second.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence

import numpy as np

from .area import FocusArea, focus_area_from_options
from .reader import FIELD_DTYPE

EARTH_RADIUS = 6371229.0

# Scaling of a sum of cardinal sines: sinc reaches about -0.21723 at its minimum.
_SINC_MINIMUM = 0.21723


def _as_result(array: np.ndarray):
    return float(array) if array.ndim == 0 else array


def _rng(rng) -> np.random.Generator:
    return rng if rng is not None else np.random.default_rng()


def _area_mask(lonlat: np.ndarray, focus: FocusArea | None) -> np.ndarray:
    lonlat = np.asarray(lonlat, dtype=float)
    if focus is None:
        return np.ones(lonlat.shape[0], dtype=bool)
    return np.asarray(focus.contains(lonlat[:, 0], lonlat[:, 1]), dtype=bool)


def sinc2d(lon, lat, centre_lon, centre_lat, spread):
    """Cardinal sine of the great-circle distance between a point and a centre.

    The larger ``spread`` is, the tighter the blob. Accepts scalars or arrays.
    """
    lat_r = np.radians(np.asarray(lat, dtype=float))
    c_lat = math.radians(centre_lat)
    dlon = np.radians(np.asarray(lon, dtype=float) - centre_lon)
    cos_dist = np.sin(lat_r) * math.sin(c_lat) + np.cos(lat_r) * math.cos(c_lat) * np.cos(dlon)
    dist = np.arccos(np.clip(cos_dist, -1.0, 1.0))
    scaled = math.pi * dist * spread
    with np.errstate(divide="ignore", invalid="ignore"):
        result = np.where(dist <= 1e-6, 1.0, np.sin(scaled) / scaled)
    return _as_result(np.asarray(result))


def gaussian2d(lon, lat, mu_lon, mu_lat, sigma_lon, sigma_lat):
    """Two dimensional gaussian in lon/lat with its peak at ``(mu_lon, mu_lat)``."""
    lon = np.asarray(lon, dtype=float)
    lat = np.asarray(lat, dtype=float)
    exponent = 0.5 * ((lat - mu_lat) / sigma_lat) ** 2 + 0.5 * ((lon - mu_lon) / sigma_lon) ** 2
    return _as_result(np.exp(-exponent))


def vortex_rollup(lon, lat, t):
    """Vortex roll-up tracer field at time ``t``; lon and lat are in degrees.

    The analytic solution of a moving vortex on the sphere, taking values in [0, 2].
    """
    lon_r = np.radians(np.asarray(lon, dtype=float))
    lat_r = np.radians(np.asarray(lat, dtype=float))
    period = 1.0
    rotation = 2.0 * math.pi / period
    t = t * period
    shifted = lon_r - rotation * t
    lambda_prime = np.arctan2(-np.cos(shifted), np.tan(lat_r))
    rho = 3.0 * np.sqrt(np.maximum(0.0, 1.0 - np.cos(lat_r) ** 2 * np.sin(shifted) ** 2))
    with np.errstate(divide="ignore", invalid="ignore"):
        omega = np.where(
            rho != 0.0,
            0.5 * 3.0 * math.sqrt(3.0) * EARTH_RADIUS * rotation
            * (1.0 / np.cosh(rho)) ** 2 * np.tanh(rho) / rho,
            0.0,
        )
    q = 1.0 - np.tanh(0.2 * rho * np.sin(lambda_prime - omega / EARTH_RADIUS * t))
    return _as_result(np.asarray(q))


def sample_centres(
    options: Mapping,
    default_area: Sequence[float] | None,
    rng=None,
) -> np.ndarray:
    """Draw ``options["modes"]`` random centres, as an ``(n, 2)`` array of lon, lat.

    Centres are drawn over the options' area, else the default area, else the
    whole globe. An area is not expected to span longitude 0/360.
    """
    rng = _rng(rng)
    nmodes = int(options["modes"])
    min_lat, max_lat, min_lon, max_lon = -90.0, 90.0, 0.0, 360.0
    if "area" in options:
        coords = list(options["area"])
    elif default_area is not None:
        coords = list(default_area)
    else:
        coords = []
    if coords:
        min_lon = coords[1] + 180.0
        max_lon = coords[3] + 180.0
        min_lat = coords[2]
        max_lat = coords[0]
    lons = rng.uniform(min_lon, max_lon, size=nmodes)
    lats = rng.uniform(min_lat, max_lat, size=nmodes)
    return np.column_stack([lons, lats])


def apply_vortex_rollup(options, lonlat, values, step, default_area=None):
    """Fill ``values`` with a vortex roll-up at time ``time_variation * step``."""
    lonlat = np.asarray(lonlat, dtype=float)
    focus = focus_area_from_options(options, default_area, step)
    mask = _area_mask(lonlat, focus)
    time = float(options["time_variation"]) * step
    values[mask] = vortex_rollup(lonlat[mask, 0], lonlat[mask, 1], time)
    return values


def apply_random(options, lonlat, values, step, default_area=None, rng=None):
    """Fill ``values`` with random draws from a uniform, normal or bernoulli distribution."""
    rng = _rng(rng)
    lonlat = np.asarray(lonlat, dtype=float)
    focus = focus_area_from_options(options, default_area, step) if options.get("use_area", True) else None
    size = len(values)
    distribution = options.get("distribution", "uniform")
    if distribution == "bernoulli":
        probability = float(options.get("probability", 0.5))
        success = float(options.get("value", 1.0))
        random_values = np.where(rng.random(size) < probability, success, 0.0)
    elif distribution == "uniform":
        random_values = rng.uniform(float(options.get("min", 0.0)), float(options.get("max", 1.0)), size)
    elif distribution == "normal":
        random_values = rng.normal(float(options.get("mean", 0.5)), float(options.get("stddev", 1.0)), size)
    else:
        random_values = np.zeros(size)
    mask = _area_mask(lonlat, focus)
    values[mask] = np.asarray(random_values, dtype=FIELD_DTYPE)[mask]
    return values


def apply_step(options, lonlat, values, step, default_area=None, rng=None):
    """Fill ``values`` with ``value + variation * step``.

    With a ``probability``, each point receives the step value only with that
    probability and zero otherwise.
    """
    lonlat = np.asarray(lonlat, dtype=float)
    step_value = float(options["value"])
    variation = float(options.get("variation", 0.0))
    focus = focus_area_from_options(options, default_area, step)
    mask = _area_mask(lonlat, focus)
    if "probability" in options:
        random_options = dict(options)
        random_options["distribution"] = "bernoulli"
        random_options["use_area"] = False
        random_values = apply_random(
            random_options, lonlat, np.zeros(len(values), dtype=FIELD_DTYPE), step, default_area, rng
        )
        stepped = np.where(np.abs(random_values) > 1e-6, random_values + variation * step, 0.0)
        values[mask] = stepped[mask]
    else:
        values[mask] = step_value + variation * step
    return values


def apply_cardinal_sine(options, lonlat, values, step, default_area=None, rng=None):
    """Fill ``values`` with a sum of ``modes`` cardinal sines scaled into [min, max].

    With ``sink`` the blobs are troughs rather than peaks.
    """
    rng = _rng(rng)
    lonlat = np.asarray(lonlat, dtype=float)
    focus = focus_area_from_options(options, default_area, step)
    nmodes = int(options["modes"])
    spread = float(options.get("spread", 10.0))
    sink = bool(options.get("sink", False))
    low = float(options.get("min", 0.0))
    high = float(options.get("max", 1.0))

    centres = sample_centres(options, default_area, rng)
    spreads = rng.uniform(90.0 / spread, 180.0 / spread, size=nmodes)

    mask = _area_mask(lonlat, focus)
    lon, lat = lonlat[mask, 0], lonlat[mask, 1]
    total = np.zeros(lon.shape[0])
    for (c_lon, c_lat), mode_spread in zip(centres, spreads):
        total += sinc2d(lon, lat, c_lon, c_lat, mode_spread)
    scale = (high - low) / (1.0 + _SINC_MINIMUM) / nmodes
    if sink:
        values[mask] = low + (nmodes - total) * scale
    else:
        values[mask] = low + (total + _SINC_MINIMUM * nmodes) * scale
    return values


def apply_gaussian(options, lonlat, values, step, default_area=None, rng=None):
    """Fill ``values`` with a sum of ``modes`` gaussians scaled into [min, max].

    Standard deviations are drawn in [1, max_stddev]. With ``sink`` the blobs are troughs.
    """
    rng = _rng(rng)
    lonlat = np.asarray(lonlat, dtype=float)
    focus = focus_area_from_options(options, default_area, step)
    nmodes = int(options["modes"])
    sink = bool(options.get("sink", False))
    low = float(options.get("min", 0.0))
    high = float(options.get("max", 1.0))
    max_stddev = float(options.get("max_stddev", 1.0))

    centres = sample_centres(options, default_area, rng)
    stddevs = rng.uniform(1.0, max_stddev, size=2 * nmodes).reshape(nmodes, 2)

    mask = _area_mask(lonlat, focus)
    lon, lat = lonlat[mask, 0], lonlat[mask, 1]
    total = np.zeros(lon.shape[0])
    for (mu_lon, mu_lat), (sigma_lon, sigma_lat) in zip(centres, stddevs):
        total += gaussian2d(lon, lat, mu_lon, mu_lat, sigma_lon, sigma_lat)
    if sink:
        values[mask] = low + (nmodes - total) * (high - low) / nmodes
    else:
        values[mask] = low + total * (high - low) / nmodes
    return values