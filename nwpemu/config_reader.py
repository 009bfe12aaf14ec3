"""Data reader that generates emulator fields from a YAML configuration."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from pathlib import Path

import numpy as np
import yaml

from .generators import (
    apply_cardinal_sine,
    apply_gaussian,
    apply_random,
    apply_step,
    apply_vortex_rollup,
)
from .levels import level_config_key
from .reader import (
    DEFAULT_STEP_COUNT_LIMIT,
    FIELD_DTYPE,
    ConfigError,
    DataReader,
    EmulatorError,
    Message,
    parse_param,
)
from .validation import validate_config

log = logging.getLogger(__name__)

_YAML_SUFFIXES = (".yml", ".yaml")
_INT_TAG = "tag:yaml.org,2002:int"


class _Loader(yaml.SafeLoader):
    """Safe loader that keeps level ranges such as ``2:5`` as strings.

    YAML 1.1 reads such scalars as base 60 integers, which would turn
    level range keys into unrelated numbers.
    """


_Loader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _INT_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
_Loader.add_implicit_resolver(
    _INT_TAG,
    re.compile(
        r"^(?:[-+]?0b[0-1_]+"
        r"|[-+]?0[0-7_]+"
        r"|[-+]?(?:0|[1-9][0-9_]*)"
        r"|[-+]?0x[0-9a-fA-F_]+)$"
    ),
    list("-+0123456789"),
)


def load_config(path) -> dict:
    """Read a YAML emulator configuration and return its ``emulator`` section."""
    path = Path(path)
    if path.suffix not in _YAML_SUFFIXES:
        raise ConfigError(f"Source '{path}' should be a YAML file")
    try:
        with path.open("r", encoding="utf-8") as stream:
            document = yaml.load(stream, Loader=_Loader)
    except OSError as exc:
        raise ConfigError(f"Could not read configuration '{path}': {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Configuration '{path}' is not valid YAML: {exc}") from exc
    if not isinstance(document, Mapping) or not isinstance(document.get("emulator"), Mapping):
        raise ConfigError(f"Configuration '{path}' has no 'emulator' section")
    return dict(document["emulator"])


class ConfigReader(DataReader):
    """Generates field values from generation functions described in a configuration.

    The configuration fixes the number of steps, the grid, the number of
    vertical levels, the fields offered and how each of them is populated.
    """

    def __init__(self, path, step_count_limit: int = DEFAULT_STEP_COUNT_LIMIT, rng=None) -> None:
        super().__init__(step_count_limit)
        self.config = load_config(path)
        self.rng = rng if rng is not None else np.random.default_rng()
        self.area: np.ndarray | None = None

        grid_name = self.config.get("grid_identifier")
        if not isinstance(grid_name, str) or not grid_name:
            raise ConfigError("No 'grid_identifier' found in the configuration")
        self.grid_name = grid_name

        self.model_levels = 1
        if "n_steps" in self.config:
            self.step_count_limit = int(self.config["n_steps"])
        else:
            log.warning("No steps found in config, will use default (%d)...", self.step_count_limit)
        if "vertical_levels" in self.config:
            self.model_levels = int(self.config["vertical_levels"])
        else:
            log.warning("No vertical levels number found in config, will use 1 as default...")

        fields = self.config.get("fields")
        if not isinstance(fields, Mapping):
            raise ConfigError("No fields configured")
        for field_name, field_value in fields.items():
            field_config = self._resolve_field(fields, field_name, field_value)
            if "levtype" in field_config:
                self.params.append(f"{field_name},sfc,0")
            else:
                self.params.extend(
                    f"{field_name},ml,{level}" for level in range(1, self.model_levels + 1)
                )

        validate_config(self.config, self.model_levels)

    @staticmethod
    def _resolve_field(fields: Mapping, field_name, field_value) -> Mapping:
        if isinstance(field_value, Mapping):
            return field_value
        if isinstance(field_value, str) and isinstance(fields.get(field_value), Mapping):
            # The field shares the configuration of the field it names.
            return fields[field_value]
        raise ConfigError(
            f"Field '{field_name}' must be either a subconfiguration or a valid "
            "field with subconfiguration"
        )

    def set_reader_area(self, lonlat) -> None:
        """Store a copy of the ``(n, 2)`` lon/lat points the reader generates data for."""
        area = np.array(lonlat, dtype=float, copy=True)
        if area.ndim != 2 or area.shape[1] != 2:
            raise EmulatorError("The reader area must be an (n, 2) array of lon, lat points")
        self.area = area

    def done(self) -> bool:
        """True once data has been generated for every step."""
        return self.step >= self.step_count_limit

    def _function_config(self, short_name: str, level: str) -> Mapping | None:
        fields = self.config["fields"]
        field_config = self._resolve_field(fields, short_name, fields[short_name])
        apply = field_config["apply"]
        if "levels" not in apply:
            return apply
        levels = apply["levels"]
        key = level_config_key(level, levels.keys())
        if key is None:
            return None
        return levels[key]

    def _apply(self, name: str, options: Mapping, values: np.ndarray) -> None:
        default_area = self.config.get("area")
        if name == "vortex_rollup":
            apply_vortex_rollup(options, self.area, values, self.step, default_area)
            return
        functions = {
            "random": apply_random,
            "step": apply_step,
            "sinc": apply_cardinal_sine,
            "gaussian": apply_gaussian,
        }
        try:
            function = functions[name]
        except KeyError:
            raise ConfigError(f"Function name '{name}' is invalid") from None
        function(options, self.area, values, self.step, default_area, self.rng)

    def next_message(self) -> Message | None:
        """Generate the next parameter of the current step.

        Returns None, and moves on to the next step, once every parameter of
        the current step has been generated or all steps are done.
        """
        if self.area is None:
            raise EmulatorError(
                "The reader area is not set, please set before requesting data"
            )
        if self.index == len(self.params) or self.done():
            self.index = 0
            self.step += 1
            return None
        short_name, levtype, level = parse_param(self.params[self.index])
        data = np.zeros(self.area.shape[0], dtype=FIELD_DTYPE)
        function_config = self._function_config(short_name, level)
        if function_config is not None:
            for name, options in function_config.items():
                self._apply(name, options, data)
        self.index += 1
        return Message(short_name, levtype, level, data)