"""Validation of the emulator configuration and of generation function options."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping

from .area import validate_area
from .levels import validate_level_keys
from .reader import ConfigError

log = logging.getLogger(__name__)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_integral(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number_list(value) -> bool:
    return isinstance(value, (list, tuple)) and all(_is_number(item) for item in value)


def _optional_number_ok(options: Mapping, *names: str) -> bool:
    return all(name not in options or _is_number(options[name]) for name in names)


def validate_vortex_rollup_opts(options: Mapping) -> bool:
    """Options for ``vortex_rollup``: a numeric ``time_variation`` is required."""
    return _is_number(options.get("time_variation"))


def validate_random_opts(options: Mapping) -> bool:
    """Options for ``random``: all optional, checked per distribution."""
    if not options:
        return True
    if "distribution" in options and not isinstance(options["distribution"], str):
        return False
    distribution = options.get("distribution", "uniform")
    if distribution == "uniform":
        if not _optional_number_ok(options, "min", "max"):
            return False
        return options.get("max", 1.0) >= options.get("min", 0.0)
    if distribution == "bernoulli":
        if not _optional_number_ok(options, "probability", "value"):
            return False
        return 1e-6 <= options.get("probability", 0.5) <= 1.0
    if distribution == "normal":
        if not _optional_number_ok(options, "mean", "stddev"):
            return False
        return options.get("stddev", 1.0) >= 1e-6
    log.error(
        "Distribution '%s' is not supported, pick between 'bernoulli', 'uniform', or 'normal'",
        distribution,
    )
    return False


def validate_step_opts(options: Mapping) -> bool:
    """Options for ``step``: a numeric ``value``, optional ``probability`` and ``variation``."""
    if not _is_number(options.get("value")):
        return False
    if "probability" in options:
        probability = options["probability"]
        if not _is_number(probability) or not 1e-6 <= probability <= 1.0:
            return False
    return _optional_number_ok(options, "variation")


def validate_cardinal_sine_opts(options: Mapping) -> bool:
    """Options for ``sinc``: integral ``modes`` >= 1, optional ``sink``, ``spread``, ``min``, ``max``."""
    modes = options.get("modes")
    if not _is_integral(modes) or modes < 1:
        return False
    if "sink" in options and not isinstance(options["sink"], bool):
        return False
    if not _optional_number_ok(options, "spread", "min", "max"):
        return False
    spread = options.get("spread", 10.0)
    if options.get("max", 1.0) < options.get("min", 0.0) or spread < 1e-6:
        return False
    return True


def validate_gaussian_opts(options: Mapping) -> bool:
    """Options for ``gaussian``: as for ``sinc``, with ``max_stddev`` in place of ``spread``."""
    if not _optional_number_ok(options, "max_stddev"):
        return False
    merged = dict(options)
    merged["spread"] = options.get("max_stddev", 1.0)
    return validate_cardinal_sine_opts(merged)


FUNCTION_VALIDATORS: dict[str, Callable[[Mapping], bool]] = {
    "vortex_rollup": validate_vortex_rollup_opts,
    "random": validate_random_opts,
    "step": validate_step_opts,
    "sinc": validate_cardinal_sine_opts,
    "gaussian": validate_gaussian_opts,
}


def _function_configs(field_name: str, field_config: Mapping, model_levels: int) -> list[Mapping]:
    apply = field_config.get("apply")
    if not isinstance(apply, Mapping):
        raise ConfigError(f"Field '{field_name}' has no 'apply' configuration")
    if "levels" not in apply:
        return [apply]
    if "levtype" in field_config:
        raise ConfigError(f"Field '{field_name}' is a surface field, it cannot have a 'levels' key")
    if model_levels == 1:
        raise ConfigError(
            f"Field '{field_name}' cannot use the levels key because the emulator has a single level"
        )
    levels = apply["levels"]
    if not isinstance(levels, Mapping):
        raise ConfigError(f"Field '{field_name}' does not have a configuration for levels")
    if not validate_level_keys(levels.keys(), model_levels):
        raise ConfigError(
            f"Field '{field_name}' has invalid level keys. Make sure to use single level, "
            "sequence or range, and that each level is covered by a single key"
        )
    configs = []
    for level, level_config in levels.items():
        if not isinstance(level_config, Mapping):
            raise ConfigError(f"Field '{field_name}' has no functions configured for levels '{level}'")
        configs.append(level_config)
    return configs


def _validate_function(field_name: str, function_name: str, options) -> None:
    if isinstance(options, Mapping):
        if "area" in options and not (
            _is_number_list(options["area"]) and validate_area(options["area"])
        ):
            raise ConfigError(
                f"Area provided for '{function_name}' for field '{field_name}' is invalid"
            )
        if "translation" in options:
            translation = options["translation"]
            if not _is_number_list(translation) or len(translation) != 2:
                raise ConfigError(
                    f"The 'translation' key in function '{function_name}' of field '{field_name}' "
                    "does not respect the format [lat_trans, lon_trans]"
                )
    validator = FUNCTION_VALIDATORS.get(function_name)
    if validator is None:
        raise ConfigError(
            f"Function name '{function_name}' is invalid, valid names are "
            "[vortex_rollup, random, step, sinc, gaussian]"
        )
    if not isinstance(options, Mapping) or not validator(options):
        raise ConfigError(
            f"Options provided for '{function_name}' for field '{field_name}' are invalid"
        )


def validate_config(config: Mapping, model_levels: int) -> list[tuple[str, str]]:
    """Validate the ``emulator`` section of a configuration.

    Raises ConfigError on the first problem found. Fields that refer to another
    field by name are not checked themselves. Returns the ``(field, function)``
    pairs that were validated, in configuration order.
    """
    if "area" in config and not (_is_number_list(config["area"]) and validate_area(config["area"])):
        raise ConfigError(
            "Provided focus area must respect the format [lat, lon, lat, lon] "
            "representing its Northwest and Southeast corners"
        )
    fields = config.get("fields")
    if not isinstance(fields, Mapping):
        raise ConfigError("No fields configured")

    checked: list[tuple[str, str]] = []
    for field_name, field_config in fields.items():
        if not isinstance(field_config, Mapping):
            continue
        for function_config in _function_configs(field_name, field_config, model_levels):
            for function_name, options in function_config.items():
                _validate_function(field_name, function_name, options)
                checked.append((field_name, function_name))
    log.info("The emulator has accepted the provided configuration")
    return checked