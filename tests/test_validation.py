import pytest

from nwpemu.reader import ConfigError
from nwpemu.validation import (
    validate_cardinal_sine_opts,
    validate_config,
    validate_gaussian_opts,
    validate_random_opts,
    validate_step_opts,
    validate_vortex_rollup_opts,
)


@pytest.mark.parametrize(
    "options, expected",
    [
        ({"time_variation": 1.1}, True),
        ({"time_variation": 2}, True),
        ({}, False),
        ({"time_variation": "fast"}, False),
        ({"time_variation": True}, False),
    ],
)
def test_vortex_rollup_opts(options, expected):
    assert validate_vortex_rollup_opts(options) is expected


@pytest.mark.parametrize(
    "options, expected",
    [
        ({}, True),
        ({"distribution": 3}, False),
        ({"min": 1.0, "max": 2.0}, True),
        ({"min": 2.0, "max": 1.0}, False),
        ({"min": "low"}, False),
        ({"distribution": "bernoulli", "probability": 0.3}, True),
        ({"distribution": "bernoulli", "probability": 0.0}, False),
        ({"distribution": "bernoulli", "probability": 1.5}, False),
        ({"distribution": "bernoulli", "value": "x"}, False),
        ({"distribution": "normal", "mean": 0.0, "stddev": 2.0}, True),
        ({"distribution": "normal", "stddev": 0.0}, False),
        ({"distribution": "poisson"}, False),
    ],
)
def test_random_opts(options, expected):
    assert validate_random_opts(options) is expected


@pytest.mark.parametrize(
    "options, expected",
    [
        ({"value": 10}, True),
        ({"value": 10.0, "variation": 1.0, "probability": 0.5}, True),
        ({}, False),
        ({"value": "ten"}, False),
        ({"value": 1.0, "probability": 1.5}, False),
        ({"value": 1.0, "probability": 0.0}, False),
        ({"value": 1.0, "probability": "half"}, False),
        ({"value": 1.0, "variation": "a"}, False),
    ],
)
def test_step_opts(options, expected):
    assert validate_step_opts(options) is expected


@pytest.mark.parametrize(
    "options, expected",
    [
        ({"modes": 2}, True),
        ({"modes": 3, "sink": True, "spread": 5.0, "min": -1.0, "max": 10.0}, True),
        ({}, False),
        ({"modes": 0}, False),
        ({"modes": 1.5}, False),
        ({"modes": True}, False),
        ({"modes": 1, "sink": "yes"}, False),
        ({"modes": 1, "spread": 0.0}, False),
        ({"modes": 1, "min": 2.0, "max": 1.0}, False),
        ({"modes": 1, "max": "high"}, False),
    ],
)
def test_cardinal_sine_opts(options, expected):
    assert validate_cardinal_sine_opts(options) is expected


@pytest.mark.parametrize(
    "options, expected",
    [
        ({"modes": 3, "max_stddev": 5.0}, True),
        ({"modes": 1}, True),
        ({"modes": 1, "max_stddev": 0.0}, False),
        ({"modes": 1, "max_stddev": "wide"}, False),
        ({"modes": 1, "spread": 0.0}, True),
        ({"modes": 0, "max_stddev": 2.0}, False),
    ],
)
def test_gaussian_opts(options, expected):
    assert validate_gaussian_opts(options) is expected


def _valid_config():
    return {
        "grid_identifier": "N80",
        "n_steps": 2,
        "vertical_levels": 5,
        "fields": {
            "100u": {
                "levtype": "sfc",
                "apply": {
                    "vortex_rollup": {
                        "time_variation": 1.1,
                        "area": [71.5, -25.0, 34.5, 45.0],
                    }
                },
            },
            "u": {
                "apply": {
                    "levels": {
                        "1": {"sinc": {"modes": 3, "min": -1.0, "max": 10.0}},
                        "2": {
                            "random": {"min": 1.0, "max": 2.0},
                            "step": {"value": 10.0, "variation": 1.0, "translation": [0.0, 1.0]},
                        },
                        "5": {"gaussian": {"modes": 2, "min": 1.0, "max": 2.0}},
                    }
                }
            },
            "v": "u",
        },
    }


def test_validate_config_accepts_valid_config():
    checked = validate_config(_valid_config(), 5)
    assert checked == [
        ("100u", "vortex_rollup"),
        ("u", "sinc"),
        ("u", "random"),
        ("u", "step"),
        ("u", "gaussian"),
    ]


def test_validate_config_skips_alias_fields():
    config = _valid_config()
    checked = validate_config(config, 5)
    assert {field for field, _ in checked} == {"100u", "u"}


def test_missing_fields():
    with pytest.raises(ConfigError, match="No fields"):
        validate_config({"grid_identifier": "N80"}, 5)


def test_invalid_global_area():
    config = _valid_config()
    config["area"] = [10.0, 0.0, 20.0, 10.0]
    with pytest.raises(ConfigError, match="focus area"):
        validate_config(config, 5)


def test_missing_apply():
    config = _valid_config()
    config["fields"]["u"] = {"levtype": "sfc"}
    with pytest.raises(ConfigError, match="'apply'"):
        validate_config(config, 5)


def test_surface_field_with_levels():
    config = _valid_config()
    config["fields"]["100u"]["apply"] = {"levels": {"1": {"step": {"value": 1.0}}}}
    with pytest.raises(ConfigError, match="surface field"):
        validate_config(config, 5)


def test_levels_with_single_model_level():
    with pytest.raises(ConfigError, match="single level"):
        validate_config(_valid_config(), 1)


def test_levels_not_a_mapping():
    config = _valid_config()
    config["fields"]["u"]["apply"]["levels"] = [1, 2]
    with pytest.raises(ConfigError, match="configuration for levels"):
        validate_config(config, 5)


def test_overlapping_level_keys():
    config = _valid_config()
    config["fields"]["u"]["apply"]["levels"]["1:2"] = {"step": {"value": 1.0}}
    with pytest.raises(ConfigError, match="invalid level keys"):
        validate_config(config, 5)


def test_invalid_function_name():
    config = _valid_config()
    config["fields"]["100u"]["apply"] = {"spline": {"modes": 1}}
    with pytest.raises(ConfigError, match="Function name 'spline'"):
        validate_config(config, 5)


def test_invalid_function_area():
    config = _valid_config()
    config["fields"]["100u"]["apply"]["vortex_rollup"]["area"] = [0.0, 0.0, 0.0]
    with pytest.raises(ConfigError, match="Area provided"):
        validate_config(config, 5)


def test_invalid_translation():
    config = _valid_config()
    config["fields"]["u"]["apply"]["levels"]["2"]["step"]["translation"] = [1.0]
    with pytest.raises(ConfigError, match="translation"):
        validate_config(config, 5)


def test_invalid_function_options():
    config = _valid_config()
    config["fields"]["u"]["apply"]["levels"]["1"]["sinc"] = {"modes": 0}
    with pytest.raises(ConfigError, match="Options provided for 'sinc'"):
        validate_config(config, 5)


def test_function_options_not_a_mapping():
    config = _valid_config()
    config["fields"]["100u"]["apply"] = {"random": 5}
    with pytest.raises(ConfigError, match="Options provided for 'random'"):
        validate_config(config, 5)