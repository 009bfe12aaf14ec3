import pytest

from nwpemu.levels import level_config_key, validate_level_keys


@pytest.mark.parametrize(
    "level, keys, expected",
    [
        ("2", ["1", "2:4"], "2:4"),
        ("3", ["1,3,5", "2"], "1,3,5"),
        ("1", [":3"], ":3"),
        ("9", ["1", "4:"], "4:"),
        ("5", ["5"], "5"),
        (4, ["1:3", "4"], "4"),
    ],
)
def test_level_config_key_matches(level, keys, expected):
    assert level_config_key(level, keys) == expected


def test_level_config_key_returns_first_matching_key():
    assert level_config_key("2", ["1:3", "2"]) == "1:3"


def test_level_config_key_returns_original_key_object():
    key = level_config_key("4", [1, 4])
    assert key == 4
    assert isinstance(key, int)


@pytest.mark.parametrize(
    "level, keys",
    [
        ("7", ["1:3", "5"]),
        ("0", [":3"]),
        ("2", ["1,3,5"]),
        ("2", ["3:"]),
        ("1", []),
    ],
)
def test_level_config_key_no_match(level, keys):
    assert level_config_key(level, keys) is None


@pytest.mark.parametrize(
    "keys, model_levels",
    [
        (["1", "2:3", "4:"], 5),
        ([":2", "3,5"], 5),
        (["1,2,3,4,5"], 5),
        ([1, 2], 2),
        ([], 3),
        (["5"], 5),
    ],
)
def test_validate_level_keys_valid(keys, model_levels):
    assert validate_level_keys(keys, model_levels) is True


@pytest.mark.parametrize(
    "keys, model_levels",
    [
        (["1:3", "3"], 5),
        (["0"], 5),
        (["6"], 5),
        (["3:2"], 5),
        (["2:2"], 5),
        (["a"], 5),
        (["1,1"], 5),
        ([":0"], 5),
        (["6:"], 5),
        (["1:6"], 5),
        ([":3", "3:"], 5),
        (["1, 2"], 5),
        (["-1"], 5),
    ],
)
def test_validate_level_keys_invalid(keys, model_levels):
    assert validate_level_keys(keys, model_levels) is False


def test_valid_keys_resolve_every_covered_level_to_one_key():
    keys = [":2", "3,5", "6:8", "10:"]
    assert validate_level_keys(keys, 12)
    covered = {1, 2, 3, 5, 6, 7, 8, 10, 11, 12}
    for level in range(1, 13):
        key = level_config_key(str(level), keys)
        assert (key is not None) == (level in covered)