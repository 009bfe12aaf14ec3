"""Resolution and validation of per-level configuration keys.

Level keys select the model levels a set of functions applies to. A key is a
single level (``"3"``), a sequence of levels (``"1,4,7"``) or a range, closed
(``"2:5"``) or open at either end (``"3:"``, ``":4"``). Level 0 is reserved
for surface fields and is never matched by a model level key.
"""

from __future__ import annotations

import re
from collections.abc import Hashable, Iterable

_SINGLE_LEVEL = re.compile(r"([0-9]+)")
_LEVEL_SEQUENCE = re.compile(r"[0-9]+(?:,[0-9]+)+")
_LEVEL_RANGE = re.compile(r"([0-9]+):([0-9]+)|([0-9]+):|:([0-9]+)")


def level_config_key(level, keys: Iterable[Hashable]) -> Hashable | None:
    """Return the first key in ``keys`` that covers ``level``.

    ``level`` may be given as a string or an integer. The key is returned as
    it was given, so it can be used to index the mapping it came from. None
    means that no key covers the level, which is then filled with zeros.
    """
    nlevel = int(level)
    for key in keys:
        text = str(key)
        if "," in text:
            if any(int(part) == nlevel for part in text.split(",")):
                return key
        elif ":" in text:
            lower_text, _, upper_text = text.partition(":")
            lower = int(lower_text) if lower_text else 1
            if nlevel >= lower:
                if not upper_text:
                    return key
                if nlevel <= int(upper_text):
                    return key
        elif nlevel == int(text):
            return key
    return None


def validate_level_keys(keys: Iterable[Hashable], model_levels: int) -> bool:
    """Check that level keys are well formed and cover each level at most once.

    Every level named by a key must lie in ``[1, model_levels]``.
    """
    covered: set[int] = set()

    def cover(levels: Iterable[int]) -> bool:
        for nlevel in levels:
            if nlevel > model_levels or nlevel <= 0 or nlevel in covered:
                return False
            covered.add(nlevel)
        return True

    for key in keys:
        text = str(key)
        if _SINGLE_LEVEL.fullmatch(text):
            if not cover([int(text)]):
                return False
        elif _LEVEL_SEQUENCE.fullmatch(text):
            if not cover(int(part) for part in text.split(",")):
                return False
        elif match := _LEVEL_RANGE.fullmatch(text):
            closed_lower, closed_upper, open_lower, open_upper = match.groups()
            if closed_lower is not None:
                lower, upper = int(closed_lower), int(closed_upper)
                if lower >= upper or lower <= 0 or upper > model_levels:
                    return False
                if not cover(range(lower, upper + 1)):
                    return False
            else:
                bound = int(open_lower if open_lower is not None else open_upper)
                if bound > model_levels or bound <= 0:
                    return False
                levels = range(1, bound + 1) if open_lower is None else range(bound, model_levels + 1)
                if not cover(levels):
                    return False
        else:
            return False
    return True