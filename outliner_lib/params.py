"""
outliner_lib/params.py: Tunable thresholds for the outline pipeline.

Lengths are in pt (1/72 inch). A Params value is immutable; overrides always
produce a new value so that concurrent runs never share mutable state.
"""
import logging
from dataclasses import dataclass, fields, replace

log = logging.getLogger("outliner.config")


@dataclass(frozen=True)
class Params:
    """Named numeric thresholds shared read-only by every stage of one run."""

    MAX_LEVELS: int = 3

    TOL_BIN_SIZE: float = 6  # tolerance of alignment
    TOL_JOIN_SPAN: float = 24  # gap allowed when joining spans on one line
    ALIGN_DECAY_RATE: float = 0.5
    ALIGN_LEFT_RATIO: float = 0.6
    ALIGN_MID_RATIO: float = 0.6

    FILTER_FONTSIZE_SMALLER: float = 2.1
    FILTER_TEXT_AVG_LEN: float = 2
    FILTER_MIN_SPANS_PER_GROUP: int = 3
    FILTER_MAX_SPANS_PER_PAGE: int = 10

    SPLIT_GROUP_RATIO: float = 0.3

    @classmethod
    def names(cls):
        return [f.name for f in fields(cls)]

    def with_overrides(self, overrides) -> "Params":
        """Returns a copy with the given {name: value} overrides applied.

        Names are case-insensitive. Values may be numbers or numeric strings.
        """
        known = {f.name: f for f in fields(self)}
        changes = {}
        for key, value in overrides.items():
            name = key.strip().upper()
            if name not in known:
                raise ValueError(
                    f"Unknown parameter '{key}'. Valid names: {', '.join(known)}"
                )
            try:
                number = float(value)
            except (TypeError, ValueError):
                raise ValueError(f"Parameter {name} expects a number, got {value!r}")
            if known[name].type in (int, "int"):
                if not number.is_integer():
                    raise ValueError(f"Parameter {name} expects an integer, got {value!r}")
                number = int(number)
            changes[name] = number
        if changes:
            log.debug("Parameter overrides: %s", changes)
        return replace(self, **changes)

    @classmethod
    def from_overrides(cls, overrides) -> "Params":
        return cls().with_overrides(overrides)

    @classmethod
    def parse_overrides(cls, text):
        """Parses 'KEY=VALUE,KEY=VALUE' into a dict, validating the syntax."""
        overrides = {}
        for pair in (text or "").split(","):
            if not pair.strip():
                continue
            key, sep, value = pair.partition("=")
            if not sep or not key.strip():
                raise ValueError(f"Invalid parameter override '{pair}', expected KEY=VALUE")
            overrides[key.strip()] = value.strip()
        return overrides

    @classmethod
    def from_string(cls, text) -> "Params":
        return cls.from_overrides(cls.parse_overrides(text))
