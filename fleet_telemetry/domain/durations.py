"""Duration string parsing for configured intervals.

Accepted strings follow the Go duration grammar used by the settings store:
an optional sign followed by one or more `<decimal><unit>` groups such as
`30s`, `1h30m` or `1.5ms`. The bare string `0` is also accepted.

Values are accumulated in integer nanoseconds and must fit a signed 64-bit
count, so `1.1h` is exactly 3960 seconds and sub-nanosecond fractions are
truncated.
"""

from __future__ import annotations

import re
from typing import Final

_DOMAIN_DURATION_UNIT_NANOSECONDS: Final[dict[str, int]] = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,
    "μs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}

_DOMAIN_DURATION_NANOSECONDS_PER_SECOND: Final[int] = 1_000_000_000
_DOMAIN_DURATION_MAX_MAGNITUDE: Final[int] = 1 << 63
# Fraction digits past this point cannot change a 64-bit nanosecond count.
_DOMAIN_DURATION_MAX_FRACTION_DIGITS: Final[int] = 18

_DOMAIN_DURATION_COMPONENT_PATTERN = re.compile(r"([0-9]+\.?[0-9]*|\.[0-9]+)(ns|us|µs|μs|ms|s|m|h)")


class DurationParseError(ValueError):
    """Raised when a duration string does not follow the supported grammar."""


def _domain_component_nanoseconds(amount_text: str, unit: str, original_value: str) -> int:
    """Convert one `<decimal><unit>` group into whole nanoseconds.

    Raises:
        DurationParseError: Raised when the group alone overflows 64 bits.
    """

    whole_text, _, fraction_text = amount_text.partition(".")
    unit_nanoseconds = _DOMAIN_DURATION_UNIT_NANOSECONDS[unit]

    nanoseconds = int(whole_text or "0") * unit_nanoseconds
    fraction_text = fraction_text[:_DOMAIN_DURATION_MAX_FRACTION_DIGITS]
    if fraction_text:
        scale = 10 ** len(fraction_text)
        nanoseconds += int(float(int(fraction_text)) * (unit_nanoseconds / scale))

    if nanoseconds > _DOMAIN_DURATION_MAX_MAGNITUDE:
        raise DurationParseError(f"invalid duration {original_value!r}")
    return nanoseconds


def domain_parse_duration_seconds(value: str) -> float:
    """Parse one duration string into seconds.

    Args:
        value: Duration text, for example `30s` or `1h15m`.

    Returns:
        float: Duration in seconds, negative when the input carries a `-` sign.

    Raises:
        DurationParseError: Raised when the value is empty, has a missing or
            unknown unit, contains unparsed characters, or does not fit a
            signed 64-bit nanosecond count.
    """

    original_value = value
    if value in ("0", "+0", "-0"):
        return 0.0

    negative = False
    if value[:1] in ("+", "-"):
        negative = value[0] == "-"
        value = value[1:]

    if not value:
        raise DurationParseError(f"invalid duration {original_value!r}")

    total_nanoseconds = 0
    position = 0
    while position < len(value):
        component_match = _DOMAIN_DURATION_COMPONENT_PATTERN.match(value, position)
        if component_match is None:
            raise DurationParseError(f"invalid duration {original_value!r}")
        amount_text, unit = component_match.groups()
        total_nanoseconds += _domain_component_nanoseconds(amount_text, unit, original_value)
        if total_nanoseconds > _DOMAIN_DURATION_MAX_MAGNITUDE:
            raise DurationParseError(f"invalid duration {original_value!r}")
        position = component_match.end()

    # Only the negative side may reach 2**63.
    if not negative and total_nanoseconds > _DOMAIN_DURATION_MAX_MAGNITUDE - 1:
        raise DurationParseError(f"invalid duration {original_value!r}")

    whole_seconds, remainder_nanoseconds = divmod(total_nanoseconds, _DOMAIN_DURATION_NANOSECONDS_PER_SECOND)
    seconds = whole_seconds + remainder_nanoseconds / 1e9
    return -seconds if negative else seconds
