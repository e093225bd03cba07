"""Live formatting for dotted-quad address input fields."""

from __future__ import annotations

import re

_DISALLOWED = re.compile(r"[^\d.]")
_MAX_PARTS = 4
_MAX_DIGITS = 3
_MAX_OCTET = 255


def _clamp_part(part: str) -> str:
    part = part[:_MAX_DIGITS]
    if not part:
        return part
    return str(min(int(part), _MAX_OCTET))


def format_address_input(raw: str, previous: str = "") -> str:
    """Normalise the current contents of an address field.

    Strips anything that is not a digit or a dot, keeps at most four
    octets of up to three digits each, clamps each octet to 255 and, when
    the user is typing forward (the cleaned value grew compared with
    *previous*), appends a separator after a complete three-digit octet.

    Args:
        raw: Current field value, as typed.
        previous: The value this function returned for the last keystroke.

    Returns:
        The formatted value to write back into the field.
    """
    cleaned = _DISALLOWED.sub("", raw)
    parts = [_clamp_part(p) for p in cleaned.split(".")[:_MAX_PARTS]]
    formatted = ".".join(parts)

    if len(cleaned) > len(previous):
        last = parts[-1]
        if len(last) == _MAX_DIGITS and len(parts) < _MAX_PARTS and not formatted.endswith("."):
            formatted += "."
    return formatted


class AddressInputMask:
    """Remembers the last formatted value for one input field."""

    def __init__(self, initial: str = "") -> None:
        self.previous = initial

    def apply(self, raw: str) -> str:
        self.previous = format_address_input(raw, self.previous)
        return self.previous

    def reset(self, value: str = "") -> None:
        self.previous = value
