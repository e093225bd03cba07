"""Unit tests for fandash.core.address input masking."""

from __future__ import annotations

from fandash.core.address import AddressInputMask, format_address_input


def _type(keys: str, mask: AddressInputMask | None = None) -> list[str]:
    """Simulate typing *keys* one character at a time into a masked field."""
    mask = mask or AddressInputMask()
    values = []
    for ch in keys:
        values.append(mask.apply(mask.previous + ch))
    return values


class TestFormatAddressInput:
    def test_strips_disallowed_characters(self):
        assert format_address_input("1a9b2", "") == "192."

    def test_clamps_octet_to_255(self):
        assert format_address_input("300", "") == "255."

    def test_dot_after_full_octet_on_insert(self):
        assert format_address_input("192", "19") == "192."

    def test_no_dot_when_deleting(self):
        assert format_address_input("192", "192.") == "192"

    def test_no_dot_after_fourth_octet(self):
        assert format_address_input("10.0.0.255", "10.0.0.25") == "10.0.0.255"

    def test_caps_at_four_octets(self):
        assert format_address_input("1.2.3.4.5", "1.2.3.4.") == "1.2.3.4"

    def test_truncates_long_octet(self):
        assert format_address_input("12345", "1234") == "123."

    def test_leading_zeros_normalised(self):
        assert format_address_input("010", "01") == "10"

    def test_empty(self):
        assert format_address_input("", "") == ""


class TestProgressiveTyping:
    def test_full_address_with_auto_separators(self):
        values = _type("19216811")
        assert values[2] == "192."
        assert values[5] == "192.168."
        assert values[-1] == "192.168.11"

    def test_typed_dot_between_short_octets(self):
        values = _type("1921681.1")
        assert values[-1] == "192.168.1.1"

    def test_no_octet_exceeds_255(self):
        values = _type("999999999999")
        assert values[-1] == "255.255.255.255"
        for value in values:
            assert all(int(p) <= 255 for p in value.split(".") if p)

    def test_extra_dot_after_auto_separator_is_kept(self):
        mask = AddressInputMask()
        _type("192", mask)
        assert mask.apply("192..") == "192.."
        assert mask.previous.count(".") == 2

    def test_reset(self):
        mask = AddressInputMask("10.0.")
        mask.reset()
        assert mask.previous == ""
