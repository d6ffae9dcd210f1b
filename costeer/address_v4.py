"""IP version 4 addresses."""

from __future__ import annotations

import functools
from typing import Iterable, Union

_MAX_UINT = 0xFFFFFFFF
_MAX_TEXT_LENGTH = 15


@functools.total_ordering
class AddressV4:
    """An IPv4 address held as a 32-bit unsigned integer in host order."""

    __slots__ = ("_value",)

    def __init__(self, value: int = 0) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError("address value must be an integer")
        if not 0 <= value <= _MAX_UINT:
            raise ValueError("address value out of range for IPv4")
        self._value = value

    @classmethod
    def from_bytes(cls, data: Iterable[int]) -> AddressV4:
        """Build an address from four bytes in network order."""
        octets = bytes(data)
        if len(octets) != 4:
            raise ValueError("an IPv4 address needs exactly four bytes")
        return cls(int.from_bytes(octets, "big"))

    def to_uint(self) -> int:
        """Return the address as an unsigned integer in host order."""
        return self._value

    def to_bytes(self) -> bytes:
        """Return the four bytes of the address in network order."""
        return self._value.to_bytes(4, "big")

    def is_unspecified(self) -> bool:
        """True for 0.0.0.0."""
        return self._value == 0

    def is_loopback(self) -> bool:
        """True for addresses in 127.0.0.0/8."""
        return (self._value & 0xFF000000) == 0x7F000000

    def is_multicast(self) -> bool:
        """True for addresses in 224.0.0.0/4."""
        return (self._value & 0xF0000000) == 0xE0000000

    @classmethod
    def any(cls) -> AddressV4:
        """The unspecified address."""
        return cls(0)

    @classmethod
    def loopback(cls) -> AddressV4:
        """The loopback address."""
        return cls(0x7F000001)

    @classmethod
    def broadcast(cls) -> AddressV4:
        """The limited broadcast address."""
        return cls(0xFFFFFFFF)

    def __str__(self) -> str:
        return ".".join(str(octet) for octet in self.to_bytes())

    def __repr__(self) -> str:
        return f"AddressV4({str(self)!r})"

    def __int__(self) -> int:
        return self._value

    def __format__(self, spec: str) -> str:
        return format(str(self), spec)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AddressV4):
            return NotImplemented
        return self._value == other._value

    def __lt__(self, other: AddressV4) -> bool:
        if not isinstance(other, AddressV4):
            return NotImplemented
        return self._value < other._value

    def __hash__(self) -> int:
        return hash(self._value)


def _parse(text: str) -> AddressV4:
    if len(text) > _MAX_TEXT_LENGTH:
        raise ValueError("make_address_v4: invalid argument")
    parts = text.split(".")
    if len(parts) != 4:
        raise ValueError("make_address_v4: invalid argument")
    octets = []
    for part in parts:
        if not part or not part.isascii() or not part.isdigit():
            raise ValueError("make_address_v4: invalid argument")
        if len(part) > 1 and part[0] == "0":
            raise ValueError("make_address_v4: invalid argument")
        octet = int(part)
        if octet > 255:
            raise ValueError("make_address_v4: invalid argument")
        octets.append(octet)
    return AddressV4.from_bytes(octets)


AddressV4Source = Union[AddressV4, int, str, bytes, bytearray, Iterable[int]]


def make_address_v4(value: AddressV4Source) -> AddressV4:
    """Build an address from an integer, four bytes or dotted-decimal text."""
    if isinstance(value, AddressV4):
        return value
    if isinstance(value, str):
        return _parse(value)
    if isinstance(value, int) and not isinstance(value, bool):
        return AddressV4(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return AddressV4.from_bytes(value)
    try:
        octets = list(value)
    except TypeError:
        raise TypeError(
            f"cannot make an IPv4 address from {type(value).__name__}"
        ) from None
    if any(not isinstance(o, int) or not 0 <= o <= 255 for o in octets):
        raise ValueError("invalid address_v4 bytes value")
    return AddressV4.from_bytes(octets)