"""IP version 6 addresses with an optional scope identifier."""

from __future__ import annotations

import functools
import ipaddress
from typing import Iterable, Optional, Union

_ADDRESS_LENGTH = 16
_MAX_SCOPE_ID = 0xFFFFFFFF


def _check_scope_id(scope_id: int) -> int:
    if isinstance(scope_id, bool) or not isinstance(scope_id, int):
        raise TypeError("scope id must be an integer")
    if not 0 <= scope_id <= _MAX_SCOPE_ID:
        raise ValueError("scope id out of range")
    return scope_id


@functools.total_ordering
class AddressV6:
    """An IPv6 address: sixteen bytes in network order plus a scope id."""

    __slots__ = ("_bytes", "_scope_id")

    def __init__(
        self, data: Iterable[int] = bytes(_ADDRESS_LENGTH), scope_id: int = 0
    ) -> None:
        try:
            octets = bytes(data)
        except (TypeError, ValueError):
            raise ValueError("invalid address_v6::bytes_type value") from None
        if len(octets) != _ADDRESS_LENGTH:
            raise ValueError("an IPv6 address needs exactly sixteen bytes")
        self._bytes = octets
        self._scope_id = _check_scope_id(scope_id)

    @property
    def scope_id(self) -> int:
        """The scope (interface) identifier of the address."""
        return self._scope_id

    @scope_id.setter
    def scope_id(self, value: int) -> None:
        self._scope_id = _check_scope_id(value)

    def to_bytes(self) -> bytes:
        """Return the sixteen bytes of the address in network order."""
        return self._bytes

    def is_unspecified(self) -> bool:
        """True for :: with no scope id."""
        return not any(self._bytes) and self._scope_id == 0

    def is_loopback(self) -> bool:
        """True for ::1 with no scope id."""
        return (
            not any(self._bytes[:15])
            and self._bytes[15] == 0x01
            and self._scope_id == 0
        )

    def is_multicast(self) -> bool:
        """True for addresses in ff00::/8."""
        return self._bytes[0] == 0xFF

    def is_link_local(self) -> bool:
        """True for addresses in fe80::/10."""
        return self._bytes[0] == 0xFE and (self._bytes[1] & 0xC0) == 0x80

    def is_site_local(self) -> bool:
        """True for addresses in fec0::/10."""
        return self._bytes[0] == 0xFE and (self._bytes[1] & 0xC0) == 0xC0

    def is_unique_local(self) -> bool:
        """True for addresses in fc00::/7."""
        return (self._bytes[0] & 0xFE) == 0xFC

    def is_v4_mapped(self) -> bool:
        """True for IPv4-mapped addresses of the form ::ffff:a.b.c.d."""
        return (
            not any(self._bytes[:9])
            and self._bytes[10] == 0xFF
            and self._bytes[11] == 0xFF
        )

    def _multicast_scope(self, scope: int) -> bool:
        return self.is_multicast() and (self._bytes[1] & 0x0F) == scope

    def is_multicast_node_local(self) -> bool:
        """True for multicast addresses with node-local scope."""
        return self._multicast_scope(0x01)

    def is_multicast_link_local(self) -> bool:
        """True for multicast addresses with link-local scope."""
        return self._multicast_scope(0x02)

    def is_multicast_site_local(self) -> bool:
        """True for multicast addresses with site-local scope."""
        return self._multicast_scope(0x05)

    def is_multicast_org_local(self) -> bool:
        """True for multicast addresses with organisation-local scope."""
        return self._multicast_scope(0x08)

    def is_multicast_unique_local(self) -> bool:
        """True for multicast addresses with scope field 0xE."""
        return self._multicast_scope(0x0E)

    def is_multicast_global(self) -> bool:
        """True for multicast addresses with scope field 0xB."""
        return self._multicast_scope(0x0B)

    @classmethod
    def any(cls) -> AddressV6:
        """The unspecified address."""
        return cls()

    @classmethod
    def loopback(cls) -> AddressV6:
        """The loopback address ::1."""
        return cls(bytes(15) + b"\x01")

    def __str__(self) -> str:
        text = ipaddress.IPv6Address(self._bytes).compressed
        if self._scope_id:
            text += f"%{self._scope_id}"
        return text

    def __repr__(self) -> str:
        return f"AddressV6({str(self)!r})"

    def __format__(self, spec: str) -> str:
        return format(str(self), spec)

    def _key(self) -> tuple[bytes, int]:
        return self._bytes, self._scope_id

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AddressV6):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: AddressV6) -> bool:
        if not isinstance(other, AddressV6):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self) -> int:
        return hash(self._key())


def _invalid() -> ValueError:
    return ValueError("make_address_v6: invalid argument")


def _parse_scope(scope: Union[str, int]) -> int:
    if isinstance(scope, int) and not isinstance(scope, bool):
        if not 0 <= scope < _MAX_SCOPE_ID:
            raise _invalid()
        return scope
    if not isinstance(scope, str):
        raise TypeError("scope must be text or an integer")
    digits = scope.lstrip()
    if digits.startswith("+"):
        digits = digits[1:]
    if not digits or not digits.isascii() or not digits.isdigit():
        raise _invalid()
    value = int(digits)
    if value >= _MAX_SCOPE_ID:
        raise _invalid()
    return value


def _parse_body(text: str) -> bytes:
    if "%" in text:
        raise _invalid()
    try:
        return ipaddress.IPv6Address(text).packed
    except ipaddress.AddressValueError:
        raise _invalid() from None


AddressV6Source = Union[AddressV6, str, bytes, bytearray, Iterable[int]]


def make_address_v6(
    value: AddressV6Source, scope: Optional[Union[str, int]] = None
) -> AddressV6:
    """Build an address from text (optionally with %scope) or sixteen bytes."""
    if isinstance(value, AddressV6):
        if scope is None:
            return value
        return AddressV6(value.to_bytes(), _parse_scope(scope))
    if isinstance(value, str):
        if scope is None:
            body, sep, scope_text = value.partition("%")
            if not sep:
                return AddressV6(_parse_body(body), 0)
            return AddressV6(_parse_body(body), _parse_scope(scope_text))
        return AddressV6(_parse_body(value), _parse_scope(scope))
    scope_id = 0 if scope is None else _parse_scope(scope)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return AddressV6(bytes(value), scope_id)
    try:
        octets = list(value)
    except TypeError:
        raise TypeError(
            f"cannot make an IPv6 address from {type(value).__name__}"
        ) from None
    if any(not isinstance(o, int) or not 0 <= o <= 255 for o in octets):
        raise ValueError("invalid address_v6::bytes_type value")
    return AddressV6(octets, scope_id)