"""Socket options: level, name and wire encoding for setsockopt/getsockopt."""

from __future__ import annotations

import datetime
import socket
import struct
from typing import Any, ClassVar, Union

from costeer.address_v4 import AddressV4, make_address_v4
from costeer.address_v6 import AddressV6, make_address_v6


def _const(name: str, fallback: int) -> int:
    return int(getattr(socket, name, fallback))


SOL_SOCKET = _const("SOL_SOCKET", 1)
IPPROTO_IP = _const("IPPROTO_IP", 0)
IPPROTO_TCP = _const("IPPROTO_TCP", 6)
IPPROTO_IPV6 = _const("IPPROTO_IPV6", 41)
AF_INET6 = _const("AF_INET6", 10)

SO_BROADCAST = _const("SO_BROADCAST", 6)
SO_DEBUG = _const("SO_DEBUG", 1)
SO_ERROR = _const("SO_ERROR", 4)
SO_DONTROUTE = _const("SO_DONTROUTE", 5)
SO_KEEPALIVE = _const("SO_KEEPALIVE", 9)
SO_LINGER = _const("SO_LINGER", 13)
SO_OOBINLINE = _const("SO_OOBINLINE", 10)
SO_RCVBUF = _const("SO_RCVBUF", 8)
SO_RCVLOWAT = _const("SO_RCVLOWAT", 18)
SO_REUSEADDR = _const("SO_REUSEADDR", 2)
SO_SNDBUF = _const("SO_SNDBUF", 7)
SO_SNDLOWAT = _const("SO_SNDLOWAT", 19)
TCP_NODELAY = _const("TCP_NODELAY", 1)
IPV6_V6ONLY = _const("IPV6_V6ONLY", 26)
IPV6_UNICAST_HOPS = _const("IPV6_UNICAST_HOPS", 16)
IP_TTL = _const("IP_TTL", 2)
IPV6_JOIN_GROUP = _const("IPV6_JOIN_GROUP", 20)
IPV6_LEAVE_GROUP = _const("IPV6_LEAVE_GROUP", 21)
IP_ADD_MEMBERSHIP = _const("IP_ADD_MEMBERSHIP", 35)
IP_DROP_MEMBERSHIP = _const("IP_DROP_MEMBERSHIP", 36)
IPV6_MULTICAST_IF = _const("IPV6_MULTICAST_IF", 17)
IP_MULTICAST_IF = _const("IP_MULTICAST_IF", 32)
IPV6_MULTICAST_HOPS = _const("IPV6_MULTICAST_HOPS", 18)
IP_MULTICAST_TTL = _const("IP_MULTICAST_TTL", 33)
IPV6_MULTICAST_LOOP = _const("IPV6_MULTICAST_LOOP", 19)
IP_MULTICAST_LOOP = _const("IP_MULTICAST_LOOP", 34)

_MAX_UINT = 0xFFFFFFFF


def _family(protocol: Any) -> int:
    """Extract an address family from an int, a socket or a protocol object."""
    if isinstance(protocol, int):
        return int(protocol)
    family = getattr(protocol, "family", None)
    if family is None:
        raise TypeError(f"cannot determine address family of {protocol!r}")
    return int(family() if callable(family) else family)


def _is_v6(protocol: Any) -> bool:
    return _family(protocol) == AF_INET6


class BasicOption:
    """A socket option holding a single value encoded as a native C int."""

    option_level: ClassVar[int]
    option_name: ClassVar[int]
    _format: ClassVar[str] = "i"
    _default: ClassVar[Any] = 0

    def __init__(self, value: Any = None) -> None:
        self.value = self._convert(self._default if value is None else value)

    @staticmethod
    def _convert(value: Any) -> Any:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError("option value must be an integer")
        return value

    def _pack_values(self) -> tuple:
        return (int(self.value),)

    def _unpack_values(self, values: tuple) -> None:
        self.value = self._convert(values[0])

    def level(self, protocol: Any) -> int:
        """Protocol level passed to setsockopt/getsockopt."""
        return self.option_level

    def name(self, protocol: Any) -> int:
        """Option name passed to setsockopt/getsockopt."""
        return self.option_name

    def data(self, protocol: Any) -> bytes:
        """The encoded option value."""
        return struct.pack(self._format, *self._pack_values())

    def size(self, protocol: Any) -> int:
        """Length in bytes of the encoded option value."""
        return struct.calcsize(self._format)

    def from_data(self, raw: bytes) -> BasicOption:
        """Load the value from bytes returned by getsockopt and return self."""
        raw = bytes(raw)
        expected = struct.calcsize(self._format)
        if len(raw) != expected:
            raise ValueError(
                f"{type(self).__name__} expects {expected} bytes, got {len(raw)}"
            )
        self._unpack_values(struct.unpack(self._format, raw))
        return self

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._pack_values() == other._pack_values()  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._pack_values()))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value!r})"


class _BoolOption(BasicOption):
    _default: ClassVar[Any] = False

    @staticmethod
    def _convert(value: Any) -> Any:
        return bool(value)


class Broadcast(_BoolOption):
    """Permit sending of broadcast messages."""

    option_level = SOL_SOCKET
    option_name = SO_BROADCAST


class Debug(_BoolOption):
    """Enable socket-level debugging."""

    option_level = SOL_SOCKET
    option_name = SO_DEBUG


class Error(BasicOption):
    """Pending socket error; read with getsockopt."""

    option_level = SOL_SOCKET
    option_name = SO_ERROR


class DoNotRoute(_BoolOption):
    """Bypass routing and send directly to the interface."""

    option_level = SOL_SOCKET
    option_name = SO_DONTROUTE


class KeepAlive(_BoolOption):
    """Send keep-alive probes on connection-oriented sockets."""

    option_level = SOL_SOCKET
    option_name = SO_KEEPALIVE


class Linger(BasicOption):
    """Behaviour of close when unsent data is present."""

    option_level = SOL_SOCKET
    option_name = SO_LINGER
    _format = "ii"

    def __init__(
        self,
        enabled: bool = False,
        timeout: Union[int, datetime.timedelta] = 0,
    ) -> None:
        self.enabled = bool(enabled)
        self.timeout = timeout  # type: ignore[assignment]

    @property
    def timeout(self) -> datetime.timedelta:
        """How long close lingers, in whole seconds."""
        return datetime.timedelta(seconds=self._seconds)

    @timeout.setter
    def timeout(self, value: Union[int, datetime.timedelta]) -> None:
        if isinstance(value, datetime.timedelta):
            self._seconds = int(value.total_seconds())
        elif isinstance(value, int) and not isinstance(value, bool):
            self._seconds = value
        else:
            raise TypeError("linger timeout must be seconds or a timedelta")

    @property
    def value(self) -> tuple[bool, datetime.timedelta]:  # type: ignore[override]
        return self.enabled, self.timeout

    def _pack_values(self) -> tuple:
        return (int(self.enabled), self._seconds)

    def _unpack_values(self, values: tuple) -> None:
        onoff, seconds = values
        self.enabled = onoff != 0
        self._seconds = seconds

    def __repr__(self) -> str:
        return f"Linger(enabled={self.enabled!r}, timeout={self._seconds!r})"


class OutOfBandInline(_BoolOption):
    """Leave received out-of-band data in line."""

    option_level = SOL_SOCKET
    option_name = SO_OOBINLINE


class ReceiveBufferSize(BasicOption):
    """Size of the receive buffer."""

    option_level = SOL_SOCKET
    option_name = SO_RCVBUF


class ReceiveLowWatermark(BasicOption):
    """Minimum number of bytes for a receive operation."""

    option_level = SOL_SOCKET
    option_name = SO_RCVLOWAT


class ReuseAddress(_BoolOption):
    """Allow the socket to be bound to an address already in use."""

    option_level = SOL_SOCKET
    option_name = SO_REUSEADDR


class SendBufferSize(BasicOption):
    """Size of the send buffer."""

    option_level = SOL_SOCKET
    option_name = SO_SNDBUF


class SendLowWatermark(BasicOption):
    """Minimum number of bytes for a send operation."""

    option_level = SOL_SOCKET
    option_name = SO_SNDLOWAT


class NoDelay(_BoolOption):
    """Disable the Nagle algorithm on TCP sockets."""

    option_level = IPPROTO_TCP
    option_name = TCP_NODELAY


class V6Only(_BoolOption):
    """Restrict an IPv6 socket to IPv6 communication only."""

    option_level = IPPROTO_IPV6
    option_name = IPV6_V6ONLY


class UnicastHops(BasicOption):
    """Default number of hops (TTL) for outbound unicast datagrams."""

    def level(self, protocol: Any) -> int:
        return IPPROTO_IPV6 if _is_v6(protocol) else IPPROTO_IP

    def name(self, protocol: Any) -> int:
        return IPV6_UNICAST_HOPS if _is_v6(protocol) else IP_TTL


class MulticastHops(BasicOption):
    """Default number of hops (TTL) for outbound multicast datagrams."""

    def level(self, protocol: Any) -> int:
        return IPPROTO_IPV6 if _is_v6(protocol) else IPPROTO_IP

    def name(self, protocol: Any) -> int:
        return IPV6_MULTICAST_HOPS if _is_v6(protocol) else IP_MULTICAST_TTL


class EnableLoopback(_BoolOption):
    """Whether multicast datagrams are delivered back to the local host."""

    def level(self, protocol: Any) -> int:
        return IPPROTO_IPV6 if _is_v6(protocol) else IPPROTO_IP

    def name(self, protocol: Any) -> int:
        return IPV6_MULTICAST_LOOP if _is_v6(protocol) else IP_MULTICAST_LOOP


def _coerce_group(group: Any) -> Union[AddressV4, AddressV6]:
    if isinstance(group, (AddressV4, AddressV6)):
        return group
    if isinstance(group, str):
        try:
            return make_address_v4(group)
        except ValueError:
            return make_address_v6(group)
    raise TypeError(f"cannot use {type(group).__name__} as a multicast group")


def _check_index(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError("interface index must be an integer")
    if not 0 <= value <= _MAX_UINT:
        raise ValueError("interface index out of range")
    return value


class _MulticastMembership:
    _V4_NAME: ClassVar[int]
    _V6_NAME: ClassVar[int]

    def __init__(self, group: Any, interface: Any = None) -> None:
        address = _coerce_group(group)
        if isinstance(address, AddressV4):
            iface = AddressV4.any() if interface is None else make_address_v4(interface)
            self._v4 = address.to_bytes() + iface.to_bytes()
            self._v6 = bytes(16) + struct.pack("I", 0)
        else:
            index = 0 if interface is None else _check_index(interface)
            self._v6 = address.to_bytes() + struct.pack("I", index)
            self._v4 = bytes(8)

    def level(self, protocol: Any) -> int:
        return IPPROTO_IPV6 if _is_v6(protocol) else IPPROTO_IP

    def name(self, protocol: Any) -> int:
        return self._V6_NAME if _is_v6(protocol) else self._V4_NAME

    def data(self, protocol: Any) -> bytes:
        return self._v6 if _is_v6(protocol) else self._v4

    def size(self, protocol: Any) -> int:
        return len(self.data(protocol))

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return (self._v4, self._v6) == (other._v4, other._v6)  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._v4, self._v6))


class JoinGroup(_MulticastMembership):
    """Request that a socket joins a multicast group."""

    _V4_NAME = IP_ADD_MEMBERSHIP
    _V6_NAME = IPV6_JOIN_GROUP

    def __init__(self, group: Any, interface: Any = None) -> None:
        super().__init__(group, interface)


class LeaveGroup(_MulticastMembership):
    """Request that a socket leaves a multicast group."""

    _V4_NAME = IP_DROP_MEMBERSHIP
    _V6_NAME = IPV6_LEAVE_GROUP

    def __init__(self, group: Any, interface: Any = None) -> None:
        super().__init__(group, interface)


class OutboundInterface:
    """Network interface for outgoing multicast datagrams."""

    def __init__(self, interface: Union[AddressV4, str, int]) -> None:
        if isinstance(interface, (AddressV4, str)):
            self._v4 = make_address_v4(interface).to_bytes()
            self._v6 = 0
        else:
            self._v4 = bytes(4)
            self._v6 = _check_index(interface)

    def level(self, protocol: Any) -> int:
        return IPPROTO_IPV6 if _is_v6(protocol) else IPPROTO_IP

    def name(self, protocol: Any) -> int:
        return IPV6_MULTICAST_IF if _is_v6(protocol) else IP_MULTICAST_IF

    def data(self, protocol: Any) -> bytes:
        return struct.pack("I", self._v6) if _is_v6(protocol) else self._v4

    def size(self, protocol: Any) -> int:
        return len(self.data(protocol))