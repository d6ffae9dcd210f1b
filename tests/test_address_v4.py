import pytest

from costeer.address_v4 import AddressV4, make_address_v4


def test_loopback_constant():
    address = AddressV4.loopback()
    assert address.to_uint() == 0x7F000001
    assert str(address) == "127.0.0.1"
    assert address.is_loopback()


def test_broadcast_constant():
    address = AddressV4.broadcast()
    assert address.to_uint() == 0xFFFFFFFF
    assert address.to_bytes() == bytes([255, 255, 255, 255])


def test_any_is_unspecified_and_default():
    assert AddressV4.any().is_unspecified()
    assert AddressV4() == AddressV4.any()
    assert not AddressV4.loopback().is_unspecified()


@pytest.mark.parametrize(
    "text", ["0.0.0.0", "10.0.0.1", "192.168.1.10", "255.255.255.255", "224.0.0.251"]
)
def test_string_round_trip(text):
    assert str(make_address_v4(text)) == text


@pytest.mark.parametrize("value", [0, 1, 0x7F000001, 0xC0A8010A, 0xFFFFFFFF])
def test_uint_round_trip(value):
    address = make_address_v4(value)
    assert address.to_uint() == value
    assert make_address_v4(str(address)) == address


def test_bytes_round_trip():
    address = make_address_v4("10.20.30.40")
    assert address.to_bytes() == bytes([10, 20, 30, 40])
    assert AddressV4.from_bytes(address.to_bytes()) == address
    assert make_address_v4([10, 20, 30, 40]) == address


def test_bytes_and_uint_agree():
    address = AddressV4.from_bytes(bytes([1, 2, 3, 4]))
    assert address.to_uint() == int.from_bytes(bytes([1, 2, 3, 4]), "big")


def test_loopback_range():
    assert make_address_v4("127.255.0.9").is_loopback()
    assert not make_address_v4("128.0.0.1").is_loopback()


def test_multicast_range():
    assert make_address_v4("224.0.0.1").is_multicast()
    assert make_address_v4("239.255.255.255").is_multicast()
    assert not make_address_v4("240.0.0.1").is_multicast()
    assert not make_address_v4("223.255.255.255").is_multicast()


def test_ordering_follows_integer_value():
    low = make_address_v4("9.255.255.255")
    high = make_address_v4("10.0.0.0")
    assert low < high
    assert sorted([high, low]) == [low, high]
    assert max(low, high) == high


def test_equal_addresses_hash_equal():
    a = make_address_v4("172.16.0.1")
    b = AddressV4.from_bytes([172, 16, 0, 1])
    assert a == b
    assert len({a, b}) == 1


def test_format_uses_text():
    address = make_address_v4("8.8.4.4")
    assert f"{address}" == "8.8.4.4"


def test_make_accepts_address():
    address = AddressV4.loopback()
    assert make_address_v4(address) is address


@pytest.mark.parametrize(
    "text",
    [
        "",
        "1.2.3",
        "1.2.3.4.5",
        "256.0.0.1",
        "1.2.3.-4",
        "a.b.c.d",
        "01.2.3.4",
        "1..3.4",
        " 1.2.3.4",
        "1000.1000.1000.1000",
    ],
)
def test_invalid_text_raises(text):
    with pytest.raises(ValueError):
        make_address_v4(text)


@pytest.mark.parametrize("value", [-1, 0x100000000])
def test_out_of_range_uint_raises(value):
    with pytest.raises(ValueError):
        AddressV4(value)


def test_wrong_byte_count_raises():
    with pytest.raises(ValueError):
        AddressV4.from_bytes(bytes([1, 2, 3]))


def test_out_of_range_byte_raises():
    with pytest.raises(ValueError):
        make_address_v4([1, 2, 3, 256])


def test_unsupported_type_raises():
    with pytest.raises(TypeError):
        make_address_v4(1.5)