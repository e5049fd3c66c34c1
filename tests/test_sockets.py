import pytest

from stratos.sockets import (
    MAX_CONCURRENT_SOCKETS,
    MAX_PACKET_SIZE,
    AddressFamily,
    NetError,
    SocketApi,
    SocketDef,
    SocketType,
    udp_rx,
    udp_tx,
)


@pytest.fixture(autouse=True)
def drain_packet_buffer():
    udp_rx(bytearray(MAX_PACKET_SIZE))
    yield
    udp_rx(bytearray(MAX_PACKET_SIZE))


def dgram():
    return SocketDef(family=AddressFamily.IPV4, type=SocketType.DGRAM)


def test_descriptors_count_up_from_zero():
    api = SocketApi()
    assert api.socket(dgram()) == 0
    assert api.socket(dgram()) == 1
    assert api.count == 2


def test_stream_socket_is_rejected():
    api = SocketApi()
    with pytest.raises(NetError):
        api.socket(SocketDef(type=SocketType.STREAM))
    assert api.count == 0


def test_invalid_family_is_rejected():
    api = SocketApi()
    with pytest.raises(NetError):
        api.socket(SocketDef(family=len(AddressFamily), type=SocketType.DGRAM))
    assert api.count == 0


def test_invalid_type_is_rejected():
    api = SocketApi()
    with pytest.raises(NetError):
        api.socket(SocketDef(type=len(SocketType)))


def test_socket_limit():
    api = SocketApi()
    descriptors = [api.socket(dgram()) for _ in range(MAX_CONCURRENT_SOCKETS)]
    assert descriptors == list(range(MAX_CONCURRENT_SOCKETS))
    with pytest.raises(NetError):
        api.socket(dgram())


def test_transmit_then_receive_round_trip():
    api = SocketApi()
    sd = api.socket(dgram())
    assert api.transmit(sd, b"hello") == 5
    assert api.receive(sd, 64) == b"hello"
    assert api.receive(sd, 64) == b""


def test_receive_limited_to_size():
    api = SocketApi()
    sd = api.socket(dgram())
    api.transmit(sd, b"abcdef")
    assert api.receive(sd, 3) == b"abc"


def test_unknown_descriptor():
    api = SocketApi()
    with pytest.raises(NetError):
        api.transmit(0, b"x")
    with pytest.raises(NetError):
        api.receive(5, 4)


def test_reset_clears_sockets():
    api = SocketApi()
    api.socket(dgram())
    api.reset()
    assert api.count == 0
    assert api.sockets == ()
    assert api.socket(dgram()) == 0


def test_udp_tx_rejects_oversized_packet():
    with pytest.raises(NetError):
        udp_tx(bytes(MAX_PACKET_SIZE + 1))


def test_udp_rx_fills_buffer():
    udp_tx(b"data")
    buffer = bytearray(8)
    assert udp_rx(buffer) == 4
    assert bytes(buffer[:4]) == b"data"