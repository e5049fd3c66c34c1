import socket

import pytest

from stratos.net import DEFAULT_ADDRESS, DEFAULT_PORT, SimNetwork


def send_to(address, payload):
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as client:
        client.sendto(payload, address)


def test_defaults_match_device_configuration():
    net = SimNetwork()
    assert net.address == DEFAULT_ADDRESS == "192.168.1.100"
    assert net.port == DEFAULT_PORT == 8000
    assert net.is_open is False


def test_get_packet_returns_sent_data():
    with SimNetwork("127.0.0.1", 0) as net:
        send_to(net.bound_address, b"ping")
        assert net.get_packet(1024, 1) == b"ping"


def test_get_packet_requires_open_socket():
    net = SimNetwork("127.0.0.1", 0)
    with pytest.raises(RuntimeError):
        net.get_packet(1024, 1)


def test_process_prints_packet(capsys):
    with SimNetwork("127.0.0.1", 0) as net:
        send_to(net.bound_address, b"hello\0junk")
        assert net.process() == b"hello\0junk"
    assert capsys.readouterr().out == "packet_data=hello"


def test_process_without_socket_returns_none(capsys):
    net = SimNetwork("127.0.0.1", 0)
    assert net.process() is None
    assert capsys.readouterr().out == ""


def test_context_manager_closes():
    with SimNetwork("127.0.0.1", 0) as net:
        assert net.is_open is True
    assert net.is_open is False
    with pytest.raises(RuntimeError):
        net.bound_address