import logging
import socket
from unittest import mock

import pytest

from enlace import console
from enlace.protocol import OpCode
from enlace.transport import receive_message, receive_operation, receive_packet, start_server


def feeder(lines, prompts=None):
    items = iter(lines)

    def _input(prompt):
        if prompts is not None:
            prompts.append(prompt)
        try:
            return next(items)
        except StopIteration:
            raise EOFError from None

    return _input


@pytest.fixture
def log():
    return logging.getLogger("test_console")


def test_read_lines_stops_at_empty_line():
    prompts = []
    lines = list(console.read_lines(console.PROMPT, feeder(["uno", "dos", "", "tres"], prompts)))
    assert lines == ["uno", "dos"]
    assert prompts == [console.PROMPT] * 3


def test_read_lines_stops_at_end_of_input():
    assert list(console.read_lines("> ", feeder(["a", "b"]))) == ["a", "b"]


def test_read_console_to_log(log, caplog):
    with caplog.at_level(logging.INFO, logger="test_console"):
        console.read_console_to_log(log, feeder(["hola", "mundo", ""]))
    assert [r.getMessage() for r in caplog.records] == ["Consola: hola", "Consola: mundo"]


def test_packet_from_console_wire_bytes():
    packet = console.packet_from_console(feeder(["hi", ""]))
    assert packet.op_code is OpCode.PACKET
    assert packet.serialize() == b"\x01\0\0\0\x07\0\0\0\x03\0\0\0hi\0"


def test_packet_from_console_empty():
    packet = console.packet_from_console(feeder([""]))
    assert bytes(packet.payload) == b""


def test_send_packet_from_console_round_trip():
    left, right = socket.socketpair()
    with left, right:
        sent = console.send_packet_from_console(left, feeder(["x", "yz", ""]))
        assert receive_operation(right) is OpCode.PACKET
        assert receive_packet(right) == ["x", "yz"]
    assert sent.op_code is OpCode.PACKET


def test_greet_sends_messages_then_packet(log):
    left, right = socket.socketpair()
    with left, right, mock.patch("enlace.console.time.sleep") as sleep:
        console.greet(left, "saludo", 3, 0.5, feeder(["a", "b", ""]))
        texts = []
        for _ in range(3):
            assert receive_operation(right) is OpCode.MESSAGE
            texts.append(receive_message(right, log))
        assert receive_operation(right) is OpCode.PACKET
        assert receive_packet(right) == ["a", "b"]
    assert texts == ["saludo"] * 3
    assert sleep.call_count == 3
    sleep.assert_called_with(0.5)


def test_start_client_greets_server(log):
    server = start_server(0, log, "127.0.0.1")
    port = server.getsockname()[1]
    with server, mock.patch("enlace.console.time.sleep"):
        thread = console.start_client("127.0.0.1", port, log, feeder(["fin", ""]))
        client, _ = server.accept()
        with client:
            thread.join(timeout=10)
            texts = []
            for _ in range(console.GREETING_TIMES):
                assert receive_operation(client) is OpCode.MESSAGE
                texts.append(receive_message(client, log))
            assert receive_operation(client) is OpCode.PACKET
            assert receive_packet(client) == ["fin"]
            assert receive_operation(client) is None
    assert not thread.is_alive()
    assert texts == ["Hola Servidor"] * 20


def test_start_client_refused(log):
    probe = socket.socket()
    probe.bind(("127.0.0.1", 0))
    port = probe.getsockname()[1]
    probe.close()
    with pytest.raises(OSError):
        console.start_client("127.0.0.1", port, log, feeder([""]))