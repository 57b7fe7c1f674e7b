"""Console-driven input: lines typed by the user are logged or packed and sent."""

from __future__ import annotations

import logging
import socket
import threading
import time
from collections.abc import Callable, Iterator

from enlace.protocol import Packet
from enlace.transport import connect_to, send_message, send_packet

PROMPT = "Ingrese cadena(finaliza con un enter):"
GREETING = "Hola Servidor"
GREETING_TIMES = 20
GREETING_INTERVAL = 2.0

InputFunc = Callable[[str], str]


def read_lines(prompt: str = PROMPT, input_func: InputFunc = input) -> Iterator[str]:
    """Yield lines read with ``input_func`` until an empty line or end of input."""
    while True:
        try:
            line = input_func(prompt)
        except EOFError:
            return
        if line == "":
            return
        yield line


def read_console_to_log(log: logging.Logger, input_func: InputFunc = input) -> None:
    """Log every line typed on the console until an empty line."""
    for line in read_lines(PROMPT, input_func):
        log.info("%s%s", "Consola: ", line)


def packet_from_console(input_func: InputFunc = input) -> Packet:
    """Build a packet holding every line typed until an empty line."""
    packet = Packet()
    for line in read_lines(PROMPT, input_func):
        packet.add(line)
    return packet


def send_packet_from_console(sock: socket.socket, input_func: InputFunc = input) -> Packet:
    """Read lines from the console, send them as one packet and return it."""
    packet = packet_from_console(input_func)
    send_packet(sock, packet)
    return packet


def greet(
    sock: socket.socket,
    greeting: str = GREETING,
    times: int = GREETING_TIMES,
    interval: float = GREETING_INTERVAL,
    input_func: InputFunc = input,
) -> Packet:
    """Send ``greeting`` ``times`` times, pausing ``interval`` seconds after each,
    then send a packet of lines read from the console."""
    for _ in range(times):
        send_message(sock, greeting)
        time.sleep(interval)
    return send_packet_from_console(sock, input_func)


def start_client(
    ip: str,
    port: str | int,
    log: logging.Logger,
    input_func: InputFunc = input,
) -> threading.Thread:
    """Connect to ``ip:port`` and greet the server on a background thread.

    The returned thread closes the connection once the greeting is done."""
    sock = connect_to(ip, port, log)

    def _run() -> None:
        with sock:
            greet(sock, GREETING, GREETING_TIMES, GREETING_INTERVAL, input_func)

    thread = threading.Thread(target=_run, daemon=True)
    thread.start()
    return thread