"""The nodes of the distributed system and the command that starts them.

Each ``run_*`` function connects to its peers, opens its listening sockets and
starts its background work on daemon threads, then returns the running node.
"""

from __future__ import annotations

import argparse
import logging
import socket
import sys
import threading
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path

from enlace.config import ConfigError, load_config, read_value
from enlace.console import GREETING, GREETING_INTERVAL, GREETING_TIMES, greet, read_console_to_log
from enlace.logger import create_logger, open_log
from enlace.settings import (
    load_cpu_settings,
    load_filesystem_settings,
    load_kernel_settings,
    load_memory_settings,
)
from enlace.transport import accept_clients, connect_to, send_message, start_server

SERVER_PORT = "4444"
MISSING_ARGUMENTS = "Error, faltan argumentos"


@dataclass
class _Node:
    """A running node: its log, its open sockets and its background threads."""

    log: logging.Logger
    sockets: list[socket.socket] = field(default_factory=list)
    threads: list[threading.Thread] = field(default_factory=list)

    def keep(self, sock: socket.socket) -> socket.socket:
        self.sockets.append(sock)
        return sock

    def spawn(self, target: Callable[..., object], *args: object) -> threading.Thread:
        thread = threading.Thread(target=target, args=args, daemon=True)
        thread.start()
        self.threads.append(thread)
        return thread

    def wait(self, timeout: float | None = None) -> bool:
        """Join every thread; return True if all of them finished."""
        deadline = None if timeout is None else time.monotonic() + timeout
        for thread in self.threads:
            remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
            thread.join(remaining)
        return not any(thread.is_alive() for thread in self.threads)

    def close(self) -> None:
        """Shut down every socket and detach the log's handlers."""
        for sock in self.sockets:
            try:
                sock.shutdown(socket.SHUT_RDWR)
            except OSError:
                pass
            sock.close()
        self.sockets.clear()
        for handler in list(self.log.handlers):
            self.log.removeHandler(handler)
            handler.close()

    def __enter__(self) -> "_Node":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


@contextmanager
def _starting(log: logging.Logger) -> Iterator[_Node]:
    node = _Node(log)
    try:
        yield node
    except BaseException:
        node.close()
        raise


def send_greetings(sock: socket.socket, text: str, times: int, interval: float) -> None:
    """Send ``text`` ``times`` times, pausing ``interval`` seconds after each."""
    for _ in range(times):
        send_message(sock, text)
        time.sleep(interval)


def _greeter(log: logging.Logger, sock: socket.socket, text: str, times: int, interval: float) -> None:
    try:
        send_greetings(sock, text, times, interval)
    except OSError as exc:
        log.warning("Saludo interrumpido: %s", exc)


def _console(log: logging.Logger) -> None:
    try:
        read_console_to_log(log)
    except OSError:
        pass


def _client_greeter(log: logging.Logger, sock: socket.socket) -> None:
    try:
        greet(sock, GREETING, GREETING_TIMES, GREETING_INTERVAL)
    except (OSError, EOFError) as exc:
        log.warning("Saludo interrumpido: %s", exc)


def _listen(node: _Node, server: socket.socket) -> None:
    node.spawn(accept_clients, server, node.log, None)


def validate_arguments(argv: list[str]) -> str:
    """Check the command line holds at least two arguments; return the first."""
    if len(argv) < 3:
        raise ValueError(MISSING_ARGUMENTS)
    return argv[1]


def run_cpu(config_path: str | Path = "cpu.config") -> _Node:
    """Connect to memory, listen for dispatch and interrupt, greet memory."""
    with _starting(create_logger()) as node:
        log = node.log
        log.info("Iniciando CPU")
        settings = load_cpu_settings(config_path)
        memory = node.keep(connect_to(settings.memory_ip, settings.memory_port, log))
        log.info("Memoria conectada a CPU, socket: %d", memory.fileno())
        dispatch = node.keep(start_server(settings.dispatch_port, log, settings.ip_cpu))
        interrupt = node.keep(start_server(settings.interrupt_port, log, settings.ip_cpu))
        node.spawn(_greeter, log, memory, "HOLA Memoria, SOY CPU", 6, 2)
        _listen(node, dispatch)
        _listen(node, interrupt)
    return node


def run_kernel(config_path: str | Path = "kernel.config") -> _Node:
    """Connect to both CPU ports and to memory, and greet each of them."""
    with _starting(create_logger()) as node:
        log = node.log
        log.info("Iniciando kernel")
        settings = load_kernel_settings(config_path)
        dispatch = node.keep(connect_to(settings.cpu_ip, settings.cpu_dispatch_port, log))
        log.info("CPU dispatch conectado a Kernel, socket: %d", dispatch.fileno())
        interrupt = node.keep(connect_to(settings.cpu_ip, settings.cpu_interrupt_port, log))
        log.info("CPU interrupt conectado a Kernel, socket: %d", interrupt.fileno())
        memory = node.keep(connect_to(settings.memory_ip, settings.memory_port, log))
        log.info("Memoria conectada a Kernel, socket: %d", memory.fileno())
        node.spawn(_greeter, log, dispatch, "HOLA CPU, SOY Kernel", 5, 2)
        node.spawn(_greeter, log, interrupt, "HOLA CPU, SOY Kernel", 5, 2)
        node.spawn(_greeter, log, memory, "HOLA Memoria, SOY Kernel", 5, 2)
    return node


def run_memory(config_path: str | Path = "memoria.config") -> _Node:
    """Connect to the filesystem, listen for clients and greet the filesystem."""
    with _starting(create_logger()) as node:
        log = node.log
        log.info("Iniciando memoria")
        settings = load_memory_settings(config_path)
        filesystem = node.keep(connect_to(settings.filesystem_ip, settings.filesystem_port, log))
        log.info("Conectado a Memoria, socket: %d", filesystem.fileno())
        server = node.keep(start_server(settings.listen_port, log, settings.ip_memory))
        _listen(node, server)
        node.spawn(_greeter, log, filesystem, "HOLA FileSystem, SOY Memoria", 5, 2)
    return node


def run_filesystem(config_path: str | Path = "filesystem.config") -> _Node:
    """Listen for clients and serve each on its own thread."""
    with _starting(create_logger()) as node:
        log = node.log
        log.info("Iniciando FileSystem")
        settings = load_filesystem_settings(config_path)
        server = node.keep(start_server(settings.listen_port, log, settings.ip_filesystem))
        log.info("Servidor listo para recibir al cliente")
        _listen(node, server)
    return node


def run_io(config_path: str | Path = "entradasalida.config") -> _Node:
    """Connect to memory and kernel, greet both and log console input."""
    with _starting(open_log("entradasalida.log", "ENTRADASALIDA_LOG")) as node:
        log = node.log
        config = load_config(config_path, log)
        memory_ip = read_value(config, "IP_MEMORIA", log)
        memory_port = read_value(config, "PUERTO_MEMORIA", log)
        kernel_ip = read_value(config, "IP_KERNEL", log)
        kernel_port = read_value(config, "PUERTO_KERNEL", log)
        memory = node.keep(connect_to(memory_ip, memory_port, log))
        kernel = node.keep(connect_to(kernel_ip, kernel_port, log))
        node.spawn(_greeter, log, memory, "HOLA! SOY ENTRADASALIDA", 20, 2)
        node.spawn(_greeter, log, kernel, "HOLA! SOY ENTRADASALIDA", 20, 2)
        node.spawn(_console, log)
    return node


def run_client(config_path: str | Path = "cliente.config") -> _Node:
    """Log console input, then connect to the server and greet it."""
    with _starting(open_log("cliente.log", "CLIENTE_LOG")) as node:
        log = node.log
        config = load_config(config_path, log)
        ip = read_value(config, "IP_SERVIDOR", log)
        port = read_value(config, "PUERTO_SERVIDOR", log)
        read_console_to_log(log)
        sock = node.keep(connect_to(ip, port, log))
        node.spawn(_client_greeter, log, sock)
    return node


def run_server(port: str | int = SERVER_PORT) -> _Node:
    """Listen on ``port`` for clients and log console input."""
    with _starting(open_log("servidor.log", "SERVIDOR_LOG")) as node:
        log = node.log
        server = node.keep(start_server(port, log))
        node.spawn(accept_clients, server, log, socket.SOMAXCONN)
        node.spawn(_console, log)
    return node


_RUNNERS: dict[str, tuple[Callable[[str], _Node], str]] = {
    "cpu": (run_cpu, "cpu.config"),
    "kernel": (run_kernel, "kernel.config"),
    "memory": (run_memory, "memoria.config"),
    "filesystem": (run_filesystem, "filesystem.config"),
    "io": (run_io, "entradasalida.config"),
    "client": (run_client, "cliente.config"),
    "server": (run_server, SERVER_PORT),
}


def main(argv: list[str] | None = None) -> int:
    """Start one node and keep it running until interrupted."""
    parser = argparse.ArgumentParser(prog="enlace", description="Start a node of the system.")
    parser.add_argument("node", choices=sorted(_RUNNERS))
    parser.add_argument("target", nargs="?", help="configuration file, or port for the server")
    args = parser.parse_args(argv)
    runner, default = _RUNNERS[args.node]
    try:
        node = runner(args.target or default)
    except (ConfigError, OSError) as exc:
        print(exc, file=sys.stderr)
        return 1
    with node:
        try:
            node.wait()
        except KeyboardInterrupt:
            pass
    return 0