"""TCP transport: listening and connecting sockets, framed send and receive,
and the per-client service loop."""

from __future__ import annotations

import logging
import socket
import threading

from enlace.protocol import INT, OpCode, Packet, ProtocolError, decode_message, decode_values, encode_message


class ConnectionTracker:
    """Thread-safe count of the clients currently being served."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._count = 0

    def opened(self) -> None:
        with self._lock:
            self._count += 1

    def closed(self) -> None:
        with self._lock:
            self._count -= 1

    @property
    def count(self) -> int:
        with self._lock:
            return self._count


def _address(host: str | None, port: str | int, passive: bool) -> tuple:
    flags = socket.AI_PASSIVE if passive else 0
    infos = socket.getaddrinfo(host, str(port), socket.AF_INET, socket.SOCK_STREAM, 0, flags)
    return infos[0]


def start_server(port: str | int, log: logging.Logger, host: str | None = None) -> socket.socket:
    """Create a socket bound to ``host:port`` and listening for clients."""
    try:
        family, kind, proto, _, address = _address(host, port, passive=True)
        server = socket.socket(family, kind, proto)
    except OSError:
        log.error("%s%s", "No se logro crear el socket del servidor con el puerto: ", port)
        raise
    log.info("Se creo el socket servidor")
    try:
        server.bind(address)
    except OSError:
        server.close()
        log.error("%s", "No se logro asignar direccion al socket")
        raise
    try:
        server.listen(socket.SOMAXCONN)
    except OSError:
        server.close()
        log.error("%s", "No se logro colocar al socket servidor, como socket de escucha")
        raise
    return server


def connect_to(ip: str, port: str | int, log: logging.Logger) -> socket.socket:
    """Open a connection to the server at ``ip:port``."""
    try:
        family, kind, proto, _, address = _address(ip, port, passive=False)
        sock = socket.socket(family, kind, proto)
    except OSError:
        log.error("%s%s", "No se logro crear el socket del cliente con el puerto: ", port)
        raise
    log.info("Se creo el socket cliente")
    log.info("%s", "Solicita atencion al servidor")
    try:
        sock.connect(address)
    except OSError:
        sock.close()
        log.error("%s%s", "No se logro establecer la conexion con el cliente del puerto: ", port)
        raise
    log.info("%s", "Inicia la atencion")
    return sock


def send_message(sock: socket.socket, text: str) -> None:
    """Send ``text`` as a message frame."""
    sock.sendall(encode_message(text))


def send_packet(sock: socket.socket, packet: Packet) -> None:
    """Send a packet frame."""
    sock.sendall(packet.serialize())


def _recv_exact(sock: socket.socket, size: int) -> bytes:
    data = bytearray()
    while len(data) < size:
        chunk = sock.recv(size - len(data))
        if not chunk:
            raise ConnectionError(f"connection closed after {len(data)} of {size} bytes")
        data += chunk
    return bytes(data)


def receive_operation(sock: socket.socket) -> OpCode | int | None:
    """Read the next operation code; on disconnection close ``sock`` and return None."""
    try:
        raw = _recv_exact(sock, INT.size)
    except OSError:
        sock.close()
        return None
    (code,) = INT.unpack(raw)
    try:
        return OpCode(code)
    except ValueError:
        return code


def receive_buffer(sock: socket.socket) -> bytes:
    """Read a length-prefixed payload."""
    (size,) = INT.unpack(_recv_exact(sock, INT.size))
    if size < 0:
        raise ProtocolError(f"invalid payload length {size}")
    return _recv_exact(sock, size)


def receive_message(sock: socket.socket, log: logging.Logger) -> str:
    """Read a message payload, log it and return its text."""
    text = decode_message(receive_buffer(sock))
    log.info("Me llego el mensaje %s", text)
    return text


def receive_packet(sock: socket.socket) -> list[str]:
    """Read a packet payload and return its values."""
    return decode_values(receive_buffer(sock))


def log_messages(values: list[str], log: logging.Logger) -> None:
    for value in values:
        log.info("%s", value)


def serve_client(
    sock: socket.socket,
    log: logging.Logger,
    tracker: ConnectionTracker | None = None,
) -> None:
    """Handle frames from one client until it disconnects or sends an unknown code."""
    try:
        while True:
            code = receive_operation(sock)
            if code is OpCode.MESSAGE:
                receive_message(sock, log)
            elif code is OpCode.PACKET:
                values = receive_packet(sock)
                log.info("Mensajes recibidos:")
                log_messages(values, log)
            elif code is None:
                log.error("el cliente se desconecto. Terminando servidor")
                if tracker is not None:
                    tracker.closed()
                return
            else:
                log.warning("Operacion desconocida")
                return
    finally:
        sock.close()


def accept_clients(
    server: socket.socket,
    log: logging.Logger,
    limit: int | None = socket.SOMAXCONN,
) -> ConnectionTracker:
    """Accept clients, each served on its own thread, while fewer than ``limit``
    are connected; ``None`` means no limit. Stops if the server socket fails."""
    tracker = ConnectionTracker()
    log.info("%s", "Inicia la atencion a los clientes")
    while limit is None or tracker.count < limit:
        try:
            client, _ = server.accept()
        except OSError:
            break
        log.info("%s", "Nueva conexion de un cliente")
        tracker.opened()
        threading.Thread(target=serve_client, args=(client, log, tracker), daemon=True).start()
    return tracker