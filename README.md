# enlace

`enlace` is a small set of TCP nodes (CPU, kernel, memory, filesystem, I/O,
plus a plain client and server) that connect to each other and exchange
greetings over a simple binary protocol. Servers accept any number of
clients, serve each one on its own thread and log every message and packet
they receive.

It also ships a tiny interactive English–Spanish dictionary.

## Installation

```
pip install .
```

For running the test suite:

```
pip install .[test]
pytest
```

## Wire format

Every frame is a little-endian 32-bit operation code, a little-endian 32-bit
payload length, and the payload:

- `OpCode.MESSAGE` (0): the payload is one NUL-terminated UTF-8 string.
- `OpCode.PACKET` (1): the payload is a sequence of values, each a 32-bit
  length followed by that many bytes (text values are NUL-terminated).

A server stops serving a client when it disconnects or sends an unknown
operation code.

## Command line

```
enlace NODE [TARGET]
```

`NODE` is one of `cpu`, `kernel`, `memory`, `filesystem`, `io`, `client`,
`server`. `TARGET` is the configuration file to read, or for `server` the
port to listen on. The node runs until interrupted (Ctrl+C). If the
configuration cannot be read or a connection fails, the error is printed and
the command exits with status 1.

| Node         | Default target         | Log file            | What it does |
|--------------|------------------------|---------------------|--------------|
| `cpu`        | `cpu.config`           | `tp.log`            | connects to memory, listens on the dispatch and interrupt ports, sends memory 6 greetings |
| `kernel`     | `kernel.config`        | `tp.log`            | connects to both CPU ports and to memory, sends each 5 greetings |
| `memory`     | `memoria.config`       | `tp.log`            | connects to the filesystem, listens for clients, sends the filesystem 5 greetings |
| `filesystem` | `filesystem.config`    | `tp.log`            | listens for clients |
| `io`         | `entradasalida.config` | `entradasalida.log` | connects to memory and kernel, sends each 20 greetings, logs console lines |
| `client`     | `cliente.config`       | `cliente.log`       | logs console lines until an empty line, then connects to the server, greets it 20 times and sends the next console lines as one packet |
| `server`     | port `4444`            | `servidor.log`      | listens for clients, logs console lines |

Greetings are sent two seconds apart. Every log is also echoed to standard
output.

### Configuration files

Configuration files hold `KEY=VALUE` lines; blank lines and lines starting
with `#` are ignored. The keys each node reads:

- `cpu`: `IP_CPU`, `PUERTO_ESCUCHA_DISPATCH`, `PUERTO_ESCUCHA_INTERRUPT`,
  `IP_MEMORIA`, `PUERTO_MEMORIA`
- `kernel`: `IP_KERNEL`, `IP_MEMORIA`, `PUERTO_MEMORIA`, `IP_CPU`,
  `PUERTO_CPU_DISPATCH`, `PUERTO_CPU_INTERRUPT`, `ALGORITMO_PLANIFICACION`,
  `QUANTUM`
- `memory`: see the example below
- `filesystem`: `IP_FILESYSTEM`, `PUERTO_ESCUCHA`, `MOUNT_DIR`, `BLOCK_SIZE`,
  `BLOCK_COUNT`, `RETARDO_ACCESO_BLOQUE`
- `io`: `IP_MEMORIA`, `PUERTO_MEMORIA`, `IP_KERNEL`, `PUERTO_KERNEL`
- `client`: `IP_SERVIDOR`, `PUERTO_SERVIDOR`

Ports and the numeric settings must be integers. A memory node's file might
read:

```
IP_MEMORIA=127.0.0.1
PUERTO_ESCUCHA=8002
IP_FILESYSTEM=127.0.0.1
PUERTO_FILESYSTEM=8003
TAM_MEMORIA=4096
PATH_INSTRUCCIONES=/tmp/instrucciones
RETARDO_RESPUESTA=1000
ESQUEMA=FIJAS
ALGORITMO_BUSQUEDA=FIRST
PARTICIONES=[256,256,512]
```

## Dictionary

```
enlace-dictionary
```

It shows a menu read from whitespace-separated input: `1` adds a new word
(English, then Spanish), `2` lists every translation entered so far as
`english: spanish`, `0` or end of input quits. Words must be shorter than 100
characters. Entries are kept in memory only.

## Library use

Building and decoding frames:

```python
from enlace.protocol import Packet, encode_message, decode_message, decode_values

frame = encode_message("HOLA, SOY KERNEL")

packet = Packet()
packet.add("primero")
packet.add("segundo")
wire = packet.serialize()
decode_values(bytes(packet.payload))   # ['primero', 'segundo']
```

Reading configuration:

```python
from enlace.config import Config
from enlace.settings import load_memory_settings

config = Config.parse("IP_MEMORIA=127.0.0.1\nPUERTO_ESCUCHA=8002\n")
config.get_string("IP_MEMORIA")   # '127.0.0.1'
config.get_int("PUERTO_ESCUCHA")  # 8002

settings = load_memory_settings("memoria.config")
```

Running a server and talking to it:

```python
import threading

from enlace.logger import open_log
from enlace.transport import accept_clients, connect_to, send_message, start_server

log = open_log("servidor.log", "SERVIDOR_LOG")
server = start_server("4444", log)
threading.Thread(target=accept_clients, args=(server, log), daemon=True).start()

with connect_to("127.0.0.1", "4444", log) as sock:
    send_message(sock, "Hola Servidor")
```

`enlace.console` reads lines from the console (`read_lines`,
`read_console_to_log`, `packet_from_console`) and `enlace.pcb` holds a
process control block (`Pcb`, `CpuRegisters`, `create_pcb`) whose registers
are range-checked as 8- or 32-bit values.

Missing configuration files or keys, and non-integer values where an integer
is expected, raise `ConfigError`; malformed packet payloads raise
`ProtocolError`.

## What it does not do

The nodes only connect, greet each other and log what they receive. There is
no process scheduling, no memory management, no filesystem storage and no
kernel command console: the scheduling, memory and filesystem settings are
read and validated but not acted on, and `Pcb` is a plain record that no
node uses.