"""Typed settings for each node, read from its configuration file."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from enlace.config import Config, load_config

_log = logging.getLogger("enlace")
_LOADED = "Configuracion cargada"


def _port(config: Config, key: str) -> str:
    return str(config.get_int(key))


@dataclass(frozen=True)
class CpuSettings:
    ip_cpu: str
    dispatch_port: str
    interrupt_port: str
    memory_ip: str
    memory_port: str


@dataclass(frozen=True)
class FilesystemSettings:
    ip_filesystem: str
    listen_port: str
    mount_dir: str
    block_size: int
    block_count: int
    block_access_delay: int


@dataclass(frozen=True)
class KernelSettings:
    ip_kernel: str
    memory_ip: str
    memory_port: str
    cpu_ip: str
    cpu_dispatch_port: str
    cpu_interrupt_port: str
    scheduling_algorithm: str
    quantum: int


@dataclass(frozen=True)
class MemorySettings:
    ip_memory: str
    listen_port: str
    filesystem_ip: str
    filesystem_port: str
    memory_size: int
    instructions_path: str
    response_delay: int
    scheme: str
    search_algorithm: str
    partitions: str


def load_cpu_settings(path: str | Path) -> CpuSettings:
    config = load_config(path, _log)
    settings = CpuSettings(
        ip_cpu=config.get_string("IP_CPU"),
        dispatch_port=_port(config, "PUERTO_ESCUCHA_DISPATCH"),
        interrupt_port=_port(config, "PUERTO_ESCUCHA_INTERRUPT"),
        memory_ip=config.get_string("IP_MEMORIA"),
        memory_port=_port(config, "PUERTO_MEMORIA"),
    )
    _log.info(_LOADED)
    return settings


def load_filesystem_settings(path: str | Path) -> FilesystemSettings:
    config = load_config(path, _log)
    settings = FilesystemSettings(
        ip_filesystem=config.get_string("IP_FILESYSTEM"),
        listen_port=_port(config, "PUERTO_ESCUCHA"),
        mount_dir=config.get_string("MOUNT_DIR"),
        block_size=config.get_int("BLOCK_SIZE"),
        block_count=config.get_int("BLOCK_COUNT"),
        block_access_delay=config.get_int("RETARDO_ACCESO_BLOQUE"),
    )
    _log.info(_LOADED)
    return settings


def load_kernel_settings(path: str | Path) -> KernelSettings:
    config = load_config(path, _log)
    settings = KernelSettings(
        ip_kernel=config.get_string("IP_KERNEL"),
        memory_ip=config.get_string("IP_MEMORIA"),
        memory_port=_port(config, "PUERTO_MEMORIA"),
        cpu_ip=config.get_string("IP_CPU"),
        cpu_dispatch_port=_port(config, "PUERTO_CPU_DISPATCH"),
        cpu_interrupt_port=_port(config, "PUERTO_CPU_INTERRUPT"),
        scheduling_algorithm=config.get_string("ALGORITMO_PLANIFICACION"),
        quantum=config.get_int("QUANTUM"),
    )
    _log.info(_LOADED)
    return settings


def load_memory_settings(path: str | Path) -> MemorySettings:
    config = load_config(path, _log)
    settings = MemorySettings(
        ip_memory=config.get_string("IP_MEMORIA"),
        listen_port=_port(config, "PUERTO_ESCUCHA"),
        filesystem_ip=config.get_string("IP_FILESYSTEM"),
        filesystem_port=_port(config, "PUERTO_FILESYSTEM"),
        memory_size=config.get_int("TAM_MEMORIA"),
        instructions_path=config.get_string("PATH_INSTRUCCIONES"),
        response_delay=config.get_int("RETARDO_RESPUESTA"),
        scheme=config.get_string("ESQUEMA"),
        search_algorithm=config.get_string("ALGORITMO_BUSQUEDA"),
        partitions=config.get_string("PARTICIONES"),
    )
    _log.info(_LOADED)
    return settings