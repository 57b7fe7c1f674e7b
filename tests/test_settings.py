import pytest

from enlace.config import ConfigError
from enlace.settings import (
    CpuSettings,
    load_cpu_settings,
    load_filesystem_settings,
    load_kernel_settings,
    load_memory_settings,
)


def _write(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def test_cpu_settings(tmp_path):
    path = _write(
        tmp_path,
        "cpu.config",
        "IP_CPU=127.0.0.1\nPUERTO_ESCUCHA_DISPATCH=8006\nPUERTO_ESCUCHA_INTERRUPT=8007\n"
        "IP_MEMORIA=127.0.0.1\nPUERTO_MEMORIA=8002\n",
    )
    assert load_cpu_settings(path) == CpuSettings("127.0.0.1", "8006", "8007", "127.0.0.1", "8002")


def test_ports_are_normalised_integers(tmp_path):
    path = _write(
        tmp_path,
        "cpu.config",
        "IP_CPU=127.0.0.1\nPUERTO_ESCUCHA_DISPATCH=08006\nPUERTO_ESCUCHA_INTERRUPT=8007\n"
        "IP_MEMORIA=127.0.0.1\nPUERTO_MEMORIA=8002\n",
    )
    assert load_cpu_settings(path).dispatch_port == "8006"


def test_filesystem_settings(tmp_path):
    path = _write(
        tmp_path,
        "filesystem.config",
        "IP_FILESYSTEM=127.0.0.1\nPUERTO_ESCUCHA=8003\nMOUNT_DIR=/home/fs\n"
        "BLOCK_SIZE=64\nBLOCK_COUNT=1024\nRETARDO_ACCESO_BLOQUE=2500\n",
    )
    settings = load_filesystem_settings(path)
    assert settings.listen_port == "8003"
    assert settings.mount_dir == "/home/fs"
    assert (settings.block_size, settings.block_count, settings.block_access_delay) == (64, 1024, 2500)


def test_kernel_settings(tmp_path):
    path = _write(
        tmp_path,
        "kernel.config",
        "IP_KERNEL=127.0.0.1\nIP_MEMORIA=127.0.0.1\nPUERTO_MEMORIA=8002\nIP_CPU=127.0.0.1\n"
        "PUERTO_CPU_DISPATCH=8006\nPUERTO_CPU_INTERRUPT=8007\nALGORITMO_PLANIFICACION=RR\nQUANTUM=2000\n",
    )
    settings = load_kernel_settings(path)
    assert settings.scheduling_algorithm == "RR"
    assert settings.quantum == 2000
    assert settings.cpu_interrupt_port == "8007"


def test_memory_settings(tmp_path):
    path = _write(
        tmp_path,
        "memoria.config",
        "IP_MEMORIA=127.0.0.1\nPUERTO_ESCUCHA=8002\nIP_FILESYSTEM=127.0.0.1\nPUERTO_FILESYSTEM=8003\n"
        "TAM_MEMORIA=4096\nPATH_INSTRUCCIONES=/home/scripts\nRETARDO_RESPUESTA=1000\n"
        "ESQUEMA=FIJAS\nALGORITMO_BUSQUEDA=FIRST\nPARTICIONES=[256,256,512]\n",
    )
    settings = load_memory_settings(path)
    assert settings.memory_size == 4096
    assert settings.partitions == "[256,256,512]"
    assert settings.filesystem_port == "8003"


def test_missing_key_raises(tmp_path):
    path = _write(tmp_path, "cpu.config", "IP_CPU=127.0.0.1\n")
    with pytest.raises(ConfigError):
        load_cpu_settings(path)


def test_missing_file_raises(tmp_path):
    with pytest.raises(ConfigError):
        load_kernel_settings(tmp_path / "kernel.config")