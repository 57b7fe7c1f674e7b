"""Process control block kept by the kernel."""

from __future__ import annotations

from dataclasses import dataclass, field, fields

_BYTE_REGISTERS = {"ax", "bx", "cx", "dx"}


@dataclass
class CpuRegisters:
    """CPU register file: four 8-bit registers, the rest 32-bit."""

    pc: int = 0
    ax: int = 0
    bx: int = 0
    cx: int = 0
    dx: int = 0
    eax: int = 0
    ebx: int = 0
    ecx: int = 0
    edx: int = 0
    si: int = 0
    di: int = 0

    def __post_init__(self) -> None:
        for item in fields(self):
            bits = 8 if item.name in _BYTE_REGISTERS else 32
            value = getattr(self, item.name)
            if not 0 <= value < 1 << bits:
                raise ValueError(f"register {item.name} out of range for {bits} bits: {value}")


@dataclass
class Pcb:
    """State of one process."""

    pid: int = 0
    program_counter: int = 0
    quantum: int = 0
    registers: CpuRegisters = field(default_factory=CpuRegisters)


def create_pcb() -> Pcb:
    """Return a new, zeroed process control block."""
    return Pcb()