import pytest

from enlace.pcb import CpuRegisters, Pcb, create_pcb


def test_create_pcb_is_zeroed():
    pcb = create_pcb()
    assert pcb == Pcb(0, 0, 0, CpuRegisters())
    assert pcb.registers.eax == 0


def test_pcbs_do_not_share_registers():
    first, second = create_pcb(), create_pcb()
    first.registers.ax = 7
    assert second.registers.ax == 0


@pytest.mark.parametrize("name", ["ax", "bx", "cx", "dx"])
def test_byte_registers_reject_overflow(name):
    with pytest.raises(ValueError):
        CpuRegisters(**{name: 256})


@pytest.mark.parametrize("name", ["pc", "eax", "ebx", "ecx", "edx", "si", "di"])
def test_wide_registers_accept_32_bits(name):
    registers = CpuRegisters(**{name: 2**32 - 1})
    assert getattr(registers, name) == 2**32 - 1
    with pytest.raises(ValueError):
        CpuRegisters(**{name: 2**32})


def test_negative_register_rejected():
    with pytest.raises(ValueError):
        CpuRegisters(si=-1)