"""
Espressif chip targets and the CPU architecture each one needs.

Xtensa chips require the custom Rust distribution and the Xtensa LLVM
backend; RISC-V chips only need the stock target added to a rustup toolchain.
"""

from enum import Enum
from typing import Iterable, List


class Architecture(Enum):
    """CPU architecture family of a chip."""

    XTENSA = "xtensa"
    RISCV = "riscv"


class Target(Enum):
    """Supported chip targets."""

    ESP32 = "esp32"
    ESP32S2 = "esp32s2"
    ESP32S3 = "esp32s3"
    ESP32C3 = "esp32c3"

    @property
    def architecture(self) -> Architecture:
        if self is Target.ESP32C3:
            return Architecture.RISCV
        return Architecture.XTENSA

    def __str__(self) -> str:
        return self.value


RISCV_TARGET_TRIPLE = "riscv32imac-unknown-none-elf"


def parse_targets(value: str) -> List[Target]:
    """
    Parse a comma separated list of chip names.

    Args:
        value: Chip names such as "esp32,esp32c3", or "all"

    Returns:
        Targets in the order given, without duplicates

    Raises:
        ValueError: If a name is not a supported chip

    Example:
        >>> parse_targets("esp32s3, esp32c3")
        [<Target.ESP32S3: 'esp32s3'>, <Target.ESP32C3: 'esp32c3'>]
    """
    names = [name.strip().lower() for name in value.split(",") if name.strip()]
    if not names:
        raise ValueError("No targets specified")

    if "all" in names:
        return list(Target)

    targets: List[Target] = []
    for name in names:
        try:
            target = Target(name)
        except ValueError:
            supported = ", ".join(t.value for t in Target)
            raise ValueError(
                f"Unknown target '{name}'. Supported: {supported}, all"
            ) from None
        if target not in targets:
            targets.append(target)
    return targets


def has_xtensa(targets: Iterable[Target]) -> bool:
    return any(t.architecture is Architecture.XTENSA for t in targets)


def has_riscv(targets: Iterable[Target]) -> bool:
    return any(t.architecture is Architecture.RISCV for t in targets)
