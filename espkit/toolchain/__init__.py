"""
Toolchain installers for espkit.

This module provides:
- The Xtensa Rust distribution and RISC-V target installer
- The Xtensa LLVM installer and its environment exports
- Chip targets and their CPU architectures
"""

from espkit.toolchain.llvm import (
    DEFAULT_LLVM_VERSION,
    LlvmToolchain,
    get_release_with_underscores,
)
from espkit.toolchain.rust import RustToolchain
from espkit.toolchain.targets import (
    Architecture,
    Target,
    has_riscv,
    has_xtensa,
    parse_targets,
)

__all__ = [
    # Rust
    "RustToolchain",
    # LLVM
    "LlvmToolchain",
    "DEFAULT_LLVM_VERSION",
    "get_release_with_underscores",
    # Targets
    "Architecture",
    "Target",
    "parse_targets",
    "has_xtensa",
    "has_riscv",
]
