"""
Installation orchestration.

Builds the Rust and LLVM installers from InstallOptions, runs the steps the
requested targets need, and collects the environment exports into a file
the user can source.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional

from espkit.config import InstallOptions
from espkit.core.platform import HostPlatform, detect_host_triple
from espkit.toolchain.llvm import LlvmToolchain
from espkit.toolchain.rust import RustToolchain
from espkit.toolchain.targets import has_riscv, has_xtensa

logger = logging.getLogger(__name__)


def render_export_file(exports: Iterable[str], path: Path) -> Path:
    """
    Write environment exports, one statement per line.

    Args:
        exports: Shell statements in the order they must run
        path: File to write (parent directories are created)

    Returns:
        Path to the written file
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("".join(f"{line}\n" for line in exports), encoding="utf-8")
    logger.info(f"Environment exports written to {path}")
    return path


class Installer:
    """
    Runs one installation for the requested targets.

    Example:
        >>> exports = Installer(InstallOptions(targets=[Target.ESP32])).run()
    """

    def __init__(self, options: InstallOptions, host: Optional[HostPlatform] = None):
        self.options = options
        self.host = host or detect_host_triple()

    def run(self) -> List[str]:
        """
        Install everything the targets need.

        Returns:
            Environment exports collected from the installers

        Raises:
            EspkitError: On the first failing step; later steps are not run
        """
        targets = self.options.targets
        logger.info(f"Installing toolchains for {', '.join(map(str, targets))}")
        logger.debug(f"Host triple: {self.host.triple}")

        rust = RustToolchain(self.options, host=self.host, targets=targets)

        exports: List[str] = []
        if has_xtensa(targets):
            # Unsupported LLVM hosts fail here, before any download
            llvm = LlvmToolchain(self.options.llvm_minified, host=self.host)
            rust.install_xtensa()
            exports.extend(llvm.install())
        if has_riscv(targets):
            rust.install_riscv_target()
        rust.install_extra_crates()

        if self.options.export_file is not None:
            render_export_file(exports, self.options.export_file)

        logger.info("Installation complete")
        return exports
