"""
Xtensa Rust toolchain installation.

The Xtensa targets need a custom Rust distribution published by esp-rs. On
Windows it ships as a single bundle (compiler and sources) that is unpacked
straight into the toolchain destination. Elsewhere the compiler and the
sources come as separate archives, each placed with its bundled install.sh.

RISC-V targets are served by the stock rustup toolchains, so they only need
the rust-src component and the target registered.
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional

from espkit.core.directory import ensure_destination_available, get_dist_path
from espkit.core.download import fetch_artifact
from espkit.core.platform import HostPlatform, detect_host_triple
from espkit.core.process import run_command, run_shell
from espkit.toolchain.targets import RISCV_TARGET_TRIPLE, Target

if TYPE_CHECKING:
    from espkit.config import InstallOptions

logger = logging.getLogger(__name__)

DEFAULT_XTENSA_RUST_REPOSITORY = "https://github.com/esp-rs/rust-build/releases/download"


class RustToolchain:
    """
    Xtensa Rust distribution for one requested version and host.

    Example:
        >>> toolchain = RustToolchain(InstallOptions(toolchain_version="1.62.1.0"))
        >>> toolchain.dist_file
        'rust-1.62.1.0-x86_64-unknown-linux-gnu.tar.xz'
        >>> toolchain.install_xtensa()
    """

    def __init__(
        self,
        options: "InstallOptions",
        host: Optional[HostPlatform] = None,
        targets: Optional[List[Target]] = None,
        allow_overwrite: bool = True,
    ):
        """
        Compute artifact names and URLs. No I/O happens here.

        Args:
            options: Installation options
            host: Host platform (auto-detected if None)
            targets: Chip targets (defaults to options.targets)
            allow_overwrite: Install over an existing toolchain destination
        """
        self.host = host or detect_host_triple()
        self.version = options.toolchain_version
        self.targets = list(options.targets if targets is None else targets)
        self.extra_crates = list(options.extra_crates)
        self.nightly_version = options.nightly_version
        self.cargo_home = options.cargo_home
        self.rustup_home = options.rustup_home
        self.toolchain_destination = Path(options.toolchain_destination)
        self.allow_overwrite = allow_overwrite

        extension = self.host.archive_extension

        self.dist_file = f"rust-{self.version}-{self.host.triple}.{extension}"
        self.dist_url = self._release_url(self.dist_file)
        self.src_dist_file = f"rust-src-{self.version}.{extension}"
        self.src_dist_url = self._release_url(self.src_dist_file)

    def _release_url(self, file_name: str) -> str:
        return f"{DEFAULT_XTENSA_RUST_REPOSITORY}/v{self.version}/{file_name}"

    def _installer_command(self, dist_dir: Path) -> str:
        return (
            f"{dist_dir / self.host.installer} "
            f"--destdir={self.toolchain_destination} "
            "--prefix='' --without=rust-docs"
        )

    def install_xtensa(self) -> None:
        """
        Install the Xtensa Rust toolchain into the toolchain destination.

        Raises:
            InstallationConflictError: If overwriting is disabled and the
                destination exists
            DownloadError: If an archive cannot be downloaded
            ArchiveExtractionError: If an archive cannot be unpacked
            CommandError: If an installer script fails
        """
        ensure_destination_available(
            self.toolchain_destination, self.allow_overwrite, "Xtensa Rust"
        )

        extension = self.host.archive_extension
        if not self.host.has_installer:
            # Single bundle with sources, no install script for this platform
            logger.info(f"Installing Xtensa Rust {self.version}")
            fetch_artifact(
                self.dist_url,
                f"rust.{extension}",
                self.toolchain_destination,
                unpack=True,
            )
            return

        rust_dist = get_dist_path("rust")
        fetch_artifact(self.dist_url, f"rust.{extension}", rust_dist, unpack=True)
        logger.info(f"Installing Xtensa Rust {self.version}")
        run_shell(
            self._installer_command(rust_dist / f"rust-nightly-{self.host.triple}")
        )

        src_dist = get_dist_path("rust-src")
        fetch_artifact(
            self.src_dist_url, f"rust-src.{extension}", src_dist, unpack=True
        )
        logger.info("Installing rust-src for the Xtensa toolchain")
        run_shell(self._installer_command(src_dist / "rust-src-nightly"))

    def install_riscv_target(self) -> None:
        """
        Register rust-src and the RISC-V target on the requested toolchain.

        Raises:
            CommandError: If rustup fails
        """
        logger.info("Installing RISC-V target")
        run_command(
            "rustup",
            "component",
            "add",
            "rust-src",
            "--toolchain",
            self.version,
        )
        run_command(
            "rustup",
            "target",
            "add",
            "--toolchain",
            self.version,
            RISCV_TARGET_TRIPLE,
        )

    def install_extra_crates(self) -> None:
        """Install each extra crate with `cargo install`, in order."""
        for crate in self.extra_crates:
            logger.info(f"Installing crate {crate}")
            run_command("cargo", "install", crate)
