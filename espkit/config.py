"""
Installation options for espkit.

Options come from three layers, later ones winning: built-in defaults, an
optional YAML configuration file and command-line flags.

Example espkit.yaml:

    toolchain_version: "1.62.1.0"
    nightly_version: nightly
    targets: [esp32, esp32c3]
    extra_crates: [ldproxy]
    llvm:
      minified: true
    export_file: ~/export-esp.sh
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from espkit.core.directory import get_cargo_home, get_rustup_home
from espkit.toolchain.targets import Target, parse_targets

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "espkit.yaml"
DEFAULT_TOOLCHAIN_VERSION = "1.62.1.0"
DEFAULT_NIGHTLY_VERSION = "nightly"


@dataclass
class InstallOptions:
    """Everything an installation run needs; read-only once built."""

    toolchain_version: str = DEFAULT_TOOLCHAIN_VERSION
    """Version of the Xtensa Rust distribution (e.g. '1.62.1.0')"""

    nightly_version: str = DEFAULT_NIGHTLY_VERSION
    """Nightly rustup toolchain name"""

    targets: List[Target] = field(default_factory=lambda: list(Target))
    """Chips the installed toolchain must support"""

    extra_crates: List[str] = field(default_factory=list)
    """Crates installed with `cargo install` after the toolchains"""

    llvm_minified: bool = True
    """Install the minified LLVM release instead of the complete one"""

    cargo_home: Path = field(default_factory=get_cargo_home)
    rustup_home: Path = field(default_factory=get_rustup_home)

    toolchain_destination: Optional[Path] = None
    """Destination of the Xtensa Rust toolchain (default: <rustup_home>/toolchains/esp)"""

    export_file: Optional[Path] = None
    """File receiving the environment exports (not written if None)"""

    def __post_init__(self):
        self.cargo_home = Path(self.cargo_home)
        self.rustup_home = Path(self.rustup_home)
        if self.toolchain_destination is None:
            self.toolchain_destination = self.rustup_home / "toolchains" / "esp"
        else:
            self.toolchain_destination = Path(self.toolchain_destination)
        if self.export_file is not None:
            self.export_file = Path(self.export_file).expanduser()


def load_yaml_config(config_file: Path, required: bool = False) -> Dict[str, Any]:
    """
    Load and parse a YAML configuration file.

    Args:
        config_file: Path to YAML configuration file
        required: If True, raise error if file doesn't exist

    Returns:
        Configuration dictionary (empty dict if file doesn't exist and not required)

    Raises:
        FileNotFoundError: If required=True and file doesn't exist
        ValueError: If YAML parsing fails or the document is not a mapping
    """
    if not config_file.exists():
        if required:
            raise FileNotFoundError(f"Configuration file not found: {config_file}")
        logger.debug(f"Config file not found (optional): {config_file}")
        return {}

    logger.debug(f"Loading configuration from {config_file}")

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {config_file}: {e}") from e

    config = config or {}
    if not isinstance(config, dict):
        raise ValueError(f"Configuration in {config_file} must be a mapping")
    return config


def _as_list(value: Any) -> List[str]:
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return [str(item) for item in value]


def options_from_config(
    config: Dict[str, Any], overrides: Optional[Dict[str, Any]] = None
) -> InstallOptions:
    """
    Build InstallOptions from a configuration mapping.

    Args:
        config: Mapping loaded from the YAML file
        overrides: Values from the command line; None entries are ignored

    Returns:
        InstallOptions with defaults for everything not set

    Raises:
        ValueError: If a target name is unknown or the llvm section is not a mapping
    """
    values: Dict[str, Any] = {}

    for key in ("toolchain_version", "nightly_version"):
        if key in config:
            values[key] = str(config[key])
    for key in ("cargo_home", "rustup_home", "toolchain_destination", "export_file"):
        if config.get(key):
            values[key] = Path(str(config[key])).expanduser()
    if "targets" in config:
        values["targets"] = parse_targets(",".join(_as_list(config["targets"])))
    if "extra_crates" in config:
        values["extra_crates"] = _as_list(config["extra_crates"])

    llvm = config.get("llvm") or {}
    if not isinstance(llvm, dict):
        raise ValueError("'llvm' must be a mapping (e.g. llvm: {minified: true})")
    if "minified" in llvm:
        values["llvm_minified"] = bool(llvm["minified"])

    for key, value in (overrides or {}).items():
        if value is not None:
            values[key] = value

    return InstallOptions(**values)
