"""
Tests for the espkit command line.
"""

import pytest
from unittest.mock import patch
from pathlib import Path

from espkit.cli.commands.install import build_options
from espkit.cli.parser import CLI
from espkit.core.exceptions import InstallationConflictError
from espkit.core.platform import HostPlatform
from espkit.toolchain.targets import Target


@pytest.fixture
def workdir(tmp_path, monkeypatch, isolated_home):
    """Run from an empty directory with no espkit.yaml."""
    workdir = tmp_path / "project"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    return workdir


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_no_command_shows_help(self, capsys):
        cli = CLI()
        result = cli.run([])

        assert result == 1
        captured = capsys.readouterr()
        assert "usage:" in captured.out.lower()

    def test_version_flag(self, capsys):
        cli = CLI()

        with pytest.raises(SystemExit) as exc_info:
            cli.run(["--version"])

        assert exc_info.value.code == 0
        assert "espkit" in capsys.readouterr().out


class TestInstallParsing:
    """Test install command parsing."""

    def test_defaults(self):
        args = CLI().parse_args(["install"])

        assert args.command == "install"
        assert args.targets is None
        assert args.toolchain_version is None
        assert args.llvm_minified is None
        assert args.export_file is None

    def test_llvm_complete(self):
        args = CLI().parse_args(["install", "--llvm-complete"])

        assert args.llvm_minified is False

    def test_llvm_flags_exclusive(self):
        with pytest.raises(SystemExit):
            CLI().parse_args(["install", "--llvm-complete", "--llvm-minified"])

    def test_all_flags(self):
        args = CLI().parse_args(
            [
                "install",
                "-t",
                "esp32,esp32c3",
                "--toolchain-version",
                "1.63.0.2",
                "--nightly-version",
                "nightly-2022-08-01",
                "--extra-crates",
                "ldproxy,espflash",
                "--export-file",
                "export-esp.sh",
            ]
        )

        assert args.targets == "esp32,esp32c3"
        assert args.toolchain_version == "1.63.0.2"
        assert args.nightly_version == "nightly-2022-08-01"
        assert args.extra_crates == "ldproxy,espflash"
        assert args.export_file == Path("export-esp.sh")


class TestBuildOptions:
    """Test merging of config file and flags."""

    def test_flags_only(self, workdir):
        args = CLI().parse_args(
            ["install", "-t", "esp32c3", "--extra-crates", "ldproxy, espflash"]
        )

        options = build_options(args)

        assert options.targets == [Target.ESP32C3]
        assert options.extra_crates == ["ldproxy", "espflash"]
        assert options.llvm_minified is True

    def test_project_config_picked_up(self, workdir):
        (workdir / "espkit.yaml").write_text(
            "toolchain_version: 1.63.0.2\ntargets: [esp32s2]\n"
        )
        args = CLI().parse_args(["install", "--llvm-complete"])

        options = build_options(args)

        assert options.toolchain_version == "1.63.0.2"
        assert options.targets == [Target.ESP32S2]
        assert options.llvm_minified is False

    def test_flags_override_config(self, workdir):
        (workdir / "espkit.yaml").write_text("toolchain_version: 1.63.0.2\n")
        args = CLI().parse_args(["install", "--toolchain-version", "1.64.0.0"])

        assert build_options(args).toolchain_version == "1.64.0.0"

    def test_scalar_llvm_section_exit_code(self, workdir):
        """Test a malformed llvm section is reported, not raised."""
        (workdir / "espkit.yaml").write_text("llvm: true\n")

        assert CLI().run(["install"]) == 1

    def test_explicit_config_must_exist(self, workdir):
        args = CLI().parse_args(["--config", "missing.yaml", "install"])

        with pytest.raises(FileNotFoundError):
            build_options(args)


class TestInstallCommand:
    """Test install command execution."""

    @patch("espkit.cli.commands.install.Installer")
    def test_prints_exports(self, mock_installer, workdir, capsys):
        mock_installer.return_value.run.return_value = ['export LIBCLANG_PATH="/x"']

        result = CLI().run(["install", "-t", "esp32"])

        assert result == 0
        options = mock_installer.call_args[0][0]
        assert options.targets == [Target.ESP32]
        assert 'export LIBCLANG_PATH="/x"' in capsys.readouterr().out

    @patch("espkit.cli.commands.install.Installer")
    def test_export_file_suppresses_output(self, mock_installer, workdir, capsys):
        mock_installer.return_value.run.return_value = ['export LIBCLANG_PATH="/x"']

        result = CLI().run(["install", "--export-file", str(workdir / "export.sh")])

        assert result == 0
        assert "LIBCLANG_PATH" not in capsys.readouterr().out

    @patch("espkit.cli.commands.install.Installer")
    def test_installer_error_exit_code(self, mock_installer, workdir):
        mock_installer.return_value.run.side_effect = InstallationConflictError(
            "LLVM", "/tools/llvm"
        )

        assert CLI().run(["install"]) == 1

    @patch("espkit.cli.commands.install.Installer")
    def test_unknown_target_exit_code(self, mock_installer, workdir):
        assert CLI().run(["install", "-t", "esp8266"]) == 1
        mock_installer.assert_not_called()

    @patch("espkit.cli.commands.install.Installer")
    def test_interrupt_exit_code(self, mock_installer, workdir):
        mock_installer.return_value.run.side_effect = KeyboardInterrupt

        assert CLI().run(["install"]) == 130


class TestPlatformCommand:
    """Test platform command."""

    @patch("espkit.cli.commands.platform.detect_host_triple")
    def test_shows_host(self, mock_detect, capsys):
        mock_detect.return_value = HostPlatform.from_triple("x86_64-pc-windows-msvc")

        result = CLI().run(["platform"])

        assert result == 0
        out = capsys.readouterr().out
        assert "x86_64-pc-windows-msvc" in out
        assert "zip" in out
        assert "win64" in out
