"""
Platform command implementation.

Shows the detected host triple and the artifact shape derived from it.
"""

from espkit.core.platform import detect_host_triple


def run(args) -> int:
    """
    Run the platform command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    host = detect_host_triple()

    print(f"Host triple:       {host.triple}")
    print(f"Archive extension: {host.archive_extension}")
    print(f"Installer script:  {host.installer or '(none, unpacked in place)'}")
    print(f"LLVM OS bucket:    {host.llvm_os or '(no complete release)'}")

    return 0
