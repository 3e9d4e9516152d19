"""
Entry point for running espkit CLI as a module.

Usage: python -m espkit.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
