"""
Entry point for running espkit CLI as a module.

Usage: python -m espkit [command] [options]
"""

from espkit.cli.parser import main

if __name__ == "__main__":
    main()
