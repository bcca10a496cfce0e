"""
Entry point for running the CLI as a module: python -m jwtlab
"""
import sys

from jwtlab.cli import main

if __name__ == "__main__":
    sys.exit(main())
