#!/usr/bin/env python3
"""foreignschema - Entry point."""
from colorama import init

from foreignschema.cli.commands import cli

# Initialize colorama
init(autoreset=True)


if __name__ == "__main__":
    cli()
