"""Permite `python -m golem`."""

from .cli.main import main

main()
