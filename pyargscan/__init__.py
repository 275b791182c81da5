#!/usr/bin/env python
"""Incremental command line option and argument scanner."""

from rich import pretty
from rich.console import Console
from rich.traceback import install as tb_install


pretty.install()

from .readers import BooleanReader, ListReader, StreamReader, UnitReader  # noqa: F401, E402
from .registry import OptionRegistry  # noqa: F401, E402
from .scanner import Arguments  # noqa: F401, E402
from .types import DecodingError, OptionResult  # noqa: F401, E402


console = Console()
tb_install(show_locals=True, max_frames=3)  # Install custom exception handler.

# setup.py reads the version from this line.
__version__ = "0.1.0"
