#!/usr/bin/env python
"""Show how a command line is split into options and arguments.

    argscan-dump -c options.toml --strict -- -xyz --mode=fast input.txt
"""

import sys
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from rich.table import Table

from pyargscan import console
from pyargscan.cmdline import ArgumentParser
from pyargscan.scanner import Arguments
from pyargscan.types import OptionResult


@dataclass
class ScanRecord:
    kind: str
    name: str
    code: Optional[int] = None
    parameter: Optional[str] = None
    candidates: Dict[str, int] = field(default_factory=dict)

    @property
    def failed(self) -> bool:
        return self.kind in ("unknown", "ambiguous")


def scan_tokens(arguments: Arguments) -> List[ScanRecord]:
    """Drive `arguments` to the end and record every decision.

    Options spelled with a trailing ``=`` take a parameter, either attached or
    from the following token. Attached parameters of unknown or ambiguous
    options are recorded as well.
    """
    records = []
    while True:
        code = arguments.get_next_option()
        if code == OptionResult.NO_MORE_OPTIONS:
            break
        name = arguments.option_name
        if code == OptionResult.AMBIGUOUS:
            record = ScanRecord("ambiguous", name, int(code), candidates=arguments.possible_options)
        elif code == OptionResult.UNKNOWN:
            record = ScanRecord("unknown", name, int(code))
        else:
            record = ScanRecord("option", name, code)
        if record.kind == "option" and name.endswith("="):
            record.parameter = arguments.get_next_argument()
        elif name.endswith("=") and arguments.has_parameter:
            record.parameter = arguments.get_next_argument()
        records.append(record)

    while True:
        argument = arguments.get_next_argument()
        if argument is None:
            break
        records.append(ScanRecord("argument", argument))
    return records


def render_table(records: List[ScanRecord]) -> Table:
    table = Table(title="Command line")
    table.add_column("Kind")
    table.add_column("Name")
    table.add_column("Code", justify="right")
    table.add_column("Parameter / Candidates")
    styles = {"option": "green", "argument": "blue", "unknown": "red", "ambiguous": "yellow"}
    for record in records:
        if record.candidates:
            extra = ", ".join(f"{name} ({key})" for name, key in record.candidates.items())
        elif record.parameter is not None:
            extra = repr(record.parameter)
        else:
            extra = ""
        code = "" if record.code is None else str(record.code)
        table.add_row(f"[{styles[record.kind]}]{record.kind}", record.name, code, extra)
    return table


def main(argv=None):
    ap = ArgumentParser(description="Show how a command line is split into options and arguments.")
    arguments = ap.run(argv)
    records = scan_tokens(arguments)
    console.print(render_table(records))
    if any(record.failed for record in records):
        sys.exit(1)


if __name__ == "__main__":
    main()
