#!/usr/bin/env python
"""
Parse the tool's own command line parameters and create
a scanner for the tokens following ``--``.
"""

from pyargscan.config import (  # noqa: F401
    ArgScan,
    create_application,
    get_application,
    reset_application,
)
from pyargscan.scanner import Arguments


class ArgumentParser:
    """Command line front-end for pyargscan tools.

    Options for the tool itself (``-c``, ``--strict``, ``--debug``, ...) are
    handled by the configuration application; everything after ``--`` is
    handed to an `Arguments` instance set up from that configuration.
    """

    def __init__(self, description=None, *args, **kws):
        self._description = description

    def run(self, argv=None) -> Arguments:
        """Create and configure an `Arguments` instance.

        Args:
            argv: Command line of the tool, without program name. Defaults to ``sys.argv[1:]``.

        Returns:
            A scanner over the extra arguments, preceded by the program name.
        """
        if self._description:
            ArgScan.description = self._description
        application = get_application(argv)
        tokens = [application.name] + list(application.extra_args)
        return application.create_arguments(tokens)
