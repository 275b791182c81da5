#!/usr/bin/env python
"""Incremental command line scanner.

The caller alternates between :meth:`Arguments.get_next_option` and
:meth:`Arguments.get_next_argument`::

    QUIET, DEBUG, OUTPUT = ord("q"), 256, ord("o")

    args = Arguments(sys.argv)
    args.register_option("--quiet", QUIET)
    args.register_option("--silent", QUIET)
    args.register_option("--debug", DEBUG)

    while opt := args.get_next_option():
        if opt == OUTPUT:
            output_file = args.get_next_argument()
            if output_file is None:
                sys.exit(f"Missing argument for {args.option_name}.")
        elif opt == QUIET:
            quiet = True
        elif opt == DEBUG:
            debug = True
        elif opt == OptionResult.AMBIGUOUS:
            sys.exit(f"Ambiguous option: {args.option_name}")
        else:
            sys.exit(f"Unknown option: {args.option_name}")

    input_file = args.get_next_argument()
"""

import logging
from collections import deque
from typing import Dict, Optional, Sequence, Union

from pyargscan.logger import Logger
from pyargscan.readers import ReaderType, as_reader, decode, reader_name
from pyargscan.registry import OptionRegistry
from pyargscan.types import DecodingError, OptionResult


def looks_like_option(token: str) -> bool:
    """``-`` followed by at least one character; a lone ``-`` is an argument."""
    return len(token) > 1 and token[0] == "-"


class Arguments:
    """Classifies command line tokens into options and arguments.

    Parameters
    ----------
    argv: sequence of str
        The tokens to scan. Index 0 is the program name and is skipped unless
        `skip_program_name` is false.
    strict: bool
        If true, unregistered short options yield `OptionResult.UNKNOWN`
        instead of their character code.
    registry: OptionRegistry
        Optional registry to share between instances.
    """

    def __init__(
        self,
        argv: Sequence[str],
        strict: bool = False,
        registry: Optional[OptionRegistry] = None,
        skip_program_name: bool = True,
    ) -> None:
        self._argv = tuple(argv)
        self._strict = bool(strict)
        self._registry = registry if registry is not None else OptionRegistry()
        self._arg_index = min(1, len(self._argv)) if skip_program_name else 0
        self._char_index = 0
        self._inline_parameter = False
        self._params = deque()
        self._no_options = False
        self._current_option = ""
        self._possible_options: Dict[str, int] = {}
        self.logger = Logger("scanner")

    def register_option(self, opt: str, key: int) -> None:
        """Register `opt` (e.g. ``-x``, ``--debug`` or ``--mode=``) under `key`.

        A trailing ``=`` marks a long option taking a parameter. Both ``--debug``
        and ``--debug=`` may be registered to tell the two forms apart.
        """
        self._registry.register(opt, key)

    @property
    def registry(self) -> OptionRegistry:
        return self._registry

    @property
    def strict(self) -> bool:
        return self._strict

    @property
    def arguments_left(self) -> int:
        """Tokens not scanned yet plus arguments queued while looking for options."""
        return (len(self._argv) - self._arg_index) + len(self._params)

    @property
    def option_name(self) -> str:
        """Name of the current option.

        For unknown or ambiguous options this is the text entered by the user,
        with ``=`` appended if a parameter was attached.
        """
        return self._current_option

    @property
    def possible_options(self) -> Dict[str, int]:
        """Candidates (name -> key) after `get_next_option` returned ``AMBIGUOUS``."""
        return dict(self._possible_options)

    @property
    def has_parameter(self) -> bool:
        """True if text attached to the current token can be read as parameter.

        For long options this means the parameter was given as ``--name=value``.
        """
        return self._char_index > 0

    def get_next_option(self) -> int:
        """Scan forward to the next option and return its key.

        Returns the registered key, the character code of an unregistered short
        option (strict mode off), `OptionResult.NO_MORE_OPTIONS` (0) once all
        options are consumed, `OptionResult.UNKNOWN` (-1) or
        `OptionResult.AMBIGUOUS` (-2).
        """
        if self._no_options:
            return OptionResult.NO_MORE_OPTIONS

        if self._inline_parameter:
            self.logger.debug(f"Discarding unconsumed parameter {self._rest_of_token()!r} of {self._current_option!r}.")
            self._next_token()

        if self._char_index == 0:
            while True:
                if self._arg_index >= len(self._argv):
                    self._no_options = True
                    return OptionResult.NO_MORE_OPTIONS
                token = self._argv[self._arg_index]
                if looks_like_option(token):
                    break
                self._params.append(token)
                self._arg_index += 1

            if token[1] != "-":
                self._char_index = 1
            elif len(token) == 2:
                self._arg_index += 1
                self._no_options = True
                self.logger.debug("'--' found, remaining tokens are arguments.")
                return OptionResult.NO_MORE_OPTIONS
            else:
                return self._resolve_long_option(token)

        return self._next_short_option()

    def get_next_argument(self, reader: Union[ReaderType, type, None] = None):
        """Return the next argument, or ``None`` if there is none.

        Before `get_next_option` has reported the end of options, this is the
        text following the current option (attached parameter or next token).
        Afterwards, the arguments skipped while scanning for options are returned
        first, in their original order.

        With a `reader` (a reader callable or a type like ``int``) the argument
        is decoded; invalid text raises `DecodingError` and leaves the argument
        in place, so it can be read again.
        """
        if self._no_options and self._params:
            text = self._params[0]
            value = self._decode(text, reader)
            self._params.popleft()
            return value

        if self._arg_index < len(self._argv):
            text = self._rest_of_token()
            value = self._decode(text, reader)
            self._next_token()
            return value
        return None

    def _decode(self, text: str, reader):
        if reader is None:
            return text
        try:
            return decode(as_reader(reader), text)
        except DecodingError:
            self.logger.debug(f"{reader_name(reader)} rejected argument {text!r}.")
            raise

    def _rest_of_token(self) -> str:
        return self._argv[self._arg_index][self._char_index :]

    def _next_token(self) -> None:
        self._arg_index += 1
        self._char_index = 0
        self._inline_parameter = False

    def _next_short_option(self) -> int:
        token = self._argv[self._arg_index]
        self._current_option = "-" + token[self._char_index]
        self._char_index += 1
        if self._char_index >= len(token):
            self._next_token()
        key = self._registry.get(self._current_option)
        if key is None:
            result = OptionResult.UNKNOWN if self._strict else ord(self._current_option[1])
        else:
            result = key
        self._trace(result)
        return result

    def _resolve_long_option(self, token: str) -> int:
        pos = token.find("=")
        has_param = pos != -1
        if has_param:
            # Parameter stays in the token, `get_next_argument` reads it from `_char_index`.
            self._current_option = token[:pos]
            self._char_index = pos + 1
            self._inline_parameter = True
        else:
            self._current_option = token
            self._next_token()

        if not has_param:
            key = self._registry.get(self._current_option)
            if key is not None:
                self._trace(key)
                return key
        key = self._registry.get(self._current_option + "=")
        if key is not None:
            self._current_option += "="
            self._trace(key)
            return key

        self._possible_options = {}
        for name, key in self._registry.prefixed(self._current_option):
            if name.endswith("="):
                # The plain spelling already represents this option.
                if name[:-1] not in self._registry:
                    self._possible_options[name] = key
            elif not has_param:
                self._possible_options[name] = key

        if len(self._possible_options) == 1:
            (name, key), = self._possible_options.items()
            self._current_option = name
            self._trace(key)
            return key
        if has_param:
            self._current_option += "="
        if not self._possible_options:
            result = OptionResult.UNKNOWN
        else:
            result = OptionResult.AMBIGUOUS
            self.logger.debug(f"{self._current_option!r} is ambiguous: {', '.join(self._possible_options)}.")
        self._trace(result)
        return result

    def _trace(self, result: int) -> None:
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(f"option {self._current_option!r} -> {int(result)}")

    def __repr__(self):
        return (
            f"Arguments(arg_index={self._arg_index}, char_index={self._char_index}, "
            f"pending={list(self._params)!r}, no_options={self._no_options})"
        )
