#!/usr/bin/env python
import enum


class OptionResult(enum.IntEnum):
    """Control-flow codes returned by `Arguments.get_next_option`.

    Registered keys are always positive, so they never collide with these values.
    """

    NO_MORE_OPTIONS = 0
    UNKNOWN = -1
    AMBIGUOUS = -2


class ArgumentsError(Exception):
    """
    Base class for errors raised by pyargscan.
    """


class DecodingError(ArgumentsError, ValueError):
    """
    An argument was available, but the reader rejected it.
    """

    def __init__(self, text, reader=None, reason=""):
        self.text = text
        self.reader = reader
        self.reason = reason
        super().__init__(text, reader, reason)

    def __str__(self):
        msg = f"Could not decode {self.text!r}"
        if self.reader is not None:
            msg += f" with {self.reader!r}"
        if self.reason:
            msg += f": {self.reason}"
        return msg
