"""Exceptions raised while compiling tables."""

from typing import Union


class CompileError(Exception):
    """Base class for every error raised by utf8tables."""


class CodepointError(CompileError, ValueError):
    """A value cannot be encoded as, or decoded to, a Unicode codepoint."""


class InputFileError(CompileError, OSError):
    """An input file is missing or cannot be read."""

    def __init__(self, filename: str, reason: str) -> None:
        super().__init__(f"cannot open {filename}: {reason}")
        self.filename = filename


class ReadFileLineError(CompileError):
    def __init__(self, filename: str, line_number: Union[int, str]) -> None:
        message = 'in {} at {}'.format(filename, line_number)
        super().__init__(message)
        self.filename = filename
        self.line_number = line_number
