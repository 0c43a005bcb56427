"""Compile Unicode database and charset maps into UTF-8 lookup tables."""

from utf8tables.errors import (
    CompileError,
    CodepointError,
    InputFileError,
    ReadFileLineError,
)

__version__ = '1.0.0'

__all__ = ['CompileError', 'CodepointError', 'InputFileError',
           'ReadFileLineError', '__version__']
