"""
Error taxonomy for random definitions and the definition store.

Parse and sampling errors are expected, recoverable conditions: callers
inspect them and show a message. PersistenceError wraps file system and
decoding failures of the store file.
"""

from typing import Optional


class PickerError(Exception):
    """Base class for all picker errors."""

    title = "Error"

    def __init__(self, message: str, help_text: str = ""):
        super().__init__(message)
        self.message = message
        self.help_text = help_text


class ParseError(PickerError):
    """A random definition or query line is malformed."""

    title = "Bad format"

    def __init__(self, message: str, text: Optional[str] = None, help_text: str = ""):
        super().__init__(message, help_text)
        self.text = text


class WeightOverflowError(PickerError):
    """The sum of the weights does not fit a signed 64-bit integer."""

    title = "Weight overflow"


class UnselectableDefinitionError(PickerError):
    """The total weight is zero, so no item can be drawn."""

    title = "Nothing to pick"


class PersistenceError(PickerError):
    """The store file could not be read or written."""

    title = "Storage error"
