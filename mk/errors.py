"""Exceptions raised by mk."""


class MkError(RuntimeError):
    """Base class for fatal mk errors."""


class TargetNotFoundError(MkError):
    """Raised when a file named on the command line does not exist."""


class InputDecodeError(MkError):
    """Raised when standard input cannot be read as UTF-8 text."""


class LocatorError(MkError):
    """Raised when a request cannot be rendered as a locator."""


class DispatchError(MkError):
    """Raised when the operating system refuses to open a locator."""


class ClipboardError(MkError):
    """Raised when the named clipboard cannot be written."""
