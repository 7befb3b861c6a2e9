"""
Error kinds raised by the actorgraph core.

Every error is fatal for the run in which it is detected. Library code raises
these; only the entry points (CLI programs, HTTP handlers) turn them into exit
codes or HTTP responses.
"""


class ActorGraphError(Exception):
    """Base class for all actorgraph errors."""


class FileOpenError(ActorGraphError):
    """An input or output path could not be opened."""

    def __init__(self, path, reason=""):
        self.path = path
        self.reason = reason
        message = f"Error opening file: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class FormatError(ActorGraphError):
    """A record does not have the expected number of fields."""

    def __init__(self, line_number, expected, found, source=None):
        self.line_number = line_number
        self.expected = expected
        self.found = found
        self.source = source
        where = f"{source}:{line_number}" if source else f"line {line_number}"
        super().__init__(f"{where}: expected {expected} fields, found {found}")


class ParseError(ActorGraphError):
    """A field that must be an integer could not be parsed as one."""

    def __init__(self, value, message=None, line_number=None):
        self.value = value
        self.line_number = line_number
        if message is None:
            message = f"not a base-10 integer: {value!r}"
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class UnknownActorError(ActorGraphError):
    """A queried actor name is not present in the registry."""

    def __init__(self, name):
        self.name = name
        super().__init__(f"Unknown actor: {name!r}")
