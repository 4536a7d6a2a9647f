"""
Custom exception classes for flaggraph.

Two failure classes exist and they are kept in separate hierarchies:

- ``SchemaError`` means an option-group type graph is wrongly shaped. It is a
  programming error in the command definitions and is never handled at
  runtime.
- ``FlaggraphException`` and its subclasses are ordinary recoverable errors
  (a malformed flag value, a failed connection) that the CLI reports and turns
  into a non-zero exit status.
"""

from typing import Optional


class SchemaError(Exception):
    """
    Raised when an option-group dataclass references a capability type in a
    shape that would break instance sharing.

    Example:
        >>> raise SchemaError(field="client", owner="mycli.Login", problem="must not be embedded")
        Traceback (most recent call last):
        ...
        SchemaError: field "client" in "mycli.Login" must not be embedded
    """

    def __init__(self, *, owner: str, problem: str, field: Optional[str] = None):
        self.field = field
        self.owner = owner
        self.problem = problem
        if field is None:
            super().__init__(f'"{owner}" {problem}')
        else:
            super().__init__(f'field "{field}" in "{owner}" {problem}')


class FlaggraphException(Exception):
    """Base exception class for all recoverable flaggraph errors."""

    pass


class FlagError(FlaggraphException):
    """Raised when a flag is missing, malformed, or cannot be finalised."""

    def __init__(self, reason: str, flag: Optional[str] = None):
        self.reason = reason
        self.flag = flag
        message = reason
        if flag:
            message = f"{flag}: {reason}"
        super().__init__(message)


class ResponseError(FlaggraphException):
    """Raised when the server answers with something that cannot be decoded."""

    pass
