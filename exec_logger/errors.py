"""Exception types raised by exec_logger."""


class ExecLoggerError(Exception):
    """Base class for exec_logger errors."""


class InvalidFormatError(ExecLoggerError, ValueError):
    """A message or timestamp template was rejected.

    The configuration keeps its previous template when this is raised.
    """

    def __init__(self, details: str):
        self.details = details
        super().__init__(f"Invalid format: {details}")
