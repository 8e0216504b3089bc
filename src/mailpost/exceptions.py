#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the mailpost package.

Most failures in mailpost are not mailpost's own: a converter that exits
with an error or a mail server that refuses a connection surfaces as the
exception raised by ``subprocess`` or ``smtplib``. The classes below cover
the conditions mailpost detects itself.

Exception Hierarchy
-------------------
- MailPostError (base exception)

  - ConfigurationError (invalid or missing configuration values)

  - PostFileError (post file access and I/O)
    - PostNotFoundError (post file doesn't exist)

  - MailCompositionError (mail composer used out of order)

"""

from typing import Any


class MailPostError(Exception):
    """Base exception class for all mailpost-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ConfigurationError(MailPostError):
    """Exception raised for invalid configuration values.

    Parameters
    ----------
    message : str
        Description of the configuration problem
    parameter_name : str, optional
        Name of the offending configuration field
    parameter_value : any, optional
        The value that was rejected
    original_error : Exception, optional
        The original exception that caused this error

    Attributes
    ----------
    parameter_name : str or None
        The name of the problematic field
    parameter_value : any
        The value that caused the error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the configuration error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class PostFileError(MailPostError):
    """Base exception for post file access and I/O errors.

    Parameters
    ----------
    message : str
        Description of the file error
    file_path : str, optional
        Path to the problematic file
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the file error with path and message."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class PostNotFoundError(PostFileError):
    """Exception raised when a post file cannot be found."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the not found error."""
        if message is None:
            message = f"Post file not found: {file_path}"
        super().__init__(message, file_path=file_path, original_error=original_error)


class MailCompositionError(MailPostError):
    """Exception raised when a mail composition is driven out of order.

    Compositions must be opened, filled with a body and sent, in that order,
    and each composition can only be sent once.

    Parameters
    ----------
    message : str
        Description of the ordering violation
    step : str, optional
        The step that was attempted (``"insert"`` or ``"send"``)

    """

    def __init__(self, message: str, step: str | None = None, original_error: Exception | None = None):
        """Initialize the composition error."""
        super().__init__(message, original_error=original_error)
        self.step = step
