"""Exit code taxonomy for the comfortable CLI."""

from __future__ import annotations

from enum import IntEnum

from content.errors import ConfigurationError, DecodeError, UnsupportedFormatError


class ExitCode(IntEnum):
    """Standard exit codes for CLI commands.

    Exit codes follow Unix conventions with domain-specific extensions:
    - 0: Success
    - 1-9: General errors (parse, validation, config)
    - 10-19: Content errors (decode, unsupported format)
    - 20-29: I/O errors
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    PARSE_ERROR = 2
    VALIDATION_ERROR = 3
    CONFIG_ERROR = 4

    DECODE_ERROR = 10
    UNSUPPORTED_FORMAT = 11

    IO_ERROR = 20
    EXPORT_FAILED = 21

    @classmethod
    def from_exception(cls, exc: BaseException) -> ExitCode:
        """Map an exception to an appropriate exit code.

        Returns
        -------
        ExitCode
            Exit code appropriate for the exception type.
        """
        if exc.__class__.__module__.startswith("cyclopts"):
            if exc.__class__.__name__ == "ValidationError":
                return cls.VALIDATION_ERROR
            return cls.PARSE_ERROR
        for exc_type, code in _TYPE_CODES:
            if isinstance(exc, exc_type):
                return code
        return cls.GENERAL_ERROR


_TYPE_CODES: tuple[tuple[type[BaseException], ExitCode], ...] = (
    (DecodeError, ExitCode.DECODE_ERROR),
    (UnsupportedFormatError, ExitCode.UNSUPPORTED_FORMAT),
    (ConfigurationError, ExitCode.CONFIG_ERROR),
    (OSError, ExitCode.IO_ERROR),
    (ValueError, ExitCode.VALIDATION_ERROR),
    (TypeError, ExitCode.VALIDATION_ERROR),
)

__all__ = ["ExitCode"]
