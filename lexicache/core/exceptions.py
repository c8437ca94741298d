"""
Error taxonomy for locale/translation storage.

Every known condition is an I18nError subclass carrying a machine-readable
``code`` (stable string) and a coarse ``kind`` for programmatic handling.
The adapter never raises these across its boundary; it returns them inside
a Failure result instead.
"""
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    ALREADY_EXISTS = "ALREADY_EXISTS"
    NOT_FOUND = "NOT_FOUND"
    REFERENTIAL_VIOLATION = "REFERENTIAL_VIOLATION"
    BACKEND_UNAVAILABLE = "BACKEND_UNAVAILABLE"
    BACKEND_FAILURE = "BACKEND_FAILURE"
    BOOTSTRAP_FAILURE = "BOOTSTRAP_FAILURE"


class ErrorCode(str, Enum):
    LOCALE_ALREADY_EXISTS = "LOCALE_ALREADY_EXISTS"
    LOCALE_NOT_FOUND = "LOCALE_NOT_FOUND"
    TRANSLATION_ALREADY_EXISTS = "TRANSLATION_ALREADY_EXISTS"
    TRANSLATION_NOT_FOUND = "TRANSLATION_NOT_FOUND"
    BACKEND_UNAVAILABLE = "BACKEND_UNAVAILABLE"
    BACKEND_ERROR = "BACKEND_ERROR"
    CACHE_UNAVAILABLE = "CACHE_UNAVAILABLE"
    BOOTSTRAP_FAILED = "BOOTSTRAP_FAILED"


class I18nError(Exception):
    """Base class for all lexicache errors."""

    code: ErrorCode = ErrorCode.BACKEND_ERROR
    kind: ErrorKind = ErrorKind.BACKEND_FAILURE

    def __init__(self, message: str, *, code: Optional[ErrorCode] = None, kind: Optional[ErrorKind] = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if kind is not None:
            self.kind = kind

    def to_dict(self) -> dict:
        return {"code": self.code.value, "kind": self.kind.value, "message": self.message}

    def __repr__(self):
        return f"<{type(self).__name__}(code={self.code.value}, message={self.message!r})>"


class LocaleAlreadyExistsError(I18nError):
    code = ErrorCode.LOCALE_ALREADY_EXISTS
    kind = ErrorKind.ALREADY_EXISTS


class LocaleNotFoundError(I18nError):
    code = ErrorCode.LOCALE_NOT_FOUND
    kind = ErrorKind.NOT_FOUND


class ReferentialViolationError(I18nError):
    """A translation references a locale that does not exist."""

    code = ErrorCode.LOCALE_NOT_FOUND
    kind = ErrorKind.REFERENTIAL_VIOLATION


class TranslationAlreadyExistsError(I18nError):
    code = ErrorCode.TRANSLATION_ALREADY_EXISTS
    kind = ErrorKind.ALREADY_EXISTS


class TranslationNotFoundError(I18nError):
    code = ErrorCode.TRANSLATION_NOT_FOUND
    kind = ErrorKind.NOT_FOUND


class BackendUnavailableError(I18nError):
    code = ErrorCode.BACKEND_UNAVAILABLE
    kind = ErrorKind.BACKEND_UNAVAILABLE


class BackendError(I18nError):
    code = ErrorCode.BACKEND_ERROR
    kind = ErrorKind.BACKEND_FAILURE


class CacheUnavailableError(I18nError):
    code = ErrorCode.CACHE_UNAVAILABLE
    kind = ErrorKind.BACKEND_UNAVAILABLE


class BootstrapError(I18nError):
    """Raised by init()/refresh() when the snapshot could not be fetched."""

    code = ErrorCode.BOOTSTRAP_FAILED
    kind = ErrorKind.BOOTSTRAP_FAILURE

    def __init__(self, message: str, *, causes: Optional[list] = None):
        super().__init__(message)
        self.causes = causes or []
