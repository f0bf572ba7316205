"""Full error hierarchy for verdiff.

Every public error class inherits from VerdiffError. Each carries a
machine-readable ``code`` (from :class:`ErrorCode`), a human-readable
``message``, an optional structured ``context`` dict, and an optional
``cause`` (chained exception).

Error codes are defined as a :class:`str` enum so that they serialise
naturally to JSON and can be matched with simple ``==`` comparisons.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

# ---------------------------------------------------------------------------
# Error code enum
# ---------------------------------------------------------------------------

class ErrorCode(str, Enum):
    """Machine-readable error codes for every error verdiff can raise."""

    INVALID_INPUT = "INVALID_INPUT"
    VERSION_INVALID = "VERSION_INVALID"
    VERSION_CONFLICT = "VERSION_CONFLICT"
    VERSION_NOT_FOUND = "VERSION_NOT_FOUND"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    UNSUPPORTED_RESOURCE_TYPE = "UNSUPPORTED_RESOURCE_TYPE"
    ALERT_DELIVERY_ERROR = "ALERT_DELIVERY_ERROR"


# ---------------------------------------------------------------------------
# Base error
# ---------------------------------------------------------------------------

class VerdiffError(Exception):
    """Base exception for all verdiff errors.

    Parameters
    ----------
    code:
        A value from :class:`ErrorCode` (or any string) identifying the
        error category.
    message:
        A developer-friendly description of what went wrong.
    context:
        Arbitrary structured data providing extra diagnostic detail.
        Keys and expected types are documented per subclass.
    cause:
        The underlying exception, if this error wraps another.
    """

    def __init__(
        self,
        code: str,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.code: str = code
        self.message: str = message
        self.context: dict[str, Any] = context or {}
        self.cause: Exception | None = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        ctx = f", context={self.context!r}" if self.context else ""
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r}{ctx})"


# ---------------------------------------------------------------------------
# Diff errors
# ---------------------------------------------------------------------------

class InvalidInputError(VerdiffError):
    """A diff input collection holds the same entity id more than once.

    Context keys: ``side`` (``"source"`` or ``"target"``), ``entity_id``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.INVALID_INPUT,
            message=message,
            context=context,
            cause=cause,
        )


# ---------------------------------------------------------------------------
# Version errors
# ---------------------------------------------------------------------------

class VersionValidationError(VerdiffError):
    """A version string is missing or is not a valid semantic version.

    Context keys: ``version``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.VERSION_INVALID,
            message=message,
            context=context,
            cause=cause,
        )


class VersionConflictError(VerdiffError):
    """The version already exists for the resource.

    Context keys: ``resource_id``, ``version``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.VERSION_CONFLICT,
            message=message,
            context=context,
            cause=cause,
        )


class VersionNotFoundError(VerdiffError):
    """The requested version does not exist.

    Context keys: ``resource_id`` (when known), ``version``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.VERSION_NOT_FOUND,
            message=message,
            context=context,
            cause=cause,
        )


# ---------------------------------------------------------------------------
# Resource errors
# ---------------------------------------------------------------------------

class ResourceNotFoundError(VerdiffError):
    """The resource does not exist in the store.

    Context keys: ``resource_id``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.RESOURCE_NOT_FOUND,
            message=message,
            context=context,
            cause=cause,
        )


class UnsupportedResourceTypeError(VerdiffError):
    """Versions cannot be created for this kind of resource.

    Context keys: ``resource_id``, ``resource_type``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.UNSUPPORTED_RESOURCE_TYPE,
            message=message,
            context=context,
            cause=cause,
        )


# ---------------------------------------------------------------------------
# Alert errors
# ---------------------------------------------------------------------------

class AlertDeliveryError(VerdiffError):
    """The outdated-version alert could not be delivered.

    Context keys: ``url``, ``status_code`` (absent for transport failures).
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.ALERT_DELIVERY_ERROR,
            message=message,
            context=context,
            cause=cause,
        )
