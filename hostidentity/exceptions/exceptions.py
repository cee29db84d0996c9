"""
Custom exceptions for hostidentity.

Every fallible lookup raises a subclass of ``IdentityError``. The infallible
API catches ``IdentityError`` and substitutes a default, so none of these
ever escape ``hostidentity.api``.
"""

from datetime import datetime
from typing import Optional, Dict, Any


class IdentityError(Exception):
    """
    Base exception for hostidentity errors.

    Attributes:
        message: The error message
        step: Optional name of the fact or stage where the error occurred
        timestamp: When the error occurred
        context: Additional context information
    """

    def __init__(
        self,
        message: str,
        step: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize the exception.

        Args:
            message: The error message
            step: The fact (e.g. ``hostname``) or stage where the error occurred
            context: Additional context information (e.g. file paths, error codes)
        """
        super().__init__(message)
        self.message = message
        self.step = step
        self.context = context or {}

        self.timestamp = datetime.now()

    def __str__(self) -> str:
        """Return a formatted error message."""
        base_msg = f"[{self.step}] {self.message}"
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{base_msg} (Context: {context_str})"
        return base_msg

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "step": self.step,
            "timestamp": self.timestamp.isoformat(),
            "context": self.context,
        }


class AbsentError(IdentityError):
    """
    Raised when the operating system simply has no value for a fact.

    Examples:
        - No passwd entry for the effective uid
        - Unset or empty environment variable
        - Missing ``/etc/os-release``
        - A native call reporting a required size of zero
    """

    def __init__(self, message: str, source: Optional[str] = None, **kwargs):
        """
        Initialize absence error.

        Args:
            message: The error message
            source: The file, variable or call that had no value
            **kwargs: Additional context passed to parent
        """
        context = kwargs.get("context", {})
        if source:
            context["source"] = source
        kwargs["context"] = context
        super().__init__(message, **kwargs)


class PlatformUnsupportedError(IdentityError):
    """
    Raised when a fact is not meaningful on the active platform family.

    Examples:
        - Windows-only API requested on a POSIX host
        - Browser host not registered for the web strategy
    """

    def __init__(self, message: str, platform: Optional[str] = None, **kwargs):
        context = kwargs.get("context", {})
        if platform:
            context["platform"] = platform
        kwargs["context"] = context
        super().__init__(message, **kwargs)


class IoFailureError(IdentityError):
    """
    Raised when reading a source failed for a reason other than absence.

    Examples:
        - Permission denied on a system file
        - A native call returning an unexpected error code
        - A helper executable exiting non-zero
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        errno: Optional[int] = None,
        **kwargs,
    ):
        """
        Initialize I/O failure error.

        Args:
            message: The error message
            path: File path or native call name that failed
            errno: OS error number or Win32 error code
            **kwargs: Additional context passed to parent
        """
        context = kwargs.get("context", {})
        if path:
            context["path"] = path
        if errno is not None:
            context["errno"] = errno
        kwargs["context"] = context
        super().__init__(message, **kwargs)


class EncodingInvalidError(IdentityError):
    """
    Raised when native text cannot be represented even with substitution.

    Byte and UTF-16 decoding always succeed with replacement characters, so
    this is reserved for impossible lengths (negative, or an odd number of
    bytes for UTF-16 text).
    """

    def __init__(self, message: str, length: Optional[int] = None, **kwargs):
        context = kwargs.get("context", {})
        if length is not None:
            context["length"] = length
        kwargs["context"] = context
        super().__init__(message, **kwargs)


class ConfigurationError(IdentityError):
    """
    Raised when there are configuration-related errors.

    Examples:
        - Unknown strategy name in ``HOSTIDENTITY_STRATEGY``
        - Log directory that cannot be written
    """

    def __init__(
        self,
        message: str,
        config_source: Optional[str] = None,
        invalid_key: Optional[str] = None,
        **kwargs,
    ):
        """
        Initialize configuration error.

        Args:
            message: The error message
            config_source: Where the configuration came from (e.g. environment)
            invalid_key: The configuration key that caused the error
            **kwargs: Additional context passed to parent
        """
        context = kwargs.get("context", {})
        if config_source:
            context["config_source"] = config_source
        if invalid_key:
            context["invalid_key"] = invalid_key
        kwargs["context"] = context
        super().__init__(message, **kwargs)
