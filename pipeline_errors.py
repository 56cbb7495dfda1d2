"""
Error Taxonomy for Homopolymer Compression Pipeline
===================================================

Every failure in the pipeline is fatal. There are no retries and no local
recovery: the stage that detects an error aborts, and the supervisor brings
down the whole thread group.
"""

import time
import traceback
from typing import Any, Dict, Optional


class PipelineError(Exception):
    """Base class for fatal pipeline errors"""

    default_code: Optional[str] = None

    def __init__(self, message: str, cause: Optional[Exception] = None,
                 error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        """
        Initialize a pipeline error.

        Args:
            message: Error description naming the failing operation
            cause: Original exception that caused this error
            error_code: Specific error code for categorization
            details: Additional error context
        """
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.error_code = error_code or self.default_code
        self.details = details or {}
        self.timestamp = time.time()
        self.traceback = traceback.format_exc() if cause else None

    def __str__(self) -> str:
        base_msg = self.message
        if self.error_code:
            base_msg = f"[{self.error_code}] {base_msg}"
        if self.cause:
            return f"{base_msg} (caused by {type(self.cause).__name__}: {self.cause})"
        return base_msg

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(message={self.message!r}, "
                f"cause={self.cause!r}, error_code={self.error_code!r}, "
                f"details={self.details!r})")

    def log_context(self) -> Dict[str, Any]:
        """Get error context for structured logging"""
        return {
            'error_type': type(self).__name__,
            'error_code': self.error_code,
            'message': str(self),
            'timestamp': self.timestamp,
            'details': self.details,
            'cause': str(self.cause) if self.cause else None
        }


class ConfigurationError(PipelineError, ValueError):
    """Invalid input extension, missing input file, or inconsistent options"""
    default_code = "CONFIG"


class InputOutputError(PipelineError):
    """A file cannot be opened, created or written"""
    default_code = "IO"


class FormatError(PipelineError):
    """Malformed record in an input or inversion map stream"""
    default_code = "FORMAT"


class ChannelClosedError(PipelineError):
    """A channel operation was attempted after the channel was aborted"""
    default_code = "CHANNEL"
