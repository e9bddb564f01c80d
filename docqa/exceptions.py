"""Application exception hierarchy.

All custom exceptions inherit from DocQAError.
Each exception has an error code for structured error handling.
The message is what API callers see; details are only logged.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes for structured error handling."""

    # General errors (1xxx)
    INTERNAL_ERROR = "DQA-1000"
    CONFIGURATION_ERROR = "DQA-1001"
    VALIDATION_ERROR = "DQA-1002"

    # Embedding errors (3xxx)
    EMBEDDING_SERVICE_ERROR = "DQA-3000"
    EMBEDDING_DIMENSION_MISMATCH = "DQA-3001"

    # Vector store errors (4xxx)
    VECTOR_STORE_ERROR = "DQA-4000"
    VECTOR_STORE_NOT_FOUND = "DQA-4001"
    VECTOR_STORE_INVALID = "DQA-4002"

    # LLM errors (5xxx)
    LLM_SERVICE_ERROR = "DQA-5000"
    LLM_TIMEOUT = "DQA-5001"

    # Retrieval errors (6xxx)
    RETRIEVAL_ERROR = "DQA-6000"


class DocQAError(Exception):
    """Base exception for all docqa errors.

    Attributes:
        message: Human-readable error message, safe to return to callers.
        code: Structured error code.
        details: Additional error context for the server log.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {"error": self.message}


class ConfigurationError(DocQAError):
    """Configuration or environment error."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.CONFIGURATION_ERROR, details)


class ValidationError(DocQAError):
    """Input validation error."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.VALIDATION_ERROR, details)


class EmbeddingError(DocQAError):
    """Embedding service error."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.EMBEDDING_SERVICE_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class DimensionMismatchError(EmbeddingError):
    """Two vectors compared against each other differ in length."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            f"Embedding dimension mismatch: expected {expected}, got {actual}",
            code=ErrorCode.EMBEDDING_DIMENSION_MISMATCH,
            details={"expected": expected, "actual": actual},
        )
        self.expected = expected
        self.actual = actual


class VectorStoreError(DocQAError):
    """Vector store operation error."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.VECTOR_STORE_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class LLMError(DocQAError):
    """LLM service error."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.LLM_SERVICE_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class RetrievalError(DocQAError):
    """Retrieval operation error."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.RETRIEVAL_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)
