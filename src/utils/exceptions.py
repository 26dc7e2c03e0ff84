"""
Custom exception hierarchy for MindLoom.

Provides structured error types for better error handling and debugging.
All exceptions inherit from MindLoomError for easy catching.
"""


class MindLoomError(Exception):
    """
    Base exception for all MindLoom errors.
    All custom exceptions should inherit from this class.
    """

    def __init__(self, message: str, context: dict | None = None):
        """
        Initialize MindLoom error.
        Args:
            message: Error message
            context: Optional context dictionary with additional error details
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}


class StoreError(MindLoomError):
    """
    Base exception for store operations.
    Used for errors related to shared storage operations.
    """

    pass


class TreeStoreError(StoreError):
    """
    Shared tree store errors.
    Raised when a transaction cannot be read or committed.
    """

    pass


class ValidationError(MindLoomError):
    """
    Validation errors.
    Raised when input validation fails or a tree breaks the structural invariant.
    """

    pass


class ConfigurationError(MindLoomError):
    """
    Configuration errors.
    Raised when configuration is invalid or missing required values.
    """

    pass


class LLMError(MindLoomError):
    """
    LLM operation errors.
    Raised when text generation fails (API errors, timeouts, etc.).
    """

    pass


class LLMAuthError(LLMError):
    """
    LLM authentication errors.
    Raised when the provider rejects the configured credentials.
    """

    pass
