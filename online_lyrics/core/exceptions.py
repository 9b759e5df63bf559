"""
Exception classes for online-lyrics.

This module defines the custom exceptions used by the orchestration layer.
The matching and LRC modules never raise for degenerate input: an empty or
malformed document simply yields an empty result. Exceptions are reserved
for configuration problems and for provider failures that the caller may
want to distinguish.

Exception Hierarchy:
    OnlineLyricsError (base)
        ConfigError - Configuration file issues
        ProviderError - Lyrics provider (network/API) issues
"""


class OnlineLyricsError(Exception):
    """
    Base exception for all online-lyrics errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context (e.g., URL, track id).

    Example:
        try:
            config = load_config(path)
        except OnlineLyricsError as e:
            logger.error(f"Operation failed: {e.message}")
            if e.details:
                logger.debug(f"Details: {e.details}")
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        """
        Initialize the base exception.

        Args:
            message: Human-readable error description that will be shown to the user.
            details: Optional dictionary containing additional context about the error.
                     Common keys include:
                     - 'file_path': Config file involved in the error
                     - 'url': Request URL that failed
                     - 'original_error': The underlying exception text
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return the error message for display."""
        return self.message


class ConfigError(OnlineLyricsError):
    """
    Raised when there's an issue with the configuration file.

    This is a CRITICAL error that should stop program execution.

    Common causes:
        - Explicit config path does not exist
        - config.yaml has invalid YAML syntax
        - Invalid field values (e.g., min_similarity outside 0..1)

    Example:
        raise ConfigError(
            "'netease.min_similarity' must be a number between 0 and 1",
            details={'field': 'netease.min_similarity', 'value': 3}
        )
    """
    pass


class ProviderError(OnlineLyricsError):
    """
    Raised when a lyrics provider cannot complete a request.

    This is a NON-CRITICAL error. The lookup service catches it, logs it
    and moves on to the next candidate or provider.

    Common causes:
        - Network timeout or connection refused
        - Non-2xx HTTP status
        - Response body is not the expected JSON

    Attributes:
        is_transient: True when retrying later could succeed
                      (timeouts, connection errors, 5xx and 429 responses).
    """

    def __init__(
        self,
        message: str,
        details: dict | None = None,
        is_transient: bool = False
    ) -> None:
        super().__init__(message, details)
        self.is_transient = is_transient
