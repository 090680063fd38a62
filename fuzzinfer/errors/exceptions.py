"""
Exception hierarchy for fuzzinfer.

The hierarchy follows the error taxonomy of the inference engine:
configuration errors surface when a term, norm or engine description is
malformed; parse errors surface when a formula or rule text cannot be
loaded; evaluation errors surface at inference time when the engine is
structurally incomplete. Numeric edge cases (NaN inputs, degenerate
ranges) are never raised; they propagate as NaN.
"""

from typing import Any, Optional


class FuzzyError(Exception):
    """
    Base exception class for all fuzzinfer errors.

    Attributes:
        message: Human-readable error message
        error_code: Optional error code for reference and documentation
        details: Optional dictionary with additional error details
        suggestion: Optional suggestion text for how to fix the error
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        """
        Initialize a new FuzzyError.

        Args:
            message: Human-readable error message
            error_code: Optional error code for reference and documentation
            details: Optional dictionary with additional error details
            suggestion: Optional suggestion text for how to fix the error
        """
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.suggestion = suggestion
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """
        Serialize error to dictionary.

        Returns:
            Dictionary with all error information
        """
        return {
            "message": self.message,
            "error_code": self.error_code,
            "details": self.details,
            "suggestion": self.suggestion,
        }

    def __str__(self) -> str:
        """String representation of the error."""
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message


# --- Configuration Errors ---


class ConfigurationError(FuzzyError):
    """
    Configuration error with location context.

    Raised when a term, norm, activation method or engine description is
    configured with the wrong number or kind of parameters. The fix
    requires editing the configuration rather than the input data.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code
        context: Where the error occurred (file, section, term)
        details: Dictionary with structured error data
        suggestion: How to fix the error

    Examples:
        >>> raise ConfigurationError(
        ...     message="[configuration error] term <Triangle> requires <3> parameters",
        ...     error_code="TERM-MissingParameters",
        ...     details={"term": "Triangle", "required": 3, "provided": 2},
        ... )
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[dict[str, Any]] = None,
        details: Optional[dict[str, Any]] = None,
        suggestion: str = "",
    ) -> None:
        super().__init__(message, error_code, details)
        self.context = context or {}
        self.suggestion = suggestion

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["context"] = self.context
        return result

    def format_user_message(self) -> str:
        """
        Format a user-friendly error message with all context.

        Returns:
            Formatted error message string
        """
        parts = [f"Error: {self.message}"]

        if self.error_code:
            parts.append(f"Code: {self.error_code}")

        if self.context:
            context_parts = []
            if "file" in self.context:
                context_parts.append(f"File: {self.context['file']}")
            if "section" in self.context:
                context_parts.append(f"Section: {self.context['section']}")
            if context_parts:
                parts.append("Location: " + ", ".join(context_parts))

        if self.suggestion:
            parts.append(f"\nSuggestion: {self.suggestion}")

        return "\n".join(parts)


class InvalidConfigurationError(ConfigurationError):
    """Exception raised when an engine description fails validation."""

    pass


class ConfigurationFileError(ConfigurationError):
    """Exception raised when there's an issue with a configuration file."""

    pass


# --- Parse Errors ---


class ParseError(FuzzyError):
    """
    Exception raised when a formula or a rule cannot be parsed.

    Covers mismatched parentheses, unknown tokens, operator arity
    mismatches and rule syntax errors. A rule that fails to parse is left
    unloaded; within a rule block the failure is isolated to that rule.
    """

    pass


# --- Evaluation Errors ---


class EvaluationError(FuzzyError):
    """
    Exception raised at inference time for structural misconfiguration.

    Examples are a Function formula that references a variable missing
    from its substitution map, or an aggregated set without an
    aggregation norm.
    """

    pass


class EngineError(FuzzyError):
    """Exception raised when an engine lookup or structure operation fails."""

    pass


# --- Processing Errors ---


class ProcessingError(FuzzyError):
    """
    Base class for errors related to batch processing.

    This class of errors covers missing input columns or failures while
    evaluating an engine over a table of inputs.
    """

    pass
