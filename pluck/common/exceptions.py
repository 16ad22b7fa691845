"""Exception types for pluck.

Absence of a node, an attribute or a parseable number is never an error in
pluck: combinators return ``None``, an empty list or ``nan`` for those. The
exceptions below cover the remaining cases: scrapers that were built with
bad configuration, and the opt-in strict and validation modes.
"""

from typing import Any


class PluckException(Exception):
    """Base class for all pluck errors.

    Attributes:
        message: Human-readable description of the problem.
        context: Extra details (selector, counts, field names...) rendered
            below the message.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable description of the problem.
            context: Optional dict of additional context.
        """
        self.message = message
        self.context = context or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context.

        Returns:
            Formatted error message string.
        """
        parts = [self.message]

        if self.context:
            parts.append("Context:")
            for key, value in self.context.items():
                parts.append(f"  {key}: {value}")

        return "\n".join(parts)


# =============================================================================
# Construction-time errors
# =============================================================================


class InvalidSelectorException(PluckException):
    """Raised when a selector string cannot be compiled.

    Selectors are compiled when a scraper is built, so a typo surfaces
    at import time of the module defining the scraper instead of on the
    first page it runs against.

    Attributes:
        selector: The offending selector string.
    """

    def __init__(self, selector: str, reason: str) -> None:
        self.selector = selector
        super().__init__(
            f"Invalid CSS selector {selector!r}",
            {"selector": selector, "reason": reason},
        )


class ScraperConfigurationException(PluckException):
    """Raised when a combinator is built with unusable arguments.

    Examples: a field map that is not a mapping, or a field whose value
    is not callable.
    """


class FieldCollisionException(ScraperConfigurationException):
    """Raised by strict positional combinators when positions share a field.

    Attributes:
        fields: Field names declared by more than one position.
    """

    def __init__(self, selector: str, fields: list[str]) -> None:
        self.fields = fields
        super().__init__(
            "Positions declare overlapping fields: " + ", ".join(fields),
            {"selector": selector, "fields": fields},
        )


# =============================================================================
# Evaluation-time errors (opt-in)
# =============================================================================


class PositionMismatchException(PluckException):
    """Raised by strict positional combinators on a count mismatch.

    The default (non-strict) behavior ignores extra matches and leaves
    unmatched positions empty.

    Attributes:
        selector: The selector used to find the positional nodes.
        expected_count: Number of declared positions.
        actual_count: Number of nodes matched.
    """

    def __init__(
        self,
        selector: str,
        expected_count: int,
        actual_count: int,
    ) -> None:
        self.selector = selector
        self.expected_count = expected_count
        self.actual_count = actual_count
        super().__init__(
            f"Expected {expected_count} positional matches for "
            f"{selector!r}, but found {actual_count}",
            {
                "selector": selector,
                "expected_count": expected_count,
                "actual_count": actual_count,
            },
        )


class DataFormatAssumptionException(PluckException):
    """Raised when a scraped record doesn't match its pydantic model.

    This indicates that the page's data format has changed or the
    scraper's extraction logic needs updating.
    """

    def __init__(
        self,
        errors: list[dict[str, Any]],
        failed_doc: dict[str, Any],
        model_name: str,
        request_url: str = "",
    ) -> None:
        """Initialize the exception.

        Args:
            errors: List of pydantic validation errors.
            failed_doc: The record that failed validation.
            model_name: Name of the model validated against.
            request_url: URL of the page the record came from, if known.
        """
        self.errors = errors
        self.failed_doc = failed_doc
        self.model_name = model_name
        self.request_url = request_url

        error_summary = ", ".join(
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: "
            f"{err['msg']}"
            for err in errors
        )

        message = (
            f"Data validation failed for model '{model_name}': {error_summary}"
        )

        context: dict[str, Any] = {
            "model": model_name,
            "error_count": len(errors),
            "failed_doc": failed_doc,
        }
        if request_url:
            context["url"] = request_url

        super().__init__(message, context)
