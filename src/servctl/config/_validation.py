# pyright: reportAny=false, reportExplicitAny=false
"""Configuration validation using Pydantic.

This module converts Pydantic validation failures into ValidationIssue
records and the ConfigValidationError raised by Config.load.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel, ValidationError

from servctl.exceptions import ConfigValidationError

if TYPE_CHECKING:
    from pydantic_core import ErrorDetails

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """Represents a configuration validation issue.

    Attributes:
        key: Dotted path to the configuration key (e.g., "logging.level").
        message: Human-readable description of the issue.
        expected: Description of expected value or type, if available.
        actual: The actual value that caused the issue.
    """

    key: str
    message: str
    expected: str | None
    actual: Any


def _pydantic_error_to_issue(error: "ErrorDetails") -> ValidationIssue:  # noqa: UP037
    key = ".".join(str(part) for part in error.get("loc", ()))
    message = str(error.get("msg", "Validation error"))

    ctx = error.get("ctx")
    expected: str | None = None
    if ctx is not None:
        if "expected" in ctx:
            expected = str(ctx["expected"])
        elif "gt" in ctx:
            expected = f"greater than {ctx['gt']}"

    return ValidationIssue(
        key=key,
        message=message,
        expected=expected,
        actual=error.get("input"),
    )


def validate(
    model: type[ModelT],
    data: dict[str, Any],
    *,
    source: str | None = None,
) -> ModelT:
    """Validate a configuration dictionary into a model instance.

    Args:
        model: The Pydantic model to validate against.
        data: The merged configuration dictionary.
        source: Where the data came from, for error reporting.

    Returns:
        The validated model instance.

    Raises:
        ConfigValidationError: For the first invalid value found.
    """
    try:
        return model.model_validate(data)
    except ValidationError as e:
        issue = _pydantic_error_to_issue(e.errors()[0])
        msg = f"invalid configuration value for '{issue.key}': {issue.message}"
        raise ConfigValidationError(
            msg,
            key=issue.key,
            value=issue.actual,
            expected=issue.expected or issue.message,
            source=source,
        ) from e
