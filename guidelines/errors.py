from __future__ import annotations

from enum import Enum


class DatasetErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    MALFORMED = "malformed"


class ValidationErrorKind(str, Enum):
    NO_FORMAT_SELECTED = "no_format_selected"
    NO_PLATFORM_SELECTED = "no_platform_selected"
    PAGE_COUNT_REQUIRED = "page_count_required"


VALIDATION_MESSAGES = {
    ValidationErrorKind.NO_FORMAT_SELECTED: "Please select at least one format (eBook, Paperback, Hardcover).",
    ValidationErrorKind.NO_PLATFORM_SELECTED: "Please select at least one publishing platform.",
    ValidationErrorKind.PAGE_COUNT_REQUIRED: "Please enter page count for print formats.",
}


class DatasetError(Exception):
    """The platform dataset could not be read or parsed."""

    def __init__(self, kind: DatasetErrorKind, message: str, detail: str | None = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.detail = detail

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message}: {self.detail}"
        return self.message


class ValidationError(ValueError):
    """A guideline request is missing a required selection."""

    def __init__(self, kind: ValidationErrorKind) -> None:
        self.kind = kind
        self.message = VALIDATION_MESSAGES[kind]
        super().__init__(self.message)
