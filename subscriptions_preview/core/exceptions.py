"""Exceptions raised by the preview service."""

from __future__ import annotations


class PreviewError(Exception):
    """Base class for preview failures."""


class UnknownEmailTypeError(PreviewError):
    """Raised when a preview is requested for an email type nobody registered."""

    def __init__(self, email_type: str):
        self.email_type = email_type
        super().__init__(f"Unknown email type: {email_type}")


class PreviewDisabledError(PreviewError):
    """Raised when previews are switched off in settings."""

    def __init__(self) -> None:
        super().__init__("Email previews are disabled")
