"""Render email previews the way the store does.

A preview builds the email, runs it through the preview filter (where the
subscription adapter injects dummy data), renders the content and finally
runs the content through the mail content filter.
"""

from __future__ import annotations

from contextlib import ExitStack
from datetime import datetime, timezone
from typing import Any, Optional

import structlog
from pydantic import BaseModel, Field

from subscriptions_preview.core.config import Settings, get_settings
from subscriptions_preview.core.exceptions import PreviewDisabledError
from subscriptions_preview.emails.registry import EmailRegistry, get_email_registry
from subscriptions_preview.hooks import HookName, HookRegistry, get_hook_registry, temporary_filter
from subscriptions_preview.preview.adapter import SubscriptionEmailPreview

logger = structlog.get_logger("preview.service")

OVERRIDE_PRIORITY = 20


class PreviewOverrides(BaseModel):
    """Per-request tweaks applied on top of the dummy data."""

    product_name: Optional[str] = Field(default=None, description="Replace the dummy product name")
    address: dict[str, str] = Field(
        default_factory=dict, description="Address fields merged over the dummy address"
    )

    def is_empty(self) -> bool:
        return self.product_name is None and not self.address


class PreviewResult(BaseModel):
    """A rendered email preview."""

    email_type: str = Field(..., description="Email class name")
    title: str = Field(..., description="Email title")
    subject: str = Field(..., description="Rendered subject line")
    content: str = Field(..., description="Rendered plain-text body")
    dummy_data: bool = Field(..., description="Whether dummy subscription data was attached")
    rendered_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class PreviewService:
    """Render previews for registered subscription emails."""

    def __init__(
        self,
        hooks: Optional[HookRegistry] = None,
        registry: Optional[EmailRegistry] = None,
        settings: Optional[Settings] = None,
        adapter: Optional[SubscriptionEmailPreview] = None,
    ):
        self.hooks = hooks or get_hook_registry()
        self.registry = registry or get_email_registry()
        self.settings = settings or get_settings()
        self.adapter = adapter or SubscriptionEmailPreview(
            hooks=self.hooks, registry=self.registry
        )

    def render(
        self, email_type: str, overrides: Optional[PreviewOverrides] = None
    ) -> PreviewResult:
        """Render a preview of ``email_type``.

        Raises:
            PreviewDisabledError: Previews are switched off
            UnknownEmailTypeError: ``email_type`` is not registered
        """
        if not self.settings.PREVIEW_ENABLED:
            raise PreviewDisabledError()

        email = self.registry.create_email(email_type)

        with ExitStack() as stack:
            if overrides and not overrides.is_empty():
                self._apply_overrides(stack, overrides)

            # Overrides are registered before the dummy data is built.
            try:
                email = self.hooks.apply_filters(HookName.PREPARE_EMAIL_FOR_PREVIEW, email)
                content = email.get_content(self.hooks, self.settings)
            except Exception:
                logger.error("preview.render_failed", email_type=email_type, exc_info=True)
                self.adapter.clean_up_filters("")
                raise
            content = self.hooks.apply_filters(HookName.MAIL_CONTENT, content)

        dummy_data = email.object is not None or bool(getattr(email, "subscriptions", None))
        logger.info(
            "preview.rendered",
            email_type=email_type,
            dummy_data=dummy_data,
            length=len(content),
        )

        return PreviewResult(
            email_type=email_type,
            title=email.title,
            subject=email.get_subject(self.settings),
            content=content,
            dummy_data=dummy_data,
        )

    def _apply_overrides(self, stack: ExitStack, overrides: PreviewOverrides) -> None:
        if overrides.product_name is not None:

            def rename_product(product: Any, email_type: str) -> Any:
                product.set_name(overrides.product_name)
                return product

            stack.enter_context(
                temporary_filter(
                    self.hooks, HookName.DUMMY_PRODUCT, rename_product, OVERRIDE_PRIORITY, 2
                )
            )

        if overrides.address:

            def merge_address(address: dict[str, Any], email_type: str) -> dict[str, Any]:
                return {**address, **overrides.address}

            stack.enter_context(
                temporary_filter(
                    self.hooks, HookName.DUMMY_ADDRESS, merge_address, OVERRIDE_PRIORITY, 2
                )
            )
