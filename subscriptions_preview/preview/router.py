"""FastAPI router for subscription email previews."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import PlainTextResponse

from subscriptions_preview.core.exceptions import PreviewDisabledError, UnknownEmailTypeError
from subscriptions_preview.emails.registry import EmailDescriptor
from subscriptions_preview.preview.service import PreviewOverrides, PreviewResult, PreviewService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/preview", tags=["preview"])

# Global service instance (replaceable by the main app or tests)
_service: Optional[PreviewService] = None


def get_preview_service() -> PreviewService:
    """Get or create the preview service."""
    global _service
    if _service is None:
        _service = PreviewService()
    return _service


def set_preview_service(service: Optional[PreviewService]) -> None:
    """Set the global preview service instance."""
    global _service
    _service = service


def _render(
    service: PreviewService, email_type: str, overrides: PreviewOverrides
) -> PreviewResult:
    try:
        return service.render(email_type, overrides)
    except UnknownEmailTypeError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PreviewDisabledError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))


def _overrides(
    product_name: Optional[str] = Query(None, description="Replace the dummy product name"),
    first_name: Optional[str] = Query(None, description="Replace the dummy first name"),
    last_name: Optional[str] = Query(None, description="Replace the dummy last name"),
    email: Optional[str] = Query(None, description="Replace the dummy email address"),
) -> PreviewOverrides:
    address = {
        key: value
        for key, value in (("first_name", first_name), ("last_name", last_name), ("email", email))
        if value is not None
    }
    return PreviewOverrides(product_name=product_name, address=address)


@router.get("/emails", response_model=list[EmailDescriptor])
async def list_preview_emails(service: PreviewService = Depends(get_preview_service)):
    """List the subscription emails that can be previewed."""
    return service.registry.descriptors()


@router.get("/emails/{email_type}", response_model=PreviewResult)
async def preview_email(
    email_type: str,
    overrides: PreviewOverrides = Depends(_overrides),
    service: PreviewService = Depends(get_preview_service),
):
    """Render a subscription email populated with dummy data."""
    result = _render(service, email_type, overrides)
    logger.debug(f"Preview rendered for {email_type} ({len(result.content)} chars)")
    return result


@router.get("/emails/{email_type}/content", response_class=PlainTextResponse)
async def preview_email_content(
    email_type: str,
    overrides: PreviewOverrides = Depends(_overrides),
    service: PreviewService = Depends(get_preview_service),
):
    """Render only the plain-text body of a preview."""
    return _render(service, email_type, overrides).content
