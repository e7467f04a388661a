"""Named filter hooks shared by the email pipeline and its integrators."""

from subscriptions_preview.hooks.names import HookName
from subscriptions_preview.hooks.registry import (
    DEFAULT_PRIORITY,
    HookRegistry,
    get_hook_registry,
    temporary_filter,
)

__all__ = [
    "DEFAULT_PRIORITY",
    "HookName",
    "HookRegistry",
    "get_hook_registry",
    "temporary_filter",
]
