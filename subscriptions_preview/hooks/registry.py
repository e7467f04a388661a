"""In-process filter registry.

Filters are named extension points. Each registered callback receives the
current value (plus up to ``accepted_args - 1`` extra context arguments) and
returns the value handed to the next callback. Callbacks run by ascending
priority; callbacks sharing a priority run in registration order.
"""

from __future__ import annotations

import itertools
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Optional

import structlog

from subscriptions_preview.hooks.names import HookName

logger = structlog.get_logger("hooks")

DEFAULT_PRIORITY = 10


def _key(name: HookName | str) -> str:
    return name.value if isinstance(name, HookName) else name


@dataclass(frozen=True)
class Registration:
    """A callback attached to a filter."""

    callback: Callable[..., Any]
    priority: int
    accepted_args: int
    sequence: int

    def invoke(self, value: Any, args: tuple[Any, ...]) -> Any:
        extra = args[: max(self.accepted_args - 1, 0)]
        return self.callback(value, *extra)


class HookRegistry:
    """Registry of filter callbacks keyed by hook name."""

    def __init__(self) -> None:
        self._filters: dict[str, list[Registration]] = {}
        self._sequence = itertools.count()

    def add_filter(
        self,
        name: HookName | str,
        callback: Callable[..., Any],
        priority: int = DEFAULT_PRIORITY,
        accepted_args: int = 1,
    ) -> None:
        """Attach ``callback`` to ``name``.

        Adding a callback that is already registered at the same priority is
        a no-op, so a filter can be set up repeatedly without stacking.
        """
        if accepted_args < 1:
            raise ValueError("accepted_args must be at least 1")

        key = _key(name)
        registrations = self._filters.setdefault(key, [])
        for existing in registrations:
            if existing.callback == callback and existing.priority == priority:
                return

        registrations.append(
            Registration(
                callback=callback,
                priority=priority,
                accepted_args=accepted_args,
                sequence=next(self._sequence),
            )
        )
        logger.debug("hooks.filter_added", hook=key, priority=priority)

    def remove_filter(
        self,
        name: HookName | str,
        callback: Callable[..., Any],
        priority: int = DEFAULT_PRIORITY,
    ) -> bool:
        """Detach ``callback`` from ``name``.

        Returns:
            True if a registration was removed
        """
        key = _key(name)
        registrations = self._filters.get(key)
        if not registrations:
            return False

        remaining = [
            r
            for r in registrations
            if not (r.callback == callback and r.priority == priority)
        ]
        removed = len(remaining) != len(registrations)
        if remaining:
            self._filters[key] = remaining
        else:
            del self._filters[key]

        if removed:
            logger.debug("hooks.filter_removed", hook=key, priority=priority)
        return removed

    def remove_all_filters(self, name: HookName | str | None = None) -> None:
        """Drop every callback for ``name``, or for every hook when omitted."""
        if name is None:
            self._filters.clear()
        else:
            self._filters.pop(_key(name), None)

    def has_filter(
        self, name: HookName | str, callback: Optional[Callable[..., Any]] = None
    ) -> bool | int:
        """Check whether a filter has callbacks.

        With ``callback``, returns the priority it is registered at, or False.
        """
        registrations = self._filters.get(_key(name), [])
        if callback is None:
            return bool(registrations)
        for registration in registrations:
            if registration.callback == callback:
                return registration.priority
        return False

    def apply_filters(self, name: HookName | str, value: Any, *args: Any) -> Any:
        """Run ``value`` through every callback attached to ``name``."""
        key = _key(name)
        # Snapshot so callbacks may add or remove filters while we iterate.
        registrations = sorted(
            self._filters.get(key, []), key=lambda r: (r.priority, r.sequence)
        )

        for registration in registrations:
            try:
                value = registration.invoke(value, args)
            except Exception as exc:
                # Nested dispatches re-raise the same exception; log it once.
                if not getattr(exc, "_hook_logged", False):
                    logger.error(
                        "hooks.callback_failed",
                        hook=key,
                        callback=getattr(
                            registration.callback, "__qualname__", repr(registration.callback)
                        ),
                        exc_info=True,
                    )
                    exc._hook_logged = True  # type: ignore[attr-defined]
                raise

        return value

    def count(self, name: HookName | str) -> int:
        return len(self._filters.get(_key(name), []))


@contextmanager
def temporary_filter(
    registry: HookRegistry,
    name: HookName | str,
    callback: Callable[..., Any],
    priority: int = DEFAULT_PRIORITY,
    accepted_args: int = 1,
) -> Iterator[HookRegistry]:
    """Register a filter for the duration of a ``with`` block."""
    registry.add_filter(name, callback, priority, accepted_args)
    try:
        yield registry
    finally:
        registry.remove_filter(name, callback, priority)


# Process-wide registry
_registry: Optional[HookRegistry] = None


def get_hook_registry() -> HookRegistry:
    """Get or create the process-wide hook registry."""
    global _registry
    if _registry is None:
        _registry = HookRegistry()
    return _registry
