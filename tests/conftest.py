import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path so `import subscriptions_preview` works when running pytest from root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from subscriptions_preview.core.config import Settings  # noqa: E402
from subscriptions_preview.emails.registry import EmailRegistry  # noqa: E402
from subscriptions_preview.hooks import HookRegistry  # noqa: E402
from subscriptions_preview.preview.adapter import SubscriptionEmailPreview  # noqa: E402
from tests.fixtures.sample_subscriptions import FIXED_NOW  # noqa: E402


@pytest.fixture
def hooks():
    """Fresh hook registry per test."""
    return HookRegistry()


@pytest.fixture
def email_registry():
    """Registry with the shipped subscription and notification emails."""
    return EmailRegistry()


@pytest.fixture
def clock():
    """Clock frozen at FIXED_NOW."""
    return lambda: FIXED_NOW


@pytest.fixture
def settings():
    """Settings isolated from any local .env file."""
    return Settings(
        _env_file=None,
        ENV="development",
        STORE_NAME="Test Store",
        PREVIEW_ENABLED=True,
        EARLY_RENEWAL_ENABLED=True,
    )


@pytest.fixture
def adapter(hooks, email_registry, clock):
    """Preview adapter attached to the test hook registry."""
    return SubscriptionEmailPreview(hooks=hooks, registry=email_registry, clock=clock)
