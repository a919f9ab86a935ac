"""
Pytest configuration and fixtures for the Stripe example backend tests.
Provides the service under test, an API client and Stripe object builders.
"""
import os
import sys

import django
import pytest

# Add the backend directory to the Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Configure Django settings before any Django imports
os.environ.setdefault('DJANGO_SETTINGS_MODULE',
                      'stripe_backend.settings.test')
django.setup()

# Now safe to import Django and third-party modules
import stripe  # noqa: E402
from rest_framework.test import APIClient  # noqa: E402

from apps.payments.config import StripeBackendConfig  # noqa: E402

TEST_API_KEY = 'sk_test_relay_key'


# ==================== Stripe object builders ====================

def make_stripe_object(cls=stripe.StripeObject, **values):
    """Build a Stripe object exactly as the client would after an API call."""
    return cls.construct_from(values, TEST_API_KEY)


def make_payment_intent(id='pi_test_123456789', client_secret='pi_test_123456789_secret',
                        status='requires_payment_method', **values):
    return make_stripe_object(
        stripe.PaymentIntent,
        id=id,
        object='payment_intent',
        client_secret=client_secret,
        status=status,
        **values
    )


def make_source_event(source_type='ideal', event_type='source.chargeable',
                      event_id='evt_test_123', **source_values):
    source = {
        'id': 'src_test_123',
        'object': 'source',
        'type': source_type,
        'amount': 1099,
        'currency': 'eur',
        'metadata': {'customer': 'cus_test_123', 'order': '42'},
    }
    source.update(source_values)
    return make_stripe_object(
        stripe.Event,
        id=event_id,
        object='event',
        type=event_type,
        data={'object': source},
    )


# ==================== Fixtures ====================

@pytest.fixture
def stripe_config():
    """Configuration used by services under test."""
    return StripeBackendConfig(secret_key=TEST_API_KEY)


@pytest.fixture
def manual_capture_config():
    return StripeBackendConfig(secret_key=TEST_API_KEY, capture_method='manual')


@pytest.fixture
def stripe_service(stripe_config):
    """Create StripeBackendService instance."""
    from apps.payments.services.stripe_service import StripeBackendService
    return StripeBackendService(stripe_config)


@pytest.fixture
def webhook_handler(stripe_service):
    from apps.payments.services.webhook_handler import StripeWebhookHandler
    return StripeWebhookHandler(stripe_service)


@pytest.fixture
def api_client():
    """DRF API client for the relay endpoints."""
    return APIClient()


@pytest.fixture
def mock_stripe_payment_intent(mocker):
    """Mock Stripe payment intent creation."""
    mock = mocker.patch('stripe.PaymentIntent.create')
    mock.return_value = make_payment_intent()
    return mock


@pytest.fixture
def stripe_card_error():
    """A declined card error as raised by the Stripe client."""
    return stripe.error.CardError(
        'Your card was declined.', param=None, code='card_declined')
