"""
Stripe configuration for the payments relay.
Built once when Django starts and handed to every service instance.
"""
from dataclasses import dataclass

from django.conf import settings

CAPTURE_METHOD_MANUAL = 'manual'
CAPTURE_METHOD_AUTOMATIC = 'automatic'


@dataclass(frozen=True)
class StripeBackendConfig:
    """Immutable Stripe credentials and capture behaviour."""

    secret_key: str
    capture_method: str = CAPTURE_METHOD_AUTOMATIC

    @staticmethod
    def normalize_capture_method(value) -> str:
        # Anything other than an explicit "manual" captures automatically.
        if value == CAPTURE_METHOD_MANUAL:
            return CAPTURE_METHOD_MANUAL
        return CAPTURE_METHOD_AUTOMATIC

    @classmethod
    def from_settings(cls) -> 'StripeBackendConfig':
        return cls(
            secret_key=getattr(settings, 'STRIPE_SECRET_KEY', '') or '',
            capture_method=cls.normalize_capture_method(
                getattr(settings, 'CAPTURE_METHOD', None)
            ),
        )
