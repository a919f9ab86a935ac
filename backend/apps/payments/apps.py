"""
Django app configuration for payments.
"""
import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class PaymentsConfig(AppConfig):
    """Configuration for the payments app."""
    name = 'apps.payments'
    verbose_name = 'Payments'

    def ready(self):
        """
        Load the Stripe configuration once per process.
        Views read it from here instead of touching the stripe module globals.
        """
        from .config import StripeBackendConfig

        self.stripe_config = StripeBackendConfig.from_settings()

        if not self.stripe_config.secret_key:
            logger.warning(
                "STRIPE_SECRET_KEY is not set. Calls to Stripe will be rejected."
            )
        logger.info(
            f"Payments relay ready (capture_method={self.stripe_config.capture_method})"
        )
