"""
Stripe webhook event handler service.
Routes authenticated Stripe events to a handler per event type.
"""
from typing import Any, Optional

from apps.core.services.base import BaseService, ServiceResult
from apps.payments.services.stripe_service import StripeBackendService


class StripeWebhookHandler(BaseService):
    """
    Handles Stripe webhook events with event-specific methods.
    Uses a handler registry pattern for clean event routing.

    Supported Events:
    - source.chargeable: Create and capture a PaymentIntent for sources that
      needed extra customer action (e.g. authorizing with their bank)
    """

    # Source types whose charge is created from the webhook
    CHARGE_CREATION_SOURCE_TYPES = (
        'bancontact',
        'giropay',
        'ideal',
        'sofort',
        'three_d_secure',
    )

    def __init__(self, stripe_service: StripeBackendService):
        """Initialize handler with event registry."""
        super().__init__()
        self.stripe_service = stripe_service

        # Event handler registry
        self.handlers = {
            'source.chargeable': self.handle_source_chargeable,
        }

    def handle_event(self, event: Any) -> ServiceResult:
        """
        Main entry point for webhook events.
        Routes events to specific handlers based on event type.

        Args:
            event: Stripe Event retrieved from the API

        Returns:
            ServiceResult indicating success or failure
        """
        event_type = event.type
        event_id = event.id

        handler = self.handlers.get(event_type)

        if not handler:
            # Unknown event type - log but don't error
            self.log_info(
                f"Unhandled webhook event type: {event_type}",
                event_id=event_id
            )
            return ServiceResult.ok({
                'message': f'Event type {event_type} not handled',
                'event_id': event_id
            })

        try:
            result = handler(event.data.object, event_id)

            if result.success:
                self.log_info(
                    f"Successfully handled {event_type}",
                    event_id=event_id
                )
            else:
                self.log_error(
                    f"Handler failed for {event_type}: {result.error}",
                    event_id=event_id,
                    error_code=result.error_code
                )

            return result

        # Any failure, not only Stripe errors, is reported and the event still acknowledged
        except Exception as e:
            self.log_error(
                f"Exception handling {event_type}",
                exception=e,
                event_id=event_id
            )
            return ServiceResult.fail(
                f"Failed to process event: {str(e)}",
                error_code="HANDLER_EXCEPTION"
            )

    def handle_source_chargeable(self, source: Any, event_id: Optional[str]) -> ServiceResult:
        """
        Capture a PaymentIntent once a source becomes chargeable.

        See https://stripe.com/docs/sources#best-practices

        Args:
            source: Stripe Source from the event
            event_id: Stripe event ID

        Returns:
            ServiceResult containing the PaymentIntent, or a skip notice
        """
        if source.type not in self.CHARGE_CREATION_SOURCE_TYPES:
            return ServiceResult.ok({
                'message': f'Source type {source.type} not charged from webhook',
                'event_id': event_id
            })

        metadata = source.metadata or {}
        payment_intent = self.stripe_service.create_and_capture_payment_intent(
            source.amount,
            source.id,
            None,
            customer_id=metadata.get('customer'),
            metadata=metadata,
            currency=source.currency,
        ).unwrap()

        # The order stored in the source metadata can be fulfilled from here
        self.log_info(
            f"Captured payment intent {payment_intent.id} for source {source.id}",
            event_id=event_id,
            source_type=source.type
        )
        return ServiceResult.ok(payment_intent)
