"""
Stripe relay service for the mobile example apps.
Wraps every Stripe call the backend makes and reports outcomes as ServiceResult.
"""
import stripe
from typing import Optional, Dict, Any

from apps.core.services.base import BaseService, ServiceResult
from apps.payments.config import StripeBackendConfig
from apps.payments.services.intent_builder import (
    CAPTURE_DEFAULT_CURRENCY,
    DEFAULT_CURRENCY,
    PAYMENT_METHOD_TYPES,
    build_payment_intent_params,
)


def stripe_error_message(error: stripe.error.StripeError) -> str:
    """Message Stripe meant for humans, without the request id prefix."""
    return error.user_message or str(error)


class StripeBackendService(BaseService):
    """
    Service for the Stripe operations exposed to the mobile example apps.

    The API key comes from the StripeBackendConfig passed in and is sent with
    each request, so the stripe module's global api_key is never touched.

    Stripe Documentation: https://stripe.com/docs/api
    """

    CUSTOMER_DESCRIPTION = 'mobile SDK example customer'

    # Our application's id for the example customer, so it is easy to find
    APP_CUSTOMER_ID = '72F8C533-FCD5-47A6-A45B-3956CA8C792D'

    def __init__(self, config: StripeBackendConfig):
        """Initialize the service with the process-wide Stripe configuration."""
        super().__init__()
        self.config = config

    @property
    def _request_options(self) -> Dict[str, Any]:
        return {'api_key': self.config.secret_key}

    def _stripe_failure(self, message: str, error: stripe.error.StripeError,
                        **context) -> ServiceResult:
        self.log_error(message, exception=error, **context)
        return ServiceResult.fail(
            stripe_error_message(error),
            error_code="STRIPE_ERROR"
        )

    def resolve_customer(self, customer_id: Optional[str]) -> ServiceResult:
        """
        Load the Stripe customer for the current caller.

        This simulates "load the Stripe customer for your current session".
        A fetched customer is NOT checked against any session or caller:
        real deployments must put their own authentication in front of this.

        Args:
            customer_id: Existing Stripe customer id, or None to create one

        Returns:
            ServiceResult containing the Stripe Customer
        """
        try:
            if customer_id is None:
                customer = stripe.Customer.create(
                    description=self.CUSTOMER_DESCRIPTION,
                    metadata={'my_customer_id': self.APP_CUSTOMER_ID},
                    **self._request_options
                )
                self.log_info(
                    f"Created customer {customer.id}",
                    customer_id=customer.id
                )
            else:
                customer = stripe.Customer.retrieve(
                    customer_id, **self._request_options)

            return ServiceResult.ok(customer)

        except stripe.error.StripeError as e:
            return self._stripe_failure(
                "Stripe error resolving customer", e, customer_id=customer_id)

    def create_ephemeral_key(self, customer_id: Optional[str],
                             api_version: Optional[str]) -> ServiceResult:
        """
        Create an ephemeral key scoped to one customer and SDK API version.

        Args:
            customer_id: Existing Stripe customer id, or None to create one
            api_version: Stripe API version the mobile SDK was built against

        Returns:
            ServiceResult containing the EphemeralKey
        """
        customer_result = self.resolve_customer(customer_id)
        if not customer_result.success:
            return customer_result

        customer = customer_result.data
        try:
            key = stripe.EphemeralKey.create(
                customer=customer.id,
                stripe_version=api_version,
                **self._request_options
            )
            return ServiceResult.ok(key)

        except stripe.error.StripeError as e:
            return self._stripe_failure(
                "Stripe error creating ephemeral key", e,
                customer_id=customer.id, api_version=api_version)

    def refund_payment(self, amount: Any, payment_intent_id: Optional[str]) -> ServiceResult:
        """
        Refund (part of) a previous payment.

        Args:
            amount: Amount to refund in the smallest currency unit
            payment_intent_id: PaymentIntent that collected the payment

        Returns:
            ServiceResult containing the Refund
        """
        try:
            refund = stripe.Refund.create(
                amount=amount,
                payment_intent=payment_intent_id,
                **self._request_options
            )
            self.log_info(
                f"Refunded payment intent {payment_intent_id}",
                refund_id=refund.id,
                amount=amount
            )
            return ServiceResult.ok(refund)

        except stripe.error.StripeError as e:
            return self._stripe_failure(
                "Stripe error processing refund", e,
                payment_intent_id=payment_intent_id)

    def create_payment_intent(
        self,
        amount: Any,
        source_id: Optional[str],
        payment_method_id: Optional[str],
        customer_id: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
        currency: Optional[str] = DEFAULT_CURRENCY,
        shipping: Optional[Dict[str, Any]] = None,
        return_url: Optional[str] = None,
        confirm: bool = False,
        description: Optional[str] = None,
    ) -> ServiceResult:
        """
        Create a PaymentIntent using the configured capture method.

        Returns:
            ServiceResult containing the PaymentIntent
        """
        params = build_payment_intent_params(
            amount,
            source_id,
            payment_method_id,
            customer_id=customer_id,
            metadata=metadata,
            currency=currency,
            shipping=shipping,
            return_url=return_url,
            confirm=confirm,
            description=description,
            capture_method=self.config.capture_method,
        )

        try:
            payment_intent = stripe.PaymentIntent.create(
                **params, **self._request_options)
            self.log_info(
                f"PaymentIntent successfully created: {payment_intent.id}",
                payment_intent_id=payment_intent.id,
                confirm=confirm
            )
            return ServiceResult.ok(payment_intent)

        except stripe.error.StripeError as e:
            return self._stripe_failure(
                "Stripe error creating payment intent", e,
                customer_id=customer_id, source_id=source_id)

    def create_and_capture_payment_intent(
        self,
        amount: Any,
        source_id: Optional[str],
        payment_method_id: Optional[str],
        customer_id: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
        currency: Optional[str] = CAPTURE_DEFAULT_CURRENCY,
        shipping: Optional[Dict[str, Any]] = None,
        return_url: Optional[str] = None,
        description: Optional[str] = None,
    ) -> ServiceResult:
        """
        Create and confirm a PaymentIntent in one call, charging the customer.

        Both callers (/capture_payment and the webhook) pass a currency
        explicitly, so the "usd" default is only reached by direct use.
        """
        return self.create_payment_intent(
            amount,
            source_id,
            payment_method_id,
            customer_id=customer_id,
            metadata=metadata,
            currency=currency,
            shipping=shipping,
            return_url=return_url,
            confirm=True,
            description=description,
        )

    def confirm_payment_intent(self, payment_intent_id: Optional[str]) -> ServiceResult:
        """
        Confirm a PaymentIntent created earlier without confirmation.

        Returns:
            ServiceResult containing the confirmed PaymentIntent
        """
        try:
            payment_intent = stripe.PaymentIntent.confirm(
                payment_intent_id,
                use_stripe_sdk=True,
                **self._request_options
            )
            self.log_info(
                f"Confirmed payment intent {payment_intent_id}",
                status=payment_intent.status
            )
            return ServiceResult.ok(payment_intent)

        except stripe.error.StripeError as e:
            return self._stripe_failure(
                "Stripe error confirming payment intent", e,
                payment_intent_id=payment_intent_id)

    def create_setup_intent(self, payment_method_id: Optional[str] = None,
                            return_url: Optional[str] = None) -> ServiceResult:
        """
        Create a card SetupIntent, confirming it straight away when a
        payment method is supplied.

        Stripe docs: https://stripe.com/docs/api/setup_intents/create

        Returns:
            ServiceResult containing the SetupIntent
        """
        has_payment_method = payment_method_id is not None

        try:
            setup_intent = stripe.SetupIntent.create(
                payment_method_types=list(PAYMENT_METHOD_TYPES),
                payment_method=payment_method_id,
                return_url=return_url,
                confirm=has_payment_method,
                use_stripe_sdk=True if has_payment_method else None,
                **self._request_options
            )
            self.log_info(
                f"SetupIntent successfully created: {setup_intent.id}",
                setup_intent_id=setup_intent.id
            )
            return ServiceResult.ok(setup_intent)

        except stripe.error.StripeError as e:
            return self._stripe_failure(
                "Stripe error creating setup intent", e,
                payment_method_id=payment_method_id)

    def retrieve_event(self, event_id: str) -> ServiceResult:
        """
        Fetch an event from Stripe by id.
        Retrieving the event from Stripe guarantees its authenticity.

        Returns:
            ServiceResult containing the Event
        """
        try:
            event = stripe.Event.retrieve(event_id, **self._request_options)
            return ServiceResult.ok(event)

        except stripe.error.StripeError as e:
            return self._stripe_failure(
                "Stripe error retrieving event", e, event_id=event_id)
