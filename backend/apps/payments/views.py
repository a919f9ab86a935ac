"""
API views relaying the mobile example apps to Stripe.

Each view normalizes the request payload, calls StripeBackendService and maps
the result: success to 200 JSON, Stripe failures to 402 with a plain-text
message. Anything else propagates to Django's default error handling.
"""
import json
import logging

import stripe
from django.apps import apps as django_apps
from django.http import HttpResponse
from drf_spectacular.utils import extend_schema, OpenApiResponse
from rest_framework import views, status
from rest_framework.negotiation import DefaultContentNegotiation
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from apps.payments.payload import parse_payload
from apps.payments.services.intent_builder import DEFAULT_CURRENCY
from apps.payments.services.stripe_service import StripeBackendService
from apps.payments.services.webhook_handler import StripeWebhookHandler

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = (
    "Great, your backend is set up. Now you can configure the Stripe "
    "example apps to point here."
)

PAYMENT_REQUIRED = OpenApiResponse(description='Stripe rejected the request')


def stripe_object_to_dict(obj):
    """JSON-ready copy of a Stripe object (the same JSON Stripe returned)."""
    if isinstance(obj, stripe.StripeObject):
        return json.loads(str(obj))
    return obj


class IgnoreAcceptNegotiation(DefaultContentNegotiation):
    """
    Always render with the first renderer, whatever the Accept header says.
    Callers (the example apps, Stripe) are never answered with 406.
    """

    def select_renderer(self, request, renderers, format_suffix=None):
        return (renderers[0], renderers[0].media_type)


def plain_text_response(message: str, status_code: int) -> HttpResponse:
    return HttpResponse(message, status=status_code, content_type='text/plain; charset=utf-8')


class StripeRelayView(views.APIView):
    """
    Base view for the relay endpoints.
    The mobile example apps are unauthenticated clients.
    """
    authentication_classes = []
    permission_classes = [AllowAny]
    content_negotiation_class = IgnoreAcceptNegotiation

    # Prefix placed before the Stripe message in 402 responses
    error_prefix = 'Error: '

    def get_stripe_service(self) -> StripeBackendService:
        config = django_apps.get_app_config('payments').stripe_config
        return StripeBackendService(config)

    def payment_required(self, result) -> HttpResponse:
        message = f"{self.error_prefix}{result.error}"
        logger.warning(message, extra={'error_code': result.error_code})
        return plain_text_response(message, status.HTTP_402_PAYMENT_REQUIRED)


def intent_response(intent) -> Response:
    return Response({
        'intent': intent.id,
        'secret': intent.client_secret,
        'status': intent.status,
    }, status=status.HTTP_200_OK)


class IndexView(views.APIView):
    """
    GET /

    Health/info check for the example apps.
    """
    authentication_classes = []
    permission_classes = [AllowAny]
    content_negotiation_class = IgnoreAcceptNegotiation

    @extend_schema(
        summary="Backend info",
        responses={200: OpenApiResponse(description='Plain text welcome message')},
        tags=['Info']
    )
    def get(self, request):
        logger.info(WELCOME_MESSAGE)
        return plain_text_response(WELCOME_MESSAGE, status.HTTP_200_OK)


class EphemeralKeyView(StripeRelayView):
    """
    Create an ephemeral key for the mobile SDK.

    POST /ephemeral_keys

    Request Body:
        customer_id (optional), api_version
    """
    error_prefix = 'Error creating ephemeral key: '

    @extend_schema(
        summary="Create ephemeral key",
        description="Resolves (or creates) the customer and returns an "
                    "ephemeral key scoped to it and the SDK's API version.",
        responses={200: OpenApiResponse(description='Ephemeral key'), 402: PAYMENT_REQUIRED},
        tags=['Customers']
    )
    def post(self, request):
        payload = parse_payload(request)

        result = self.get_stripe_service().create_ephemeral_key(
            payload.get('customer_id'),
            payload.get('api_version'),
        )
        if not result.success:
            return self.payment_required(result)

        return Response(stripe_object_to_dict(result.data), status=status.HTTP_200_OK)


class RefundPaymentView(StripeRelayView):
    """
    Refund a payment.

    POST /refund_payment

    Request Body:
        amount, payment_intent
    """

    @extend_schema(
        summary="Refund a payment",
        responses={200: OpenApiResponse(description='{"refund": {...}}'), 402: PAYMENT_REQUIRED},
        tags=['Payments']
    )
    def post(self, request):
        payload = parse_payload(request)

        result = self.get_stripe_service().refund_payment(
            payload.get('amount'),
            payload.get('payment_intent'),
        )
        if not result.success:
            return self.payment_required(result)

        return Response(
            {'refund': stripe_object_to_dict(result.data)},
            status=status.HTTP_200_OK
        )


class CapturePaymentView(StripeRelayView):
    """
    Create and capture a PaymentIntent: this charges the user's card.

    POST /capture_payment

    Request Body:
        amount, source, payment_method, customer_id, metadata, shipping,
        return_url, description
    """

    @extend_schema(
        summary="Create and capture a payment",
        responses={200: OpenApiResponse(description='{"secret": "..."}'), 402: PAYMENT_REQUIRED},
        tags=['Payments']
    )
    def post(self, request):
        payload = parse_payload(request)

        result = self.get_stripe_service().create_and_capture_payment_intent(
            payload.get('amount'),
            payload.get('source'),
            payload.get('payment_method'),
            customer_id=payload.get('customer_id'),
            metadata=payload.get('metadata'),
            currency=DEFAULT_CURRENCY,
            shipping=payload.get('shipping'),
            return_url=payload.get('return_url'),
            description=payload.get('description'),
        )
        if not result.success:
            return self.payment_required(result)

        return Response({'secret': result.data.client_secret}, status=status.HTTP_200_OK)


class ConfirmPaymentView(StripeRelayView):
    """
    Confirm a PaymentIntent created without confirmation.

    POST /confirm_payment

    Request Body:
        payment_intent_id
    """

    @extend_schema(
        summary="Confirm a payment intent",
        responses={200: OpenApiResponse(description='{"secret": "..."}'), 402: PAYMENT_REQUIRED},
        tags=['Payments']
    )
    def post(self, request):
        payload = parse_payload(request)

        result = self.get_stripe_service().confirm_payment_intent(
            payload.get('payment_intent_id'))
        if not result.success:
            return self.payment_required(result)

        return Response({'secret': result.data.client_secret}, status=status.HTTP_200_OK)


class CreateSetupIntentView(StripeRelayView):
    """
    Create a SetupIntent.

    POST /create_setup_intent

    Like /capture_payment, a real implementation would include controls
    to prevent misuse.
    """
    error_prefix = 'Error creating SetupIntent: '

    @extend_schema(
        summary="Create a setup intent",
        responses={200: OpenApiResponse(description='{"intent", "secret", "status"}'), 402: PAYMENT_REQUIRED},
        tags=['Setup Intents']
    )
    def post(self, request):
        payload = parse_payload(request)

        result = self.get_stripe_service().create_setup_intent(
            payload.get('payment_method'),
            payload.get('return_url'),
        )
        if not result.success:
            return self.payment_required(result)

        return intent_response(result.data)


class CreateIntentView(StripeRelayView):
    """
    Create an unconfirmed PaymentIntent.

    POST /create_intent

    Like /capture_payment, a real implementation would include controls
    to prevent misuse.
    """
    error_prefix = 'Error creating PaymentIntent: '

    @extend_schema(
        summary="Create a payment intent",
        responses={200: OpenApiResponse(description='{"intent", "secret", "status"}'), 402: PAYMENT_REQUIRED},
        tags=['Payments']
    )
    def post(self, request):
        payload = parse_payload(request)

        result = self.get_stripe_service().create_payment_intent(
            payload.get('amount'),
            None,
            None,
            metadata=payload.get('metadata'),
            currency=DEFAULT_CURRENCY,
        )
        if not result.success:
            return self.payment_required(result)

        return intent_response(result.data)


class StripeWebhookView(StripeRelayView):
    """
    Handle Stripe webhooks.

    POST /stripe-webhook

    Add this URL in the webhook settings section of the Stripe Dashboard.
    The event id from the body is re-fetched from Stripe; the rest of the
    body is never trusted.

    Returns:
        200: Event received (always once authenticated, even on errors)
        400: Body or event id could not be authenticated
    """

    @extend_schema(
        summary="Stripe webhook receiver",
        request=None,
        responses={200: None, 400: OpenApiResponse(description='Unverifiable event')},
        tags=['Webhooks']
    )
    def post(self, request):
        try:
            event_id = json.loads(request.body)['id']
        except (ValueError, TypeError, KeyError):
            logger.error("Stripe webhook with invalid payload")
            return plain_text_response('Invalid payload', status.HTTP_400_BAD_REQUEST)

        stripe_service = self.get_stripe_service()
        event_result = stripe_service.retrieve_event(event_id)
        if not event_result.success:
            logger.error(
                f"Stripe webhook event could not be retrieved: {event_result.error}",
                extra={'event_id': event_id}
            )
            return plain_text_response('Invalid event', status.HTTP_400_BAD_REQUEST)

        event = event_result.data
        logger.info(f"Processing Stripe webhook: {event.type}", extra={
            'event_id': event_id,
            'event_type': event.type
        })

        result = StripeWebhookHandler(stripe_service).handle_event(event)
        if not result.success:
            # Acknowledge anyway so Stripe does not redeliver an event whose
            # side effects may have partly happened
            logger.error(
                f"Webhook handler failed: {result.error}",
                extra={'event_id': event_id, 'error_code': result.error_code}
            )

        return HttpResponse(status=status.HTTP_200_OK)
