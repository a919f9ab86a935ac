"""
URL configuration for the Stripe relay endpoints.
Paths match what the Stripe mobile example apps call.
"""
from django.urls import path

from .views import (
    IndexView,
    EphemeralKeyView,
    RefundPaymentView,
    CapturePaymentView,
    ConfirmPaymentView,
    CreateSetupIntentView,
    CreateIntentView,
    StripeWebhookView,
)

app_name = 'payments'

urlpatterns = [
    path('', IndexView.as_view(), name='index'),
    path('ephemeral_keys', EphemeralKeyView.as_view(), name='ephemeral-keys'),
    path('refund_payment', RefundPaymentView.as_view(), name='refund-payment'),
    path('capture_payment', CapturePaymentView.as_view(), name='capture-payment'),
    path('confirm_payment', ConfirmPaymentView.as_view(), name='confirm-payment'),
    path(
        'create_setup_intent',
        CreateSetupIntentView.as_view(),
        name='create-setup-intent'
    ),
    path('create_intent', CreateIntentView.as_view(), name='create-intent'),
    # Stripe webhooks
    path('stripe-webhook', StripeWebhookView.as_view(), name='stripe-webhook'),
]
