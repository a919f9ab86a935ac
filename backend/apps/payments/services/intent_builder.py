"""
PaymentIntent request construction.
Pure helpers: no Stripe calls, no settings access.
"""
from typing import Any, Dict, Optional

from apps.payments.config import CAPTURE_METHOD_AUTOMATIC

DEFAULT_CURRENCY = 'mxn'
CAPTURE_DEFAULT_CURRENCY = 'usd'
PAYMENT_METHOD_TYPES = ['card']

# Fixed order reference attached to every PaymentIntent created by the relay
DEFAULT_ORDER_ID = '5278735C-1F40-407D-933A-286E463E72D8'


def build_payment_intent_params(
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
    capture_method: str = CAPTURE_METHOD_AUTOMATIC,
) -> Dict[str, Any]:
    """
    Build the keyword arguments for stripe.PaymentIntent.create.

    Args:
        amount: Amount in the currency's smallest unit
        source_id: Legacy Source id, if any
        payment_method_id: PaymentMethod id, if any
        customer_id: Stripe customer id
        metadata: Caller metadata, merged over the fixed order_id
        currency: ISO currency code; falls back to DEFAULT_CURRENCY when empty
        shipping: Shipping details
        return_url: Redirect target for payment methods that need one
        confirm: Confirm the intent on creation
        description: Free-form description
        capture_method: "manual" or "automatic"

    Returns:
        Dictionary of PaymentIntent parameters. None values are left in place;
        the Stripe client drops them when encoding the request.
    """
    return {
        'amount': amount,
        'currency': currency or DEFAULT_CURRENCY,
        'customer': customer_id,
        'source': source_id,
        'payment_method': payment_method_id,
        'payment_method_types': list(PAYMENT_METHOD_TYPES),
        'description': description,
        'shipping': shipping,
        'return_url': return_url,
        'confirm': confirm,
        'confirmation_method': 'manual' if confirm else 'automatic',
        'use_stripe_sdk': True if confirm else None,
        'capture_method': capture_method,
        # Caller metadata wins, including a caller-supplied order_id
        'metadata': {'order_id': DEFAULT_ORDER_ID, **(metadata or {})},
    }
