"""
Payments app relaying the mobile example apps to Stripe.
Provides endpoints for ephemeral keys, payment intents, setup intents,
refunds and the Stripe webhook.
"""
