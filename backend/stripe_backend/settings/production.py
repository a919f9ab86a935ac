"""
Production settings - used for deployment behind the platform's TLS proxy.
"""
import logging
from .base import *

logger = logging.getLogger(__name__)


def _env_list(name):
    """Comma-separated environment variable as a list, blanks dropped."""
    return [item.strip() for item in os.environ.get(name, '').split(',') if item.strip()]


DEBUG = os.environ.get('DEBUG', 'False').lower() == 'true'

# e.g. ALLOWED_HOSTS="relay.example.com,api.example.com"
ALLOWED_HOSTS = _env_list('ALLOWED_HOSTS')
if not ALLOWED_HOSTS:
    ALLOWED_HOSTS = ['.herokuapp.com']
    logger.info(
        "ALLOWED_HOSTS not set, accepting Heroku app domains only."
    )

if not STRIPE_SECRET_KEY:
    logger.warning(
        "STRIPE_SECRET_KEY environment variable not set! "
        "Every relayed call will be rejected by Stripe."
    )

# TLS is terminated by the platform proxy
SECURE_SSL_REDIRECT = False
SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')
SECURE_CONTENT_TYPE_NOSNIFF = True
SECURE_HSTS_SECONDS = 60 * 60 * 24 * 365
SECURE_HSTS_INCLUDE_SUBDOMAINS = True
X_FRAME_OPTIONS = 'DENY'

# Native mobile apps send no Origin header, so an empty list only blocks browsers
CORS_ALLOWED_ORIGINS = _env_list('CORS_ALLOWED_ORIGINS')

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{levelname} {asctime} {name} {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': os.getenv('DJANGO_LOG_LEVEL', 'INFO'),
    },
    'loggers': {
        'stripe': {
            'handlers': ['console'],
            'level': 'WARNING',
            'propagate': False,
        },
        'django.request': {
            'handlers': ['console'],
            'level': 'WARNING',
            'propagate': False,
        },
    },
}

# Error tracking, enabled when a DSN is configured
_sentry_dsn = os.environ.get('SENTRY_DSN')
if _sentry_dsn:
    import sentry_sdk
    from sentry_sdk.integrations.django import DjangoIntegration

    sentry_sdk.init(
        dsn=_sentry_dsn,
        integrations=[DjangoIntegration()],
        traces_sample_rate=float(os.environ.get('SENTRY_TRACES_SAMPLE_RATE', '0.1')),
        send_default_pii=False,
    )
