"""
Request logging for the relay endpoints.
"""
import logging
import time

from django.conf import settings
from django.core.exceptions import MiddlewareNotUsed

logger = logging.getLogger('stripe_backend.requests')


class RequestLoggingMiddleware:
    """
    Logs each request line and the status the relay answered with.
    Only installed when REQUEST_LOGGING_ENABLED is true.

    Bodies are never logged: they carry payment method and customer ids.
    """

    def __init__(self, get_response):
        if not getattr(settings, 'REQUEST_LOGGING_ENABLED', False):
            raise MiddlewareNotUsed()
        self.get_response = get_response

    def __call__(self, request):
        started = time.monotonic()
        logger.info(
            f"INCOMING REQUEST: {request.method} {request.path} "
            f"Content-Type: {request.content_type or 'none'}"
        )

        try:
            response = self.get_response(request)
        except Exception:
            logger.exception(f"Unhandled error for {request.method} {request.path}")
            raise

        # 402 is how Stripe declines reach the apps, worth spotting in the logs
        level = logging.WARNING if response.status_code >= 400 else logging.INFO
        logger.log(
            level,
            f"RESPONSE: {request.method} {request.path} "
            f"Status: {response.status_code} "
            f"Duration: {time.monotonic() - started:.3f}s"
        )
        return response
