"""
ASGI entry point for the Stripe example backend.

Platform health probes are answered before Django so they stay cheap and
never depend on ALLOWED_HOSTS or the Stripe configuration.
"""

import os

os.environ.setdefault('DJANGO_SETTINGS_MODULE',
                      'stripe_backend.settings.production')

from django.core.asgi import get_asgi_application  # noqa: E402

HEALTH_CHECK_PATHS = frozenset({'/health'})


async def send_plain_text(send, status, body):
    await send({
        'type': 'http.response.start',
        'status': status,
        'headers': [(b'content-type', b'text/plain; charset=utf-8')],
    })
    await send({'type': 'http.response.body', 'body': body})


class HealthCheckMiddleware:
    """
    Wraps the Django application.

    Answers /health with "OK" and completes the lifespan handshake, which
    Django's ASGI handler rejects.
    """

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope['type'] == 'lifespan':
            await self.lifespan(receive, send)
            return

        if scope['type'] == 'http' and scope.get('path') in HEALTH_CHECK_PATHS:
            await send_plain_text(send, 200, b'OK')
            return

        await self.app(scope, receive, send)

    @staticmethod
    async def lifespan(receive, send):
        # Nothing to open or close: the relay keeps no connections
        while True:
            message = await receive()
            if message['type'] == 'lifespan.startup':
                await send({'type': 'lifespan.startup.complete'})
            elif message['type'] == 'lifespan.shutdown':
                await send({'type': 'lifespan.shutdown.complete'})
                return


application = HealthCheckMiddleware(get_asgi_application())
