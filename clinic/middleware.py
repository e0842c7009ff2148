import logging
import time

logger = logging.getLogger(__name__)

SLOW_REQUEST_SECONDS = 1.0


class RequestLogMiddleware:
    """Log method, path, status and latency of every request."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        start = time.monotonic()
        response = self.get_response(request)
        elapsed = time.monotonic() - start
        latency_ms = round(elapsed * 1000, 2)

        logger.info('%s %s %s %sms', request.method, request.path, response.status_code, latency_ms)
        response['X-Process-Time'] = str(latency_ms)
        if elapsed > SLOW_REQUEST_SECONDS:
            logger.warning('Slow request: %s %s took %sms', request.method, request.path, latency_ms)
        return response
