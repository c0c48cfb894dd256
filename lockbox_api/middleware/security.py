"""
Security middleware.

Adds protective headers to every response.
"""

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

# the file list page deletes through an inline script
CONTENT_SECURITY_POLICY = "; ".join([
    "default-src 'self'",
    "script-src 'self' 'unsafe-inline'",
    "frame-ancestors 'none'",
    "base-uri 'self'",
    "form-action 'self'",
])


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware adding security headers to all responses."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """
        Process request through security middleware.

        Args:
            request: Incoming request
            call_next: Next middleware or endpoint

        Returns:
            Response with security headers
        """
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "same-origin"
        response.headers["Content-Security-Policy"] = CONTENT_SECURITY_POLICY

        return response


def add_security_middleware(app: FastAPI) -> None:
    """
    Add security middleware to FastAPI app.

    Args:
        app: FastAPI application
    """
    app.add_middleware(SecurityHeadersMiddleware)
