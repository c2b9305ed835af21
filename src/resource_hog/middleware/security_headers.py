"""HTTP security headers middleware.

The service only serves JSON plus the Swagger UI, so the policy is strict
except where flasgger's bundled UI needs inline script and style.
"""

# Swagger UI (flasgger) renders with inline bootstrap script and styles
CSP_POLICY = (
    "default-src 'self'; "
    "script-src 'self' 'unsafe-inline'; "
    "style-src 'self' 'unsafe-inline'; "
    "img-src 'self' data:; "
    "connect-src 'self'; "
    "frame-ancestors 'none'; "
    "base-uri 'self'; "
    "form-action 'self';"
)


def init_security_headers(app):
    """Add security headers to all responses.

    Headers applied:
    - X-Content-Type-Options: Prevents MIME-type sniffing attacks
    - X-Frame-Options: Blocks iframe embedding
    - Strict-Transport-Security: Forces HTTPS (outside debug mode)
    - Content-Security-Policy: Controls allowed resource sources
    - Referrer-Policy: Limits referrer leakage
    - Cache-Control: Hog status must never be served from a cache

    Args:
        app: Flask application instance
    """

    @app.after_request
    def add_security_headers(response):
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"

        # Local development runs without TLS
        if not app.debug:
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains"
            )

        response.headers["Content-Security-Policy"] = CSP_POLICY
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        if "Cache-Control" not in response.headers:
            response.headers["Cache-Control"] = "no-store, max-age=0"

        return response

    app.logger.info("Security headers middleware enabled")
