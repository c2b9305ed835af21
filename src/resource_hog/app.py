"""Application factory for Resource Hog.

This module bootstraps the Flask application by wiring together:
- Swagger/OpenAPI documentation
- Authentication middleware (API key)
- Security headers middleware
- Prometheus metrics
- Route handlers
"""

import logging
import os

from flask import Flask
from prometheus_flask_exporter import PrometheusMetrics
from werkzeug.middleware.proxy_fix import ProxyFix

from resource_hog.constants import HOG_GRACE_PERIOD_SECONDS, HOG_MINUTE_SECONDS
from resource_hog.middleware import init_auth, init_security_headers
from resource_hog.resource_hog_service import ResourceHogService
from resource_hog.swagger_config import init_swagger


def create_app(config_override: dict | None = None):
    """Application factory for creating the Flask app.

    Args:
        config_override: Optional config dict for testing. Supports:
            - API_KEY: Enable authentication with this key
            - HOG_GRACE_PERIOD_SECONDS: Stop grace period before force kill
            - HOG_MINUTE_SECONDS: Length of one expiry minute
            - HOG_CONTROLLER: Pre-built HogController to use

    Returns:
        Flask application instance
    """
    app = Flask(__name__)

    # Trust X-Forwarded-* from the ingress controller (1 hop)
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)

    # Base config from environment
    app.config.from_mapping(
        ENVIRONMENT=os.getenv("ENVIRONMENT", "local"),
        APP_VERSION=os.getenv("APP_VERSION", "dev"),
        HOG_GRACE_PERIOD_SECONDS=float(
            os.getenv("HOG_GRACE_PERIOD_SECONDS", HOG_GRACE_PERIOD_SECONDS)
        ),
        HOG_MINUTE_SECONDS=float(os.getenv("HOG_MINUTE_SECONDS", HOG_MINUTE_SECONDS)),
    )

    # Apply config overrides (for testing)
    if config_override:
        app.config.update(config_override)

    # Setup logging
    logging.basicConfig(level=logging.INFO)
    app.logger.setLevel(logging.INFO)

    init_swagger(app)

    # Auth runs before the route handlers
    init_auth(app, config_override)
    init_security_headers(app)

    metrics = PrometheusMetrics(app)
    metrics.info("resource_hog_app_info", "Resource Hog application info",
                 version=app.config["APP_VERSION"])

    ResourceHogService(
        app=app,
        metrics=metrics,
        controller=app.config.get("HOG_CONTROLLER"),
    )

    return app


# For local dev: `python -m resource_hog.app`
if __name__ == "__main__":
    app = create_app()
    port = int(os.getenv("PORT", 3000))
    app.run(host="0.0.0.0", port=port, debug=True)
