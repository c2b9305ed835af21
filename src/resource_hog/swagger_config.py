"""Swagger/OpenAPI configuration for Resource Hog API."""

import os

from flasgger import Swagger

SWAGGER_CONFIG = {
    "headers": [],
    "specs": [
        {
            "endpoint": "apispec",
            "route": "/apispec.json",
            "rule_filter": lambda rule: True,
            "model_filter": lambda tag: True,
        }
    ],
    "static_url_path": "/flasgger_static",
    "swagger_ui": True,
    "specs_route": "/apidocs",
}

SWAGGER_TEMPLATE = {
    "info": {
        "title": "Resource Hog API",
        "description": "Bounded synthetic CPU and memory load for exercising "
        "Kubernetes autoscaling. One hog per instance, auto-stopping after "
        "its configured maximum runtime.",
        "version": os.getenv("APP_VERSION", "dev"),
        "contact": {
            "name": "Platform Engineering",
        },
    },
    "basePath": "/",
    "schemes": ["http", "https"],
    "securityDefinitions": {
        "ApiKeyAuth": {
            "type": "apiKey",
            "in": "header",
            "name": "X-API-Key",
            "description": "API key for authentication. Required when API_KEY env var is set. "
            "If API_KEY is not configured, authentication is disabled.",
        }
    },
    "security": [{"ApiKeyAuth": []}],
    "tags": [
        {
            "name": "Service",
            "description": "Service information endpoints",
        },
        {
            "name": "Resource Hog",
            "description": "Resource consumption endpoints for Kubernetes scaling tests",
        },
    ],
}


def init_swagger(app):
    """Initialize Swagger documentation for the app.

    Args:
        app: Flask application instance

    Returns:
        Swagger instance
    """
    app.config["SWAGGER"] = SWAGGER_CONFIG
    return Swagger(app, template=SWAGGER_TEMPLATE)
