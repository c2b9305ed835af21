"""Resource hog service providing the start/stop/status endpoints.

This module contains the ResourceHogService class which registers the API
routes and translates HogController results into JSON responses.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from flask import jsonify, request
from flasgger import swag_from

from resource_hog.openapi_specs import (
    APP_INFO_SPEC,
    HOG_START_SPEC,
    HOG_STATUS_SPEC,
    HOG_STOP_SPEC,
)
from resource_hog.services.hog_controller import GeneratorSpawnError, HogController


def _request_params() -> Dict[str, Any]:
    """Merge query-string args and JSON body; body keys win."""
    params: Dict[str, Any] = request.args.to_dict()
    body = request.get_json(silent=True)
    if isinstance(body, dict):
        params.update(body)
    return params


class ResourceHogService:
    """
    Encapsulates the resource hog endpoints.
    """

    def __init__(self, app, metrics=None, controller: Optional[HogController] = None):
        """
        Initialize ResourceHogService with Flask app and optional dependencies.

        Args:
            app: Flask application instance
            metrics: PrometheusMetrics instance (optional)
            controller: HogController owning the generator. If not provided,
                        one is built from the app config.
        """
        self.app = app
        self.metrics = metrics
        self.logger = logging.getLogger(self.__class__.__name__)
        self.controller = controller or HogController(
            grace_period_seconds=app.config["HOG_GRACE_PERIOD_SECONDS"],
            minute_seconds=app.config["HOG_MINUTE_SECONDS"],
            logger=self.logger,
        )

        self._register_routes()

    def _register_routes(self):
        """Wire endpoints to Flask routes."""
        self.app.add_url_rule("/", "app_info", self.app_info, methods=["GET"])
        self.app.add_url_rule("/hog-resources", "hog_start", self.hog_start, methods=["POST"])
        self.app.add_url_rule("/clear-hog-resources", "hog_stop", self.hog_stop, methods=["POST"])
        self.app.add_url_rule("/hog-status", "hog_status", self.hog_status, methods=["GET"])

    # ---- Endpoints ----

    @swag_from(APP_INFO_SPEC)
    def app_info(self):
        return jsonify({
            "message": "Resource Hog - Autoscaling Load Generator",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": self.app.config.get("APP_VERSION", "dev"),
            "environment": self.app.config.get("ENVIRONMENT", "local"),
        })

    @swag_from(HOG_START_SPEC)
    def hog_start(self):
        """Start (or restart) the resource hog."""
        try:
            result = self.controller.start(_request_params())
        except GeneratorSpawnError as exc:
            self.logger.exception("Error starting resource hog")
            return jsonify({
                "error": "Failed to start resource hog",
                "details": str(exc),
            }), 500

        return jsonify(result.to_dict()), 202

    @swag_from(HOG_STOP_SPEC)
    def hog_stop(self):
        """Stop the resource hog if it is running."""
        result = self.controller.stop()
        return jsonify(result.to_dict()), 200

    @swag_from(HOG_STATUS_SPEC)
    def hog_status(self):
        """Report the resource hog status."""
        result = self.controller.status()
        return jsonify(result.to_dict()), 200
