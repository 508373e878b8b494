from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify, request
from flask_cors import CORS

from config import get_settings_module

from .auth.middleware import CONTAINER_KEY
from .common.datetime_utils import utcnow
from .container import Container, build_container
from .core.constants import API_VERSION
from .database.bootstrap import ensure_demo_employees, ensure_indexes, list_collections, seed_departments
from .attendance.controller import register as register_attendance
from .departments.controller import register as register_departments
from .employees.controller import register as register_employees
from .holidays.controller import register as register_holidays
from .meetings.controller import register as register_meetings
from .payments.controller import register as register_payments

logger = logging.getLogger(__name__)

LOCAL_ORIGINS = ("http://localhost:3000", "http://localhost:3001")

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
}


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _register_system_routes(app: Flask, container: Container) -> None:
    @app.after_request
    def add_security_headers(response):
        for header, value in SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)
        return response

    @app.route("/", methods=["GET"], endpoint="root")
    def root():
        return jsonify(
            {
                "success": True,
                "message": "HR Operations API is running",
                "version": API_VERSION,
                "health": "/api/health",
            }
        )

    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        connected = container.conn is not None and container.conn.ping()
        return jsonify(
            {
                "success": True,
                "message": "Server is healthy",
                "database": "connected" if connected else "disconnected",
                "environment": app.config["APP_ENV"],
                "timestamp": utcnow().isoformat(),
            }
        )

    @app.errorhandler(404)
    def not_found(_error):
        return (
            jsonify(
                {
                    "success": False,
                    "message": "Route not found",
                    "requested_url": request.path,
                    "method": request.method,
                }
            ),
            404,
        )

    @app.errorhandler(405)
    def method_not_allowed(_error):
        return jsonify({"success": False, "message": "Method not allowed"}), 405

    @app.errorhandler(500)
    def internal_error(error):
        logger.error("Unhandled error on %s %s: %s", request.method, request.path, error)
        return jsonify({"success": False, "message": "Internal Server Error"}), 500


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["JWT_SECRET"] = getattr(settings, "JWT_SECRET")
    app.config["APP_ENV"] = settings_module.rsplit(".", 1)[-1]

    _configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    frontend_url = getattr(settings, "FRONTEND_URL", "")
    origins = [o for o in (frontend_url, *LOCAL_ORIGINS) if o]
    CORS(app, origins=origins, supports_credentials=True)

    if container is None:
        mongo_config = dict(getattr(settings, "MONGO_CONFIG"))
        logger.info("settings=%s db=%s/%s", settings_module, mongo_config.get("uri"), mongo_config.get("database"))
        container = build_container(
            mongo_config=mongo_config,
            gateway_secret=getattr(settings, "PAYMENT_GATEWAY_SECRET", "") or None,
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            ensure_indexes(container.conn)
            seed_departments(container.department_service)
            logger.info("Database ready (collections=%d)", len(list_collections(container.conn)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            ensure_demo_employees(container.employee_service)

    app.extensions[CONTAINER_KEY] = container

    _register_system_routes(app, container)
    register_departments(app, container)
    register_employees(app, container)
    register_holidays(app, container)
    register_attendance(app, container)
    register_meetings(app, container)
    register_payments(app, container)

    return app
