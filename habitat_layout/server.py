"""Flask API for saving designs, user accounts and layout evaluation."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from flask import Flask, current_app, jsonify, request

from .accounts import AccountService, InMemoryUserRepository, UserRepository
from .catalog import catalog_payload
from .errors import AuthError, InvalidHabitatError, StorageError
from .io_schema import parse_design
from .logging_config import setup_logging
from .scoring import evaluate
from .settings import AppSettings
from .storage import HabitatStore, JsonFileHabitatStore, save_habitat

logger = logging.getLogger(__name__)


def _store() -> HabitatStore:
    return current_app.extensions["habitat_store"]


def _accounts() -> AccountService:
    return current_app.extensions["habitat_accounts"]


def _json_body() -> Dict[str, Any]:
    payload = request.get_json(force=True, silent=True)
    return payload if isinstance(payload, dict) else {}


def _bearer_token() -> Optional[str]:
    header = request.headers.get("Authorization")
    if not header:
        return None
    parts = header.split(" ")
    return parts[1] if len(parts) > 1 else ""


def create_app(
    settings: AppSettings | None = None,
    store: HabitatStore | None = None,
    users: UserRepository | None = None,
) -> Flask:
    """Build the API application with its store and account service wired in."""

    settings = settings or AppSettings.from_env()
    setup_logging(settings.log_level, settings.log_file)

    app = Flask(__name__)
    app.config["HABITAT_SETTINGS"] = settings
    app.extensions["habitat_store"] = store if store is not None else JsonFileHabitatStore(settings.data_path)
    app.extensions["habitat_accounts"] = AccountService(
        users if users is not None else InMemoryUserRepository(),
        settings.secret_key,
        token_ttl_seconds=settings.token_ttl_seconds,
    )

    @app.after_request
    def _finish_response(response):
        logger.info("%s %s -> %s", request.method, request.path, response.status_code)
        response.headers["Access-Control-Allow-Origin"] = "*"
        response.headers["Access-Control-Allow-Headers"] = "Content-Type, Authorization"
        response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
        return response

    @app.errorhandler(AuthError)
    def _auth_error(exc: AuthError):
        return jsonify({"message": exc.message}), exc.status_code

    @app.route("/api/save", methods=["POST"])
    def save():
        try:
            record = save_habitat(_store(), request.get_json(force=True, silent=True))
        except InvalidHabitatError as exc:
            return jsonify({"message": str(exc)}), 400
        except StorageError as exc:
            logger.error("Error saving habitat: %s", exc)
            return jsonify({"message": "Error saving habitat", "error": str(exc)}), 500
        return jsonify({"message": "Habitat saved successfully", "habitat": record})

    @app.route("/api/habitats", methods=["GET"])
    def list_habitats():
        try:
            records = _store().list_all()
        except StorageError as exc:
            logger.error("Error reading habitats: %s", exc)
            return jsonify({"message": "Error reading habitats", "error": str(exc)}), 500
        return jsonify(records)

    @app.route("/api/catalog", methods=["GET"])
    def catalog():
        return jsonify(catalog_payload())

    @app.route("/api/layout/evaluate", methods=["POST"])
    def evaluate_layout():
        try:
            design = parse_design(_json_body())
        except ValueError as exc:
            return jsonify({"message": "Invalid design payload", "error": str(exc)}), 400
        try:
            result = evaluate(design.config, design.zones)
        except KeyError as exc:
            return jsonify({"message": "Unknown zone type", "error": str(exc)}), 400
        return jsonify(result.to_json())

    @app.route("/signup", methods=["POST"])
    def signup():
        body = _json_body()
        try:
            user, token = _accounts().signup(body.get("name"), body.get("email"), body.get("password"))
        except AuthError:
            raise
        except Exception as exc:
            logger.exception("Signup failed")
            return jsonify({"message": "Signup failed", "error": str(exc)}), 500
        return jsonify({"message": "Signup successful", "user": user.public(), "token": token}), 201

    @app.route("/login", methods=["POST"])
    def login():
        body = _json_body()
        try:
            user, token = _accounts().login(body.get("email"), body.get("password"))
        except AuthError:
            raise
        except Exception as exc:
            logger.exception("Login failed")
            return jsonify({"message": "Login failed", "error": str(exc)}), 500
        return jsonify({"message": "Login successful", "user": user.public(), "token": token})

    @app.route("/profile", methods=["GET"])
    def profile():
        token = _bearer_token()
        if token is None:
            return jsonify({"message": "No token provided"}), 401
        user = _accounts().profile(token)
        return jsonify({"message": "Profile loaded", "user": user.profile()})

    @app.route("/users", methods=["GET"])
    def list_users():
        users_list = _accounts().repository.all()
        return jsonify({"total": len(users_list), "users": [user.profile() for user in users_list]})

    logger.info("Habitat API ready (store: %s)", type(app.extensions["habitat_store"]).__name__)
    return app
