from flask import Flask, jsonify, request, g
import time
import logging
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from .src.config import Config
from .routes.health import bp as health_bp
from .routes.mood import bp as mood_bp
from .routes.playlists import bp as playlists_bp
from .routes.spotify import bp as spotify_bp


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    origins = getattr(config_object, "CORS_ORIGINS", "*")
    CORS(app, resources={r"/*": {"origins": origins}}, supports_credentials=True)

    app.register_blueprint(health_bp)
    app.register_blueprint(mood_bp, url_prefix="/mood")
    app.register_blueprint(playlists_bp, url_prefix="/playlist")
    app.register_blueprint(spotify_bp, url_prefix="/spotify")

    # Logging simple de todas las peticiones entrantes
    logging.basicConfig(level=logging.DEBUG if getattr(config_object, 'DEBUG', True) else logging.INFO)

    @app.before_request
    def _log_start():
        g._start_time = time.time()

    @app.after_request
    def _log_request(resp):
        started = getattr(g, '_start_time', None)
        dur_ms = int((time.time() - started) * 1000) if started else -1
        logging.info(
            "%s %s -> %s (%d ms) ip=%s",
            request.method,
            request.path,
            resp.status_code,
            dur_ms,
            request.headers.get('X-Forwarded-For', request.remote_addr),
        )
        return resp

    @app.errorhandler(404)
    def _not_found(_):
        return jsonify({"error": "Route not found"}), 404

    @app.errorhandler(Exception)
    def _unhandled(exc):
        if isinstance(exc, HTTPException):
            return exc
        logging.exception("Error no controlado en %s %s", request.method, request.path)
        detail = str(exc) if app.config.get("DEBUG") else "Something went wrong"
        return jsonify({"error": "Internal server error", "detail": detail}), 500

    @app.get("/")
    def root():
        return jsonify({"name": "mood_playlist", "status": "ok"}), 200

    return app
