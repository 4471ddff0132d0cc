# Gemini Chat Relay - Main Entry Point
# Serves both API and Frontend on the same port

from pathlib import Path
import atexit
import logging
import sys
from dotenv import load_dotenv

# Load environment variables from .env file immediately
env_path = Path(__file__).parent / ".env"
load_dotenv(env_path)

from flask import Flask, jsonify, send_from_directory
from flask_cors import CORS
from werkzeug.exceptions import RequestEntityTooLarge

from chat_relay.api.routes import api
from chat_relay.api.generate_routes import generate_api
from chat_relay.core.config import HOST, PORT, DEBUG, LOG_LEVEL, FRONTEND_DIR, MAX_UPLOAD_MB
from chat_relay.core.errors import ConfigurationError
from chat_relay.services.gemini_client import GeminiClient
from chat_relay.services.relay_service import RelayService


def create_app(gemini_client=None):
    """
    Application factory.

    Args:
        gemini_client: provider client to inject; built from the environment
            when omitted (raises ConfigurationError without GEMINI_API_KEY)
    """
    if gemini_client is None:
        gemini_client = GeminiClient.from_config()

    app = Flask(__name__, static_folder=None)
    app.config["MAX_CONTENT_LENGTH"] = MAX_UPLOAD_MB * 1024 * 1024

    # Enable CORS for all routes
    CORS(
        app,
        resources={r"/*": {"origins": "*"}},
        allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
        methods=["GET", "POST", "OPTIONS"],
    )

    app.extensions["gemini_client"] = gemini_client
    app.extensions["relay_service"] = RelayService(gemini_client)

    # Register API blueprints
    app.register_blueprint(api, url_prefix="/api")
    app.register_blueprint(generate_api)

    @app.errorhandler(RequestEntityTooLarge)
    def file_too_large(e):
        return jsonify({"error": f"File too large (max {MAX_UPLOAD_MB} MB)"}), 413

    # Serve frontend index.html at root
    @app.route("/")
    def index():
        """Serve main index.html"""
        return send_from_directory(str(FRONTEND_DIR), "index.html")

    # Serve CSS files
    @app.route("/css/<path:filename>")
    def serve_css(filename):
        """Serve CSS files"""
        return send_from_directory(str(FRONTEND_DIR / "css"), filename, mimetype="text/css")

    # Serve JS files
    @app.route("/js/<path:filename>")
    def serve_js(filename):
        """Serve JavaScript files"""
        return send_from_directory(str(FRONTEND_DIR / "js"), filename, mimetype="application/javascript")

    return app


if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL, format="[%(asctime)s] %(levelname)s %(name)s - %(message)s")

    try:
        app = create_app()
    except ConfigurationError as e:
        print(f"\nFATAL ERROR: {e}\n", file=sys.stderr)
        sys.exit(1)

    atexit.register(app.extensions["gemini_client"].close)

    print("=" * 60)
    print("  GEMINI CHAT RELAY")
    print("=" * 60)
    print(f"\n  Server: http://127.0.0.1:{PORT}")
    print(f"  Model:  {app.extensions['gemini_client'].model}")
    print("\n" + "=" * 60)
    print("  Press Ctrl+C to stop the server")
    print("=" * 60 + "\n")

    app.run(debug=DEBUG, host=HOST, port=PORT)
