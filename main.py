#!/usr/bin/env python3
"""
Barcode API - SVG barcode generator
===================================

Single-command run:  python main.py

See config.py for all environment-variable tunables.
"""

import logging

from flask import Flask, jsonify

import config
from api import api_bp
from ui import ui_bp


def create_app() -> Flask:
    """Flask application factory."""

    app = Flask(__name__, template_folder=str(config.TEMPLATES_DIR))

    # ── Register blueprints ─────────────────────────────────────────
    app.register_blueprint(api_bp)
    app.register_blueprint(ui_bp)

    @app.route("/health")
    def health():
        return jsonify({"ok": True})

    # ── Error handlers ──────────────────────────────────────────────
    @app.errorhandler(404)
    def _404(e):
        return jsonify({"error": "not found"}), 404

    @app.errorhandler(500)
    def _500(e):
        return jsonify({"error": "internal server error"}), 500

    return app


def main():
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    print("=" * 56)
    print("  Barcode API - SVG barcode generator")
    print("=" * 56)

    app = create_app()

    print(f"\n  http://{config.HOST}:{config.PORT}/?value=123456789")
    print(f"  Docs: http://{config.HOST}:{config.PORT}/")
    print("=" * 56)

    app.run(host=config.HOST, port=config.PORT, debug=config.DEBUG)


if __name__ == "__main__":
    main()
