from flask import Flask, jsonify
from .config import Config
from .extensions import cors, init_store
from .logging_config import setup_logging


def create_app(config_class: type[Config] = Config, **overrides):
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.config.update(overrides)
    app.json.ensure_ascii = False

    setup_logging(app.config["LOG_LEVEL"])

    # Extensions
    cors.init_app(app)
    init_store(app)

    # Blueprints
    from .routes.resenas_api import bp as resenas_api

    app.register_blueprint(resenas_api, url_prefix="/api")

    @app.errorhandler(404)
    def not_found(_err):
        return jsonify({"error": "Recurso no encontrado"}), 404

    @app.errorhandler(405)
    def method_not_allowed(_err):
        return jsonify({"error": "Método no permitido"}), 405

    return app
