import logging
import os
from logging.handlers import RotatingFileHandler

from flask import Flask, jsonify
from flask_cors import CORS

from ptconnect.config import config
from ptconnect.errors import register_error_handlers
from ptconnect.extensions import db, jwt, ma, migrate, scheduler


def configure_logging(app):
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    logging.basicConfig(level=level)
    app.logger.setLevel(level)

    log_file = app.config.get('LOG_FILE')
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handler = RotatingFileHandler(log_file, maxBytes=1_000_000, backupCount=5)
        handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s [%(name)s] %(message)s'))
        handler.setLevel(level)
        logging.getLogger('ptconnect').addHandler(handler)
        app.logger.addHandler(handler)


def configure_scheduler(app):
    """Register the health-alert sweep and start the scheduler once per process."""
    if scheduler.running:
        return

    from ptconnect.services.health import sweep_health_alerts

    scheduler.init_app(app)

    @scheduler.task('interval', id='health_alert_sweep',
                    minutes=app.config['HEALTH_ALERT_SWEEP_MINUTES'], max_instances=1)
    def health_alert_sweep():
        with app.app_context():
            try:
                sweep_health_alerts()
            except Exception as e:
                app.logger.error(f"Health alert sweep failed: {e}")
                db.session.rollback()

    scheduler.start()


def create_app(config_name='default'):
    app = Flask(__name__)
    app.config.from_object(config[config_name])

    configure_logging(app)

    # Extensions
    db.init_app(app)
    ma.init_app(app)
    jwt.init_app(app)
    migrate.init_app(app, db)
    CORS(app, resources={r"/*": {
        "origins": app.config['CORS_ORIGINS'],
        "allow_headers": ["Content-Type", "Authorization"],
        "methods": ["GET", "POST", "PUT", "OPTIONS"]
    }}, supports_credentials=True)

    @jwt.expired_token_loader
    def expired_token_callback(jwt_header, jwt_payload):
        return jsonify({"msg": "Token has expired"}), 401

    @jwt.invalid_token_loader
    def invalid_token_callback(error):
        return jsonify({"msg": "Invalid token"}), 401

    @jwt.unauthorized_loader
    def unauthorized_callback(error):
        return jsonify({"msg": "Missing authorization"}), 401

    register_error_handlers(app)

    # Blueprints
    from ptconnect.routes.auth import auth_bp
    from ptconnect.routes.coach import coach_bp
    from ptconnect.routes.client import client_bp

    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(coach_bp, url_prefix="/coach")
    app.register_blueprint(client_bp, url_prefix="/client")

    @app.route("/health")
    def healthcheck():
        return jsonify({"status": "ok"}), 200

    if app.config.get('SCHEDULER_ENABLED'):
        configure_scheduler(app)

    return app
