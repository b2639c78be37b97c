"""Global Inflation Calculator Flask Application Factory."""

import logging
from typing import Optional

from flask import Flask

from calcsite.config import get_global_settings
from calcsite.services.reference_data import initialize_rate_tables


def create_app(config_name: Optional[str] = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        config_name: Configuration name (development, testing, production);
            defaults to the APP_ENV setting

    Returns:
        Flask: Configured Flask application instance
    """
    app = Flask(__name__)

    # Configuration from Pydantic Settings
    settings = get_global_settings()
    env = config_name or settings.app_env
    app.config["SECRET_KEY"] = settings.secret_key
    app.config["DATABASE_URL"] = settings.db_url
    app.config["ENV"] = env
    app.config["DEBUG"] = env == "development"
    app.config["TESTING"] = env == "testing"
    app.config["ADMIN_TOKEN"] = settings.admin_token

    # Scenario and series keys are returned in the order they were computed
    app.json.sort_keys = False  # type: ignore[attr-defined]

    # Projection assumptions
    app.config["GENERATION_GAP_YEARS"] = settings.generation_gap_years
    app.config["HEALTHCARE_EROSION_RATE"] = settings.healthcare_erosion_rate
    app.config["HEALTHCARE_INFLATION_MULTIPLIER"] = (
        settings.healthcare_inflation_multiplier
    )
    app.config["CAR_PRICE_INFLATION_PERCENT"] = settings.car_price_inflation_percent

    logging.getLogger("calcsite").setLevel(settings.log_level)
    app.logger.setLevel(settings.log_level)

    tables = initialize_rate_tables(settings)
    app.logger.info(f"Rate tables ready for {len(tables.currencies())} currencies")

    # Register blueprints
    from calcsite.blueprints.calculators import calculators_bp
    from calcsite.blueprints.content import content_bp
    from calcsite.blueprints.health import health_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(calculators_bp)
    app.register_blueprint(content_bp)

    @app.cli.command("init-db")
    def init_db() -> None:
        """Create the content store tables."""
        from calcsite.database import create_tables

        create_tables()
        app.logger.info("Content store tables created")

    return app
