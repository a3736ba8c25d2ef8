import logging

from flask import Flask

from .config import Config
from .controllers.auth import bp as auth_bp
from .controllers.bookings import bp as bookings_bp
from .controllers.views import bp as views_bp
from .models.store import Store
from .utils.filters import fmt_iso_local, fmt_money


def _configure_logging(level: str) -> None:
    logger = logging.getLogger(__name__)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(level.upper())


def create_app(config=None):
    """App factory. `config` is a dict of overrides applied on top of Config."""
    app = Flask(__name__, static_folder="static", template_folder="templates")
    app.config.from_object(Config)
    if config:
        app.config.update(config)

    _configure_logging(app.config.get("LOG_LEVEL", "INFO"))
    Store.instance(app.config["DATA_PATH"])  # load data.pkl or init default

    app.register_blueprint(auth_bp)
    app.register_blueprint(views_bp)
    app.register_blueprint(bookings_bp)
    app.jinja_env.filters["fmt_iso_local"] = fmt_iso_local
    app.jinja_env.filters["fmt_money"] = fmt_money

    return app
