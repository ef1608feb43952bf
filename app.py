import os
import logging
from logging.handlers import RotatingFileHandler
from flask import Flask
from database import db
from database.player_store import PlayerStatsStore
from engine.match_recorder import MatchRecorder
from engine.stats_service import StatsService
from utils.helpers import PROJECT_ROOT, load_config


def _resolve_db_uri(config):
    """PLAYERBOOK_DB_URI wins; relative SQLite paths are anchored at the project root."""
    uri = os.getenv("PLAYERBOOK_DB_URI") or config.get("database", {}).get("uri") \
        or "sqlite:///data/playerbook.db"
    prefix = "sqlite:///"
    if uri.startswith(prefix) and uri != prefix + ":memory:":
        path = uri[len(prefix):]
        if not os.path.isabs(path):
            path = os.path.join(PROJECT_ROOT, path)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        uri = prefix + path
    return uri


def _configure_logging(config):
    log_config = config.get("logging", {})
    log_dir = log_config.get("dir", "logs")
    if not os.path.isabs(log_dir):
        log_dir = os.path.join(PROJECT_ROOT, log_dir)
    os.makedirs(log_dir, exist_ok=True)
    level = getattr(logging, str(log_config.get("level", "INFO")).upper(), logging.INFO)

    # Clear existing handlers to avoid duplicates
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)

    # File handler for persistent logging
    file_handler = RotatingFileHandler(
        os.path.join(log_dir, "execution.log"),
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding='utf-8'
    )
    console_handler = logging.StreamHandler()

    formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
    file_handler.setFormatter(formatter)
    console_handler.setFormatter(formatter)

    logging.basicConfig(level=level, handlers=[file_handler, console_handler])

    logger = logging.getLogger("PlayerBook")
    logger.setLevel(level)
    return logger


# ────── App Factory ──────
def create_app(config_path=None):
    app = Flask(__name__)
    config = load_config(config_path)

    app.logger = _configure_logging(config)

    # --- Database ---
    app.config["SQLALCHEMY_DATABASE_URI"] = _resolve_db_uri(config)
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False
    db.init_app(app)

    with app.app_context():
        db.create_all()

    # --- Services (injected, one set per app) ---
    store = PlayerStatsStore()
    app.extensions["playerbook"] = {
        "store": store,
        "recorder": MatchRecorder(store),
        "stats_service": StatsService(store, logger=app.logger),
    }

    app.logger.info(f"PlayerBook initialised (database: {app.config['SQLALCHEMY_DATABASE_URI']})")
    return app


def get_services(app):
    """Service objects registered by :func:`create_app`."""
    return app.extensions["playerbook"]
