import logging
import os

from datetime import timezone, timedelta
from logging.handlers import RotatingFileHandler

from dotenv import load_dotenv
from flask import Flask

from contest_tracker.config import config_map
from contest_tracker.extensions import csrf

__version__ = '0.1.0'

_STATUS_LABELS = {
    'ongoing': 'Ongoing',
    'upcoming': 'Upcoming',
    'completed': 'Completed',
}


def create_app(config_name=None):
    """Application factory for creating the Flask app instance.

    Args:
        config_name: Configuration name ('development', 'production' or
                     'testing'). Defaults to FLASK_ENV environment variable
                     or 'development'.

    Returns:
        Configured Flask application instance.
    """
    # Load environment variables from the appropriate .env file
    env = config_name or os.environ.get('FLASK_ENV', 'development')
    env_file = os.path.join(
        os.path.dirname(os.path.dirname(os.path.abspath(__file__))),
        f'.env.{env}',
    )
    if os.path.exists(env_file):
        load_dotenv(env_file)

    # Also load a local .env if it exists (overrides the environment-specific one)
    dotenv_path = os.path.join(
        os.path.dirname(os.path.dirname(os.path.abspath(__file__))),
        '.env',
    )
    if os.path.exists(dotenv_path):
        load_dotenv(dotenv_path, override=True)

    # Determine final config name after env files are loaded
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    app = Flask(__name__)

    config_class = config_map.get(config_name, config_map['development'])
    app.config.from_object(config_class)

    _configure_logging(app)

    csrf.init_app(app)

    _register_blueprints(app)

    def to_display_tz(dt, _app=None):
        """Convert a UTC datetime to the configured display timezone."""
        target = _app or app
        offset = target.config.get('DISPLAY_TIMEZONE_OFFSET', 0)
        tz = timezone(timedelta(hours=offset))
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(tz)

    app.to_display_tz = to_display_tz

    @app.template_filter('datefmt')
    def datefmt_filter(dt, fmt='%b %d, %H:%M'):
        """Format a UTC datetime in display timezone."""
        if not dt:
            return '-'
        return to_display_tz(dt).strftime(fmt)

    @app.template_filter('status_label')
    def status_label_filter(status):
        status = getattr(status, 'value', status)
        return _STATUS_LABELS.get(status, _STATUS_LABELS['upcoming'])

    @app.context_processor
    def inject_globals():
        return dict(app_version=__version__)

    return app


def _configure_logging(app):
    """Set up RotatingFileHandler on the root logger."""
    max_bytes = app.config.get('LOG_FILE_MAX_BYTES', 0)
    if not max_bytes:
        return

    log_dir = os.path.join(app.instance_path, 'logs')
    os.makedirs(log_dir, exist_ok=True)

    log_file = os.path.join(log_dir, 'app.log')
    handler = RotatingFileHandler(
        log_file,
        maxBytes=max_bytes,
        backupCount=app.config.get('LOG_FILE_BACKUP_COUNT', 3),
    )
    handler.setFormatter(logging.Formatter(
        app.config.get('LOG_FORMAT', '%(asctime)s [%(levelname)s] %(name)s: %(message)s')
    ))
    handler.setLevel(logging.DEBUG)

    root = logging.getLogger()
    root.addHandler(handler)
    if root.level == logging.WARNING:
        root.setLevel(logging.DEBUG)


def _register_blueprints(app):
    """Register all application blueprints."""
    from contest_tracker.views.contests import contests_bp
    from contest_tracker.views.api import api_bp

    app.register_blueprint(contests_bp)
    app.register_blueprint(api_bp)
