from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
import os
from gsa_registry.logger import get_logger

# Initialize extensions
db = SQLAlchemy()
migrate = Migrate()
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["2000 per day", "200 per hour"],
    storage_uri="memory://"  # Use Redis in production for distributed systems
)


def _env_flag(name, default):
    return os.environ.get(name, default).lower() in ('true', '1', 'yes', 'on')


def create_app(config_overrides=None):
    """
    Create the GSA asset registry application.
    
    Configuration is read from environment variables; config_overrides (a mapping)
    is applied last and is how tests point the app at an in-memory database.
    """
    from pathlib import Path
    
    config_overrides = dict(config_overrides or {})
    app = Flask(__name__)
    
    logger = get_logger("gsa_registry")
    logger.info("Initializing Flask application")
    
    # SECURITY: Require SECRET_KEY - no fallback
    app.config['SECRET_KEY'] = config_overrides.get('SECRET_KEY') or os.environ.get('SECRET_KEY')
    if not app.config['SECRET_KEY']:
        logger.critical("SECRET_KEY not set in environment! Application cannot start.")
        raise RuntimeError("SECRET_KEY environment variable is required")
    
    # Prefer an explicit DATABASE_URL; otherwise keep the SQLite database in instance/
    database_url = config_overrides.get('SQLALCHEMY_DATABASE_URI') or os.environ.get('DATABASE_URL')
    if not database_url:
        base_dir = Path(__file__).parent.parent
        instance_dir = base_dir / 'instance'
        instance_dir.mkdir(parents=True, exist_ok=True)
        default_db_path = instance_dir / 'gsa_registry.db'
        database_url = f"sqlite:///{str(default_db_path.resolve())}"
    app.config['SQLALCHEMY_DATABASE_URI'] = database_url
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    
    # Remote registry used for GSA code generation; the local tables are used when unset
    app.config['GSA_REGISTRY_URL'] = os.environ.get('GSA_REGISTRY_URL', '')
    app.config['GSA_REGISTRY_TIMEOUT'] = float(os.environ.get('GSA_REGISTRY_TIMEOUT', '5.0'))
    app.config['GSA_REGISTRY_RETRIES'] = int(os.environ.get('GSA_REGISTRY_RETRIES', '3'))
    
    app.config['RATELIMIT_ENABLED'] = _env_flag('RATELIMIT_ENABLED', 'True')
    
    app.config.update(config_overrides)
    app.json.sort_keys = False
    
    if app.config['GSA_REGISTRY_URL']:
        logger.info(f"GSA codes will be generated against remote registry {app.config['GSA_REGISTRY_URL']}")
    else:
        logger.debug("GSA codes will be generated against the local database")
    
    # Initialize extensions with app
    db.init_app(app)
    migrate.init_app(app, db)
    limiter.init_app(app)
    
    logger.debug("Extensions initialized")
    
    # Import models to ensure they're registered with SQLAlchemy
    from gsa_registry.data.assets.vehicle import Vehicle
    from gsa_registry.data.assets.equipment import Equipment
    from gsa_registry.data.assets.furniture import Furniture
    
    logger.debug("Models imported and registered")
    
    from gsa_registry.presentation.routes import init_app as init_routes
    init_routes(app)
    
    # Add security headers to all responses
    @app.after_request
    def set_security_headers(response):
        response.headers['X-Frame-Options'] = 'SAMEORIGIN'
        response.headers['X-Content-Type-Options'] = 'nosniff'
        return response
    
    logger.info("Flask application initialization complete")
    
    return app
