"""
Routes package for the GSA asset registry
JSON API blueprints under /api
"""

from flask import jsonify
from werkzeug.exceptions import HTTPException

from gsa_registry import db
from gsa_registry.buisness.assets.errors import (
    AssetConflictError,
    AssetNotFoundError,
    AssetValidationError,
)
from gsa_registry.buisness.gsa.errors import GSACodeError
from gsa_registry.logger import get_logger

logger = get_logger("gsa_registry.routes")


def error_response(message, status_code, details=None):
    """JSON error body used by every API endpoint"""
    body = {'success': False, 'error': message}
    if details:
        body['details'] = details
    return jsonify(body), status_code


def register_error_handlers(app):
    """Map business-layer exceptions to JSON error responses"""
    
    @app.errorhandler(AssetValidationError)
    def handle_validation_error(error):
        return error_response('Validation failed', 400, error.errors)
    
    @app.errorhandler(GSACodeError)
    def handle_gsa_code_error(error):
        return error_response(str(error), 400)
    
    @app.errorhandler(AssetNotFoundError)
    def handle_not_found(error):
        return error_response(str(error), 404)
    
    @app.errorhandler(AssetConflictError)
    def handle_conflict(error):
        return error_response(str(error), 409)
    
    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        return error_response(error.description, error.code)
    
    @app.errorhandler(Exception)
    def handle_unexpected(error):
        db.session.rollback()
        logger.error(f"Unhandled error: {error}", exc_info=True)
        return error_response('Internal server error', 500)


def init_app(app):
    """Initialize all route blueprints with the Flask app"""
    logger.debug("Initializing route blueprints")
    
    from .api import health, gsa_codes
    from .api.assets import create_asset_blueprint
    from gsa_registry.buisness.gsa.asset_registry import CATEGORY_COLLECTIONS
    
    app.register_blueprint(health.bp, url_prefix='/api')
    app.register_blueprint(gsa_codes.bp, url_prefix='/api/gsa-codes')
    
    for asset_category, collection in CATEGORY_COLLECTIONS.items():
        app.register_blueprint(create_asset_blueprint(asset_category), url_prefix=f'/api/{collection}')
    
    register_error_handlers(app)
    
    logger.info("Registered API blueprints")
