"""
Health check route
"""

from datetime import datetime

from flask import Blueprint, jsonify
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from gsa_registry import db, limiter
from gsa_registry.logger import get_logger

logger = get_logger("gsa_registry.routes.health")

bp = Blueprint('health', __name__)


@bp.route('/health', methods=['GET'])
@limiter.exempt
def health():
    """Stub health check; reports whether the database answers"""
    try:
        db.session.execute(text('SELECT 1'))
        database = 'ok'
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Health check database query failed: {e}")
        database = 'unavailable'
    
    return jsonify({
        'status': 'OK',
        'service': 'gsa-registry',
        'database': database,
        'timestamp': datetime.utcnow().isoformat(),
    })
