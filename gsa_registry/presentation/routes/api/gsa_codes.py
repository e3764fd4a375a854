"""
GSA code API routes
Lookup tables, generation, validation, parsing, description and collision checks
"""

from flask import Blueprint, jsonify, request

from gsa_registry import limiter
from gsa_registry.buisness.gsa.gsa_code_generator import code_exists, generate_asset_code, next_sequence_count
from gsa_registry.buisness.gsa.gsa_codes import (
    ASSET_CATEGORIES,
    EQUIPMENT_CLASS_CODES,
    FURNITURE_CLASS_CODES,
    MAC_CODES,
    VEHICLE_CLASS_CODES,
    VEHICLE_TYPE_CLASS_CODES,
    class_code_for,
    describe_code,
    mac_code_for,
    parse_code,
    validate_code,
)
from gsa_registry.logger import get_logger
from gsa_registry.presentation.routes import error_response
from gsa_registry.services.asset_service import AssetService

logger = get_logger("gsa_registry.routes.gsa_codes")

bp = Blueprint('gsa_codes', __name__)


def _category_error(asset_category):
    if asset_category not in ASSET_CATEGORIES:
        return error_response(f"category must be one of {', '.join(ASSET_CATEGORIES)}", 400)
    return None


@bp.route('/classes', methods=['GET'])
def classes():
    """MAC codes and class code tables for registration forms"""
    return jsonify({
        'success': True,
        'macCodes': MAC_CODES,
        'vehicleClassCodes': VEHICLE_CLASS_CODES,
        'vehicleTypeClassCodes': VEHICLE_TYPE_CLASS_CODES,
        'equipmentClassCodes': EQUIPMENT_CLASS_CODES,
        'furnitureClassCodes': FURNITURE_CLASS_CODES,
    })


@bp.route('/generate', methods=['POST'])
@limiter.limit("60 per minute")
def generate():
    """
    Preview the GSA code for a new asset
    
    Body: {"department", "category", "classLabel", "manualCount"?}
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return error_response('Request body must be a JSON object', 400)
    
    department = data.get('department')
    asset_category = data.get('category')
    class_label = data.get('classLabel') or ''
    
    invalid = _category_error(asset_category)
    if invalid:
        return invalid
    if not isinstance(department, str) or not department.strip():
        return error_response('department is required', 400)
    if not mac_code_for(department):
        return error_response(f'MAC not recognized: {department}', 400)
    
    registry = AssetService.get_registry()
    gsa_code = generate_asset_code(department, asset_category, class_label, registry,
                                   manual_count=data.get('manualCount'))
    
    return jsonify({
        'success': True,
        'gsaCode': gsa_code,
        'components': parse_code(gsa_code).to_dict(),
        'description': describe_code(gsa_code),
        'exists': code_exists(gsa_code, asset_category, registry),
    })


@bp.route('/validate', methods=['GET'])
def validate():
    code = request.args.get('code', '')
    return jsonify({'success': True, 'code': code, 'valid': validate_code(code)})


@bp.route('/parse', methods=['GET'])
def parse():
    """Best-effort decomposition; components is null when the code has no four segments"""
    code = request.args.get('code', '')
    components = parse_code(code)
    return jsonify({
        'success': True,
        'code': code,
        'valid': validate_code(code),
        'components': components.to_dict() if components else None,
    })


@bp.route('/describe', methods=['GET'])
def describe():
    code = request.args.get('code', '')
    return jsonify({'success': True, 'code': code, 'description': describe_code(code)})


@bp.route('/exists', methods=['GET'])
def exists():
    """Collision check; excludeId skips the asset being edited"""
    code = request.args.get('code')
    asset_category = request.args.get('category')
    
    invalid = _category_error(asset_category)
    if invalid:
        return invalid
    if not code:
        return error_response('code is required', 400)
    
    found = code_exists(code, asset_category, AssetService.get_registry(),
                        exclude_id=request.args.get('excludeId'))
    return jsonify({'success': True, 'code': code, 'exists': found})


@bp.route('/next-count', methods=['GET'])
def next_count():
    """Sequence count the next asset of a MAC and class would receive"""
    department = request.args.get('department')
    asset_category = request.args.get('category')
    
    invalid = _category_error(asset_category)
    if invalid:
        return invalid
    if not department:
        return error_response('department is required', 400)
    
    class_code = request.args.get('classCode') or class_code_for(asset_category, request.args.get('classLabel', ''))
    count = next_sequence_count(department, asset_category, class_code, AssetService.get_registry())
    
    return jsonify({
        'success': True,
        'department': department,
        'category': asset_category,
        'classCode': class_code,
        'count': count,
    })
