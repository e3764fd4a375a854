"""
Asset API routes
One blueprint per asset category: /api/vehicles, /api/equipment, /api/furniture
"""

from flask import Blueprint, jsonify, request

from gsa_registry.buisness.assets.asset_context import AssetContext
from gsa_registry.buisness.gsa.asset_registry import CATEGORY_COLLECTIONS
from gsa_registry.logger import get_logger
from gsa_registry.presentation.routes import error_response
from gsa_registry.services.asset_service import AssetService

logger = get_logger("gsa_registry.routes.assets")


def _json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return None
    return data


def _asset_payload(context):
    payload = context.asset.to_dict()
    payload['gsaCodeDescription'] = context.gsa_code_description
    return payload


def create_asset_blueprint(asset_category):
    """
    Build the CRUD blueprint for an asset category
    
    Args:
        asset_category (str): 'vehicle', 'equipment' or 'furniture'
        
    Returns:
        Blueprint: Routes for list, create, read, update, delete, transfer and history
    """
    collection = CATEGORY_COLLECTIONS[asset_category]
    label = asset_category.title()
    bp = Blueprint(f'{collection}_api', __name__)
    
    @bp.route('', methods=['GET'])
    def list_assets():
        """List assets with search, department, status, type filter and limit/offset"""
        return jsonify(AssetService.get_list_data(asset_category, request.args))
    
    @bp.route('', methods=['POST'])
    def create_asset():
        """Register an asset; a GSA code is generated when none is supplied"""
        data = _json_body()
        if data is None:
            return error_response('Request body must be a JSON object', 400)
        
        context, warnings = AssetContext.create(asset_category, data, registry=AssetService.get_registry())
        
        body = {
            'success': True,
            asset_category: _asset_payload(context),
            'message': f'{label} created successfully',
        }
        if warnings:
            body['warnings'] = warnings
        return jsonify(body), 201
    
    @bp.route('/<asset_id>', methods=['GET'])
    def get_asset(asset_id):
        context = AssetContext.load(asset_category, asset_id)
        return jsonify({'success': True, asset_category: _asset_payload(context)})
    
    @bp.route('/<asset_id>', methods=['PUT'])
    def update_asset(asset_id):
        data = _json_body()
        if data is None:
            return error_response('Request body must be a JSON object', 400)
        
        context = AssetContext.load(asset_category, asset_id, registry=AssetService.get_registry())
        context.update(data)
        
        return jsonify({
            'success': True,
            asset_category: _asset_payload(context),
            'message': f'{label} updated successfully',
        })
    
    @bp.route('/<asset_id>', methods=['DELETE'])
    def delete_asset(asset_id):
        AssetContext.load(asset_category, asset_id).delete()
        return jsonify({'success': True, 'message': f'{label} deleted successfully'})
    
    @bp.route('/<asset_id>/transfer', methods=['POST'])
    def transfer_asset(asset_id):
        """Move the asset to another MAC; a new GSA code replaces the old one"""
        data = _json_body()
        if data is None:
            return error_response('Request body must be a JSON object', 400)
        
        context = AssetContext.load(asset_category, asset_id, registry=AssetService.get_registry())
        transfer = context.transfer(data.get('department'), manual_count=data.get('manualCount'))
        
        return jsonify({
            'success': True,
            asset_category: _asset_payload(context),
            'transfer': transfer,
            'message': f"{label} transferred to {transfer['department']}",
        })
    
    @bp.route('/<asset_id>/history', methods=['GET'])
    def asset_history(asset_id):
        """GSA codes previously held by the asset"""
        context = AssetContext.load(asset_category, asset_id)
        return jsonify({
            'success': True,
            'assetId': context.asset_id,
            'gsaCode': context.asset.gsa_code,
            'history': context.gsa_code_history,
        })
    
    return bp
