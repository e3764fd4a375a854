"""
Asset Service
Presentation service for asset list retrieval and registry selection.

Handles:
- Query building and filtering for asset list endpoints
- limit/offset pagination and the list envelope
- Choosing the registry the GSA code generator reads
"""

from typing import Dict, Optional

from flask import current_app
from sqlalchemy import or_

from gsa_registry.buisness.assets.errors import AssetValidationError
from gsa_registry.buisness.gsa.asset_registry import (
    CATEGORY_COLLECTIONS,
    AssetRegistry,
    DatabaseAssetRegistry,
    HttpAssetRegistry,
)
from gsa_registry.data.assets import model_for_category


class AssetService:
    """
    Service for asset list data.
    
    Provides methods for:
    - Building filtered asset queries
    - Producing {success, <collection>, total, offset, limit} envelopes
    """
    
    DEFAULT_LIMIT = 100
    MAX_LIMIT = 1000
    
    # Columns searched by the free-text "search" parameter
    SEARCH_COLUMNS = {
        'vehicle': ('plate_number', 'make', 'model', 'department', 'vin_number', 'gsa_code'),
        'equipment': ('name', 'serial_number', 'brand', 'department', 'gsa_code'),
        'furniture': ('name', 'material', 'department', 'gsa_code'),
    }
    
    # Query parameter -> column for the per-category type filter
    TYPE_FILTERS = {
        'vehicle': ('vehicleType', 'vehicle_type'),
        'equipment': ('equipmentClass', 'equipment_class'),
        'furniture': ('furnitureClass', 'furniture_class'),
    }
    
    @staticmethod
    def build_filtered_query(
        asset_category: str,
        search: Optional[str] = None,
        department: Optional[str] = None,
        status: Optional[str] = None,
        type_value: Optional[str] = None
    ):
        """
        Build a filtered asset query.
        
        Args:
            asset_category: 'vehicle', 'equipment' or 'furniture'
            search: Case-insensitive partial match across the category's search columns
            department: Exact MAC name
            status: Exact status
            type_value: Exact vehicle type / equipment class / furniture class
            
        Returns:
            SQLAlchemy query object ordered by id
        """
        model = model_for_category(asset_category)
        query = model.query
        
        if search:
            pattern = f'%{search}%'
            query = query.filter(or_(*[
                getattr(model, column).ilike(pattern)
                for column in AssetService.SEARCH_COLUMNS[asset_category]
            ]))
        
        if department:
            query = query.filter(model.department == department)
        
        if status:
            query = query.filter(model.status == status)
        
        if type_value:
            _, column = AssetService.TYPE_FILTERS[asset_category]
            query = query.filter(getattr(model, column) == type_value)
        
        return query.order_by(model.id)
    
    @staticmethod
    def parse_pagination(args) -> Dict:
        """
        Read limit/offset from request args.
        
        Returns:
            dict: {"limit", "offset", "errors"}; errors lists invalid parameters
        """
        errors = []
        limit = AssetService._int_arg(args, 'limit', AssetService.DEFAULT_LIMIT)
        offset = AssetService._int_arg(args, 'offset', 0)
        
        if limit is None or not 1 <= limit <= AssetService.MAX_LIMIT:
            errors.append({'field': 'limit', 'message': f'limit must be an integer between 1 and {AssetService.MAX_LIMIT}'})
        if offset is None or offset < 0:
            errors.append({'field': 'offset', 'message': 'offset must be a non-negative integer'})
        
        return {'limit': limit, 'offset': offset, 'errors': errors}

    @staticmethod
    def _int_arg(args, name, default):
        # None marks a value that is present but not an integer
        raw = args.get(name)
        if raw is None or raw == '':
            return default
        try:
            return int(raw)
        except ValueError:
            return None
    
    @staticmethod
    def get_list_data(asset_category: str, args) -> Dict:
        """
        Get the list envelope for an asset category.
        
        Args:
            asset_category: 'vehicle', 'equipment' or 'furniture'
            args: Request args (search, department, status, type filter, limit, offset)
            
        Returns:
            dict: {"success", <collection>, "total", "offset", "limit"}
            
        Raises:
            AssetValidationError: If limit or offset is invalid
        """
        pagination = AssetService.parse_pagination(args)
        if pagination['errors']:
            raise AssetValidationError(pagination['errors'])
        type_param, _ = AssetService.TYPE_FILTERS[asset_category]
        
        query = AssetService.build_filtered_query(
            asset_category,
            search=args.get('search'),
            department=args.get('department'),
            status=args.get('status'),
            type_value=args.get(type_param)
        )
        
        total = query.count()
        assets = query.offset(pagination['offset']).limit(pagination['limit']).all()
        
        return {
            'success': True,
            CATEGORY_COLLECTIONS[asset_category]: [asset.to_dict() for asset in assets],
            'total': total,
            'offset': pagination['offset'],
            'limit': pagination['limit'],
        }
    
    @staticmethod
    def get_registry() -> AssetRegistry:
        """
        Registry used for GSA code generation in the current app.
        
        Returns:
            HttpAssetRegistry when GSA_REGISTRY_URL is configured, else DatabaseAssetRegistry
        """
        base_url = current_app.config.get('GSA_REGISTRY_URL')
        if base_url:
            return HttpAssetRegistry(
                base_url,
                timeout=current_app.config.get('GSA_REGISTRY_TIMEOUT', 5.0),
                max_attempts=current_app.config.get('GSA_REGISTRY_RETRIES', 3)
            )
        return DatabaseAssetRegistry()
