"""
GSA Code Generator
Registry-backed operations: next sequence count, code generation and collision checks.

These operations favour availability over correctness. When the registry cannot be
read, the count falls back to 1 and the collision check to False, with an error logged,
so that asset registration is never blocked by code generation. A human operator
reviews and can correct any code issued this way.
"""

from typing import Optional

from gsa_registry.buisness.gsa.asset_registry import AssetRegistry
from gsa_registry.buisness.gsa.errors import InvalidManualCountError
from gsa_registry.buisness.gsa.gsa_codes import (
    GSA_PREFIX,
    MAX_SEQUENCE_COUNT,
    VEHICLE,
    build_code,
    class_code_for,
    mac_code_for,
    vehicle_class_code_for,
)
from gsa_registry.logger import get_logger

logger = get_logger("gsa_registry.buisness.gsa.generator")


def next_sequence_count(mac_name: str, asset_category: str, class_code: str,
                        registry: AssetRegistry) -> int:
    """
    Compute the sequence count for the next asset of a MAC and class.
    
    Vehicles are counted per vehicle class, taken from each record's vehicleClass when set
    and its vehicleType otherwise. Equipment and furniture records carry no comparable
    class token, so every record of the category owned by the MAC is counted.
    
    Args:
        mac_name: Full MAC name as stored in the asset's department field
        asset_category: 'vehicle', 'equipment' or 'furniture'
        class_code: 2 digit class code of the new asset
        registry: Registry to read existing assets from
        
    Returns:
        int: Existing matching assets + 1, or 1 if the registry could not be read
    """
    try:
        assets = registry.query(asset_category)
        mac_assets = [asset for asset in assets if asset.get('department') == mac_name]
        
        if asset_category == VEHICLE:
            mac_assets = [
                vehicle for vehicle in mac_assets
                if vehicle_class_code_for(vehicle.get('vehicleClass') or vehicle.get('vehicleType') or 'car') == class_code
            ]
        
        count = len(mac_assets) + 1
        logger.debug(f"{mac_name} has {len(mac_assets)} existing {asset_category} assets in class {class_code}, next count {count}")
        return count
    except Exception as e:
        logger.error(f"Error counting {asset_category} assets for {mac_name}, defaulting to count 1: {e}", exc_info=True)
        return 1


def check_manual_count(manual_count) -> int:
    """
    Check an operator-supplied count override.
    
    Raises:
        InvalidManualCountError: Unless manual_count is an int between 1 and 999
    """
    if isinstance(manual_count, bool) or not isinstance(manual_count, int):
        raise InvalidManualCountError(manual_count)
    if manual_count < 1 or manual_count > MAX_SEQUENCE_COUNT:
        raise InvalidManualCountError(manual_count)
    return manual_count


def generate_asset_code(mac_name: str, asset_category: str, class_label: str,
                        registry: AssetRegistry, manual_count: Optional[int] = None) -> str:
    """
    Generate the GSA code for a new asset.
    
    An unrecognized MAC name still produces a string (with an empty MAC segment) that
    fails validate_code; callers check mac_code_for before persisting a code.
    
    Args:
        mac_name: Full MAC name
        asset_category: 'vehicle', 'equipment' or 'furniture'
        class_label: Vehicle type token or equipment/furniture class name
        registry: Registry used to compute the sequence count
        manual_count: Operator override for the count (legacy paper records)
        
    Returns:
        str: Canonical GSA code
        
    Raises:
        InvalidManualCountError: If manual_count is given but not an integer in 1..999
    """
    mac_code = mac_code_for(mac_name)
    class_code = class_code_for(asset_category, class_label)
    
    if manual_count is not None:
        count = check_manual_count(manual_count)
    else:
        count = next_sequence_count(mac_name, asset_category, class_code, registry)
    
    if not mac_code:
        logger.warning(f"MAC not recognized: {mac_name!r}, generated code has no MAC segment")
    
    return build_code(GSA_PREFIX, mac_code, class_code, count)


def code_exists(code: str, asset_category: str, registry: AssetRegistry,
                exclude_id: Optional[str] = None) -> bool:
    """
    Check whether a GSA code is already assigned to an asset of the category.
    
    Args:
        code: GSA code to look for
        asset_category: 'vehicle', 'equipment' or 'furniture'
        registry: Registry to search
        exclude_id: Asset id to ignore (the asset being edited)
        
    Returns:
        bool: True if another asset holds the code; False if none does or the
            registry could not be read
    """
    try:
        assets = registry.query(asset_category)
        return any(
            asset.get('gsaCode') == code and asset.get('id') != exclude_id
            for asset in assets
        )
    except Exception as e:
        logger.error(f"Error checking GSA code {code} for {asset_category}, assuming it is unused: {e}", exc_info=True)
        return False
