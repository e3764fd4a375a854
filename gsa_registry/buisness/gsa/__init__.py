"""
GSA asset codes
Pure code handling (gsa_codes), registry collaborators (asset_registry)
and registry-backed generation (gsa_code_generator).
"""

from gsa_registry.buisness.gsa.gsa_codes import (
    ASSET_CATEGORIES,
    GSACode,
    build_code,
    class_code_for,
    describe_code,
    equipment_class_code_for,
    furniture_class_code_for,
    mac_code_for,
    parse_code,
    validate_code,
    vehicle_class_code_for,
)
from gsa_registry.buisness.gsa.gsa_code_generator import (
    check_manual_count,
    code_exists,
    generate_asset_code,
    next_sequence_count,
)
from gsa_registry.buisness.gsa.asset_registry import (
    AssetRegistry,
    DatabaseAssetRegistry,
    HttpAssetRegistry,
    InMemoryAssetRegistry,
)
from gsa_registry.buisness.gsa.errors import GSACodeError, InvalidManualCountError, RegistryQueryError

__all__ = [
    'ASSET_CATEGORIES',
    'GSACode',
    'build_code',
    'class_code_for',
    'describe_code',
    'equipment_class_code_for',
    'furniture_class_code_for',
    'mac_code_for',
    'parse_code',
    'validate_code',
    'vehicle_class_code_for',
    'check_manual_count',
    'code_exists',
    'generate_asset_code',
    'next_sequence_count',
    'AssetRegistry',
    'DatabaseAssetRegistry',
    'HttpAssetRegistry',
    'InMemoryAssetRegistry',
    'GSACodeError',
    'InvalidManualCountError',
    'RegistryQueryError',
]
