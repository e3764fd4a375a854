"""
Sequence ID Managers
Manages counter tables for asset ids
"""

from gsa_registry.data.core.sequences.asset_id_managers import (
    AssetIDManager,
    VehicleIDManager,
    EquipmentIDManager,
    FurnitureIDManager,
)

__all__ = [
    'AssetIDManager',
    'VehicleIDManager',
    'EquipmentIDManager',
    'FurnitureIDManager',
]
