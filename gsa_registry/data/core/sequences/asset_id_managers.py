"""
Asset ID Managers
Per-category sequences behind the VH001 / EQ001 / FU001 asset ids
"""

from gsa_registry.data.core.virtual_sequence_generator import VirtualSequenceGenerator


class AssetIDManager(VirtualSequenceGenerator):
    """
    Base for asset id sequences; subclasses set the table name and id prefix
    """
    
    sequence_table_name = None
    id_prefix = None
    
    @classmethod
    def get_sequence_table_name(cls):
        return cls.sequence_table_name
    
    @classmethod
    def format_id(cls, value):
        return f"{cls.id_prefix}{value:03d}"
    
    @classmethod
    def get_next_asset_id(cls):
        """Get the next formatted asset id, e.g. VH003"""
        return cls.format_id(cls.get_next_id())


class VehicleIDManager(AssetIDManager):
    sequence_table_name = "_sequence_vehicle_id"
    id_prefix = "VH"


class EquipmentIDManager(AssetIDManager):
    sequence_table_name = "_sequence_equipment_id"
    id_prefix = "EQ"


class FurnitureIDManager(AssetIDManager):
    sequence_table_name = "_sequence_furniture_id"
    id_prefix = "FU"
