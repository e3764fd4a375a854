from gsa_registry import db
from gsa_registry.data.core.registry_asset_base import RegistryAssetBase
from gsa_registry.data.core.sequences import EquipmentIDManager


class Equipment(RegistryAssetBase):
    __tablename__ = 'equipment'
    asset_category = 'equipment'
    id_manager = EquipmentIDManager

    name = db.Column(db.String(255), nullable=False)
    equipment_class = db.Column(db.String(100), nullable=False, default='Other Equipment')
    equipment_type = db.Column(db.String(50), nullable=True)
    brand = db.Column(db.String(100), nullable=True)
    model = db.Column(db.String(100), nullable=True)
    serial_number = db.Column(db.String(100), unique=True, nullable=True)
    condition = db.Column(db.String(20), default='good')
    purchase_date = db.Column(db.String(10), nullable=True)  # ISO 8601 date
    purchase_price = db.Column(db.Float, nullable=True)

    @property
    def class_label(self):
        return self.equipment_class

    def __repr__(self):
        return f'<Equipment {self.name} ({self.gsa_code})>'
