from gsa_registry import db
from gsa_registry.data.core.registry_asset_base import RegistryAssetBase
from gsa_registry.data.core.sequences import FurnitureIDManager


class Furniture(RegistryAssetBase):
    __tablename__ = 'furniture'
    asset_category = 'furniture'
    id_manager = FurnitureIDManager

    name = db.Column(db.String(255), nullable=False)
    furniture_class = db.Column(db.String(100), nullable=False, default='Other Furniture')
    material = db.Column(db.String(100), nullable=True)
    condition = db.Column(db.String(20), default='good')
    quantity = db.Column(db.Integer, default=1)

    @property
    def class_label(self):
        return self.furniture_class

    def __repr__(self):
        return f'<Furniture {self.name} ({self.gsa_code})>'
