from gsa_registry import db
from gsa_registry.data.core.registry_asset_base import RegistryAssetBase
from gsa_registry.data.core.sequences import VehicleIDManager


class Vehicle(RegistryAssetBase):
    __tablename__ = 'vehicles'
    asset_category = 'vehicle'
    id_manager = VehicleIDManager

    plate_number = db.Column(db.String(20), unique=True, nullable=False)
    # Freeform type token (car, truck, suv, ...); drives the vehicle class used for sequence counts
    vehicle_type = db.Column(db.String(50), nullable=False, default='car')
    # Optional class label (Sedan, Yellow Machine, ...) chosen by the operator
    vehicle_class = db.Column(db.String(50), nullable=True)
    make = db.Column(db.String(100), nullable=False)
    model = db.Column(db.String(100), nullable=False)
    year = db.Column(db.Integer, nullable=True)
    color = db.Column(db.String(50), nullable=True)
    vin_number = db.Column(db.String(17), unique=True, nullable=False)
    mileage = db.Column(db.Integer, default=0)
    fuel_level = db.Column(db.Integer, default=100)

    @property
    def class_label(self):
        return self.vehicle_class or self.vehicle_type or 'car'

    def __repr__(self):
        return f'<Vehicle {self.plate_number} ({self.gsa_code})>'
