"""
Tests for the database build and debug data insertion
"""

import json

import pytest

from gsa_registry import create_app
from gsa_registry.build import build_database, build_models, debug_data_present, insert_debug_data
from gsa_registry.data.assets.equipment import Equipment
from gsa_registry.data.assets.furniture import Furniture
from gsa_registry.data.assets.vehicle import Vehicle
from gsa_registry.data.core.sequences import EquipmentIDManager, VehicleIDManager

from conftest import TEST_CONFIG


def test_build_models_is_idempotent(app):
    build_models()
    assert VehicleIDManager.get_current_sequence_value() == 0
    assert debug_data_present() is False


def test_sequence_reset(app):
    assert VehicleIDManager.get_next_asset_id() == 'VH001'
    VehicleIDManager.reset_sequence(10)
    assert VehicleIDManager.get_next_asset_id() == 'VH010'


def test_sequences_count_per_category_and_survive_rebuild(app):
    assert VehicleIDManager.get_next_asset_id() == 'VH001'
    assert VehicleIDManager.get_next_asset_id() == 'VH002'
    assert EquipmentIDManager.get_next_asset_id() == 'EQ001'

    VehicleIDManager.create_sequence_if_not_exists(start_value=50)

    assert VehicleIDManager.get_current_sequence_value() == 2
    assert VehicleIDManager.get_next_asset_id() == 'VH003'


def test_insert_debug_data(app):
    summary = insert_debug_data()

    assert summary == {'vehicle': 3, 'equipment': 2, 'furniture': 2}
    codes = {vehicle.plate_number: vehicle.gsa_code for vehicle in Vehicle.query.all()}
    assert codes == {
        'LBR-001-GOV': 'GSA-MOH-06-001',
        'LBR-002-GOV': 'GSA-MOD-02-001',
        'LBR-003-GOV': 'GSA-GSA-03-001',
    }
    assert sorted(e.gsa_code for e in Equipment.query.all()) == ['GSA-GSA-02-001', 'GSA-MOH-01-001']
    assert sorted(f.gsa_code for f in Furniture.query.all()) == ['GSA-MOF-01-001', 'GSA-MOJ-09-001']


def test_insert_debug_data_skips_populated_database(app):
    insert_debug_data()
    assert insert_debug_data() == {}
    assert Vehicle.query.count() == 3


def test_insert_debug_data_missing_file(app, tmp_path):
    with pytest.raises(FileNotFoundError):
        insert_debug_data(tmp_path / 'missing.json')


def test_insert_debug_data_from_custom_file(app, tmp_path):
    data_file = tmp_path / 'assets.json'
    data_file.write_text(json.dumps({
        'furniture': [{'name': 'Office Chair', 'furnitureClass': 'Chair', 'department': 'Ministry of Education'}],
    }))

    assert insert_debug_data(data_file) == {'furniture': 1}
    assert Furniture.query.one().gsa_code == 'GSA-MOE-02-001'


def test_build_database_with_app():
    app = create_app(TEST_CONFIG)

    build_database(enable_debug_data=True, app=app)

    with app.app_context():
        assert Vehicle.query.count() == 3
        assert Equipment.query.count() == 2


def test_create_app_requires_secret_key(monkeypatch):
    monkeypatch.delenv('SECRET_KEY', raising=False)

    with pytest.raises(RuntimeError):
        create_app({'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:'})
