"""
Tests for registry-backed GSA code generation and collision checks
"""

import logging

import pytest

from gsa_registry.buisness.gsa.asset_registry import AssetRegistry, InMemoryAssetRegistry
from gsa_registry.buisness.gsa.errors import InvalidManualCountError, RegistryQueryError
from gsa_registry.buisness.gsa.gsa_code_generator import (
    code_exists,
    generate_asset_code,
    next_sequence_count,
)


class FailingRegistry(AssetRegistry):
    """Registry whose every query fails"""

    def __init__(self, error=None):
        self.error = error or RegistryQueryError('vehicle', 'connection refused')
        self.calls = 0

    def query(self, asset_category):
        self.calls += 1
        raise self.error


def test_next_sequence_count_counts_matching_vehicles(registry):
    assert next_sequence_count('Ministry of Health', 'vehicle', '02', registry) == 3


def test_next_sequence_count_ignores_other_macs_and_classes(registry):
    registry.add('vehicle', {'id': 'VH003', 'department': 'Ministry of Justice', 'vehicleType': 'car', 'gsaCode': 'GSA-MOJ-02-001'})
    registry.add('vehicle', {'id': 'VH004', 'department': 'Ministry of Health', 'vehicleType': 'truck', 'gsaCode': 'GSA-MOH-06-001'})

    assert next_sequence_count('Ministry of Health', 'vehicle', '02', registry) == 3
    assert next_sequence_count('Ministry of Health', 'vehicle', '06', registry) == 2
    assert next_sequence_count('Ministry of Justice', 'vehicle', '02', registry) == 2
    assert next_sequence_count('Ministry of Finance', 'vehicle', '02', registry) == 1


def test_next_sequence_count_missing_vehicle_type_counts_as_car():
    registry = InMemoryAssetRegistry({
        'vehicle': [{'id': 'VH001', 'department': 'Ministry of Health', 'gsaCode': None}],
    })
    assert next_sequence_count('Ministry of Health', 'vehicle', '02', registry) == 2
    assert next_sequence_count('Ministry of Health', 'vehicle', '03', registry) == 1


def test_next_sequence_count_equipment_counts_whole_mac():
    registry = InMemoryAssetRegistry({
        'equipment': [
            {'id': 'EQ001', 'department': 'Ministry of Health', 'equipmentClass': 'Computer'},
            {'id': 'EQ002', 'department': 'Ministry of Health', 'equipmentClass': 'Printer'},
            {'id': 'EQ003', 'department': 'Ministry of Finance', 'equipmentClass': 'Computer'},
        ]
    })
    assert next_sequence_count('Ministry of Health', 'equipment', '01', registry) == 3
    assert next_sequence_count('Ministry of Health', 'equipment', '06', registry) == 3
    assert next_sequence_count('Ministry of Finance', 'equipment', '02', registry) == 2


def test_next_sequence_count_empty_registry():
    assert next_sequence_count('Ministry of Health', 'furniture', '01', InMemoryAssetRegistry()) == 1


def test_next_sequence_count_falls_back_to_one_on_failure(caplog):
    failing = FailingRegistry()

    with caplog.at_level(logging.ERROR, logger='gsa_registry'):
        assert next_sequence_count('Ministry of Health', 'vehicle', '02', failing) == 1

    assert failing.calls == 1
    assert any('defaulting to count 1' in record.getMessage() for record in caplog.records)


def test_next_sequence_count_falls_back_on_unexpected_errors():
    assert next_sequence_count('Ministry of Health', 'vehicle', '02', FailingRegistry(TimeoutError('slow'))) == 1


def test_generate_asset_code(registry):
    assert generate_asset_code('Ministry of Health', 'vehicle', 'car', registry) == 'GSA-MOH-02-003'
    assert generate_asset_code('Ministry of Health', 'vehicle', 'Sedan', registry) == 'GSA-MOH-02-003'
    assert generate_asset_code('Ministry of Health', 'vehicle', 'truck', registry) == 'GSA-MOH-06-001'
    assert generate_asset_code('Ministry of Justice', 'vehicle', 'suv', registry) == 'GSA-MOJ-03-001'


def test_generate_asset_code_equipment_and_furniture():
    registry = InMemoryAssetRegistry()
    assert generate_asset_code('General Services Agency', 'equipment', 'Printer', registry) == 'GSA-GSA-02-001'
    assert generate_asset_code('Ministry of Finance', 'furniture', 'Desk', registry) == 'GSA-MOF-01-001'
    assert generate_asset_code('Ministry of Finance', 'furniture', 'Beanbag', registry) == 'GSA-MOF-10-001'


def test_generate_asset_code_manual_count_skips_registry():
    failing = FailingRegistry()
    assert generate_asset_code('Ministry of Health', 'vehicle', 'car', failing, manual_count=15) == 'GSA-MOH-02-015'
    assert failing.calls == 0


@pytest.mark.parametrize('manual_count', [0, -1, 1000, 2.5, '7', True])
def test_generate_asset_code_rejects_bad_manual_count(registry, manual_count):
    with pytest.raises(InvalidManualCountError):
        generate_asset_code('Ministry of Health', 'vehicle', 'car', registry, manual_count=manual_count)


def test_invalid_manual_count_is_a_value_error(registry):
    with pytest.raises(ValueError):
        generate_asset_code('Ministry of Health', 'vehicle', 'car', registry, manual_count=0)


def test_generate_asset_code_unknown_mac_still_returns_string(registry):
    code = generate_asset_code('Ministry of Magic', 'vehicle', 'car', registry)
    assert code == 'GSA--02-001'


def test_generate_asset_code_registry_failure_still_generates():
    assert generate_asset_code('Ministry of Health', 'vehicle', 'car', FailingRegistry()) == 'GSA-MOH-02-001'


def test_code_exists(registry):
    assert code_exists('GSA-MOH-02-001', 'vehicle', registry) is True
    assert code_exists('GSA-MOH-02-003', 'vehicle', registry) is False
    assert code_exists('GSA-MOH-02-001', 'equipment', registry) is False


def test_code_exists_excludes_asset_being_edited(registry):
    assert code_exists('GSA-MOH-02-001', 'vehicle', registry, exclude_id='VH001') is False
    assert code_exists('GSA-MOH-02-001', 'vehicle', registry, exclude_id='VH002') is True


def test_generated_code_exists_after_registration(registry):
    code = generate_asset_code('Ministry of Health', 'vehicle', 'car', registry)
    assert code_exists(code, 'vehicle', registry) is False

    registry.add('vehicle', {'id': 'VH003', 'department': 'Ministry of Health', 'vehicleType': 'car', 'gsaCode': code})

    assert code_exists(code, 'vehicle', registry) is True
    assert generate_asset_code('Ministry of Health', 'vehicle', 'car', registry) == 'GSA-MOH-02-004'


def test_code_exists_false_on_failure(caplog):
    with caplog.at_level(logging.ERROR, logger='gsa_registry'):
        assert code_exists('GSA-MOH-02-001', 'vehicle', FailingRegistry()) is False

    assert any('assuming it is unused' in record.getMessage() for record in caplog.records)
