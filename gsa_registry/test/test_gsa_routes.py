"""
Tests for the GSA code API endpoints
"""

import pytest

from conftest import vehicle_payload


def test_classes(client):
    data = client.get('/api/gsa-codes/classes').get_json()

    assert data['macCodes']['Ministry of Health'] == 'MOH'
    assert len(data['macCodes']) == 10
    assert data['vehicleClassCodes']['Yellow Machine'] == '01'
    assert data['vehicleTypeClassCodes']['pickup'] == '05'
    assert data['equipmentClassCodes']['Other Equipment'] == '10'
    assert data['furnitureClassCodes']['Conference Table'] == '09'


def test_generate_first_code(client):
    response = client.post('/api/gsa-codes/generate', json={
        'department': 'Ministry of Health', 'category': 'vehicle', 'classLabel': 'car',
    })
    data = response.get_json()

    assert response.status_code == 200
    assert data['gsaCode'] == 'GSA-MOH-02-001'
    assert data['components'] == {'prefix': 'GSA', 'macCode': 'MOH', 'classCode': '02', 'count': 1}
    assert data['description'] == 'Ministry of Health - Asset #1 in class 02'
    assert data['exists'] is False


def test_generate_follows_registered_assets(client):
    client.post('/api/vehicles', json=vehicle_payload())
    client.post('/api/vehicles', json=vehicle_payload(plateNumber='LBR-101-GOV', vinNumber='JT2BF22K1W0123457'))

    data = client.post('/api/gsa-codes/generate', json={
        'department': 'Ministry of Health', 'category': 'vehicle', 'classLabel': 'Sedan',
    }).get_json()

    assert data['gsaCode'] == 'GSA-MOH-02-003'
    assert data['exists'] is False


def test_generate_manual_count_reports_collision(client):
    client.post('/api/vehicles', json=vehicle_payload())

    data = client.post('/api/gsa-codes/generate', json={
        'department': 'Ministry of Health', 'category': 'vehicle', 'classLabel': 'car', 'manualCount': 1,
    }).get_json()

    assert data['gsaCode'] == 'GSA-MOH-02-001'
    assert data['exists'] is True


@pytest.mark.parametrize('body, message', [
    ({'department': 'Ministry of Health', 'category': 'boat'}, 'category must be one of vehicle, equipment, furniture'),
    ({'category': 'vehicle'}, 'department is required'),
    ({'department': 'Ministry of Magic', 'category': 'vehicle'}, 'MAC not recognized: Ministry of Magic'),
])
def test_generate_rejects_bad_input(client, body, message):
    response = client.post('/api/gsa-codes/generate', json=body)

    assert response.status_code == 400
    assert response.get_json()['error'] == message


def test_generate_rejects_bad_manual_count(client):
    response = client.post('/api/gsa-codes/generate', json={
        'department': 'Ministry of Health', 'category': 'vehicle', 'classLabel': 'car', 'manualCount': 1000,
    })

    assert response.status_code == 400
    assert 'between 1 and 999' in response.get_json()['error']


@pytest.mark.parametrize('code, valid', [
    ('GSA-MOH-02-001', True),
    ('GSA-MOH-2-001', False),
    ('', False),
])
def test_validate(client, code, valid):
    data = client.get('/api/gsa-codes/validate', query_string={'code': code}).get_json()
    assert data['valid'] is valid


def test_parse(client):
    data = client.get('/api/gsa-codes/parse', query_string={'code': 'GSA-MOJ-01-042'}).get_json()
    assert data['valid'] is True
    assert data['components']['count'] == 42

    loose = client.get('/api/gsa-codes/parse', query_string={'code': 'GSA-MOH-02-abc'}).get_json()
    assert loose['valid'] is False
    assert loose['components']['count'] == 0

    assert client.get('/api/gsa-codes/parse', query_string={'code': 'garbage'}).get_json()['components'] is None


def test_describe(client):
    data = client.get('/api/gsa-codes/describe', query_string={'code': 'GSA-MOH-02-001'}).get_json()
    assert data['description'] == 'Ministry of Health - Asset #1 in class 02'

    invalid = client.get('/api/gsa-codes/describe', query_string={'code': 'garbage'}).get_json()
    assert invalid['description'] == 'Invalid GSA Code'


def test_exists(client):
    vehicle = client.post('/api/vehicles', json=vehicle_payload()).get_json()['vehicle']

    def exists(**params):
        return client.get('/api/gsa-codes/exists', query_string=params).get_json()['exists']

    assert exists(code='GSA-MOH-02-001', category='vehicle') is True
    assert exists(code='GSA-MOH-02-001', category='equipment') is False
    assert exists(code='GSA-MOH-02-001', category='vehicle', excludeId=vehicle['id']) is False
    assert exists(code='GSA-MOH-02-009', category='vehicle') is False


def test_exists_requires_code_and_category(client):
    assert client.get('/api/gsa-codes/exists', query_string={'code': 'GSA-MOH-02-001'}).status_code == 400
    assert client.get('/api/gsa-codes/exists', query_string={'category': 'vehicle'}).status_code == 400


def test_next_count(client):
    client.post('/api/vehicles', json=vehicle_payload())

    def next_count(**params):
        return client.get('/api/gsa-codes/next-count', query_string=params).get_json()

    by_label = next_count(department='Ministry of Health', category='vehicle', classLabel='car')
    assert by_label['classCode'] == '02'
    assert by_label['count'] == 2

    assert next_count(department='Ministry of Health', category='vehicle', classCode='06')['count'] == 1
    assert next_count(department='Ministry of Magic', category='vehicle', classLabel='car')['count'] == 1


def test_next_count_requires_department(client):
    response = client.get('/api/gsa-codes/next-count', query_string={'category': 'vehicle'})
    assert response.status_code == 400


def test_generate_uses_remote_registry_when_configured(app, client, monkeypatch):
    """With GSA_REGISTRY_URL set, an unreachable registry degrades to count 1"""
    import httpx

    def refuse(self, url, **kwargs):
        raise httpx.ConnectError('connection refused')

    monkeypatch.setattr(httpx.Client, 'get', refuse)
    app.config['GSA_REGISTRY_URL'] = 'http://registry.invalid'
    app.config['GSA_REGISTRY_RETRIES'] = 1
    client.post('/api/vehicles', json=vehicle_payload(manualCount=1))

    data = client.post('/api/gsa-codes/generate', json={
        'department': 'Ministry of Health', 'category': 'vehicle', 'classLabel': 'car',
    }).get_json()

    assert data['gsaCode'] == 'GSA-MOH-02-001'
    assert data['exists'] is False
