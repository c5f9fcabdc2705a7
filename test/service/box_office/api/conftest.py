from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from src.main import app
from test.constants import ADMIN_EMAIL, GOLD_A_CHART, USER_EMAIL
from test.service.box_office.api.auth_helper import sign_up_and_login


@pytest.fixture
def client() -> Iterator[TestClient]:
    # Lifespan shutdown resets every in-memory store
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_headers(client: TestClient) -> dict[str, str]:
    return sign_up_and_login(client, email=ADMIN_EMAIL, display_name='Box Office')


@pytest.fixture
def user_headers(client: TestClient) -> dict[str, str]:
    return sign_up_and_login(client, email=USER_EMAIL, display_name='Asha')


@pytest.fixture
def event_id(client: TestClient, admin_headers: dict[str, str]) -> str:
    response = client.post(
        '/api/event',
        json={
            'name': 'Monsoon Ragas',
            'description': 'An evening of classical music',
            'category': 'Music',
            'date': '2030-01-15T19:00:00Z',
            'location': 'Pune',
            'venue': 'Main Auditorium',
            'ticket_types': [{'type': 'Gold', 'price': 500}],
            'seating_chart': GOLD_A_CHART,
            'reserved_seats': ['A-5'],
        },
        headers=admin_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()['id']


@pytest.fixture
def member_code(client: TestClient, admin_headers: dict[str, str]) -> str:
    response = client.post(
        '/api/member',
        json={
            'member_id': 1001,
            'name': 'Asha Rao',
            'email': 'asha.rao@example.com',
            'coupon_code': 'RIC-ASHA-1001',
        },
        headers=admin_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()['coupon_code']
