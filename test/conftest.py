"""
Test Configuration and Fixtures

- Environment is set before any application module reads settings
- Unit tests (test/**/unit/) build domain objects and mocked collaborators
- API tests (test/**/api/) drive the FastAPI app through TestClient
"""

# =============================================================================
# Environment setup MUST happen before any other imports: settings and the
# loguru sinks are configured at import time
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    os.environ['ADMIN_EMAILS'] = '["admin@example.com"]'
    os.environ['SEED_SAMPLE_DATA'] = 'false'
    os.environ['RECOMMENDATION_API_URL'] = ''


_early_setup_test_environment()

import pytest  # noqa: E402

from src.service.box_office.domain.entity.event_entity import Event  # noqa: E402
from src.service.box_office.domain.entity.member_entity import Member  # noqa: E402
from src.service.box_office.domain.entity.seating_chart_entity import SeatingChart  # noqa: E402
from test.constants import GOLD_A_CHART, STALLS_CHART  # noqa: E402
from test.factories import build_event  # noqa: E402


@pytest.fixture
def gold_chart() -> SeatingChart:
    return SeatingChart.from_dict(GOLD_A_CHART)


@pytest.fixture
def stalls_chart() -> SeatingChart:
    return SeatingChart.from_dict(STALLS_CHART)


@pytest.fixture
def gold_event(gold_chart: SeatingChart) -> Event:
    return build_event(gold_chart)


@pytest.fixture
def member_asha() -> Member:
    return Member.create(
        member_id=1001,
        name='Asha Rao',
        email='asha@example.com',
        coupon_code='RIC-ASHA-1001',
    )


@pytest.fixture
def member_rohan() -> Member:
    return Member.create(
        member_id=1002,
        name='Rohan Mehta',
        email='rohan@example.com',
        coupon_code='RIC-ROHAN-1002',
    )
