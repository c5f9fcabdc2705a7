from datetime import date, datetime, time, timedelta, timezone
from pathlib import Path
from typing import Any

import orjson

from src.platform.constant.path import SEED_DATA_DIR
from src.platform.logging.loguru_io import Logger
from src.service.box_office.app.interface.i_event_store import IEventStore
from src.service.box_office.app.interface.i_member_store import IMemberStore
from src.service.box_office.domain.entity.event_entity import Event, TicketType
from src.service.box_office.domain.entity.member_entity import Member
from src.service.box_office.domain.entity.seating_chart_entity import SeatingChart
from src.service.box_office.domain.enum.event_category import EventCategory
from src.service.box_office.domain.seat_resolver_domain import resolve_rows


SAMPLE_DATA_FILE = SEED_DATA_DIR / 'sample_data.json'


def load_sample_data(path: Path = SAMPLE_DATA_FILE) -> dict[str, Any]:
    return orjson.loads(path.read_bytes())


def _event_date(days_from_now: int, showtimes: list[str]) -> datetime:
    day = datetime.now(timezone.utc).date() + timedelta(days=days_from_now)
    start = time.fromisoformat(showtimes[0]) if showtimes else time(19, 0)
    return datetime.combine(day, start, tzinfo=timezone.utc)


@Logger.io
async def seed_sample_data(
    *, event_store: IEventStore, member_store: IMemberStore, path: Path = SAMPLE_DATA_FILE
) -> int:
    """
    Load the sample venue, events and members into empty stores.

    Returns:
        Number of events created (0 when the event store already has data)
    """
    if await event_store.list_events():
        Logger.base.info('🌱 [SEED] Event store not empty, skipping sample data')
        return 0

    data = load_sample_data(path)
    chart = SeatingChart.from_dict(data['seating_chart'])
    resolve_rows(chart)

    for raw in data['events']:
        event = Event.create(
            name=raw['name'],
            description=raw['description'],
            category=EventCategory(raw['category']),
            date=_event_date(raw['days_from_now'], raw['showtimes']),
            location=raw['location'],
            venue=raw['venue'],
            image=raw['image'],
            showtimes=raw['showtimes'],
            ticket_types=[
                TicketType(name=t['type'], price=t['price']) for t in raw['ticket_types']
            ],
            seating_chart=chart,
            reserved_seats=raw['reserved_seats'],
        )
        await event_store.create_event(event=event)

    for raw in data['members']:
        await member_store.create_member(
            member=Member.create(
                **{
                    **raw,
                    'date_of_birth': date.fromisoformat(raw['date_of_birth']),
                    'date_of_admission': date.fromisoformat(raw['date_of_admission']),
                }
            )
        )

    Logger.base.info(
        f'🌱 [SEED] Loaded {len(data["events"])} events and {len(data["members"])} members'
    )
    return len(data['events'])
