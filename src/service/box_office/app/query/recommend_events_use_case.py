"""
Recommend Events Use Case

Free-text recommendations from the generative text service. This feature never
fails a request: any error yields an empty list and a warning.
"""

from datetime import datetime, timezone
from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.box_office_metrics import metrics
from src.service.box_office.app.interface.i_booking_store import IBookingStore
from src.service.box_office.app.interface.i_event_store import IEventStore
from src.service.box_office.app.interface.i_recommendation_text_service import (
    IRecommendationTextService,
)
from src.service.box_office.domain.entity.event_entity import Event


def describe_events(events: List[Event]) -> str:
    return '\n'.join(
        f'{event.name} ({event.category}) at {event.venue} on {event.date:%Y-%m-%d}'
        for event in events
    )


def parse_recommendations(text: str) -> List[str]:
    lines = (line.strip() for line in text.splitlines())
    return [line.removeprefix('- ').strip() for line in lines if line and line != '-']


class RecommendEventsUseCase:
    def __init__(
        self,
        *,
        event_store: IEventStore,
        booking_store: IBookingStore,
        text_service: IRecommendationTextService,
    ) -> None:
        self.event_store = event_store
        self.booking_store = booking_store
        self.text_service = text_service

    @classmethod
    @inject
    def depends(
        cls,
        event_store: IEventStore = Depends(Provide[Container.event_store]),
        booking_store: IBookingStore = Depends(Provide[Container.booking_store]),
        text_service: IRecommendationTextService = Depends(
            Provide[Container.recommendation_text_service]
        ),
    ) -> Self:
        return cls(event_store=event_store, booking_store=booking_store, text_service=text_service)

    @Logger.io
    async def recommend(self, *, user_id: str, preferences: str) -> List[str]:
        now = datetime.now(timezone.utc)
        try:
            events = await self.event_store.list_events()
            upcoming = [event for event in events if event.date >= now]
            if not upcoming:
                return []
            history = await self.booking_store.list_bookings_for_user(user_id=user_id)
            if past := sorted({booking.event_name for booking in history}):
                preferences = f'{preferences}\nPreviously booked: {", ".join(past)}'

            text = await self.text_service.generate(
                user_preferences=preferences, available_events=describe_events(upcoming)
            )
        except Exception as e:
            metrics.recommendation_failures.inc()
            Logger.base.warning(f'⚠️ [RECOMMEND] No recommendations: {type(e).__name__}: {e}')
            return []

        return parse_recommendations(text)
