"""
Generative text client for event recommendations.

Posts a prompt built from the user's stated preferences and the upcoming
events to RECOMMENDATION_API_URL and returns the free-text answer.
"""

from typing import Optional

import httpx
from pydantic import SecretStr

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import StorageUnavailable
from src.platform.logging.loguru_io import Logger
from src.service.box_office.app.interface.i_recommendation_text_service import (
    IRecommendationTextService,
)


RECOMMENDATION_PROMPT = """You are an assistant that recommends events to a user based on their past activity, their preferences and the events on offer.

User Preferences: {user_preferences}
Available Events: {available_events}

Recommend only events from the Available Events list that the user would be interested in.
Return the recommendations as a list, one event per line."""


class HttpRecommendationTextService(IRecommendationTextService):
    def __init__(
        self,
        *,
        api_url: str = settings.RECOMMENDATION_API_URL,
        api_key: SecretStr = settings.RECOMMENDATION_API_KEY,
        timeout_seconds: float = settings.RECOMMENDATION_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_url = api_url
        self.api_key = api_key
        self.timeout_seconds = timeout_seconds
        self.transport = transport

    @Logger.io(truncate_content=True)
    async def generate(self, *, user_preferences: str, available_events: str) -> str:
        if not self.api_url:
            raise StorageUnavailable('Recommendation service is not configured')

        prompt = RECOMMENDATION_PROMPT.format(
            user_preferences=user_preferences, available_events=available_events
        )
        headers = {}
        if key := self.api_key.get_secret_value():
            headers['Authorization'] = f'Bearer {key}'

        async with httpx.AsyncClient(
            timeout=self.timeout_seconds, transport=self.transport
        ) as client:
            try:
                response = await client.post(
                    self.api_url, json={'prompt': prompt}, headers=headers
                )
                response.raise_for_status()
            except httpx.HTTPError as e:
                raise StorageUnavailable(f'Recommendation service failed: {e}') from e

        return str(response.json().get('text', ''))
