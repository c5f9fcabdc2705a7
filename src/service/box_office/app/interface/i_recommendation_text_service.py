from abc import ABC, abstractmethod


class IRecommendationTextService(ABC):
    @abstractmethod
    async def generate(self, *, user_preferences: str, available_events: str) -> str:
        """Free-text list of recommended events"""
        pass
