"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.event.in_memory_broadcaster import InMemoryEventBroadcasterImpl
from src.service.box_office.domain.member_verification_domain import MemberVerifier
from src.service.box_office.driven_adapter.auth.bcrypt_password_hasher import (
    BcryptPasswordHasher,
)
from src.service.box_office.driven_adapter.auth.in_memory_auth_provider import (
    InMemoryAuthProvider,
)
from src.service.box_office.driven_adapter.recommendation.http_recommendation_text_service import (
    HttpRecommendationTextService,
)
from src.service.box_office.driven_adapter.store.booking_store_impl import BookingStoreImpl
from src.service.box_office.driven_adapter.store.event_store_impl import EventStoreImpl
from src.service.box_office.driven_adapter.store.member_store_impl import MemberStoreImpl


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # In-process pub/sub for store snapshots (SSE + checkout sessions)
    event_broadcaster = providers.Singleton(InMemoryEventBroadcasterImpl)

    # Document stores
    event_store = providers.Singleton(EventStoreImpl, broadcaster=event_broadcaster)
    booking_store = providers.Singleton(BookingStoreImpl, broadcaster=event_broadcaster)
    member_store = providers.Singleton(MemberStoreImpl)

    # Auth
    password_hasher = providers.Singleton(BcryptPasswordHasher)
    auth_provider = providers.Singleton(InMemoryAuthProvider, password_hasher=password_hasher)

    # Domain services
    member_verifier = providers.Singleton(MemberVerifier)

    # Optional generative text service
    recommendation_text_service = providers.Singleton(HttpRecommendationTextService)


container = Container()


def setup() -> None:
    container.config_service()


def cleanup() -> None:
    container.reset_singletons()
