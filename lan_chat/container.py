from __future__ import annotations

from dependency_injector import containers, providers  # type: ignore[import-not-found]

from lan_chat.constants import PREFERENCES_FILE
from lan_chat.controller import ChatController
from lan_chat.models import SyncSettings
from lan_chat.remote import HttpRemoteClient
from lan_chat.repositories import PreferenceRepository
from lan_chat.services import (
    ChangeDetector,
    PollScheduler,
    StatusService,
    SyncEngine,
)
from lan_chat.view import PromptToolkitView


class SyncAppContainer(containers.DeclarativeContainer):
    settings = providers.Dependency(instance_of=SyncSettings)
    preferences_path = providers.Object(PREFERENCES_FILE)

    preference_repository = providers.Singleton(
        PreferenceRepository, path=preferences_path
    )
    remote_client = providers.Singleton(HttpRemoteClient, settings=settings)
    view = providers.Singleton(PromptToolkitView, preferences=preference_repository)

    status_service = providers.Singleton(
        StatusService, presenter=view, settings=settings
    )
    change_detector = providers.Singleton(
        ChangeDetector, presenter=view, status_service=status_service
    )
    poll_scheduler = providers.Singleton(
        PollScheduler,
        client=remote_client,
        detector=change_detector,
        status_service=status_service,
        settings=settings,
    )
    sync_engine = providers.Singleton(
        SyncEngine,
        client=remote_client,
        presenter=view,
        preferences=preference_repository,
        status_service=status_service,
        detector=change_detector,
        scheduler=poll_scheduler,
    )
    controller = providers.Singleton(ChatController, engine=sync_engine, view=view)
