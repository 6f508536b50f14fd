"""
API dependencies for dependency injection.

This module provides FastAPI dependency functions for the session principal,
the unit of work, the outbound providers and the use cases built on them.
"""

from typing import Annotated, Optional
from uuid import UUID

import httpx
from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.ports import (
    DocumentStoragePort,
    GeocoderPort,
    IdentityProviderPort,
    RoadDistancePort,
)
from app.application.unit_of_work import UnitOfWork
from app.application.use_cases import (
    CreateEventUseCase,
    DeleteEventUseCase,
    GetEventUseCase,
    GetUserUseCase,
    GetVerificationDocumentUseCase,
    ListCreatedEventsUseCase,
    ListEventsUseCase,
    RebuildCreatedEventsUseCase,
    RoadDistanceUseCase,
    SubmitVerificationUseCase,
    SyncIdentityUseCase,
    UpdateEventUseCase,
)
from app.data.queries.event_queries import EventQueries
from app.domain_core.exceptions import UnauthorizedError
from app.infra.auth.google_oauth import GoogleIdentityProvider
from app.infra.auth.jwt_auth import InvalidSessionToken, JWTAuth
from app.infra.config.database import get_db_session
from app.infra.config.logging_config import get_logger, bind_context
from app.infra.config.settings import Settings, get_settings
from app.infra.geo.distance_matrix import GoogleDistanceMatrixClient
from app.infra.storage.document_storage import LocalDocumentStorage

log = get_logger("auth")


# ---------- session principal ----------
def _extract_token(request: Request, authorization: Optional[str], settings: Settings) -> Optional[str]:
    if authorization:
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() == "bearer" and token:
            return token.strip()
    return request.cookies.get(settings.session_cookie_name)


async def get_optional_user_id(
    request: Request,
    authorization: Annotated[Optional[str], Header()] = None,
    settings: Settings = Depends(get_settings),
) -> Optional[UUID]:
    """Resolve the caller from the session token, or None when anonymous."""
    token = _extract_token(request, authorization, settings)
    if not token:
        return None

    try:
        user_id = JWTAuth(settings).extract_user_id_from_token(token)
    except InvalidSessionToken as e:
        log.info("auth.invalid_token", reason=str(e))
        return None

    bind_context(user_id=str(user_id))
    return user_id


async def get_current_user_id(
    user_id: Optional[UUID] = Depends(get_optional_user_id),
) -> UUID:
    """Like ``get_optional_user_id`` but anonymous callers get a 401."""
    if user_id is None:
        raise UnauthorizedError()
    return user_id


OptionalUserId = Annotated[Optional[UUID], Depends(get_optional_user_id)]
CurrentUserId = Annotated[UUID, Depends(get_current_user_id)]


# ---------- persistence ----------
async def get_unit_of_work(
    session: AsyncSession = Depends(get_db_session),
) -> UnitOfWork:
    """Unit of work over the request's database session."""
    return UnitOfWork.from_session(session)


async def get_event_queries(
    session: AsyncSession = Depends(get_db_session),
) -> EventQueries:
    return EventQueries(session)


# ---------- providers ----------
def get_http_client(request: Request) -> httpx.AsyncClient:
    """Shared outbound client opened in the application lifespan."""
    return request.app.state.http_client


def get_geocoder(request: Request) -> GeocoderPort:
    """Application-wide geocoder; its lookup cache outlives a single request."""
    return request.app.state.geocoder


def get_road_distance_client(
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> RoadDistancePort:
    return GoogleDistanceMatrixClient.from_settings(settings, client)


def get_document_storage(
    settings: Settings = Depends(get_settings),
) -> DocumentStoragePort:
    return LocalDocumentStorage.from_settings(settings)


def get_identity_provider(
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> IdentityProviderPort:
    return GoogleIdentityProvider(client, settings)


# ---------- use cases ----------
async def get_create_event_use_case(
    uow: UnitOfWork = Depends(get_unit_of_work),
    geocoder: GeocoderPort = Depends(get_geocoder),
) -> CreateEventUseCase:
    return CreateEventUseCase(uow=uow, geocoder=geocoder)


async def get_update_event_use_case(
    uow: UnitOfWork = Depends(get_unit_of_work),
    geocoder: GeocoderPort = Depends(get_geocoder),
) -> UpdateEventUseCase:
    return UpdateEventUseCase(uow=uow, geocoder=geocoder)


async def get_delete_event_use_case(
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> DeleteEventUseCase:
    return DeleteEventUseCase(uow=uow)


async def get_get_event_use_case(
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> GetEventUseCase:
    return GetEventUseCase(uow=uow)


async def get_list_events_use_case(
    queries: EventQueries = Depends(get_event_queries),
) -> ListEventsUseCase:
    return ListEventsUseCase(queries=queries)


async def get_road_distance_use_case(
    uow: UnitOfWork = Depends(get_unit_of_work),
    distance_client: RoadDistancePort = Depends(get_road_distance_client),
) -> RoadDistanceUseCase:
    return RoadDistanceUseCase(uow=uow, distance_client=distance_client)


async def get_sync_identity_use_case(
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> SyncIdentityUseCase:
    return SyncIdentityUseCase(uow=uow)


async def get_user_use_case(
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> GetUserUseCase:
    return GetUserUseCase(uow=uow)


async def get_submit_verification_use_case(
    uow: UnitOfWork = Depends(get_unit_of_work),
    storage: DocumentStoragePort = Depends(get_document_storage),
) -> SubmitVerificationUseCase:
    return SubmitVerificationUseCase(uow=uow, storage=storage)


async def get_list_created_events_use_case(
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> ListCreatedEventsUseCase:
    return ListCreatedEventsUseCase(uow=uow)


async def get_rebuild_created_events_use_case(
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> RebuildCreatedEventsUseCase:
    return RebuildCreatedEventsUseCase(uow=uow)


async def get_verification_document_use_case(
    uow: UnitOfWork = Depends(get_unit_of_work),
    storage: DocumentStoragePort = Depends(get_document_storage),
) -> GetVerificationDocumentUseCase:
    return GetVerificationDocumentUseCase(uow=uow, storage=storage)
