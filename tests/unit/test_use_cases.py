"""
Unit tests for use cases with mocked dependencies.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock
from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy.exc import IntegrityError, OperationalError

from app.application.use_cases.create_event import CreateEventUseCase
from app.application.use_cases.delete_event import DeleteEventUseCase
from app.application.use_cases.road_distance import RoadDistanceUseCase
from app.application.use_cases.update_event import UpdateEventUseCase
from app.application.use_cases.identity import SyncIdentityUseCase
from app.application.ports import StoredDocument
from app.application.use_cases.verification import (
    DocumentUpload,
    GetVerificationDocumentUseCase,
    SubmitVerificationUseCase,
)
from app.application.use_cases.created_events import RebuildCreatedEventsUseCase
from app.domain_core.entities.deleted_event import DEFAULT_DELETION_REASON
from app.domain_core.entities.event import Event
from app.domain_core.entities.user import IdentityProfile, User, VerificationDetails
from app.domain_core.exceptions import (
    BadRequestError,
    ConflictError,
    EventNotFoundError,
    ExternalServiceDegradedError,
    ForbiddenError,
    NotFoundError,
    PersistenceError,
    UnauthorizedError,
    ValidationError,
)
from app.domain_core.value_objects.coordinates import Coordinates, RoadDistance


@pytest.fixture
def mock_uow():
    """Unit of work whose repositories are AsyncMocks."""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=None)
    uow.commit = AsyncMock()
    uow.event_repo = AsyncMock()
    uow.deleted_event_repo = AsyncMock()
    uow.user_repo = AsyncMock()
    return uow


@pytest.fixture
def mock_geocoder():
    geocoder = AsyncMock()
    geocoder.geocode.return_value = Coordinates(12.97, 77.59)
    return geocoder


def stored_event(owner_id, **overrides) -> Event:
    fields = dict(
        id=uuid4(),
        owner_id=owner_id,
        title="Meetup",
        location="Bengaluru",
        date=datetime(2030, 5, 1, 18, tzinfo=timezone.utc),
        max_participants=50,
        location_lat=12.97,
        location_lon=77.59,
    )
    fields.update(overrides)
    return Event(**fields)


VALID_PAYLOAD = {
    "title": "Meetup",
    "location": "Bengaluru",
    "date": datetime(2030, 5, 1, 18, tzinfo=timezone.utc),
    "max_participants": 50,
}


class TestCreateEventUseCase:
    @pytest.mark.asyncio
    async def test_execute_success(self, mock_uow, mock_geocoder):
        owner_id = uuid4()
        use_case = CreateEventUseCase(uow=mock_uow, geocoder=mock_geocoder)

        event = await use_case.execute(owner_id, dict(VALID_PAYLOAD))

        assert event.owner_id == owner_id
        assert (event.location_lat, event.location_lon) == (12.97, 77.59)
        assert event.fee == 0.0
        assert event.current_participants == 0
        mock_geocoder.geocode.assert_awaited_once_with("Bengaluru")
        mock_uow.event_repo.create.assert_awaited_once_with(event)
        mock_uow.user_repo.append_created_event.assert_awaited_once_with(owner_id, event.id)

    @pytest.mark.asyncio
    async def test_payload_cannot_choose_owner_or_counters(self, mock_uow, mock_geocoder):
        owner_id = uuid4()
        use_case = CreateEventUseCase(uow=mock_uow, geocoder=mock_geocoder)

        event = await use_case.execute(
            owner_id,
            {**VALID_PAYLOAD, "owner_id": uuid4(), "current_participants": 40, "version": 7},
        )

        assert event.owner_id == owner_id
        assert event.current_participants == 0
        assert event.version == 1

    @pytest.mark.asyncio
    async def test_geocoder_miss_still_persists(self, mock_uow, mock_geocoder):
        mock_geocoder.geocode.return_value = Coordinates.unknown()
        use_case = CreateEventUseCase(uow=mock_uow, geocoder=mock_geocoder)

        event = await use_case.execute(uuid4(), dict(VALID_PAYLOAD))

        assert event.location_lat is None and event.location_lon is None
        mock_uow.event_repo.create.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_index_failure_is_swallowed(self, mock_uow, mock_geocoder):
        mock_uow.user_repo.append_created_event.side_effect = RuntimeError("db down")
        use_case = CreateEventUseCase(uow=mock_uow, geocoder=mock_geocoder)

        event = await use_case.execute(uuid4(), dict(VALID_PAYLOAD))

        assert event.id is not None
        mock_uow.event_repo.create.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_anonymous_caller_rejected(self, mock_uow, mock_geocoder):
        use_case = CreateEventUseCase(uow=mock_uow, geocoder=mock_geocoder)

        with pytest.raises(UnauthorizedError):
            await use_case.execute(None, dict(VALID_PAYLOAD))

        mock_geocoder.geocode.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_fields_rejected_before_geocoding(self, mock_uow, mock_geocoder):
        use_case = CreateEventUseCase(uow=mock_uow, geocoder=mock_geocoder)

        with pytest.raises(ValidationError):
            await use_case.execute(uuid4(), {"title": "Meetup"})

        mock_geocoder.geocode.assert_not_awaited()
        mock_uow.event_repo.create.assert_not_awaited()


class TestUpdateEventUseCase:
    @pytest.mark.asyncio
    async def test_non_owner_forbidden(self, mock_uow, mock_geocoder):
        event = stored_event(uuid4())
        mock_uow.event_repo.get_by_id.return_value = event
        use_case = UpdateEventUseCase(uow=mock_uow, geocoder=mock_geocoder)

        with pytest.raises(ForbiddenError):
            await use_case.execute(uuid4(), event.id, {"title": "Hijacked"})

        mock_uow.event_repo.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_event(self, mock_uow, mock_geocoder):
        mock_uow.event_repo.get_by_id.return_value = None
        use_case = UpdateEventUseCase(uow=mock_uow, geocoder=mock_geocoder)

        with pytest.raises(EventNotFoundError):
            await use_case.execute(uuid4(), uuid4(), {"title": "x"})

    @pytest.mark.asyncio
    async def test_location_change_overwrites_coordinates_with_nulls(
        self, mock_uow, mock_geocoder
    ):
        owner_id = uuid4()
        event = stored_event(owner_id)
        mock_uow.event_repo.get_by_id.return_value = event
        mock_uow.event_repo.update.return_value = True
        mock_geocoder.geocode.return_value = Coordinates.unknown()
        use_case = UpdateEventUseCase(uow=mock_uow, geocoder=mock_geocoder)

        updated = await use_case.execute(owner_id, event.id, {"location": "Atlantis"})

        assert updated.location == "Atlantis"
        assert updated.location_lat is None and updated.location_lon is None
        assert updated.version == 2
        mock_geocoder.geocode.assert_awaited_once_with("Atlantis")

    @pytest.mark.asyncio
    async def test_same_location_is_not_regeocoded(self, mock_uow, mock_geocoder):
        owner_id = uuid4()
        event = stored_event(owner_id)
        mock_uow.event_repo.get_by_id.return_value = event
        mock_uow.event_repo.update.return_value = True
        use_case = UpdateEventUseCase(uow=mock_uow, geocoder=mock_geocoder)

        await use_case.execute(owner_id, event.id, {"location": "Bengaluru", "fee": 5.0})

        mock_geocoder.geocode.assert_not_awaited()
        assert event.fee == 5.0

    @pytest.mark.asyncio
    async def test_owner_and_id_are_stripped(self, mock_uow, mock_geocoder):
        owner_id = uuid4()
        event = stored_event(owner_id)
        original_id = event.id
        mock_uow.event_repo.get_by_id.return_value = event
        mock_uow.event_repo.update.return_value = True
        use_case = UpdateEventUseCase(uow=mock_uow, geocoder=mock_geocoder)

        updated = await use_case.execute(
            owner_id, event.id, {"id": uuid4(), "owner_id": uuid4(), "title": "Renamed"}
        )

        assert updated.id == original_id
        assert updated.owner_id == owner_id
        assert updated.title == "Renamed"

    @pytest.mark.asyncio
    async def test_stale_version_conflicts(self, mock_uow, mock_geocoder):
        owner_id = uuid4()
        event = stored_event(owner_id, version=3)
        mock_uow.event_repo.get_by_id.return_value = event
        use_case = UpdateEventUseCase(uow=mock_uow, geocoder=mock_geocoder)

        with pytest.raises(ConflictError):
            await use_case.execute(owner_id, event.id, {"title": "x"}, expected_version=2)

        mock_uow.event_repo.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_lost_write_race_conflicts(self, mock_uow, mock_geocoder):
        owner_id = uuid4()
        event = stored_event(owner_id, version=3)
        mock_uow.event_repo.get_by_id.return_value = event
        mock_uow.event_repo.update.return_value = False
        use_case = UpdateEventUseCase(uow=mock_uow, geocoder=mock_geocoder)

        with pytest.raises(ConflictError):
            await use_case.execute(owner_id, event.id, {"title": "x"}, expected_version=3)

        mock_uow.event_repo.update.assert_awaited_once_with(event, expected_version=3)
        mock_uow.commit.assert_not_awaited()


class TestDeleteEventUseCase:
    @pytest.mark.asyncio
    async def test_archives_before_deleting(self, mock_uow):
        owner_id = uuid4()
        event = stored_event(owner_id)
        mock_uow.event_repo.get_owned.return_value = event
        mock_uow.event_repo.delete_owned.return_value = True

        # Record the relative order of archive and delete
        order = MagicMock()
        order.attach_mock(mock_uow.deleted_event_repo.archive, "archive")
        order.attach_mock(mock_uow.event_repo.delete_owned, "delete_owned")

        record = await DeleteEventUseCase(uow=mock_uow).execute(owner_id, event.id)

        assert [c[0] for c in order.mock_calls] == ["archive", "delete_owned"]
        assert record.original_event_id == event.id
        assert record.deleted_by_id == owner_id
        assert record.reason == DEFAULT_DELETION_REASON
        assert record.original_event["title"] == "Meetup"
        mock_uow.user_repo.remove_created_event.assert_awaited_once_with(owner_id, event.id)

    @pytest.mark.asyncio
    async def test_not_owned_is_not_found(self, mock_uow):
        mock_uow.event_repo.get_owned.return_value = None

        with pytest.raises(EventNotFoundError):
            await DeleteEventUseCase(uow=mock_uow).execute(uuid4(), uuid4())

        mock_uow.deleted_event_repo.archive.assert_not_awaited()
        mock_uow.event_repo.delete_owned.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_lost_delete_race_does_not_commit(self, mock_uow):
        owner_id = uuid4()
        mock_uow.event_repo.get_owned.return_value = stored_event(owner_id)
        mock_uow.event_repo.delete_owned.return_value = False

        with pytest.raises(EventNotFoundError):
            await DeleteEventUseCase(uow=mock_uow).execute(owner_id, uuid4())

        mock_uow.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_duplicate_archive_is_not_found(self, mock_uow):
        owner_id = uuid4()
        mock_uow.event_repo.get_owned.return_value = stored_event(owner_id)
        mock_uow.deleted_event_repo.archive.side_effect = IntegrityError(
            "INSERT", {}, Exception("UNIQUE constraint failed")
        )

        with pytest.raises(EventNotFoundError):
            await DeleteEventUseCase(uow=mock_uow).execute(owner_id, uuid4())

        mock_uow.event_repo.delete_owned.assert_not_awaited()
        mock_uow.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_custom_reason(self, mock_uow):
        owner_id = uuid4()
        mock_uow.event_repo.get_owned.return_value = stored_event(owner_id)
        mock_uow.event_repo.delete_owned.return_value = True

        record = await DeleteEventUseCase(uow=mock_uow).execute(
            owner_id, uuid4(), reason="Venue cancelled"
        )

        assert record.reason == "Venue cancelled"


class TestRoadDistanceUseCase:
    @pytest.fixture
    def distance_client(self):
        client = AsyncMock()
        client.is_configured = True
        client.road_distance.return_value = RoadDistance(12.3, "25 mins")
        return client

    @pytest.mark.asyncio
    async def test_success(self, mock_uow, distance_client):
        event = stored_event(uuid4())
        mock_uow.event_repo.get_by_id.return_value = event

        result = await RoadDistanceUseCase(mock_uow, distance_client).execute(
            event.id, "12.9", "77.5"
        )

        assert result == RoadDistance(12.3, "25 mins")
        distance_client.road_distance.assert_awaited_once_with(12.9, 77.5, 12.97, 77.59)

    @pytest.mark.asyncio
    async def test_missing_user_point(self, mock_uow, distance_client):
        with pytest.raises(BadRequestError):
            await RoadDistanceUseCase(mock_uow, distance_client).execute(uuid4(), None, "77.5")

    @pytest.mark.asyncio
    async def test_event_without_coordinates(self, mock_uow, distance_client):
        mock_uow.event_repo.get_by_id.return_value = stored_event(
            uuid4(), location_lat=None, location_lon=None
        )

        with pytest.raises(EventNotFoundError):
            await RoadDistanceUseCase(mock_uow, distance_client).execute(uuid4(), "1", "2")

        distance_client.road_distance.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unconfigured_provider(self, mock_uow, distance_client):
        distance_client.is_configured = False
        mock_uow.event_repo.get_by_id.return_value = stored_event(uuid4())

        with pytest.raises(ExternalServiceDegradedError):
            await RoadDistanceUseCase(mock_uow, distance_client).execute(uuid4(), "1", "2")

    @pytest.mark.asyncio
    async def test_provider_failure(self, mock_uow, distance_client):
        distance_client.road_distance.return_value = RoadDistance.unknown()
        mock_uow.event_repo.get_by_id.return_value = stored_event(uuid4())

        with pytest.raises(ExternalServiceDegradedError, match="Could not calculate"):
            await RoadDistanceUseCase(mock_uow, distance_client).execute(uuid4(), "1", "2")


class TestSyncIdentityUseCase:
    @pytest.mark.asyncio
    async def test_new_identity_creates_user(self, mock_uow):
        mock_uow.user_repo.get_by_external_id.return_value = None
        profile = IdentityProfile("g-1", "Asha", "asha@example.test", None)

        user = await SyncIdentityUseCase(mock_uow).execute(profile)

        assert user.external_id == "g-1"
        assert user.verified_profile is False
        assert user.created_events == []
        mock_uow.user_repo.create.assert_awaited_once_with(user)
        mock_uow.user_repo.update_profile.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_known_identity_is_overwritten(self, mock_uow):
        existing = User(id=uuid4(), external_id="g-1", display_name="Old", email="old@x.test")
        mock_uow.user_repo.get_by_external_id.return_value = existing

        user = await SyncIdentityUseCase(mock_uow).execute(
            IdentityProfile("g-1", "New", None, None)
        )

        assert user.id == existing.id
        assert user.display_name == "New"
        assert user.email is None
        mock_uow.user_repo.update_profile.assert_awaited_once_with(existing)

    @pytest.mark.asyncio
    async def test_store_failure_is_a_persistence_error(self, mock_uow):
        mock_uow.user_repo.get_by_external_id.side_effect = OperationalError(
            "SELECT", {}, Exception("database is locked")
        )

        with pytest.raises(PersistenceError):
            await SyncIdentityUseCase(mock_uow).execute(IdentityProfile("g-1", "Asha", None, None))

        mock_uow.commit.assert_not_awaited()


class TestSubmitVerificationUseCase:
    @pytest.fixture
    def storage(self):
        storage = AsyncMock()
        storage.store.return_value = "http://files.test/doc.pdf"
        return storage

    @pytest.mark.asyncio
    async def test_success(self, mock_uow, storage):
        user = User(id=uuid4(), external_id="g-1", verified_profile=True)
        mock_uow.user_repo.get_by_id.return_value = user
        mock_uow.user_repo.save_verification.return_value = True
        document = DocumentUpload("id.pdf", "application/pdf", b"%PDF")

        details = await SubmitVerificationUseCase(mock_uow, storage).execute(
            user.id, " Asha Rao ", "9999999999", document
        )

        assert details.full_name == "Asha Rao"
        assert details.document_url == "http://files.test/doc.pdf"
        assert user.verified_profile is False
        storage.store.assert_awaited_once_with(user.id, "id.pdf", "application/pdf", b"%PDF")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "full_name, mobile, with_document",
        [("", "999", True), ("Asha", "  ", True), ("Asha", "999", False)],
    )
    async def test_missing_mandatory_input(
        self, mock_uow, storage, full_name, mobile, with_document
    ):
        document = DocumentUpload("id.pdf", "application/pdf", b"%PDF") if with_document else None

        with pytest.raises(ValidationError, match="Missing mandatory fields or document."):
            await SubmitVerificationUseCase(mock_uow, storage).execute(
                uuid4(), full_name, mobile, document
            )

        storage.store.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_user_row_gone(self, mock_uow, storage):
        mock_uow.user_repo.get_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await SubmitVerificationUseCase(mock_uow, storage).execute(
                uuid4(), "Asha", "999", DocumentUpload("id.png", "image/png", b"png")
            )


class TestGetVerificationDocumentUseCase:
    NAME = "0123456789abcdef0123456789abcdef.pdf"

    def user_with_document(self, name):
        return User(
            id=uuid4(),
            external_id="g-1",
            verification_details=VerificationDetails(
                full_name="Asha Rao",
                mobile_number="9999999999",
                document_url=f"http://files.test/docs/{name}",
            ),
        )

    @pytest.mark.asyncio
    async def test_owner_gets_document(self, mock_uow):
        user = self.user_with_document(self.NAME)
        mock_uow.user_repo.get_by_id.return_value = user
        storage = AsyncMock()
        storage.load.return_value = StoredDocument(self.NAME, "application/pdf", b"%PDF")

        document = await GetVerificationDocumentUseCase(mock_uow, storage).execute(
            user.id, self.NAME
        )

        assert document.content == b"%PDF"
        storage.load.assert_awaited_once_with(self.NAME)

    @pytest.mark.asyncio
    async def test_other_names_are_hidden(self, mock_uow):
        user = self.user_with_document(self.NAME)
        mock_uow.user_repo.get_by_id.return_value = user
        storage = AsyncMock()

        with pytest.raises(NotFoundError):
            await GetVerificationDocumentUseCase(mock_uow, storage).execute(
                user.id, "fedcba9876543210fedcba9876543210.pdf"
            )

        storage.load.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_anonymous(self, mock_uow):
        with pytest.raises(UnauthorizedError):
            await GetVerificationDocumentUseCase(mock_uow, AsyncMock()).execute(None, self.NAME)


class TestRebuildCreatedEventsUseCase:
    @pytest.mark.asyncio
    async def test_replaces_index_with_owned_ids(self, mock_uow):
        user_id = uuid4()
        owned = [uuid4(), uuid4()]
        mock_uow.user_repo.get_by_id.return_value = User(id=user_id, external_id="g-1")
        mock_uow.user_repo.list_created_events.return_value = [uuid4()]
        mock_uow.event_repo.list_ids_by_owner.return_value = owned

        result = await RebuildCreatedEventsUseCase(mock_uow).execute(user_id)

        assert result == owned
        mock_uow.user_repo.replace_created_events.assert_awaited_once_with(user_id, owned)
        mock_uow.commit.assert_awaited_once()
