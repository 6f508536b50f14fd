"""
Use Case: Submit Verification

Stores the identity document and records the submission on the caller's
profile. Approval is a separate, out-of-band step; every submission resets
``verified_profile`` to False.
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from app.domain_core.entities.user import VerificationDetails
from app.domain_core.exceptions import NotFoundError, PersistenceError, ValidationError
from app.domain_core.services.ownership import require_authenticated
from app.application.unit_of_work import UnitOfWork
from app.application.ports import DocumentStoragePort, StoredDocument
from app.infra.config.logging_config import get_logger, bind_context


@dataclass(frozen=True)
class DocumentUpload:
    filename: str
    content_type: str
    content: bytes


class SubmitVerificationUseCase:
    def __init__(self, uow: UnitOfWork, storage: DocumentStoragePort):
        self.uow = uow
        self.storage = storage
        self._log = get_logger("usecase.submit_verification")

    async def execute(
        self,
        caller_id: Optional[UUID],
        full_name: Optional[str],
        mobile_number: Optional[str],
        document: Optional[DocumentUpload],
        father_name: Optional[str] = None,
        full_address: Optional[str] = None,
    ) -> VerificationDetails:
        user_id = require_authenticated(caller_id)
        bind_context(user_id=str(user_id))
        self._log.info("usecase.start", action="submit_verification")

        if not (full_name or "").strip() or not (mobile_number or "").strip() or document is None:
            raise ValidationError("Missing mandatory fields or document.")

        async with self.uow:
            user = await self.uow.user_repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User", str(user_id))

        try:
            document_url = await self.storage.store(
                user_id, document.filename, document.content_type, document.content
            )
        except OSError as e:
            self._log.exception("usecase.submit_verification.storage_failed", error=str(e))
            raise PersistenceError("could not store verification document") from e

        details = VerificationDetails(
            full_name=full_name.strip(),
            mobile_number=mobile_number.strip(),
            document_url=document_url,
            father_name=(father_name or "").strip(),
            full_address=(full_address or "").strip(),
        )
        user.submit_verification(details)

        async with self.uow:
            try:
                saved = await self.uow.user_repo.save_verification(user)
            except SQLAlchemyError as e:
                self._log.exception("usecase.submit_verification.persist_failed", error=str(e))
                raise PersistenceError("could not save verification details") from e
            if not saved:
                raise NotFoundError("User", str(user_id))
            await self.uow.commit()

        self._log.info("usecase.submit_verification.done", document_url=document_url)
        return details


class GetVerificationDocumentUseCase:
    """Return the caller's own verification document.

    Only the document named by the caller's current submission is served;
    any other name is reported as not found.
    """

    def __init__(self, uow: UnitOfWork, storage: DocumentStoragePort):
        self.uow = uow
        self.storage = storage
        self._log = get_logger("usecase.get_verification_document")

    async def execute(self, caller_id: Optional[UUID], name: str) -> StoredDocument:
        user_id = require_authenticated(caller_id)

        async with self.uow:
            user = await self.uow.user_repo.get_by_id(user_id)

        details = user.verification_details if user else None
        if details is None or details.document_url.rsplit("/", 1)[-1] != name:
            self._log.warning("usecase.get_verification_document.denied", name=name)
            raise NotFoundError("Document", name)

        document = await self.storage.load(name)
        if document is None:
            raise NotFoundError("Document", name)
        return document
