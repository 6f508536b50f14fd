"""
Profile endpoints for the logged-in user.
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Path, Response, UploadFile

from app.api.dependencies import (
    CurrentUserId,
    get_list_created_events_use_case,
    get_rebuild_created_events_use_case,
    get_submit_verification_use_case,
    get_verification_document_use_case,
)
from app.api.schemas.user_io import (
    CreatedEventsResponse,
    VerificationResponse,
    VerificationSubmissionResponse,
)
from app.application.use_cases import (
    DocumentUpload,
    GetVerificationDocumentUseCase,
    ListCreatedEventsUseCase,
    RebuildCreatedEventsUseCase,
    SubmitVerificationUseCase,
)

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/verify", response_model=VerificationResponse)
async def submit_verification(
    caller_id: CurrentUserId,
    full_name: Optional[str] = Form(None, alias="fullName"),
    father_name: Optional[str] = Form(None, alias="fatherName"),
    mobile_number: Optional[str] = Form(None, alias="mobileNumber"),
    full_address: Optional[str] = Form(None, alias="fullAddress"),
    document: Optional[UploadFile] = File(None),
    use_case: SubmitVerificationUseCase = Depends(get_submit_verification_use_case),
) -> VerificationResponse:
    """
    Submit identity details with a supporting document (image or PDF).

    The profile goes back to unverified until the submission is reviewed.
    """
    upload = None
    if document is not None and document.filename:
        upload = DocumentUpload(
            filename=document.filename,
            content_type=document.content_type or "",
            content=await document.read(),
        )

    details = await use_case.execute(
        caller_id,
        full_name=full_name,
        mobile_number=mobile_number,
        document=upload,
        father_name=father_name,
        full_address=full_address,
    )
    return VerificationResponse(
        message="Verification details and document submitted successfully. Review pending.",
        submission=VerificationSubmissionResponse.from_entity(details),
    )


@router.get("/me/verification-document/{name}")
async def get_verification_document(
    caller_id: CurrentUserId,
    name: str = Path(..., max_length=64),
    use_case: GetVerificationDocumentUseCase = Depends(get_verification_document_use_case),
) -> Response:
    """Download the caller's own submitted document."""
    document = await use_case.execute(caller_id, name)
    return Response(
        content=document.content,
        media_type=document.content_type,
        headers={
            "Content-Disposition": f'attachment; filename="{document.name}"',
            "X-Content-Type-Options": "nosniff",
            "Cache-Control": "private, no-store",
        },
    )


@router.get("/me/events", response_model=CreatedEventsResponse)
async def list_my_events(
    caller_id: CurrentUserId,
    use_case: ListCreatedEventsUseCase = Depends(get_list_created_events_use_case),
) -> CreatedEventsResponse:
    event_ids = await use_case.execute(caller_id)
    return CreatedEventsResponse(event_ids=event_ids)


@router.post("/me/created-events/rebuild", response_model=CreatedEventsResponse)
async def rebuild_my_events(
    caller_id: CurrentUserId,
    use_case: RebuildCreatedEventsUseCase = Depends(get_rebuild_created_events_use_case),
) -> CreatedEventsResponse:
    """Re-derive the created-events index from event ownership."""
    event_ids = await use_case.execute(caller_id)
    return CreatedEventsResponse(event_ids=event_ids)
