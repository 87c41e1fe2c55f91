"""
Complaint endpoints.

Every response is projected through the complaint policy so each role sees
only the fields it is entitled to.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from app.api.deps import get_complaint_service, get_current_actor, valid_complaint_id
from app.models.base.enums import ComplaintPriority, ComplaintStatus
from app.schemas.complaint import (
    ComplaintCreate,
    ComplaintEnvelope,
    ComplaintFilters,
    ComplaintListResponse,
    ComplaintMutationResponse,
    ComplaintStatusUpdate,
    ComplaintTransferRequest,
    PublicComplaintListResponse,
    TransferListResponse,
    TransferView,
)
from app.services.common.permissions import Actor
from app.services.complaint import ComplaintService

router = APIRouter(prefix="/complaints", tags=["Complaints"])


@router.post("", response_model=ComplaintMutationResponse, status_code=status.HTTP_201_CREATED)
def create_complaint(
    payload: ComplaintCreate,
    actor: Actor = Depends(get_current_actor),
    service: ComplaintService = Depends(get_complaint_service),
) -> ComplaintMutationResponse:
    """File a new complaint (students only)."""
    complaint = service.create(actor, payload)
    return ComplaintMutationResponse(
        message="Complaint created successfully",
        complaint=service.policy.project(actor, complaint),
    )


@router.get("", response_model=ComplaintListResponse)
def list_complaints(
    status_filter: Optional[ComplaintStatus] = Query(default=None, alias="status"),
    priority: Optional[ComplaintPriority] = None,
    actor: Actor = Depends(get_current_actor),
    service: ComplaintService = Depends(get_complaint_service),
) -> ComplaintListResponse:
    """Complaints visible to the caller, newest first."""
    complaints = service.list(actor, ComplaintFilters(status=status_filter, priority=priority))
    return ComplaintListResponse(
        complaints=[service.policy.project(actor, c) for c in complaints]
    )


@router.get("/public", response_model=PublicComplaintListResponse)
def list_public_complaints(
    service: ComplaintService = Depends(get_complaint_service),
) -> PublicComplaintListResponse:
    """Recently resolved complaints, without student identity. No login required."""
    return PublicComplaintListResponse(
        complaints=[service.policy.project_public(c) for c in service.list_public()]
    )


@router.get("/{complaint_id}", response_model=ComplaintEnvelope)
def get_complaint(
    complaint_id: int = Depends(valid_complaint_id),
    actor: Actor = Depends(get_current_actor),
    service: ComplaintService = Depends(get_complaint_service),
) -> ComplaintEnvelope:
    complaint = service.get(actor, complaint_id)
    return ComplaintEnvelope(complaint=service.policy.project(actor, complaint))


@router.put("/{complaint_id}", response_model=ComplaintMutationResponse)
def update_complaint_status(
    payload: ComplaintStatusUpdate,
    complaint_id: int = Depends(valid_complaint_id),
    actor: Actor = Depends(get_current_actor),
    service: ComplaintService = Depends(get_complaint_service),
) -> ComplaintMutationResponse:
    """Change a complaint's status (sub-admins and super-admins)."""
    complaint = service.update_status(actor, complaint_id, payload)
    return ComplaintMutationResponse(
        message="Complaint updated successfully",
        complaint=service.policy.project(actor, complaint),
    )


@router.put("/{complaint_id}/mark-seen", response_model=ComplaintMutationResponse)
def mark_complaint_seen(
    complaint_id: int = Depends(valid_complaint_id),
    actor: Actor = Depends(get_current_actor),
    service: ComplaintService = Depends(get_complaint_service),
) -> ComplaintMutationResponse:
    complaint = service.mark_seen(actor, complaint_id)
    return ComplaintMutationResponse(
        message="Complaint marked as seen",
        complaint=service.policy.project(actor, complaint),
    )


@router.post("/{complaint_id}/transfer", response_model=ComplaintMutationResponse)
def transfer_complaint(
    payload: ComplaintTransferRequest,
    complaint_id: int = Depends(valid_complaint_id),
    actor: Actor = Depends(get_current_actor),
    service: ComplaintService = Depends(get_complaint_service),
) -> ComplaintMutationResponse:
    """Move a complaint to another domain and record why."""
    complaint = service.transfer(actor, complaint_id, payload)
    return ComplaintMutationResponse(
        message="Complaint transferred successfully",
        complaint=service.policy.project(actor, complaint),
    )


@router.get("/{complaint_id}/transfers", response_model=TransferListResponse)
def list_complaint_transfers(
    complaint_id: int = Depends(valid_complaint_id),
    actor: Actor = Depends(get_current_actor),
    service: ComplaintService = Depends(get_complaint_service),
) -> TransferListResponse:
    transfers = service.transfer_history(actor, complaint_id)
    return TransferListResponse(transfers=[TransferView.model_validate(t) for t in transfers])
