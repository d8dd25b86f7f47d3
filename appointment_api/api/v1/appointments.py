from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List

from ...core.database import get_db
from ...api.deps import get_current_user
from ...services.appointment_service import AppointmentService
from ...schemas.appointment import (
    AppointmentCreate, AppointmentUpdate, AppointmentResponse, AppointmentListParams,
    AppointmentSortField, SortDirection, MessageResponse, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
)
from ...models.user import User

router = APIRouter(prefix="/appointments", tags=["Appointments"])

def list_params(
    current_user: User = Depends(get_current_user),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    page: int = Query(1, ge=1),
    sort_by: AppointmentSortField = Query(AppointmentSortField.DATE, alias="sortBy"),
    sort_dir: SortDirection = Query(SortDirection.ASC, alias="sortDir"),
) -> AppointmentListParams:
    """Paging and sorting query parameters for the current user."""
    return AppointmentListParams(
        user_id=current_user.id,
        limit=limit,
        page=page,
        sort_by=sort_by,
        sort_dir=sort_dir,
    )

@router.post("", response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
async def create_appointment(
    appointment_data: AppointmentCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create an appointment owned by the current user."""
    appointment_service = AppointmentService(db)
    return appointment_service.create_appointment({
        **appointment_data.model_dump(),
        "appointment_by": current_user.id,
    })

@router.get("", response_model=List[AppointmentResponse])
async def get_user_created_appointments(
    params: AppointmentListParams = Depends(list_params),
    db: Session = Depends(get_db)
):
    """List appointments created by the current user."""
    appointment_service = AppointmentService(db)
    return appointment_service.get_user_created_appointments(params)

@router.get("/for-me", response_model=List[AppointmentResponse])
async def get_appointments_for_me(
    params: AppointmentListParams = Depends(list_params),
    db: Session = Depends(get_db)
):
    """List appointments booked for the current user."""
    appointment_service = AppointmentService(db)
    return appointment_service.get_appointments_for_user(params)

@router.get("/{appointment_id}", response_model=AppointmentResponse)
async def get_appointment(
    appointment_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    appointment_service = AppointmentService(db)
    return appointment_service.get_appointment(appointment_id, current_user.id)

@router.put("/{appointment_id}", response_model=AppointmentResponse)
async def update_appointment(
    appointment_id: str,
    appointment_data: AppointmentUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update an appointment owned by the current user."""
    appointment_service = AppointmentService(db)
    return appointment_service.update_appointment(appointment_id, {
        **appointment_data.model_dump(),
        "appointment_by": current_user.id,
    })

@router.delete("/{appointment_id}", response_model=MessageResponse)
async def delete_appointment(
    appointment_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    appointment_service = AppointmentService(db)
    message = appointment_service.delete_appointment(appointment_id, current_user.id)

    return {"message": message}
