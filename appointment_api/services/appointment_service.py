from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from ..core.exceptions import AppError
from ..models.appointment import Appointment
from ..repositories.appointment_repository import AppointmentRepository
from ..schemas.appointment import AppointmentListParams
from ..utils.dates import is_future_date, to_naive_utc

logger = logging.getLogger(__name__)

class AppointmentService:
    """Business rules for appointments.

    Every read, update and delete is restricted to the appointment's owner
    (``appointment_by``). Appointments owned by someone else are reported
    exactly like missing ones.
    """

    def __init__(self, db: Session, repository: Optional[AppointmentRepository] = None):
        self.db = db
        self.repository = repository or AppointmentRepository(db)

    def create_appointment(self, payload: dict) -> Appointment:
        """Create an appointment; ``payload["appointment_by"]`` is the caller's id."""
        data = dict(payload)
        data["date"] = to_naive_utc(data["date"])

        appointment = self.repository.create_appointment(data)
        if not appointment:
            raise AppError.internal("Appointment could not be created")

        logger.info(f"Appointment {appointment.id} created by user {appointment.appointment_by}")
        return appointment

    def get_user_created_appointments(self, params: AppointmentListParams) -> List[Appointment]:
        """Page of appointments owned by ``params.user_id``."""
        appointments = self.repository.get_appointments_by_user_id(
            params.user_id,
            params.limit,
            params.page,
            params.sort_by,
            params.sort_dir,
        )
        if appointments is None:
            raise AppError.not_found(
                f"Appointments created by user {params.user_id} could not be found"
            )
        return appointments

    def get_appointments_for_user(self, params: AppointmentListParams) -> List[Appointment]:
        """Page of appointments booked for ``params.user_id``."""
        appointments = self.repository.get_appointments_for_user_id(
            params.user_id,
            params.limit,
            params.page,
            params.sort_by,
            params.sort_dir,
        )
        if appointments is None:
            raise AppError.not_found(
                f"Appointments for user {params.user_id} could not be found"
            )
        return appointments

    def get_appointment(self, appointment_id: str, user_id: str) -> Appointment:
        appointment = self.repository.get_appointment_by_id(appointment_id)

        if not appointment or appointment.appointment_by != user_id:
            raise AppError.not_found(_not_found_message(appointment_id))

        return appointment

    def update_appointment(self, appointment_id: str, payload: dict) -> Appointment:
        """Update an appointment owned by ``payload["appointment_by"]``.

        The new date must be strictly in the future.
        """
        existing = self.repository.get_appointment_by_id(appointment_id)
        if not existing:
            raise AppError.not_found(_not_found_message(appointment_id))

        if not is_future_date(payload.get("date")):
            raise AppError.validation("Appointment date must be in the future")

        data = dict(payload)
        data["date"] = to_naive_utc(data["date"])

        count = self.repository.update_appointment_by_id(appointment_id, data)
        if not count:
            # Scoped by owner: zero rows also covers someone else's appointment
            raise AppError.not_found(_not_found_message(appointment_id))

        logger.info(f"Appointment {appointment_id} updated by user {data.get('appointment_by')}")
        return self.repository.get_appointment_by_id(appointment_id)

    def delete_appointment(self, appointment_id: str, user_id: str) -> str:
        existing = self.repository.get_appointment_by_id(appointment_id)
        if not existing:
            raise AppError.bad_request(
                f"There is no appointments available with Id {appointment_id}. "
                "Please check the appointment Id."
            )

        count = self.repository.delete_appointment_by_id(appointment_id, user_id)
        if count != 1:
            raise AppError.bad_request(
                f"Error while deleting the appointment for ID {appointment_id}"
            )

        logger.info(f"Appointment {appointment_id} deleted by user {user_id}")
        return f"Appointment with Id {appointment_id} deleted successfully"

def _not_found_message(appointment_id: str) -> str:
    return f"Appointment with Id {appointment_id} not found"
