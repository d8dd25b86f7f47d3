from sqlalchemy.orm import Session
from typing import List, Optional

from ..models.appointment import Appointment
from ..schemas.appointment import AppointmentSortField, SortDirection

SORTABLE_COLUMNS = {
    AppointmentSortField.ID: Appointment.id,
    AppointmentSortField.TITLE: Appointment.title,
    AppointmentSortField.DATE: Appointment.date,
    AppointmentSortField.APPOINTMENT_BY: Appointment.appointment_by,
    AppointmentSortField.APPOINTMENT_FOR: Appointment.appointment_for,
}

UPDATABLE_FIELDS = ("title", "date", "appointment_for")

class AppointmentRepository:
    def __init__(self, db: Session):
        self.db = db

    def create_appointment(self, data: dict) -> Optional[Appointment]:
        appointment = Appointment(**data)

        self.db.add(appointment)
        self.db.commit()
        self.db.refresh(appointment)

        return appointment

    def get_appointment_by_id(self, appointment_id: str) -> Optional[Appointment]:
        return self.db.query(Appointment).filter(
            Appointment.id == appointment_id
        ).first()

    def get_appointments_by_user_id(
        self,
        user_id: str,
        limit: int,
        page: int,
        sort_by: AppointmentSortField,
        sort_dir: SortDirection,
    ) -> List[Appointment]:
        """Page of appointments created by ``user_id``."""
        query = self.db.query(Appointment).filter(Appointment.appointment_by == user_id)
        return self._paginate(query, limit, page, sort_by, sort_dir)

    def get_appointments_for_user_id(
        self,
        user_id: str,
        limit: int,
        page: int,
        sort_by: AppointmentSortField,
        sort_dir: SortDirection,
    ) -> List[Appointment]:
        """Page of appointments whose subject is ``user_id``."""
        query = self.db.query(Appointment).filter(Appointment.appointment_for == user_id)
        return self._paginate(query, limit, page, sort_by, sort_dir)

    def update_appointment_by_id(self, appointment_id: str, data: dict) -> int:
        """Update an appointment owned by ``data["appointment_by"]``.

        Returns the number of rows affected; 0 when the id does not exist or
        belongs to someone else.
        """
        values = {
            field: data[field]
            for field in UPDATABLE_FIELDS
            if data.get(field) is not None
        }
        if not values:
            return 0

        count = self.db.query(Appointment).filter(
            Appointment.id == appointment_id,
            Appointment.appointment_by == data.get("appointment_by"),
        ).update(values, synchronize_session=False)

        self.db.commit()
        return count

    def delete_appointment_by_id(self, appointment_id: str, user_id: str) -> int:
        """Delete an appointment owned by ``user_id``; returns rows affected."""
        count = self.db.query(Appointment).filter(
            Appointment.id == appointment_id,
            Appointment.appointment_by == user_id,
        ).delete(synchronize_session=False)

        self.db.commit()
        return count

    def _paginate(self, query, limit: int, page: int, sort_by: AppointmentSortField, sort_dir: SortDirection):
        column = SORTABLE_COLUMNS[AppointmentSortField(sort_by)]
        order = column.desc() if SortDirection(sort_dir) == SortDirection.DESC else column.asc()

        # Secondary key keeps pages stable when the sort column has ties
        return (
            query.order_by(order, Appointment.id.asc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
