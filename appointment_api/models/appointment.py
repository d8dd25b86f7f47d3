from sqlalchemy import Column, String, ForeignKey, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import uuid

from ..core.database import Base

class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # Appointment details
    title = Column(String(255), nullable=False)
    date = Column(DateTime, nullable=False, index=True)

    # Ownership
    appointment_by = Column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    appointment_for = Column(String(255), nullable=False, index=True)

    # Timestamps
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    owner = relationship("User", back_populates="appointments")

    def __repr__(self):
        return f"<Appointment(id={self.id}, appointment_by={self.appointment_by}, date='{self.date}')>"
