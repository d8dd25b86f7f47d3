from .appointment_repository import AppointmentRepository
from .user_repository import UserRepository

__all__ = ["AppointmentRepository", "UserRepository"]
