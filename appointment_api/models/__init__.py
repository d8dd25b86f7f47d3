from .user import User
from .appointment import Appointment

__all__ = ["User", "Appointment"]
