"""
Appointment Scheduling API

A FastAPI-based backend for managing personal appointments and user accounts,
with JWT authentication and owner-scoped access to appointments.
"""

__version__ = "1.0.0"
