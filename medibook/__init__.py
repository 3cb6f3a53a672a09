"""
MediBook

A FastAPI service for finding doctors by specialty and distance and booking
appointments with them, with email confirmations and one-hour reminders.
"""

__version__ = "1.0.0"
