"""
doctorslots - recurring schedule expansion and availability for doctor bookings.
"""

__version__ = "0.1.0"
