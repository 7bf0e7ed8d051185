"""
Консольная система бронирования рейсов и отелей.
"""

__version__ = "1.0.0"
