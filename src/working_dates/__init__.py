"""
Working dates service.

A Flask API that adds business days and business hours to a UTC instant,
following the Colombian work schedule and holiday calendar.
"""

__version__ = "1.0.0"
