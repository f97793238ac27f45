"""Kazi — job-marketplace backend.

Employees and employers sign up with a phone number, employers post jobs,
employees apply to them. Auth is bearer-JWT; storage is async SQLAlchemy.
"""

__version__ = "0.1.0"
