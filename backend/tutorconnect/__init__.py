"""
TutorConnect booking workflow engine.

Turns booking requests into confirmed sessions, conversations, message
threads and per-user rollups.
"""

__version__ = "0.1.0"
