"""
Incident Teams Call.
Creates a Teams meeting for an incident and emails the join link to responders.
"""

__version__ = "1.0.0"
