"""
Fish & Follow: contact management for campus outreach teams.
"""

__version__ = "0.1.0"
