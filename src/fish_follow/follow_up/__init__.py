"""
Follow-up pipeline stages.
"""
