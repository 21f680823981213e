"""
Staff accounts and their per-organization roles.
"""
