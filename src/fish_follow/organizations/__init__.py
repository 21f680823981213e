"""
Organizations owning contacts.
"""
