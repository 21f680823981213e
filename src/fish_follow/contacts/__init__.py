"""
Contacts: CRUD, search, statistics and bulk import.
"""
