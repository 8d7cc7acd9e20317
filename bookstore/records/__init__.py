"""
Record store for books and search preferences.

Records are created once, read by id, and listed; identifiers are generated
on save.
"""
