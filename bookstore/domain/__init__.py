"""
Bookstore domain models.

Responsibilities:
- Describe books and the search preferences users register for them.
- Validate request payloads at the HTTP boundary.
"""
