"""
Percolation layer.

Responsibilities:
- Compile search preference criteria into boolean filter queries.
- Register those queries with a matching engine, keyed by preference id.
- Test a book against every registered query and resolve the matches.
"""
