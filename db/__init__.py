"""
db/ - Database Layer
====================
Handles the PostgreSQL connection pool, typed data-access errors and SQL
statement building.
This layer is the lowest in the architecture and has no dependencies on other layers.
"""
