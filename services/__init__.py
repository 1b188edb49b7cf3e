"""
services/ - Query Operations
============================
Public operations of the data-access layer, built on the repositories.
"""
