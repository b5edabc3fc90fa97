"""
Notekeeper.

- backend/: Notes API, trash lifecycle, database, configuration
"""
