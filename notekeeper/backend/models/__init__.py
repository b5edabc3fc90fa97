# SQLAlchemy models package. Import models here so metadata is complete.
from notekeeper.backend.models.base import Base
from notekeeper.backend.models.note import Note

__all__ = ["Base", "Note"]
