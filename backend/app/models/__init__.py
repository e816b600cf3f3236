"""
ORM models. Importing this package registers every table on Base.metadata
(used by Database.create_all and by Alembic autogenerate).
"""

from app.models.presentation import Slide
from app.models.psalm import Psalm
from app.models.song import Song

__all__ = ["Slide", "Psalm", "Song"]
