"""
Scorekeeper Backend — ORM Models
==================================

Importing this package registers every table with ``Base.metadata``
(used by Alembic autogenerate and by ``create_all`` in tests).
"""

from scorekeeper.models.user import User
from scorekeeper.models.room import Room
from scorekeeper.models.player import Player

__all__ = ["User", "Room", "Player"]
