from mongoengine import ReferenceField

from app.models.base import BaseDocument
from app.models.movie import Movie
from app.models.user import User


class Favorite(BaseDocument):
    """A user's bookmark of a movie. One per (user, movie)."""
    user = ReferenceField(document_type=User, required=True, null=False)
    movie = ReferenceField(document_type=Movie, required=True, null=False)

    meta = {
        "collection": "favorites",
        "indexes": [
            {"fields": ["user", "movie"], "unique": True},
            {"fields": ["user", "-created_at"]},
        ],
    }
