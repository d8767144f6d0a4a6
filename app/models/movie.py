from mongoengine import BooleanField, IntField, ListField, ReferenceField, StringField, URLField

from app.models.base import BaseDocument
from app.models.user import User


class Movie(BaseDocument):
    """Catalog entry uploaded by a user.

    Fields:
    - title/description (str)
    - genre (list[str]), year (int)
    - video_url (str|None): hosted video location
    - user (Ref[User]): uploader
    - is_public (bool)
    """
    title = StringField(required=True, null=False, min_length=2)
    description = StringField(required=False, null=True)
    genre = ListField(StringField(), required=True, default=list)
    year = IntField(required=True, null=False, min_value=1900)
    video_url = URLField(required=False, null=True)
    user = ReferenceField(document_type=User, required=True, null=False)
    is_public = BooleanField(required=True, null=False, default=False)

    hidden_fields = ("metadata", "user")

    meta = {
        "collection": "movies",
        "indexes": [
            {"fields": ["-created_at"]},
            {"fields": ["is_public"]},
        ],
    }
