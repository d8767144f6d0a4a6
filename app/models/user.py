from mongoengine import EmailField, IntField, StringField
from app.models.base import BaseDocument


class User(BaseDocument):
    """User document.

    Fields:
    - first_name/last_name (str): 2..50 chars
    - age (int): 13..120
    - email (str, unique): Login identifier, stored lowercased
    - password (str, hashed): Bcrypt-hashed password
    - security_question (str): Plaintext recovery prompt
    - security_answer (str, hashed): Bcrypt-hashed recovery answer
    - token_version (int): Incremented on logout/password change to invalidate tokens
    """
    first_name = StringField(required=True, null=False, min_length=2, max_length=50)
    last_name = StringField(required=True, null=False, min_length=2, max_length=50)
    age = IntField(required=True, null=False, min_value=13, max_value=120)
    email = EmailField(required=True, null=False, unique=True)
    password = StringField(required=True, null=False)
    security_question = StringField(required=True, null=False)
    security_answer = StringField(required=True, null=False)
    token_version = IntField(required=True, null=False, default=0, min_value=0)

    hidden_fields = ("password", "security_answer", "token_version", "metadata")

    meta = {
        "collection": "users",
        "indexes": [
            {"fields": ["email"], "unique": True},
        ],
    }
