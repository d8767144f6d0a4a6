from mongoengine import ReferenceField, StringField

from app.models.base import BaseDocument
from app.models.user import User
from app.utils.base import ActivityAction


class UserActivity(BaseDocument):
    """Audit trail entry for account-level actions.

    Fields:
    - user (Ref[User])
    - action (str): one of ActivityAction
    - ip_address/user_agent (str|None): request origin
    """
    user = ReferenceField(document_type=User, required=True, null=False)
    action = StringField(required=True, null=False, choices=ActivityAction.choices())
    ip_address = StringField(required=False, null=True)
    user_agent = StringField(required=False, null=True)

    meta = {
        "collection": "user_activities",
        "indexes": [
            {"fields": ["user", "-created_at"]},
        ],
    }
