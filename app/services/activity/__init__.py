from __future__ import annotations

import logging

from bson.objectid import ObjectId

from app.models.user_activity import UserActivity
from app.utils.base import ActivityAction


logger = logging.getLogger(__name__)


def record_activity(
    user_id: str,
    action: ActivityAction,
    ip_address: str | None = None,
    user_agent: str | None = None,
) -> UserActivity:
    activity = UserActivity(
        user=ObjectId(user_id),
        action=action.value,
        ip_address=ip_address,
        user_agent=user_agent,
    )
    activity.save()
    return activity


def list_activity(user_id: str, limit: int = 20) -> list[dict]:
    """Most recent account actions first."""
    activities = UserActivity.objects(user=user_id).order_by("-created_at").limit(limit)
    return [a.to_output(exclude=["user", "metadata"]) for a in activities]


def delete_for_user(user_id: str) -> int:
    deleted = UserActivity.objects(user=user_id).delete()
    logger.info("Removed %s activity entries of user %s", deleted, user_id)
    return deleted
