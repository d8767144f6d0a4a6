from enum import Enum


class BaseEnum(Enum):
    @classmethod
    def choices(cls):
        return [(item.value, item.name) for item in cls]


class ActivityAction(BaseEnum):
    REGISTERED = "Registered"
    LOGGED_IN = "Logged in"
    LOGGED_OUT = "Logged out"
    UPDATED_PROFILE = "Updated profile"
    CHANGED_PASSWORD = "Changed password"
    RESET_PASSWORD = "Reset password"
