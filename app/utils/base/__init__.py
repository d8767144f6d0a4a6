from app.utils.base.enums import BaseEnum, ActivityAction

__all__ = ["BaseEnum", "ActivityAction"]
