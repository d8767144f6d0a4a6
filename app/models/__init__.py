from app.models.user import User
from app.models.user_activity import UserActivity
from app.models.movie import Movie
from app.models.favorite import Favorite

__all__ = ["User", "UserActivity", "Movie", "Favorite"]
