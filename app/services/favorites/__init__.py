from __future__ import annotations

import logging

from bson.objectid import ObjectId
from mongoengine import NotUniqueError

from app.models.favorite import Favorite
from app.models.movie import Movie
from app.services.errors import AppError
from app.services.movies import MovieNotFoundError


logger = logging.getLogger(__name__)


class FavoriteExistsError(AppError):
    status_code = 409
    default_message = "Movie already in favorites"
    default_code = "FAVORITE_EXISTS"


class FavoriteNotFoundError(AppError):
    status_code = 404
    default_message = "Favorite not found"
    default_code = "FAVORITE_NOT_FOUND"


def add_favorite(user_id: str, movie_id: str) -> dict:
    movie: Movie | None = Movie.objects(id=movie_id).first() if ObjectId.is_valid(movie_id) else None
    if not movie:
        raise MovieNotFoundError()

    if Favorite.objects(user=user_id, movie=movie).first():
        raise FavoriteExistsError()
    favorite = Favorite(user=ObjectId(user_id), movie=movie)
    try:
        favorite.save(force_insert=True)
    except NotUniqueError:
        # Lost a race with a concurrent add of the same movie
        raise FavoriteExistsError()
    return favorite.to_output(exclude=["user", "metadata"])


def list_favorites(user_id: str) -> list[dict]:
    """The user's favorites newest first, each with its movie payload."""
    favorites = Favorite.objects(user=user_id).order_by("-created_at")
    return [f.to_output(exclude=["user", "metadata"]) for f in favorites]


def remove_favorite(user_id: str, favorite_id: str) -> None:
    """Delete one favorite; another user's favorite counts as not found."""
    if not ObjectId.is_valid(favorite_id):
        raise FavoriteNotFoundError()
    if not Favorite.objects(id=favorite_id, user=user_id).delete():
        raise FavoriteNotFoundError()


def delete_for_user(user_id: str) -> int:
    deleted = Favorite.objects(user=user_id).delete()
    logger.info("Removed %s favorites of user %s", deleted, user_id)
    return deleted
