from __future__ import annotations

import logging

from bson.objectid import ObjectId

from app.models.favorite import Favorite
from app.models.movie import Movie
from app.services.errors import AppError


logger = logging.getLogger(__name__)

MOVIE_FIELDS = ("title", "description", "genre", "year", "video_url", "is_public")


class MovieNotFoundError(AppError):
    status_code = 404
    default_message = "Movie not found"
    default_code = "MOVIE_NOT_FOUND"


class MovieForbiddenError(AppError):
    status_code = 403
    default_message = "Only the owner can modify this movie"
    default_code = "MOVIE_FORBIDDEN"


def _get(movie_id: str) -> Movie | None:
    if not ObjectId.is_valid(movie_id):
        return None
    return Movie.objects(id=movie_id).first()


def _owned(user_id: str, movie_id: str) -> Movie:
    movie = _get(movie_id)
    if not movie:
        raise MovieNotFoundError()
    if str(movie.user.id) != str(user_id):
        raise MovieForbiddenError()
    return movie


def _output(movie: Movie) -> dict:
    data = movie.to_output()
    data["owner_id"] = str(movie.user.id)
    return data


def create_movie(user_id: str, fields: dict) -> dict:
    movie = Movie(user=ObjectId(user_id), **{k: v for k, v in fields.items() if k in MOVIE_FIELDS})
    movie.save()
    logger.info("User %s created movie %s", user_id, movie.id)
    return _output(movie)


def list_public_movies() -> list[dict]:
    return [_output(m) for m in Movie.objects(is_public=True).order_by("-created_at")]


def list_user_movies(user_id: str) -> list[dict]:
    """Every movie the user uploaded, private ones included."""
    return [_output(m) for m in Movie.objects(user=user_id).order_by("-created_at")]


def get_public_movie(movie_id: str) -> dict:
    """A private movie is reported as missing to everyone; owners see it via their own list."""
    movie = _get(movie_id)
    if not movie or not movie.is_public:
        raise MovieNotFoundError()
    return _output(movie)


def update_movie(user_id: str, movie_id: str, changes: dict) -> dict:
    movie = _owned(user_id, movie_id)
    for key, value in changes.items():
        if key in MOVIE_FIELDS:
            setattr(movie, key, value)
    movie.save()
    return _output(movie)


def delete_movie(user_id: str, movie_id: str) -> None:
    """Delete an owned movie along with every favorite pointing at it."""
    movie = _owned(user_id, movie_id)
    removed = Favorite.objects(movie=movie).delete()
    movie.delete()
    logger.info("Deleted movie %s and %s favorites", movie_id, removed)


def delete_for_user(user_id: str) -> int:
    movies = Movie.objects(user=user_id)
    Favorite.objects(movie__in=list(movies)).delete()
    deleted = movies.delete()
    logger.info("Removed %s movies of user %s", deleted, user_id)
    return deleted
