from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import Field, HttpUrl, StringConstraints, field_validator

from app.services import movies
from app.services.auth import AuthenticatedUser, get_current_user
from app.services.auth.schemas import InputModel
from app.utils.response import success_response


router = APIRouter()

Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2)]
Genre = Annotated[list[Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]], Field(min_length=1)]


def _not_in_future(year: int | None) -> int | None:
    if year is not None and year > datetime.now(timezone.utc).year:
        raise ValueError("Year cannot be in the future")
    return year


class MovieBody(InputModel):
    title: Title
    description: str | None = None
    genre: Genre
    year: int = Field(ge=1900)
    video_url: HttpUrl | None = None
    is_public: bool = False

    check_year = field_validator("year")(_not_in_future)


class MovieUpdateBody(InputModel):
    title: Title | None = None
    description: str | None = None
    genre: Genre | None = None
    year: int | None = Field(default=None, ge=1900)
    video_url: HttpUrl | None = None
    is_public: bool | None = None

    check_year = field_validator("year")(_not_in_future)


@router.get("")
def list_movies() -> JSONResponse:
    """PUBLIC: Public catalog, newest first."""
    items = movies.list_public_movies()
    return success_response("Movies fetched successfully", {"total": len(items), "movies": items})


@router.get("/my")
def list_my_movies(current_user: AuthenticatedUser = Depends(get_current_user)) -> JSONResponse:
    """PROTECTED: Every movie the caller created."""
    items = movies.list_user_movies(current_user.id)
    return success_response("Movies fetched successfully", {"total": len(items), "movies": items})


@router.get("/{movie_id}")
def get_movie(movie_id: str) -> JSONResponse:
    """PUBLIC: One public movie."""
    return success_response("Movie fetched successfully", movies.get_public_movie(movie_id))


@router.post("")
def create_movie(body: MovieBody, current_user: AuthenticatedUser = Depends(get_current_user)) -> JSONResponse:
    """PROTECTED: Add a movie owned by the caller."""
    movie = movies.create_movie(current_user.id, body.model_dump(mode="json"))
    return success_response("Movie created successfully", movie, status_code=201)


@router.put("/{movie_id}")
def update_movie(
    movie_id: str,
    body: MovieUpdateBody,
    current_user: AuthenticatedUser = Depends(get_current_user),
) -> JSONResponse:
    """PROTECTED: Owner-only metadata update."""
    changes = body.model_dump(mode="json", exclude_none=True)
    movie = movies.update_movie(current_user.id, movie_id, changes)
    return success_response("Movie updated successfully", movie)


@router.delete("/{movie_id}")
def delete_movie(movie_id: str, current_user: AuthenticatedUser = Depends(get_current_user)) -> JSONResponse:
    """PROTECTED: Owner-only delete; favorites of the movie go with it."""
    movies.delete_movie(current_user.id, movie_id)
    return success_response("Movie deleted")
