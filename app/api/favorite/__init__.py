from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.services import favorites
from app.services.auth import AuthenticatedUser, get_current_user
from app.services.auth.schemas import InputModel
from app.utils.response import success_response


router = APIRouter()


class FavoriteBody(InputModel):
    movie_id: str


@router.get("")
def list_favorites(current_user: AuthenticatedUser = Depends(get_current_user)) -> JSONResponse:
    """PROTECTED: Caller's favorites, newest first."""
    items = favorites.list_favorites(current_user.id)
    return success_response("Favorites fetched successfully", {"total": len(items), "favorites": items})


@router.post("")
def add_favorite(body: FavoriteBody, current_user: AuthenticatedUser = Depends(get_current_user)) -> JSONResponse:
    """PROTECTED: Bookmark a movie once."""
    favorite = favorites.add_favorite(current_user.id, body.movie_id)
    return success_response("Added to favorites", favorite, status_code=201)


@router.delete("/{favorite_id}")
def remove_favorite(favorite_id: str, current_user: AuthenticatedUser = Depends(get_current_user)) -> JSONResponse:
    """PROTECTED: Remove one of the caller's favorites."""
    favorites.remove_favorite(current_user.id, favorite_id)
    return success_response("Removed from favorites")
