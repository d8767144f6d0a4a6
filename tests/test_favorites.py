import pytest

from app.models import Movie, User
from app.services import favorites
from app.services.favorites import FavoriteExistsError, FavoriteNotFoundError, MovieNotFoundError
from tests.conftest import bearer


@pytest.fixture
def movie(jane):
    owner = User.objects(id=jane["id"]).first()
    return Movie(title="Inception", genre=["sci-fi"], year=2010, user=owner, is_public=True).save()


class TestFavoritesService:
    def test_add_and_list(self, jane, movie):
        favorite = favorites.add_favorite(jane["id"], str(movie.id))
        assert favorite["movie"]["title"] == "Inception"
        assert "user" not in favorite["movie"]

        listed = favorites.list_favorites(jane["id"])
        assert [f["id"] for f in listed] == [favorite["id"]]

    def test_duplicate_favorite(self, jane, movie):
        favorites.add_favorite(jane["id"], str(movie.id))
        with pytest.raises(FavoriteExistsError):
            favorites.add_favorite(jane["id"], str(movie.id))

    @pytest.mark.parametrize("movie_id", ["nope", "64b7f0c2a1b2c3d4e5f60718"])
    def test_unknown_movie(self, jane, movie_id):
        with pytest.raises(MovieNotFoundError):
            favorites.add_favorite(jane["id"], movie_id)

    def test_remove_only_own_favorite(self, jane, movie):
        favorite = favorites.add_favorite(jane["id"], str(movie.id))
        with pytest.raises(FavoriteNotFoundError):
            favorites.remove_favorite("64b7f0c2a1b2c3d4e5f60718", favorite["id"])
        favorites.remove_favorite(jane["id"], favorite["id"])
        assert favorites.list_favorites(jane["id"]) == []


class TestFavoritesEndpoints:
    def test_requires_session(self, client):
        assert client.get("/api/favorites").status_code == 401

    def test_add_list_remove(self, client, jane, movie):
        token = client.post("/api/auth/login", json={"email": "jane@example.com", "password": "Strong@123"}).json()["data"]["token"]

        response = client.post("/api/favorites", json={"movieId": str(movie.id)}, headers=bearer(token))
        assert response.status_code == 201
        favorite_id = response.json()["data"]["id"]

        again = client.post("/api/favorites", json={"movieId": str(movie.id)}, headers=bearer(token))
        assert again.status_code == 409

        listed = client.get("/api/favorites", headers=bearer(token)).json()["data"]
        assert listed["total"] == 1

        assert client.delete(f"/api/favorites/{favorite_id}", headers=bearer(token)).status_code == 200
        assert client.delete(f"/api/favorites/{favorite_id}", headers=bearer(token)).status_code == 404
