import pytest

from movier.core.exceptions import NotFoundError, UpstreamError, ValidationError
from movier.models import Movie
from movier.services.movie_service import MovieService, parse_year


def test_import_twice_returns_the_same_movie(db, catalog, make_user):
    user = make_user()
    service = MovieService(db, catalog)

    first, first_created = service.import_from_external(27205, user.id)
    second, second_created = service.import_from_external(27205, user.id)

    assert first.id == second.id
    assert (first_created, second_created) == (True, False)
    assert db.query(Movie).count() == 1
    assert catalog.detail_calls == [27205]


def test_import_maps_external_fields(db, catalog, make_user):
    user = make_user()

    movie, _ = MovieService(db, catalog).import_from_external(27205, user.id)

    assert movie.title == "Inception"
    assert movie.year == 2010
    assert movie.genre == "Action, Science Fiction"
    assert movie.description.startswith("A thief")
    assert movie.poster_url == "https://image.tmdb.org/t/p/w500/inception.jpg"
    assert movie.external_source == "tmdb"
    assert movie.external_id == "27205"
    assert movie.created_by == user.id
    assert (movie.avg_rating, movie.review_count) == (0, 0)


def test_import_tolerates_sparse_detail(db, catalog):
    catalog.details[5] = {"id": 5, "name": "Untitled", "release_date": "", "poster_path": None}

    movie, created = MovieService(db, catalog).import_from_external(5)

    assert created
    assert movie.title == "Untitled"
    assert movie.year is None
    assert movie.genre == ""
    assert movie.poster_url is None


def test_upstream_failure_surfaces_and_writes_nothing(db, catalog, upstream_down):
    catalog.fail_with = upstream_down

    with pytest.raises(UpstreamError):
        MovieService(db, catalog).import_from_external(27205)

    assert db.query(Movie).count() == 0


def test_unknown_external_movie_is_not_found(db, catalog):
    catalog.fail_with = NotFoundError("Movie not found in external catalog")

    with pytest.raises(NotFoundError):
        MovieService(db, catalog).import_from_external(1)


@pytest.mark.parametrize("external_id", [0, -4, "27205", None, True])
def test_invalid_external_id_is_rejected(db, catalog, external_id):
    with pytest.raises(ValidationError):
        MovieService(db, catalog).import_from_external(external_id)

    assert catalog.detail_calls == []


def test_concurrent_import_resolves_to_the_existing_row(db, catalog):
    def competing_import(external_id):
        db.add(Movie(title="Inception", external_source="tmdb", external_id=str(external_id)))
        db.commit()

    catalog.before_detail = competing_import

    movie, created = MovieService(db, catalog).import_from_external(27205)

    assert created is False
    assert db.query(Movie).count() == 1
    assert movie.id == db.query(Movie).one().id


def test_manual_movies_do_not_collide_on_provenance(db, catalog, make_user):
    user = make_user()
    service = MovieService(db, catalog)

    service.create_movie(user.id, "Home Video")
    service.create_movie(user.id, "Home Video 2")

    assert db.query(Movie).filter(Movie.external_id.is_(None)).count() == 2


def test_create_movie_validates_title_and_year(db, catalog, make_user):
    user = make_user()
    service = MovieService(db, catalog)

    with pytest.raises(ValidationError):
        service.create_movie(user.id, "   ")
    with pytest.raises(ValidationError):
        service.create_movie(user.id, "Too Early", year=1879)

    movie = service.create_movie(user.id, "  Heat ", year=1995, genre="Crime")
    assert movie.title == "Heat"
    assert movie.created_by == user.id
    assert movie.external_source is None


def test_search_external_normalizes_and_limits(db, catalog):
    catalog.search_results = [
        {"id": n, "title": f"Movie {n}", "release_date": "1999-01-01", "overview": "", "poster_path": f"/{n}.jpg"}
        for n in range(25)
    ] + [{"id": 99, "title": "", "release_date": None}]

    result = MovieService(db, catalog).search_external(" movie ")

    assert result.query == "movie"
    assert result.total == 25
    assert len(result.movies) == 20
    assert result.movies[0].external_id == "0"
    assert result.movies[0].year == 1999
    assert result.movies[0].poster_url.endswith("/0.jpg")


def test_search_external_requires_a_query(db, catalog):
    with pytest.raises(ValidationError):
        MovieService(db, catalog).search_external("  ")


def test_seed_only_fills_an_empty_catalog(db, catalog):
    service = MovieService(db, catalog)

    assert service.seed_movies() == 4
    assert service.seed_movies() == 0
    assert db.query(Movie).count() == 4


@pytest.mark.parametrize("release_date, year", [
    ("2010-07-15", 2010),
    ("1999", 1999),
    ("", None),
    (None, None),
    ("TBA", None),
])
def test_parse_year(release_date, year):
    assert parse_year(release_date) == year
