from datetime import date, datetime

import pytest

from movier.core.exceptions import NotFoundError, ValidationError
from movier.models import Review
from movier.services.review_service import ReviewService


def test_resubmitting_replaces_the_review_in_place(db, make_user, make_movie):
    user = make_user()
    movie = make_movie()
    service = ReviewService(db)

    first = service.submit_review(user.id, movie.id, 4, "meh", date(2024, 1, 2))
    second = service.submit_review(user.id, movie.id, 9, "grew on me", date(2024, 3, 4))

    assert db.query(Review).count() == 1
    assert second.id == first.id
    assert second.rating == 9
    assert second.review_text == "grew on me"
    assert second.watched_on == date(2024, 3, 4)
    assert second.username == "alice"
    assert second.updated_at is not None


def test_resubmitting_refreshes_updated_at_and_keeps_created_at(db, make_user, make_movie):
    user = make_user()
    movie = make_movie()
    service = ReviewService(db)
    service.submit_review(user.id, movie.id, 4)
    long_ago = datetime(2020, 1, 1, 12, 0, 0)
    db.query(Review).update({"created_at": long_ago, "updated_at": long_ago})
    db.commit()

    second = service.submit_review(user.id, movie.id, 9)

    db.expire_all()
    stored = db.query(Review).one()
    assert stored.created_at == long_ago
    assert stored.updated_at > long_ago
    assert second.created_at == long_ago
    assert second.updated_at > second.created_at


def test_resubmitting_without_text_clears_previous_text(db, make_user, make_movie):
    user = make_user()
    movie = make_movie()
    service = ReviewService(db)

    service.submit_review(user.id, movie.id, 7, "first take", date(2024, 1, 2))
    review = service.submit_review(user.id, movie.id, 8)

    assert review.review_text is None
    assert review.watched_on is None


@pytest.mark.parametrize("rating", [0, 11, -3, 5.5, "7", True, None])
def test_out_of_range_rating_is_rejected_and_nothing_is_written(db, make_user, make_movie, rating):
    user = make_user()
    movie = make_movie()

    with pytest.raises(ValidationError):
        ReviewService(db).submit_review(user.id, movie.id, rating)

    assert db.query(Review).count() == 0


def test_invalid_rating_leaves_existing_review_untouched(db, make_user, make_movie):
    user = make_user()
    movie = make_movie()
    service = ReviewService(db)
    service.submit_review(user.id, movie.id, 6, "fine")

    with pytest.raises(ValidationError):
        service.submit_review(user.id, movie.id, 11, "broken")

    review = db.query(Review).one()
    assert review.rating == 6
    assert review.review_text == "fine"


def test_review_of_missing_movie_is_not_found(db, make_user):
    user = make_user()

    with pytest.raises(NotFoundError):
        ReviewService(db).submit_review(user.id, 999, 5)

    assert db.query(Review).count() == 0


def test_review_by_unknown_user_is_not_found(db, make_movie):
    movie = make_movie()

    with pytest.raises(NotFoundError) as exc_info:
        ReviewService(db).submit_review(999, movie.id, 5)

    assert exc_info.value.message == "User not found"
    assert db.query(Review).count() == 0


def test_users_review_the_same_movie_independently(db, make_user, make_movie):
    alice = make_user("alice")
    bob = make_user("bob")
    movie = make_movie()
    service = ReviewService(db)

    service.submit_review(alice.id, movie.id, 3)
    service.submit_review(bob.id, movie.id, 10)

    assert db.query(Review).count() == 2


def test_delete_by_another_user_is_not_found_and_keeps_the_review(db, make_user, make_movie):
    alice = make_user("alice")
    bob = make_user("bob")
    movie = make_movie()
    service = ReviewService(db)
    review = service.submit_review(alice.id, movie.id, 8)

    with pytest.raises(NotFoundError):
        service.delete_review(review.id, bob.id)

    assert db.query(Review).filter_by(id=review.id).count() == 1


def test_owner_can_delete_once(db, make_user, make_movie):
    user = make_user()
    movie = make_movie()
    service = ReviewService(db)
    review = service.submit_review(user.id, movie.id, 8)

    service.delete_review(review.id, user.id)

    assert db.query(Review).count() == 0
    with pytest.raises(NotFoundError):
        service.delete_review(review.id, user.id)


def test_list_for_movie_is_newest_first_with_usernames(db, make_user, make_movie):
    alice = make_user("alice")
    bob = make_user("bob")
    movie = make_movie()
    service = ReviewService(db)
    service.submit_review(alice.id, movie.id, 5)
    service.submit_review(bob.id, movie.id, 7)

    reviews = service.list_reviews_for_movie(movie.id)

    assert [r.username for r in reviews] == ["bob", "alice"]
    assert [r.rating for r in reviews] == [7, 5]


def test_list_for_missing_movie_is_not_found(db):
    with pytest.raises(NotFoundError):
        ReviewService(db).list_reviews_for_movie(42)


def test_list_for_user_carries_movie_titles(db, make_user, make_movie):
    user = make_user()
    heat = make_movie("Heat")
    alien = make_movie("Alien", 1979, "Horror")
    service = ReviewService(db)
    service.submit_review(user.id, heat.id, 9)
    service.submit_review(user.id, alien.id, 8)

    reviews = service.list_reviews_for_user(user.id)

    assert [(r.title, r.rating) for r in reviews] == [("Alien", 8), ("Heat", 9)]
    assert ReviewService(db).list_reviews_for_user(user.id + 100) == []


def test_deleting_a_movie_cascades_to_its_reviews(db, make_user, make_movie):
    user = make_user()
    movie = make_movie()
    ReviewService(db).submit_review(user.id, movie.id, 8)

    db.delete(movie)
    db.commit()

    assert db.query(Review).count() == 0


def test_deleting_a_user_cascades_to_their_reviews(db, make_user, make_movie):
    user = make_user()
    movie = make_movie()
    ReviewService(db).submit_review(user.id, movie.id, 8)

    db.delete(user)
    db.commit()

    assert db.query(Review).count() == 0
