# File: tests/test_share_service.py

"""Slug allocation against a real (SQLite) unique constraint."""

import pytest

from unpacked.core.errors import ServiceUnavailableError
from unpacked.models.outfit import Outfit
from unpacked.models.user import User
from unpacked.services.share_service import allocate_share_slug, generate_slug


def _outfits(db, count):
    user = User(email="slugs@example.com", name="Slugs")
    outfits = [Outfit(name=f"Outfit {i}", tags=[], owner=user) for i in range(count)]
    db.add(user)
    db.commit()
    return outfits


def _factory(*slugs):
    calls = []
    pending = list(slugs)

    def make():
        slug = pending.pop(0)
        calls.append(slug)
        return slug

    return make, calls


def test_generated_slugs_are_url_safe():
    slug = generate_slug()
    assert slug
    assert all(ch.isalnum() or ch in "-_" for ch in slug)
    assert generate_slug() != slug


def test_existing_slug_is_reused(db):
    (outfit,) = _outfits(db, 1)
    outfit.share_slug = "already-there"
    db.commit()

    make, calls = _factory("unused")
    assert allocate_share_slug(db, outfit, slug_factory=make) == "already-there"
    assert calls == []


def test_collision_is_retried(db):
    taken, fresh = _outfits(db, 2)
    taken.share_slug = "taken"
    db.commit()

    make, calls = _factory("taken", "free")
    assert allocate_share_slug(db, fresh, slug_factory=make) == "free"
    assert calls == ["taken", "free"]

    db.expire_all()
    assert db.get(Outfit, fresh.id).share_slug == "free"
    assert db.get(Outfit, taken.id).share_slug == "taken"


def test_gives_up_after_bounded_attempts(db):
    taken, fresh = _outfits(db, 2)
    taken.share_slug = "taken"
    db.commit()

    make, calls = _factory("taken", "taken", "taken")
    with pytest.raises(ServiceUnavailableError) as exc:
        allocate_share_slug(db, fresh, max_attempts=3, slug_factory=make)
    assert exc.value.status_code == 503
    assert len(calls) == 3

    db.expire_all()
    assert db.get(Outfit, fresh.id).share_slug is None
