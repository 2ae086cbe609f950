# File: tests/test_share_and_save.py

from conftest import create_outfit

ITEMS = [
    {"name": "Heavy Combat Boots", "category": "FOOTWEAR"},
    {"name": "Oversized Tailored Coat", "category": "OUTERWEAR"},
]


# -----------------------------
# Share
# -----------------------------

def test_sharing_twice_returns_the_same_link(alice):
    outfit = create_outfit(alice)
    url = f"/api/v1/outfits/{outfit['id']}/share"

    first = alice.post(url)
    second = alice.post(url)
    assert first.status_code == 200
    assert second.status_code == 200
    assert first.json()["shareUrl"] == second.json()["shareUrl"]

    slug = first.json()["shareSlug"]
    assert first.json()["shareUrl"] == f"http://testserver/outfits/share/{slug}"
    assert alice.get(f"/api/v1/outfits/{outfit['id']}").json()["shareSlug"] == slug


def test_sharing_private_outfit_is_forbidden(alice):
    outfit = create_outfit(alice, isPrivate=True)
    resp = alice.post(f"/api/v1/outfits/{outfit['id']}/share")
    assert resp.status_code == 403
    assert resp.json() == {"error": "Cannot share private outfits"}


def test_sharing_requires_session(alice, anon_client):
    outfit = create_outfit(alice)
    assert anon_client.post(f"/api/v1/outfits/{outfit['id']}/share").status_code == 401


def test_sharing_missing_outfit(alice):
    assert alice.post("/api/v1/outfits/424242/share").status_code == 404


def test_share_link_resolves_without_session(alice, anon_client):
    outfit = create_outfit(alice, items=ITEMS)
    slug = alice.post(f"/api/v1/outfits/{outfit['id']}/share").json()["shareSlug"]

    resp = anon_client.get(f"/api/v1/share/{slug}")
    assert resp.status_code == 200
    shared = resp.json()
    assert shared["id"] == outfit["id"]
    assert shared["user"]["name"] == "Alice"
    assert [item["category"] for item in shared["items"]] == ["OUTERWEAR", "FOOTWEAR"]


def test_share_link_stops_resolving_once_private(alice, anon_client):
    outfit = create_outfit(alice)
    slug = alice.post(f"/api/v1/outfits/{outfit['id']}/share").json()["shareSlug"]

    alice.put(f"/api/v1/outfits/{outfit['id']}", json={"name": outfit["name"], "isPrivate": True})
    assert anon_client.get(f"/api/v1/share/{slug}").status_code == 404


def test_unknown_share_slug(anon_client):
    assert anon_client.get("/api/v1/share/does-not-exist").status_code == 404


# -----------------------------
# Save
# -----------------------------

def test_saving_own_outfit_conflicts(alice):
    outfit = create_outfit(alice, name="Test Outfit for Save")
    resp = alice.post(f"/api/v1/outfits/{outfit['id']}/save")
    assert resp.status_code == 409
    assert resp.json() == {"error": "You already have this outfit"}


def test_saving_private_outfit_is_forbidden_for_owner_and_others(alice, bob):
    outfit = create_outfit(alice, name="Private Outfit", isPrivate=True)
    for client in (alice, bob):
        resp = client.post(f"/api/v1/outfits/{outfit['id']}/save")
        assert resp.status_code == 403
        assert resp.json() == {"error": "Cannot save private outfits"}


def test_saving_someone_elses_public_outfit(alice, bob):
    outfit = create_outfit(alice, name="Street Layers", tags=["street"], items=ITEMS)

    resp = bob.post(f"/api/v1/outfits/{outfit['id']}/save")
    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Outfit saved successfully"

    copy = bob.get(f"/api/v1/outfits/{body['outfitId']}").json()
    assert copy["id"] != outfit["id"]
    assert copy["user"]["name"] == "Bob"
    assert copy["name"] == "Street Layers"
    assert copy["tags"] == ["street"]
    assert copy["isPrivate"] is True
    assert [item["name"] for item in copy["items"]] == ["Oversized Tailored Coat", "Heavy Combat Boots"]

    # The original is untouched
    original = alice.get(f"/api/v1/outfits/{outfit['id']}").json()
    assert original["user"]["name"] == "Alice"
    assert len(original["items"]) == 2


def test_saving_twice_conflicts(alice, bob):
    outfit = create_outfit(alice, name="Street Layers")
    assert bob.post(f"/api/v1/outfits/{outfit['id']}/save").status_code == 200

    resp = bob.post(f"/api/v1/outfits/{outfit['id']}/save")
    assert resp.status_code == 409
    assert resp.json() == {"error": "You already have this outfit"}


def test_saving_conflicts_with_same_name_in_other_case(alice, bob):
    outfit = create_outfit(alice, name="Street Layers")
    create_outfit(bob, name="  street   layers ")
    assert bob.post(f"/api/v1/outfits/{outfit['id']}/save").status_code == 409


def test_saving_requires_session(alice, anon_client):
    outfit = create_outfit(alice)
    assert anon_client.post(f"/api/v1/outfits/{outfit['id']}/save").status_code == 401
