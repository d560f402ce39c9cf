from backend.app.models import Profile


def _with_profile(client):
    resp = client.post("/api/profile", json={"status": "Developer", "skills": "cobol"})
    assert resp.status_code == 200


def test_add_experience(authorized_client, experience_payload):
    client, _, _ = authorized_client
    _with_profile(client)

    resp = client.put("/api/profile/experience", json=experience_payload)

    assert resp.status_code == 200
    entries = resp.json()["experience"]
    assert len(entries) == 1
    entry = entries[0]
    assert entry["title"] == "Senior Engineer"
    assert entry["from"] == "2022-03-01"
    assert entry["current"] is False
    assert len(entry["id"]) == 24
    assert "to" not in entry


def test_newest_experience_first(authorized_client, experience_payload):
    client, _, _ = authorized_client
    _with_profile(client)

    client.put("/api/profile/experience", json={**experience_payload, "title": "Old"})
    resp = client.put("/api/profile/experience", json={**experience_payload, "title": "New"})

    assert [e["title"] for e in resp.json()["experience"]] == ["New", "Old"]


def test_add_experience_validation(authorized_client):
    client, _, _ = authorized_client
    _with_profile(client)

    resp = client.put("/api/profile/experience", json={"location": "Remote"})

    assert resp.status_code == 400
    messages = {e["param"]: e["msg"] for e in resp.json()["errors"]}
    assert messages == {
        "title": "Title is required",
        "company": "Company is required",
        "from": "From date is required",
    }


def test_add_experience_without_profile(authorized_client, experience_payload):
    client, _, _ = authorized_client

    resp = client.put("/api/profile/experience", json=experience_payload)

    assert resp.status_code == 400
    assert resp.json() == {"msg": "There is no profile for this user"}


def test_update_experience(authorized_client, experience_payload):
    client, _, _ = authorized_client
    _with_profile(client)
    entry_id = client.put("/api/profile/experience", json=experience_payload).json()["experience"][0]["id"]

    resp = client.put(
        f"/api/profile/experience/{entry_id}",
        json={"to": "2024-01-31", "description": "Shipped it"},
    )

    assert resp.status_code == 200
    entry = resp.json()["experience"][0]
    assert entry["id"] == entry_id
    assert entry["to"] == "2024-01-31"
    assert entry["description"] == "Shipped it"
    assert entry["title"] == "Senior Engineer"


def test_update_unknown_experience(authorized_client):
    client, _, _ = authorized_client
    _with_profile(client)

    resp = client.put("/api/profile/experience/" + "0" * 24, json={"title": "Ghost"})

    assert resp.status_code == 400
    assert resp.json() == {"msg": "Experience not found"}


def test_delete_experience(authorized_client, experience_payload):
    client, current_user, session_factory = authorized_client
    _with_profile(client)
    for title in ("First", "Second", "Third"):
        client.put("/api/profile/experience", json={**experience_payload, "title": title})
    entries = client.get("/api/profile/me").json()["experience"]

    resp = client.delete(f"/api/profile/experience/{entries[1]['id']}")

    assert resp.status_code == 200
    assert [e["title"] for e in resp.json()["experience"]] == ["Third", "First"]

    session = session_factory()
    profile = session.query(Profile).filter(Profile.user_id == current_user().id).one()
    assert len(profile.experience) == 2
    session.close()


def test_delete_unknown_experience_leaves_list(authorized_client, experience_payload):
    client, _, _ = authorized_client
    _with_profile(client)
    client.put("/api/profile/experience", json=experience_payload)

    resp = client.delete("/api/profile/experience/does-not-exist")

    assert resp.status_code == 400
    assert resp.json() == {"msg": "Experience not found"}
    assert len(client.get("/api/profile/me").json()["experience"]) == 1


def test_add_education(authorized_client, education_payload):
    client, _, _ = authorized_client
    _with_profile(client)

    resp = client.put("/api/profile/education", json=education_payload)

    assert resp.status_code == 200
    entry = resp.json()["education"][0]
    assert entry["school"] == "Open University"
    assert entry["fieldofstudy"] == "Computer Science"
    assert entry["to"] == "2021-06-30"


def test_add_education_validation(authorized_client):
    client, _, _ = authorized_client
    _with_profile(client)

    resp = client.put("/api/profile/education", json={"school": "", "from": "2019-09-01"})

    assert resp.status_code == 400
    messages = {e["param"]: e["msg"] for e in resp.json()["errors"]}
    assert messages == {
        "school": "School is required",
        "degree": "Degree is required",
        "fieldofstudy": "Field of Study is required",
    }


def test_update_education(authorized_client, education_payload):
    client, _, _ = authorized_client
    _with_profile(client)
    entry_id = client.put("/api/profile/education", json=education_payload).json()["education"][0]["id"]

    resp = client.put(f"/api/profile/education/{entry_id}", json={"degree": "PhD", "current": True})

    assert resp.status_code == 200
    entry = resp.json()["education"][0]
    assert entry["degree"] == "PhD"
    assert entry["current"] is True
    assert entry["school"] == "Open University"


def test_delete_education(authorized_client, education_payload):
    client, _, _ = authorized_client
    _with_profile(client)
    entry_id = client.put("/api/profile/education", json=education_payload).json()["education"][0]["id"]

    resp = client.delete(f"/api/profile/education/{entry_id}")

    assert resp.status_code == 200
    assert resp.json()["education"] == []


def test_delete_unknown_education(authorized_client):
    client, _, _ = authorized_client
    _with_profile(client)

    resp = client.delete("/api/profile/education/" + "f" * 24)

    assert resp.status_code == 400
    assert resp.json() == {"msg": "Education not found"}
