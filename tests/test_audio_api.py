import base64
import sqlite3

import pytest

from fastapi.testclient import TestClient

from audio_library_api.app.main import create_app


def decode(value: str) -> bytes:
    return base64.b64decode(value)


def test_create_returns_record_and_fetch_matches(client, create_entry):
    response = create_entry(title="Riff", genre="Jazz", audio=b"audio-1", image=b"cover-1")
    assert response.status_code == 200
    created = response.json()
    assert created["id"] > 0
    assert created["title"] == "Riff"
    assert created["genre"] == "Jazz"
    assert decode(created["audioFile"]) == b"audio-1"
    assert decode(created["imageFile"]) == b"cover-1"

    fetched = client.get(f"/audio/{created['id']}")
    assert fetched.status_code == 200
    assert fetched.json() == created


def test_created_ids_are_unique(create_entry):
    ids = [create_entry(title=f"Track {n}").json()["id"] for n in range(3)]
    assert len(set(ids)) == 3
    assert all(i > 0 for i in ids)


def test_create_without_image_uses_default(client, create_entry, default_image_path):
    response = create_entry(title="Riff", genre="Jazz", image=None)
    assert response.status_code == 200
    assert decode(response.json()["imageFile"]) == default_image_path.read_bytes()

    stored = client.get(f"/audio/{response.json()['id']}").json()
    assert decode(stored["imageFile"]) == default_image_path.read_bytes()


def test_create_without_audio(create_entry):
    response = create_entry(title="Jazz Riff", genre="Jazz", audio=None)
    assert response.status_code == 400
    assert response.json() == {"error": "Audio file required"}


def test_create_with_empty_title(create_entry):
    response = create_entry(title="", genre="Jazz")
    assert response.status_code == 400
    assert response.json() == {"error": "Title field required"}


def test_create_without_genre(create_entry):
    response = create_entry(title="Riff", genre=None)
    assert response.status_code == 400
    assert response.json() == {"error": "Genre Field required"}


def test_create_reports_missing_audio_before_title(create_entry):
    response = create_entry(title=None, genre=None, audio=None)
    assert response.json() == {"error": "Audio file required"}


def test_rejected_create_stores_nothing(client, create_entry):
    create_entry(title="", genre="Jazz")
    assert client.get("/audio").json() == []


def test_list_returns_all_entries_in_insertion_order(client, create_entry):
    first = create_entry(title="One").json()
    second = create_entry(title="Two").json()
    response = client.get("/audio")
    assert response.status_code == 200
    assert response.json() == [first, second]


def test_list_empty(client):
    response = client.get("/audio")
    assert response.status_code == 200
    assert response.json() == []


def test_get_invalid_id(client):
    for raw in ("abc", "0", "-4", "1.5"):
        response = client.get(f"/audio/{raw}")
        assert response.status_code == 400, raw
        assert response.json() == {"error": "Invalid id value"}


def test_get_missing_entry(client):
    response = client.get("/audio/999999")
    assert response.status_code == 404
    assert response.json() == {"error": "Audio entry not found"}


def test_update_genre_only(client, create_entry):
    created = create_entry(title="Riff", genre="Jazz", audio=b"audio", image=b"cover").json()
    response = client.put(f"/audio/{created['id']}", data={"genre": "Blues"})
    assert response.status_code == 200
    updated = response.json()
    assert updated["genre"] == "Blues"
    assert updated["title"] == created["title"]
    assert updated["audioFile"] == created["audioFile"]
    assert updated["imageFile"] == created["imageFile"]


def test_update_image_and_title(client, create_entry):
    created = create_entry(title="Riff", genre="Jazz").json()
    response = client.put(
        f"/audio/{created['id']}",
        data={"title": "New Riff"},
        files={"imageFile": ("new.png", b"new-cover", "image/png")},
    )
    assert response.status_code == 200
    updated = response.json()
    assert updated["title"] == "New Riff"
    assert updated["genre"] == "Jazz"
    assert decode(updated["imageFile"]) == b"new-cover"
    assert updated["audioFile"] == created["audioFile"]


def test_update_empty_strings_leave_fields_unchanged(client, create_entry):
    created = create_entry(title="Riff", genre="Jazz").json()
    response = client.put(f"/audio/{created['id']}", data={"title": "", "genre": ""})
    assert response.status_code == 200
    assert response.json() == created


def test_update_with_nothing_returns_current_entry(client, create_entry):
    created = create_entry().json()
    response = client.put(f"/audio/{created['id']}")
    assert response.status_code == 200
    assert response.json() == created


def test_update_invalid_id(client):
    response = client.put("/audio/abc", data={"title": "x"})
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid id value"}


def test_update_missing_entry(client):
    response = client.put("/audio/424242", data={"title": "x"})
    assert response.status_code == 404
    assert response.json() == {"error": "Audio entry not found"}


def test_delete_entry(client, create_entry):
    created = create_entry().json()
    response = client.delete(f"/audio/{created['id']}")
    assert response.status_code == 200
    assert response.json() == {"message": "Audio entry deleted successfully"}
    assert client.get(f"/audio/{created['id']}").status_code == 404


def test_delete_missing_entry_still_succeeds(client):
    response = client.delete("/audio/999999")
    assert response.status_code == 200
    assert response.json() == {"message": "Audio entry deleted successfully"}


def test_delete_twice_gives_same_response(client, create_entry):
    created = create_entry().json()
    first = client.delete(f"/audio/{created['id']}")
    second = client.delete(f"/audio/{created['id']}")
    assert first.status_code == second.status_code == 200
    assert first.json() == second.json()


def test_delete_invalid_id(client):
    response = client.delete("/audio/-1")
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid id value"}


def test_deleted_ids_are_not_reused(client, create_entry):
    created = create_entry().json()
    client.delete(f"/audio/{created['id']}")
    assert create_entry().json()["id"] > created["id"]


@pytest.mark.parametrize(
    "method, url, kwargs",
    [
        ("GET", "/audio", {}),
        ("GET", "/audio/1", {}),
        (
            "POST",
            "/audio",
            {
                "data": {"title": "Riff", "genre": "Jazz"},
                "files": {"audioFile": ("riff.mp3", b"audio", "audio/mpeg")},
            },
        ),
        ("PUT", "/audio/1", {"data": {"title": "Solo"}}),
        ("DELETE", "/audio/1", {}),
    ],
)
def test_storage_failure_is_reported_as_server_error(client, db_path, method, url, kwargs):
    conn = sqlite3.connect(db_path)
    conn.execute("DROP TABLE audio")
    conn.commit()
    conn.close()

    response = client.request(method, url, **kwargs)
    assert response.status_code == 500
    assert "no such table" in response.json()["error"]


def test_large_identifiers_select_the_exact_row(client, db_path):
    conn = sqlite3.connect(db_path)
    conn.executemany(
        "INSERT INTO audio (id, title, genre, image_file, audio_file) VALUES (?, ?, 'Jazz', x'00', x'00')",
        [(2**53, "A"), (2**53 + 1, "B"), (2**63 - 1, "Last")],
    )
    conn.commit()
    conn.close()

    response = client.get("/audio/9007199254740993")
    assert response.status_code == 200
    assert response.json()["id"] == 9007199254740993
    assert response.json()["title"] == "B"

    updated = client.put("/audio/9007199254740993", data={"genre": "Blues"}).json()
    assert (updated["title"], updated["genre"]) == ("B", "Blues")
    assert client.get("/audio/9007199254740992").json()["genre"] == "Jazz"

    assert client.get("/audio/9223372036854775807").json()["title"] == "Last"


def test_create_with_text_part_named_audio_file(client):
    response = client.post(
        "/audio",
        data={"audioFile": "not-a-file", "title": "Riff", "genre": "Jazz"},
        files={"imageFile": ("cover.png", b"cover", "image/png")},
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Audio file required"}
    assert client.get("/audio").json() == []


def test_create_with_text_part_named_image_file_uses_default(client, default_image_path):
    response = client.post(
        "/audio",
        data={"imageFile": "not-a-file", "title": "Riff", "genre": "Jazz"},
        files={"audioFile": ("riff.mp3", b"audio", "audio/mpeg")},
    )
    assert response.status_code == 200
    assert decode(response.json()["imageFile"]) == default_image_path.read_bytes()


def test_update_ignores_text_part_named_image_file(client, create_entry):
    created = create_entry(title="Riff", genre="Jazz", image=b"cover").json()
    response = client.put(f"/audio/{created['id']}", data={"imageFile": "x", "genre": "Blues"})
    assert response.status_code == 200
    updated = response.json()
    assert updated["genre"] == "Blues"
    assert updated["imageFile"] == created["imageFile"]


def test_data_survives_restart(test_settings, create_entry, client):
    created = create_entry(title="Persisted").json()
    with TestClient(create_app(test_settings)) as other:
        assert other.get(f"/audio/{created['id']}").json() == created


def test_api_prefix(test_settings):
    test_settings.api_prefix = "/api/v1"
    with TestClient(create_app(test_settings)) as prefixed:
        assert prefixed.get("/api/v1/audio").json() == []
        assert prefixed.get("/audio").status_code == 404
