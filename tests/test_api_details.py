"""Tests for details API endpoint."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

from videocalls.api.app import create_app
from videocalls.db import repo
from videocalls.providers.base import VIDEO_DETAILS_PATH
from videocalls.providers.mock import INVALID_UUID_MESSAGE

VIDEO_ID = "45d4063d00454c9fb21e5186a09c3115"


class TestDetailsValidation:
    """Requests without a usable video_id are rejected before any lookup."""

    @pytest.mark.parametrize(
        "body",
        [
            "",
            "{}",
            '{"video_id": ""}',
            '{"video_id": "   "}',
            '{"video_id": 123}',
            "[]",
            "not json",
        ],
    )
    def test_missing_video_id_returns_400(self, client, provider, engine, body):
        response = client.post("/v1/details", content=body)

        assert response.status_code == 400
        assert response.json() == {"message": "missing 'video_id'"}
        assert provider.requests == []
        with Session(engine) as session:
            assert repo.get_api_calls(session) == []


class TestDetailsProviderFailure:
    """Provider failures become 400 responses and are still recorded."""

    def test_invalid_uuid_returns_400(self, client, provider, engine):
        response = client.post("/v1/details", json={"video_id": "abcd"})

        assert response.status_code == 400
        assert response.json() == {
            "message": "failed to make api call : " + INVALID_UUID_MESSAGE
        }
        assert provider.requests == ["abcd"]

        with Session(engine) as session:
            calls = repo.get_api_calls(session)
        assert len(calls) == 1
        assert calls[0].error == INVALID_UUID_MESSAGE
        assert calls[0].type == ""

    def test_video_id_is_sent_as_given(self, client, provider):
        response = client.post("/v1/details", json={"video_id": " abcd "})

        assert response.status_code == 400
        assert provider.requests == [" abcd "]


class TestDetailsSuccess:
    """Successful lookups return the provider document."""

    def test_returns_video_and_id(self, client, provider):
        response = client.post("/v1/details", json={"video_id": VIDEO_ID})

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == VIDEO_ID
        assert data["message"]["video_id"] == VIDEO_ID
        assert data["message"] == provider.get_video(VIDEO_ID).model_dump(
            mode="json", exclude_unset=True
        )

    def test_returns_canonical_id(self, client):
        response = client.post(
            "/v1/details", json={"video_id": "45D4063D-0045-4C9F-B21E-5186A09C3115"}
        )

        assert response.status_code == 200
        assert response.json()["id"] == VIDEO_ID

    def test_records_call(self, client, engine):
        client.post("/v1/details", json={"video_id": VIDEO_ID})

        with Session(engine) as session:
            calls = repo.get_api_calls(session)
        assert len(calls) == 1
        assert calls[0].type == VIDEO_DETAILS_PATH
        assert calls[0].video_id == VIDEO_ID
        assert calls[0].error == ""
        assert calls[0].called_at is not None

    def test_extra_fields_ignored(self, client):
        response = client.post("/v1/details", json={"video_id": VIDEO_ID, "type": "x", "id": 9})

        assert response.status_code == 200
        assert response.json()["id"] == VIDEO_ID


class TestDetailsStorageFailure:
    """A failed save does not change the response."""

    def test_lookup_succeeds_without_database(self, context, broken_engine):
        context.session_factory = sessionmaker(bind=broken_engine)
        client = TestClient(create_app(context))

        response = client.post("/v1/details", json={"video_id": VIDEO_ID})

        assert response.status_code == 200
        assert response.json()["id"] == VIDEO_ID
