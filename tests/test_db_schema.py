"""Tests for the api_calls table.

Invariants:
1. id is assigned by the database on insert
2. video_id is indexed but not unique (history is kept per video)
3. ctime is set by storage, not by callers
"""

from datetime import timedelta

from videocalls.db.schema import ApiCall, Base


class TestSchemaCreation:
    """Test that schema can be created without errors."""

    def test_api_calls_table_created(self, engine):
        assert "api_calls" in Base.metadata.tables.keys()

    def test_expected_columns(self):
        columns = set(Base.metadata.tables["api_calls"].columns.keys())
        assert columns == {"id", "type", "ctime", "called", "video_id", "taken", "error", "result"}

    def test_video_id_is_indexed(self):
        table = Base.metadata.tables["api_calls"]
        assert any("video_id" in index.columns.keys() for index in table.indexes)


class TestApiCallRows:
    """Test row-level defaults and non-uniqueness."""

    def test_defaults_on_insert(self, session):
        call = ApiCall(video_id="123")
        session.add(call)
        session.commit()

        stored = session.query(ApiCall).one()
        assert stored.id > 0
        assert stored.ctime is not None
        assert stored.type == ""
        assert stored.error == ""
        assert stored.taken == timedelta(0)
        assert stored.result == {}

    def test_same_video_id_kept_twice(self, session):
        session.add_all([ApiCall(video_id="123"), ApiCall(video_id="123")])
        session.commit()

        assert session.query(ApiCall).filter(ApiCall.video_id == "123").count() == 2

    def test_result_round_trips_json(self, session):
        payload = {"video_id": "123", "state": "uploaded", "metadata": {"k": [1, 2]}}
        session.add(ApiCall(video_id="123", result=payload))
        session.commit()

        assert session.query(ApiCall).one().result == payload
