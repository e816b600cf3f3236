"""
WorshipDeck Backend - Song Service Unit Tests
==============================================

What:  Tests for the duplicate-name guard and song CRUD.
How:   Guard outcomes run against a real temporary SQLite file; storage
       failures are simulated with a mock session.

What we test:
    ✅ Near-duplicate names are rejected with ConflictError, nothing inserted
    ✅ Dissimilar names (or an empty table) are inserted with a fresh id
    ✅ Missing fields fail validation before any storage access
    ✅ Read/write failures surface as DatabaseError with the store's message
    ✅ Concurrent similar creates: exactly one wins
    ✅ Update skips the guard; delete by id / by case-insensitive name
"""

import asyncio
from unittest.mock import MagicMock

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from app.exceptions import ConflictError, DatabaseError, NotFoundError, ValidationError
from app.models.song import Song
from app.schemas.song import SongPayload
from app.services.song_service import SIMILARITY_THRESHOLD, SongService, find_similar_name


def payload(name, **overrides):
    data = {
        "song_name": name,
        "main_stanza": {"lines": ["chorus"]},
        "stanzas": [{"lines": ["verse one"]}],
    }
    data.update(overrides)
    return SongPayload(**data)


async def count_songs(db) -> int:
    result = await db.execute(select(func.count(Song.song_id)))
    return result.scalar_one()


async def seed(service, db, *names):
    for name in names:
        await service.insert_song(db, name, {"lines": []}, [])
    await db.commit()


class TestFindSimilarName:

    def test_returns_first_match_with_score(self):
        match = find_similar_name("Amazing Grace", ["Be Thou My Vision", "Amazing Grace"])
        assert match == ("Amazing Grace", 1.0)

    def test_none_when_all_below_threshold(self):
        assert find_similar_name("How Great Thou Art", ["Amazing Grace"]) is None

    def test_empty_name_set(self):
        assert find_similar_name("Any Song", []) is None

    def test_threshold_is_inclusive(self):
        # "night"/"nacht" score exactly 0.25
        assert find_similar_name("night", ["nacht"], threshold=0.25) == ("nacht", 0.25)

    def test_default_threshold(self):
        assert SIMILARITY_THRESHOLD == 0.8


class TestCreateSongGuard:

    def setup_method(self):
        self.service = SongService()

    @pytest.mark.asyncio
    async def test_exact_duplicate_is_rejected(self, db_session):
        await seed(self.service, db_session, "Amazing Grace")

        with pytest.raises(ConflictError) as exc_info:
            await self.service.create_song(db_session, payload("Amazing Grace"))

        assert exc_info.value.message == "A similar song already exists"
        assert exc_info.value.context["similar_to"] == "Amazing Grace"
        assert exc_info.value.context["score"] == 1.0
        assert await count_songs(db_session) == 1

    @pytest.mark.asyncio
    async def test_one_letter_typo_is_rejected(self, db_session):
        await seed(self.service, db_session, "Amazing Grace")

        with pytest.raises(ConflictError):
            await self.service.create_song(db_session, payload("Amazing Grase"))
        assert await count_songs(db_session) == 1

    @pytest.mark.asyncio
    async def test_dissimilar_name_is_inserted(self, db_session):
        await seed(self.service, db_session, "Amazing Grace")

        result = await self.service.create_song(db_session, payload("How Great Thou Art"))

        names = await self.service.list_all_names(db_session)
        assert sorted(names) == ["Amazing Grace", "How Great Thou Art"]
        song = await db_session.get(Song, result.song_id)
        assert song.song_name == "How Great Thou Art"

    @pytest.mark.asyncio
    async def test_empty_table_accepts_anything(self, db_session):
        result = await self.service.create_song(db_session, payload("Any Song"))
        assert result.song_id >= 1
        assert await count_songs(db_session) == 1

    @pytest.mark.asyncio
    async def test_ids_are_fresh_and_never_reused(self, db_session):
        first = await self.service.create_song(db_session, payload("Be Thou My Vision"))
        await self.service.delete_song(db_session, first.song_id)
        await db_session.commit()

        second = await self.service.create_song(db_session, payload("Holy, Holy, Holy"))
        assert second.song_id > first.song_id

    @pytest.mark.asyncio
    async def test_case_differences_are_not_folded(self, db_session):
        await seed(self.service, db_session, "Amazing Grace")
        # Upper-case shares no bigrams with the stored mixed-case name
        result = await self.service.create_song(db_session, payload("AMAZING GRACE"))
        assert result.song_id is not None

    @pytest.mark.asyncio
    async def test_stanzas_round_trip_as_structured_data(self, db_session):
        stanza = {"label": "Chorus", "lines": ["a", "b"]}
        created = await self.service.create_song(
            db_session, payload("Great Is Thy Faithfulness", main_stanza=stanza)
        )
        song = await self.service.get_song(db_session, created.song_id)
        assert song.main_stanza == stanza
        assert song.stanzas == [{"lines": ["verse one"]}]


class TestCreateSongValidation:

    def setup_method(self):
        self.service = SongService()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("missing", ["song_name", "main_stanza", "stanzas"])
    async def test_missing_field_never_reaches_storage(self, mock_db_session, missing):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.create_song(mock_db_session, payload("Song", **{missing: None}))

        assert exc_info.value.fields == [missing]
        mock_db_session.execute.assert_not_awaited()
        mock_db_session.add.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "overrides",
        [{"song_name": ""}, {"main_stanza": ""}, {"stanzas": []}, {"main_stanza": {}}],
    )
    async def test_empty_field_is_rejected(self, mock_db_session, overrides):
        with pytest.raises(ValidationError, match="Missing required fields"):
            await self.service.create_song(mock_db_session, payload("Song", **overrides))
        mock_db_session.execute.assert_not_awaited()


class TestCreateSongStorageFailures:

    def setup_method(self):
        self.service = SongService()

    @pytest.mark.asyncio
    async def test_read_failure_is_database_error(self, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError(
            "SELECT songs.song_name FROM songs", {}, Exception("database is locked")
        )

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.create_song(mock_db_session, payload("Song"))

        assert exc_info.value.message == "database is locked"
        assert exc_info.value.context["operation"] == "list_song_names"
        mock_db_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_write_failure_rolls_back(self, mock_db_session):
        names_result = MagicMock()
        names_result.scalars.return_value.all.return_value = ["Amazing Grace"]
        mock_db_session.execute.return_value = names_result
        mock_db_session.flush.side_effect = OperationalError(
            "INSERT INTO songs", {}, Exception("disk I/O error")
        )

        with pytest.raises(DatabaseError, match="disk I/O error"):
            await self.service.create_song(mock_db_session, payload("How Great Thou Art"))

        mock_db_session.rollback.assert_awaited_once()
        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_lock_is_released_after_failure(self, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception("boom"))
        with pytest.raises(DatabaseError):
            await self.service.create_song(mock_db_session, payload("Song"))
        assert not self.service._create_lock.locked()


class TestConcurrentCreates:

    @pytest.mark.asyncio
    async def test_similar_names_created_concurrently_only_one_wins(self, database):
        service = SongService()

        async def attempt(name):
            async with database.session() as session:
                return await service.create_song(session, payload(name))

        results = await asyncio.gather(
            attempt("Amazing Grace"),
            attempt("Amazing Grase"),
            return_exceptions=True,
        )

        successes = [r for r in results if not isinstance(r, Exception)]
        conflicts = [r for r in results if isinstance(r, ConflictError)]
        assert len(successes) == 1
        assert len(conflicts) == 1

        async with database.session() as session:
            assert await count_songs(session) == 1


class TestSongCrud:

    def setup_method(self):
        self.service = SongService()

    @pytest.mark.asyncio
    async def test_update_does_not_recheck_similarity(self, db_session):
        await seed(self.service, db_session, "Amazing Grace")
        other = await self.service.create_song(db_session, payload("How Great Thou Art"))

        result = await self.service.update_song(
            db_session, other.song_id, payload("Amazing Grace")
        )

        assert result.message == "Song updated"
        names = await self.service.list_all_names(db_session)
        assert names.count("Amazing Grace") == 2

    @pytest.mark.asyncio
    async def test_update_missing_song(self, db_session):
        with pytest.raises(NotFoundError, match="Song not found"):
            await self.service.update_song(db_session, 999, payload("Anything"))

    @pytest.mark.asyncio
    async def test_list_without_name_returns_summaries(self, db_session):
        await self.service.create_song(db_session, payload("Amazing Grace"))
        songs = await self.service.list_songs(db_session)

        assert len(songs) == 1
        assert songs[0].song_name == "Amazing Grace"
        assert songs[0].main_stanza is None
        assert songs[0].stanzas is None

    @pytest.mark.asyncio
    async def test_search_by_substring_returns_full_rows(self, db_session):
        await self.service.create_song(db_session, payload("Amazing Grace"))
        await self.service.create_song(db_session, payload("How Great Thou Art"))

        songs = await self.service.list_songs(db_session, name="grace")

        assert [s.song_name for s in songs] == ["Amazing Grace"]
        assert songs[0].stanzas == [{"lines": ["verse one"]}]

    @pytest.mark.asyncio
    async def test_get_missing_song(self, db_session):
        with pytest.raises(NotFoundError):
            await self.service.get_song(db_session, 42)

    @pytest.mark.asyncio
    async def test_delete_by_id(self, db_session):
        created = await self.service.create_song(db_session, payload("Amazing Grace"))
        result = await self.service.delete_song(db_session, created.song_id)

        assert result.message == "Song deleted successfully."
        with pytest.raises(NotFoundError, match="Song not found."):
            await self.service.delete_song(db_session, created.song_id)

    @pytest.mark.asyncio
    async def test_delete_by_name_ignores_case(self, db_session):
        await seed(self.service, db_session, "Amazing Grace", "AMAZING GRACE", "Amazing Grace (Live)")

        result = await self.service.delete_songs_by_name(db_session, "amazing grace")

        assert result.message == "Song(s) deleted successfully."
        assert await self.service.list_all_names(db_session) == ["Amazing Grace (Live)"]

    @pytest.mark.asyncio
    async def test_delete_by_name_no_match(self, db_session):
        with pytest.raises(NotFoundError, match="No song found with that name."):
            await self.service.delete_songs_by_name(db_session, "Nothing")
