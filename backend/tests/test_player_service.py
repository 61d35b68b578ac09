"""
Scorekeeper Backend — Player & Scoring Service Tests
======================================================

What:  Enrollment rules and the relative/absolute × single/bulk points matrix.

What we test:
    ✅ Per-room name uniqueness
    ✅ +5 then -3 from 10 gives 12, in either order
    ✅ Zero delta sends no statement at all
    ✅ Absolute 0 is a real write
    ✅ Bulk updates touch only the target room
    ✅ Stale readers in separate sessions do not lose increments
"""

import uuid
from unittest.mock import AsyncMock, patch

import pytest

from scorekeeper.exceptions import ConflictError, NotFoundError
from scorekeeper.repositories import Decrement, Increment, players, rooms, users
from scorekeeper.services.player_service import PlayerService, relative_update


async def _room(db, owner_name="alice", room_name="Game Night"):
    owner = await users.find_first(db, where={"name": owner_name})
    if owner is None:
        owner = await users.create(db, {"name": owner_name, "password": "hash"})
    return await rooms.create(db, {"name": room_name, "owner_id": owner.id})


async def _points(db, player_id):
    return (await players.find_unique(db, player_id)).points


class TestRelativeUpdate:

    def test_positive_delta_increments(self):
        assert relative_update(5) == Increment(5)

    def test_negative_delta_decrements_by_magnitude(self):
        assert relative_update(-3) == Decrement(3)


class TestEnrollment:

    def setup_method(self):
        self.service = PlayerService()

    @pytest.mark.asyncio
    async def test_add_player_starts_at_zero(self, db_session):
        room = await _room(db_session)
        player = await self.service.add_player(db_session, room.id, "Bob")
        assert player.points == 0
        assert player.room_id == room.id

    @pytest.mark.asyncio
    async def test_add_player_to_missing_room(self, db_session):
        with pytest.raises(NotFoundError, match="Room"):
            await self.service.add_player(db_session, uuid.uuid4(), "Bob")

    @pytest.mark.asyncio
    async def test_same_name_same_room_conflicts(self, db_session):
        room = await _room(db_session)
        await self.service.add_player(db_session, room.id, "Alice")
        with pytest.raises(ConflictError, match="already exists in the room"):
            await self.service.add_player(db_session, room.id, "Alice")

    @pytest.mark.asyncio
    async def test_same_name_different_rooms_both_succeed(self, db_session):
        first = await _room(db_session, room_name="One")
        second = await _room(db_session, room_name="Two")
        a = await self.service.add_player(db_session, first.id, "Alice")
        b = await self.service.add_player(db_session, second.id, "Alice")
        assert a.id != b.id

    @pytest.mark.asyncio
    async def test_remove_player(self, db_session):
        room = await _room(db_session)
        player = await self.service.add_player(db_session, room.id, "Bob")
        await self.service.remove_player(db_session, room.id, player.id)
        assert await players.find_unique(db_session, player.id) is None

    @pytest.mark.asyncio
    async def test_remove_player_from_wrong_room(self, db_session):
        room = await _room(db_session)
        other = await _room(db_session, room_name="Other")
        player = await self.service.add_player(db_session, room.id, "Bob")
        with pytest.raises(NotFoundError):
            await self.service.remove_player(db_session, other.id, player.id)


class TestSinglePlayerPoints:

    def setup_method(self):
        self.service = PlayerService()

    async def _player_at(self, db, points):
        room = await _room(db)
        player = await self.service.add_player(db, room.id, "Bob")
        await self.service.set_total_points(db, room.id, player.id, points)
        return room, player

    @pytest.mark.asyncio
    async def test_plus_five_then_minus_three(self, db_session):
        room, player = await self._player_at(db_session, 10)
        await self.service.adjust_points(db_session, room.id, player.id, 5)
        await self.service.adjust_points(db_session, room.id, player.id, -3)
        assert await _points(db_session, player.id) == 12

    @pytest.mark.asyncio
    async def test_minus_three_then_plus_five(self, db_session):
        room, player = await self._player_at(db_session, 10)
        await self.service.adjust_points(db_session, room.id, player.id, -3)
        await self.service.adjust_points(db_session, room.id, player.id, 5)
        assert await _points(db_session, player.id) == 12

    @pytest.mark.asyncio
    async def test_points_may_go_negative(self, db_session):
        room, player = await self._player_at(db_session, 2)
        await self.service.adjust_points(db_session, room.id, player.id, -10)
        assert await _points(db_session, player.id) == -8

    @pytest.mark.asyncio
    async def test_set_total_zero_overwrites(self, db_session):
        room, player = await self._player_at(db_session, 42)
        result = await self.service.set_total_points(db_session, room.id, player.id, 0)
        assert result.updated == 1
        assert await _points(db_session, player.id) == 0

    @pytest.mark.asyncio
    async def test_adjust_missing_player(self, db_session):
        room = await _room(db_session)
        with pytest.raises(NotFoundError):
            await self.service.adjust_points(db_session, room.id, uuid.uuid4(), 1)

    @pytest.mark.asyncio
    async def test_set_total_for_player_of_other_room(self, db_session):
        room, player = await self._player_at(db_session, 1)
        other = await _room(db_session, room_name="Other")
        with pytest.raises(NotFoundError):
            await self.service.set_total_points(db_session, other.id, player.id, 5)
        assert await _points(db_session, player.id) == 1


class TestZeroDeltaShortCircuit:

    def setup_method(self):
        self.service = PlayerService()

    @pytest.mark.asyncio
    async def test_adjust_points_zero_issues_no_write(self, mock_db_session):
        with patch("scorekeeper.services.player_service.players") as mock_players:
            mock_players.update = AsyncMock()
            result = await self.service.adjust_points(mock_db_session, uuid.uuid4(), uuid.uuid4(), 0)

        assert result.updated == 0
        mock_players.update.assert_not_awaited()
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_adjust_all_points_zero_issues_no_write(self, mock_db_session):
        with patch("scorekeeper.services.player_service.players") as mock_players:
            mock_players.update_many = AsyncMock()
            result = await self.service.adjust_all_points(mock_db_session, uuid.uuid4(), 0)

        assert result.updated == 0
        mock_players.update_many.assert_not_awaited()
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_set_total_zero_does_write(self, mock_db_session):
        with patch("scorekeeper.services.player_service.players") as mock_players:
            mock_players.update = AsyncMock()
            await self.service.set_total_points(mock_db_session, uuid.uuid4(), uuid.uuid4(), 0)

        mock_players.update.assert_awaited_once()
        assert mock_players.update.await_args.args[2] == {"points": 0}


class TestBulkPoints:

    def setup_method(self):
        self.service = PlayerService()

    async def _seed(self, db):
        room = await _room(db)
        other = await _room(db, room_name="Other")
        ids = []
        for name, start in (("A", 0), ("B", 10), ("C", -5)):
            player = await self.service.add_player(db, room.id, name)
            await self.service.set_total_points(db, room.id, player.id, start)
            ids.append(player.id)
        outsider = await self.service.add_player(db, other.id, "A")
        return room, ids, outsider

    @pytest.mark.asyncio
    async def test_adjust_all_is_relative_per_player(self, db_session):
        room, ids, outsider = await self._seed(db_session)

        result = await self.service.adjust_all_points(db_session, room.id, 3)

        assert result.updated == 3
        assert [await _points(db_session, pid) for pid in ids] == [3, 13, -2]
        assert await _points(db_session, outsider.id) == 0

    @pytest.mark.asyncio
    async def test_adjust_all_negative(self, db_session):
        room, ids, _ = await self._seed(db_session)
        await self.service.adjust_all_points(db_session, room.id, -4)
        assert [await _points(db_session, pid) for pid in ids] == [-4, 6, -9]

    @pytest.mark.asyncio
    async def test_set_all_total_is_absolute(self, db_session):
        room, ids, outsider = await self._seed(db_session)

        result = await self.service.set_all_total_points(db_session, room.id, 0)

        assert result.updated == 3
        assert [await _points(db_session, pid) for pid in ids] == [0, 0, 0]
        assert await _points(db_session, outsider.id) == 0

    @pytest.mark.asyncio
    async def test_bulk_on_empty_room_updates_nothing(self, db_session):
        room = await _room(db_session)
        assert (await self.service.adjust_all_points(db_session, room.id, 5)).updated == 0
        assert (await self.service.set_all_total_points(db_session, room.id, 5)).updated == 0


class TestNoLostUpdates:
    """
    Every session reads the player before any of them writes. A
    read-modify-write implementation would end at 1; server-side
    increments end at N.
    """

    @pytest.mark.asyncio
    async def test_interleaved_sessions_keep_every_increment(self, file_session_factory):
        service = PlayerService()
        async with file_session_factory() as setup:
            room = await _room(setup)
            player = await service.add_player(setup, room.id, "Bob")
            await setup.commit()

        n = 10
        sessions = [file_session_factory() for _ in range(n)]
        try:
            for session in sessions:
                stale = await players.find_unique(session, player.id)
                assert stale.points == 0

            for session in sessions:
                await service.adjust_points(session, room.id, player.id, 1)
                await session.commit()
        finally:
            for session in sessions:
                await session.close()

        async with file_session_factory() as check:
            assert await _points(check, player.id) == n
