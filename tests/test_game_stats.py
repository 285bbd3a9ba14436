"""Tests for board-game log statistics."""

import pytest
from datetime import date

from cadence.engine.games import location_counts, overview, player_standings, top_games
from cadence.models.game import Game, GameSession


GAMES = [
    Game(id="g1", name="Catan"),
    Game(id="g2", name="Azul"),
    Game(id="g3", name="Old Game", is_active=False),
]


def _session(session_id, game_id, day, players, winner="Draw", **kwargs):
    return GameSession(id=session_id, game_id=game_id, date=day, players=players, winner=winner, **kwargs)


@pytest.fixture
def sessions():
    return [
        _session("s1", "g1", date(2024, 1, 1), ["Ana", "Ben"], winner="Ana", duration_min=60, location="Home"),
        _session("s2", "g1", date(2024, 1, 5), ["Ana", "Ben", "Cy"], winner="Ben", duration_min=90, location="Cafe"),
        _session("s3", "g2", date(2024, 1, 3), ["Ana", "Cy"], location="Home"),
        _session("s4", "g3", date(2024, 1, 4), ["Ben"], winner="Ben"),
    ]


class TestPlayerStandings:
    """Wins and win rates per player."""

    def test_standings(self, sessions):
        standings = {s.name: s for s in player_standings(sessions)}
        assert standings["Ana"].wins == 1
        assert standings["Ana"].games == 3
        assert standings["Ben"].wins == 2
        assert standings["Ben"].games == 3
        assert standings["Cy"].wins == 0
        assert standings["Cy"].win_rate == 0.0

    def test_sorted_by_wins_then_name(self, sessions):
        assert [s.name for s in player_standings(sessions)] == ["Ben", "Ana", "Cy"]

    def test_draw_counts_no_win(self):
        standings = player_standings([_session("s1", "g1", date(2024, 1, 1), ["Ana", "Ben"])])
        assert all(s.wins == 0 and s.games == 1 for s in standings)

    def test_winner_outside_player_list(self):
        standings = player_standings([_session("s1", "g1", date(2024, 1, 1), ["Ana"], winner="Dee")])
        dee = next(s for s in standings if s.name == "Dee")
        assert dee.games == 1
        assert dee.win_rate == pytest.approx(100.0)


class TestGameCounts:
    def test_top_games_skip_inactive(self, sessions):
        top = top_games(sessions, GAMES)
        assert [(g.name, g.count) for g in top] == [("Catan", 2), ("Azul", 1)]
        assert top[0].last_played == date(2024, 1, 5)

    def test_top_games_limit(self, sessions):
        assert len(top_games(sessions, GAMES, limit=1)) == 1

    def test_locations(self, sessions):
        assert [(c.location, c.count) for c in location_counts(sessions)] == [("Home", 2), ("Cafe", 1)]

    def test_overview(self, sessions):
        summary = overview(sessions, GAMES)
        assert summary.games_count == 2
        assert summary.sessions_count == 4
        assert summary.unique_players_count == 3
        assert summary.avg_duration == 75

    def test_overview_without_durations(self):
        assert overview([], GAMES).avg_duration is None
