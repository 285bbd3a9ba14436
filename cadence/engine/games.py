"""Board-game log statistics for cadence."""

from typing import Dict, Iterable, List, Set

from cadence.models.constants import DRAW, TOP_LIST_LIMIT
from cadence.models.game import Game, GameOverview, GamePlayCount, GameSession, LocationCount, PlayerStanding


def player_standings(sessions: Iterable[GameSession]) -> List[PlayerStanding]:
    """Wins, games played and win rate per player.

    A draw counts as a game for every player and a win for nobody. Sorted by
    wins (most first), then name.
    """
    wins: Dict[str, int] = {}
    games: Dict[str, int] = {}
    for session in sessions:
        for player in set(session.players):
            games[player] = games.get(player, 0) + 1
        if session.winner and session.winner != DRAW:
            wins[session.winner] = wins.get(session.winner, 0) + 1
            # A recorded winner always counts as having played
            if session.winner not in session.players:
                games[session.winner] = games.get(session.winner, 0) + 1

    standings = []
    for name, played in games.items():
        won = wins.get(name, 0)
        standings.append(
            PlayerStanding(
                name=name,
                wins=won,
                games=played,
                win_rate=won / played * 100 if played > 0 else 0.0,
            )
        )
    return sorted(standings, key=lambda s: (-s.wins, s.name))


def top_games(sessions: Iterable[GameSession], games: Iterable[Game], limit: int = TOP_LIST_LIMIT) -> List[GamePlayCount]:
    """Most played games with their last play date."""
    by_id = {g.id: g for g in games}
    counts: Dict[str, GamePlayCount] = {}
    for session in sessions:
        game = by_id.get(session.game_id)
        if game is None or not game.is_active:
            continue
        entry = counts.get(game.id)
        if entry is None:
            counts[game.id] = GamePlayCount(game_id=game.id, name=game.name, count=1, last_played=session.date)
        else:
            entry.count += 1
            entry.last_played = max(entry.last_played, session.date)
    ranked = sorted(counts.values(), key=lambda c: (-c.count, c.name))
    return ranked[:limit]


def location_counts(sessions: Iterable[GameSession]) -> List[LocationCount]:
    counts: Dict[str, int] = {}
    for session in sessions:
        if session.location:
            counts[session.location] = counts.get(session.location, 0) + 1
    return [
        LocationCount(location=loc, count=n)
        for loc, n in sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))
    ]


def overview(sessions: Iterable[GameSession], games: Iterable[Game]) -> GameOverview:
    sessions = list(sessions)
    players: Set[str] = set()
    durations: List[int] = []
    for session in sessions:
        players.update(session.players)
        if session.duration_min is not None:
            durations.append(session.duration_min)
    return GameOverview(
        games_count=sum(1 for g in games if g.is_active),
        sessions_count=len(sessions),
        unique_players_count=len(players),
        avg_duration=sum(durations) // len(durations) if durations else None,
    )
