"""FastAPI web application for cadence.

A thin JSON surface over the engine: every response is recomputed from the
database on request.
"""

from datetime import date, timedelta
from typing import Dict, List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from pydantic import BaseModel, Field, field_validator
from sqlalchemy.orm import Session

from cadence.database.database import get_db
from cadence.database.store import TrackerStore
from cadence.engine import analytics, games as games_engine, status as status_engine, streaks
from cadence.engine.calendar import Clock, SystemClock, month_grid, week_start
from cadence.engine.collection import collection_statistics, set_progress
from cadence.models.analytics import (
    ActivitySummary,
    DayStatus,
    DayStatusEntry,
    PeriodStatistics,
    WeekBucket,
)
from cadence.models.collection import CollectibleItem, CollectionSet, CollectionStatistics, SetProgress
from cadence.models.constants import DEFAULT_ANALYTICS_DAYS, DEFAULT_WEEKS_BACK
from cadence.models.errors import InvalidScheduleError
from cadence.models.game import Game, GameOverview, GamePlayCount, GameSession, LocationCount, PlayerStanding
from cadence.models.instance import Instance, InstanceStatus
from cadence.models.period import DateRange
from cadence.models.record import TrackedRecord
from cadence.models.recurrence import DaySchedulePreset, RecurrenceFrequency, RecurrenceRule, Weekday, normalize_time

API_VERSION = "0.1.0"

app = FastAPI(
    title="cadence API",
    description="Schedules, adherence and streaks for recurring trackers",
    version=API_VERSION,
)


def get_clock() -> Clock:
    return SystemClock()


def get_store(db: Session = Depends(get_db), clock: Clock = Depends(get_clock)) -> TrackerStore:
    return TrackerStore(db, clock=clock)


# Request models
class RecordCreateRequest(BaseModel):
    """Create a tracked record. Give either `frequency` or `preset`."""
    name: str = Field(..., min_length=1)
    dosage: Optional[str] = None
    notes: Optional[str] = None
    frequency: Optional[RecurrenceFrequency] = None
    preset: Optional[DaySchedulePreset] = None
    weekdays: List[Weekday] = Field(default_factory=list)
    active_from: date
    active_until: Optional[date] = None
    times: List[str] = Field(default_factory=list)


class InstanceRef(BaseModel):
    parent_id: str
    date: date
    time: str

    @field_validator("time")
    @classmethod
    def _normalize_time(cls, v):
        try:
            return normalize_time(v)
        except InvalidScheduleError as e:
            raise ValueError(str(e))


class InstanceStatusRequest(InstanceRef):
    status: InstanceStatus


class MarkAllRequest(BaseModel):
    status: InstanceStatus
    record_id: Optional[str] = None


class CollectionStatsRequest(BaseModel):
    items: List[CollectibleItem] = Field(default_factory=list)
    sets: List[CollectionSet] = Field(default_factory=list)


class GameStatsRequest(BaseModel):
    games: List[Game] = Field(default_factory=list)
    sessions: List[GameSession] = Field(default_factory=list)
    weeks_back: int = Field(DEFAULT_WEEKS_BACK, ge=1)
    reference_date: Optional[date] = None


# Response models
class RecordResponse(BaseModel):
    record: TrackedRecord


class RecordListResponse(BaseModel):
    records: List[TrackedRecord]
    count: int


class DayResponse(BaseModel):
    date: date
    status: DayStatus
    summary: PeriodStatistics
    instances: List[Instance]


class MarkAllResponse(BaseModel):
    updated: int
    status: DayStatus


class InstanceResponse(BaseModel):
    instance: Instance


class CalendarResponse(BaseModel):
    month: date
    days: List[DayStatusEntry]


class RecordBreakdownEntry(BaseModel):
    record_id: str
    name: str
    statistics: PeriodStatistics


class AnalyticsResponse(BaseModel):
    period: DateRange
    statistics: PeriodStatistics
    by_record: List[RecordBreakdownEntry]
    daily: List[DayStatusEntry]


class HistoryResponse(BaseModel):
    record_id: str
    period: DateRange
    statistics: PeriodStatistics
    instances: List[Instance]


class UpcomingResponse(BaseModel):
    instances: List[Instance]
    names: Dict[str, str] = Field(default_factory=dict, description="Map of parent_id to record name")


class StreaksResponse(BaseModel):
    longest_streak: int
    current_streak: int
    summary: ActivitySummary
    weekly: List[WeekBucket]


class CollectionStatsResponse(BaseModel):
    statistics: CollectionStatistics
    sets: List[SetProgress]


class GameStatsResponse(BaseModel):
    overview: GameOverview
    players: List[PlayerStanding]
    top_games: List[GamePlayCount]
    locations: List[LocationCount]
    weekly: List[WeekBucket]


def _require_record(store: TrackerStore, record_id: str) -> TrackedRecord:
    record = store.get_record(record_id)
    if record is None:
        raise HTTPException(status_code=404, detail=f"Record {record_id} not found")
    return record


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "version": API_VERSION}


def _build_rule(request: RecordCreateRequest) -> RecurrenceRule:
    if request.preset is None and request.frequency is None:
        raise HTTPException(status_code=422, detail="Either frequency or preset is required")
    if request.preset is not None and request.frequency is not None:
        raise HTTPException(status_code=422, detail="Give either frequency or preset, not both")
    try:
        if request.preset is not None:
            rule = RecurrenceRule.from_preset(
                request.preset,
                active_from=request.active_from,
                active_until=request.active_until,
                times=request.times,
                weekdays=request.weekdays,
            )
        else:
            rule = RecurrenceRule(
                frequency=request.frequency,
                weekdays=request.weekdays,
                active_from=request.active_from,
                active_until=request.active_until,
                times=request.times,
            )
    except InvalidScheduleError as e:
        raise HTTPException(status_code=422, detail=f"Invalid schedule: {str(e)}")
    return rule


@app.post("/records", response_model=RecordResponse, status_code=201)
def create_record(request: RecordCreateRequest, store: TrackerStore = Depends(get_store)):
    """Create a tracked record with its schedule."""
    rule = _build_rule(request)
    record = store.create_record(name=request.name, rule=rule, dosage=request.dosage, notes=request.notes)
    return RecordResponse(record=record)


@app.get("/records", response_model=RecordListResponse)
def list_records(store: TrackerStore = Depends(get_store)):
    records = store.list_recurring_definitions()
    return RecordListResponse(records=records, count=len(records))


@app.get("/records/{record_id}", response_model=RecordResponse)
def get_record(record_id: str, store: TrackerStore = Depends(get_store)):
    return RecordResponse(record=_require_record(store, record_id))


@app.put("/records/{record_id}", response_model=RecordResponse)
def update_record(record_id: str, request: RecordCreateRequest, store: TrackerStore = Depends(get_store)):
    """Replace a record's details and schedule; statuses already marked are kept."""
    _require_record(store, record_id)
    rule = _build_rule(request)
    record = store.update_record(
        record_id, name=request.name, rule=rule, dosage=request.dosage, notes=request.notes
    )
    return RecordResponse(record=record)


@app.delete("/records/{record_id}")
def delete_record(record_id: str, store: TrackerStore = Depends(get_store)):
    if not store.soft_delete_record(record_id):
        raise HTTPException(status_code=404, detail=f"Record {record_id} not found")
    return {"deleted": True, "record_id": record_id}


@app.get("/records/{record_id}/history", response_model=HistoryResponse)
def record_history(
    record_id: str,
    days: int = Query(DEFAULT_ANALYTICS_DAYS, ge=1),
    store: TrackerStore = Depends(get_store),
):
    """Instances of one record over the last `days` days, newest first."""
    _require_record(store, record_id)
    period = DateRange.last_n_days(days, store.clock.today())
    instances = store.instances_in_range(period, record_id=record_id)
    newest_first = sorted(instances, key=lambda i: (i.date, i.time), reverse=True)
    return HistoryResponse(
        record_id=record_id,
        period=period,
        statistics=analytics.statistics(instances, period),
        instances=newest_first,
    )


@app.get("/days/{day}", response_model=DayResponse)
def get_day(day: date, store: TrackerStore = Depends(get_store)):
    """Instances due on a day, with the day status and counts."""
    instances = store.instances_on(day)
    return DayResponse(
        date=day,
        status=status_engine.day_status(instances),
        summary=analytics.statistics(instances, DateRange.single(day)),
        instances=instances,
    )


@app.post("/days/{day}/mark-all", response_model=MarkAllResponse)
def mark_all(day: date, request: MarkAllRequest, store: TrackerStore = Depends(get_store)):
    """Mark every instance on a day (status `unmarked` resets the day)."""
    if request.record_id is not None:
        _require_record(store, request.record_id)
    updated = store.mark_all_for_day(day, request.status, record_id=request.record_id)
    return MarkAllResponse(updated=updated, status=store.day_status(day))


@app.post("/instances/cycle", response_model=InstanceResponse)
def cycle_instance(request: InstanceRef, store: TrackerStore = Depends(get_store)):
    """Advance one instance: unmarked -> completed -> missed -> unmarked."""
    instance = store.cycle_instance(request.parent_id, request.date, request.time)
    if instance is None:
        raise HTTPException(status_code=404, detail="No such scheduled instance")
    return InstanceResponse(instance=instance)


@app.put("/instances/status", response_model=InstanceResponse)
def set_instance_status(request: InstanceStatusRequest, store: TrackerStore = Depends(get_store)):
    instance = store.set_instance_status(request.parent_id, request.date, request.time, request.status)
    if instance is None:
        raise HTTPException(status_code=404, detail="No such scheduled instance")
    return InstanceResponse(instance=instance)


@app.get("/calendar/{day}", response_model=CalendarResponse)
def calendar_month(day: date, store: TrackerStore = Depends(get_store)):
    """Day statuses for the six-week grid around the month containing `day`."""
    grid = month_grid(day)
    period = DateRange(start=grid[0], end=grid[-1])
    return CalendarResponse(
        month=day.replace(day=1),
        days=status_engine.day_statuses(store.instances_in_range(period), period),
    )


@app.get("/analytics", response_model=AnalyticsResponse)
def get_analytics(days: int = Query(DEFAULT_ANALYTICS_DAYS, ge=1), store: TrackerStore = Depends(get_store)):
    """Overall adherence, per-record ranking and the daily overview."""
    period = DateRange.last_n_days(days, store.clock.today())
    records = store.list_recurring_definitions()
    names = {r.id: r.name for r in records}
    instances = store.instances_in_range(period)

    breakdown = analytics.per_record_breakdown(instances, period, record_ids=[r.id for r in records])
    ranked = analytics.rank_breakdown(breakdown, names)
    return AnalyticsResponse(
        period=period,
        statistics=analytics.statistics(instances, period),
        by_record=[
            RecordBreakdownEntry(record_id=r.record_id, name=names.get(r.record_id, ""), statistics=r.statistics)
            for r in ranked
        ],
        daily=status_engine.day_statuses(instances, period),
    )


@app.get("/upcoming", response_model=UpcomingResponse)
def upcoming(store: TrackerStore = Depends(get_store)):
    """Unmarked instances due in the next 24 hours."""
    instances = store.upcoming()
    names = {r.id: r.name for r in store.list_recurring_definitions()}
    return UpcomingResponse(instances=instances, names={i.parent_id: names.get(i.parent_id, "") for i in instances})


@app.get("/streaks", response_model=StreaksResponse)
def get_streaks(
    days: int = Query(DEFAULT_ANALYTICS_DAYS, ge=1),
    weeks_back: int = Query(DEFAULT_WEEKS_BACK, ge=1),
    store: TrackerStore = Depends(get_store),
):
    """Streaks and trends over completed instances.

    `longest_streak` and `summary` cover the last `days` days; `current_streak`
    follows the ongoing run as far back as it goes.
    """
    today = store.clock.today()
    period = DateRange.last_n_days(days, today)
    summary = streaks.activity_summary(store.completed_series(period), period, today=today)

    weeks = DateRange(start=week_start(today) - timedelta(weeks=weeks_back - 1), end=today)
    completed = [i for i in store.instances_in_range(weeks) if i.status == InstanceStatus.COMPLETED]
    return StreaksResponse(
        longest_streak=summary.longest_streak,
        current_streak=store.current_streak(today),
        summary=summary,
        weekly=streaks.weekly_buckets(completed, weeks_back, today),
    )


@app.post("/stats/collection", response_model=CollectionStatsResponse)
def collection_stats(request: CollectionStatsRequest):
    """Totals, profit/loss and set completion for a collection snapshot."""
    return CollectionStatsResponse(
        statistics=collection_statistics(request.items),
        sets=[set_progress(s, request.items) for s in request.sets],
    )


@app.post("/stats/games", response_model=GameStatsResponse)
def game_stats(request: GameStatsRequest, clock: Clock = Depends(get_clock)):
    """Board-game log statistics for a snapshot of games and sessions."""
    reference = request.reference_date or clock.today()
    return GameStatsResponse(
        overview=games_engine.overview(request.sessions, request.games),
        players=games_engine.player_standings(request.sessions),
        top_games=games_engine.top_games(request.sessions, request.games),
        locations=games_engine.location_counts(request.sessions),
        weekly=streaks.weekly_buckets(request.sessions, request.weeks_back, reference),
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
