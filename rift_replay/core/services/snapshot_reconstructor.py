"""Snapshot carry-forward reconstruction.

Full snapshots arrive only every few seconds while kills happen at any time.
The reconstructor keeps the last snapshot and a set of live kill/death/assist
counters; every frame gets the last snapshot with the live counters written
over it, so combat stats never lag behind or regress even when positions and
gold are a few seconds stale.

Snapshots are immutable models: carrying one forward shares it, and only
the participants whose counters differ get a copy.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from rift_replay.contracts.common import TeamId
from rift_replay.contracts.events import KillEvent, RawEvent
from rift_replay.contracts.match import (
    FrameSnapshot,
    ItemSlot,
    Participant,
    ParticipantFrameState,
    TeamAggregate,
)
from rift_replay.core.utils.payload import as_float, as_int, parse_position

logger = logging.getLogger(__name__)

MAX_PARTICIPANTS = 10


@dataclass
class CombatCounters:
    kills: int = 0
    deaths: int = 0
    assists: int = 0


def champion_id_from_name(champion_name: str | None) -> int:
    """Stable numeric ID for feeds that only carry champion names."""
    if not champion_name:
        return 0
    return sum(ord(char) for char in champion_name)


def _team_for(participant_id: int, raw_team: Any) -> int:
    team_id = as_int(raw_team)
    if team_id in (TeamId.BLUE.value, TeamId.RED.value):
        return team_id
    # Feed convention: ids 1-5 play blue, 6-10 play red
    return TeamId.BLUE.value if participant_id <= 5 else TeamId.RED.value


def parse_participant(raw: Any) -> Participant | None:
    """Static identity from one snapshot entry; None when the entry has no usable ID."""
    if not isinstance(raw, dict):
        return None
    participant_id = as_int(raw.get("participantID"))
    if not 1 <= participant_id <= MAX_PARTICIPANTS:
        return None

    champion_name = raw.get("championName") or "Unknown"
    champion_id = as_int(raw.get("championID")) or champion_id_from_name(raw.get("championName"))
    return Participant(
        participant_id=participant_id,
        summoner_name=str(
            raw.get("summonerName") or raw.get("playerName") or f"Player {participant_id}"
        ),
        team_id=_team_for(participant_id, raw.get("teamID")),
        champion_id=champion_id,
        champion_name=str(champion_name),
    )


def _stats_map(raw_stats: Any) -> dict[str, float]:
    if not isinstance(raw_stats, list):
        return {}
    stats: dict[str, float] = {}
    for stat in raw_stats:
        if isinstance(stat, dict) and isinstance(stat.get("name"), str):
            stats[stat["name"]] = as_float(stat.get("value"))
    return stats


def _parse_items(raw_items: Any) -> list[ItemSlot]:
    if not isinstance(raw_items, list):
        return []
    items = []
    for raw in raw_items:
        if not isinstance(raw, dict):
            continue
        item_id = as_int(raw.get("itemID"))
        if item_id > 0:
            items.append(
                ItemSlot(
                    item_id=item_id,
                    slot=as_int(raw.get("inventorySlot")),
                    stacks=as_int(raw.get("itemStacks"), default=1) or 1,
                )
            )
    return items


def _first_present(raw: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if raw.get(key) is not None:
            return raw[key]
    return None


def parse_participant_state(raw: dict[str, Any], identity: Participant) -> ParticipantFrameState:
    """Per-frame state of one snapshot entry. Combat counters start at zero."""
    stats = _stats_map(raw.get("stats"))
    return ParticipantFrameState(
        participant_id=identity.participant_id,
        summoner_name=identity.summoner_name,
        team_id=identity.team_id,
        champion_id=identity.champion_id,
        champion_name=identity.champion_name,
        position=parse_position(raw.get("position")),
        level=as_int(raw.get("level"), default=1) or 1,
        current_gold=as_float(raw.get("currentGold")),
        total_gold=as_float(raw.get("totalGold")),
        xp=as_float(_first_present(raw, "XP", "xp")) or stats.get("XP", 0.0),
        total_damage_dealt=stats.get("TOTAL_DAMAGE_DEALT_TO_CHAMPIONS")
        or as_float(raw.get("totalDamageDealtToChampions")),
        total_damage_taken=stats.get("TOTAL_DAMAGE_TAKEN") or as_float(raw.get("totalDamageTaken")),
        total_heal=stats.get("TOTAL_HEAL_ON_TEAMMATES", 0.0),
        vision_score=stats.get("VISION_SCORE") or as_float(raw.get("visionScore")),
        items=_parse_items(raw.get("items")),
    )


def _parse_team(raw: Any, participants: list[ParticipantFrameState]) -> TeamAggregate | None:
    if not isinstance(raw, dict):
        return None
    team_id = as_int(_first_present(raw, "teamID", "teamId"))
    if team_id not in (TeamId.BLUE.value, TeamId.RED.value):
        return None
    total_gold = _first_present(raw, "totalGold")
    return TeamAggregate(
        team_id=team_id,
        total_gold=(
            as_float(total_gold)
            if total_gold is not None
            else sum(p.total_gold for p in participants if p.team_id == team_id)
        ),
        towers=as_int(_first_present(raw, "towerKills", "towers")),
        inhibitors=as_int(_first_present(raw, "inhibKills", "inhibitors")),
        dragons=as_int(_first_present(raw, "dragonKills", "dragons")),
        barons=as_int(_first_present(raw, "baronKills", "barons")),
    )


class SnapshotReconstructor:
    """Carry-forward state of one reconstruction pass.

    Usage per second ``t``: :meth:`apply_kill` for every kill of ``t`` in
    stream order, :meth:`apply_snapshot` for the snapshot(s) of ``t`` (the last
    one wins), then :meth:`current_snapshot` for the frame.
    """

    def __init__(self) -> None:
        self._roster: dict[int, Participant] = {}
        self._counters: dict[int, CombatCounters] = {}
        self._last_snapshot: FrameSnapshot | None = None
        self._current: FrameSnapshot | None = None

    @property
    def roster(self) -> dict[int, Participant]:
        return dict(self._roster)

    @property
    def participants(self) -> list[Participant]:
        return [self._roster[pid] for pid in sorted(self._roster)]

    @property
    def has_roster(self) -> bool:
        return bool(self._roster)

    @property
    def last_snapshot(self) -> FrameSnapshot | None:
        return self._last_snapshot

    def counters_for(self, participant_id: int) -> CombatCounters | None:
        counters = self._counters.get(participant_id)
        if counters is None:
            return None
        return CombatCounters(counters.kills, counters.deaths, counters.assists)

    def register_roster(self, event: RawEvent) -> bool:
        """Fix the participant set from the first snapshot that lists participants.

        Returns True when this call established the roster.
        """
        if self._roster:
            return False
        raw_participants = event.payload.get("participants")
        if not isinstance(raw_participants, list):
            return False

        roster: dict[int, Participant] = {}
        for raw in raw_participants:
            participant = parse_participant(raw)
            if participant is not None and participant.participant_id not in roster:
                roster[participant.participant_id] = participant
        if not roster:
            return False

        self._roster = roster
        self._counters = {pid: CombatCounters() for pid in roster}
        logger.debug("Roster fixed with %d participants", len(roster))
        return True

    def apply_kill(self, kill: KillEvent) -> None:
        """Fold one kill into the live counters. Unknown IDs are ignored."""
        changed = False
        if kill.killer_id in self._counters:
            self._counters[kill.killer_id].kills += 1
            changed = True
        if kill.victim_id in self._counters:
            self._counters[kill.victim_id].deaths += 1
            changed = True
        for assist_id in kill.assist_ids:
            if assist_id in self._counters:
                self._counters[assist_id].assists += 1
                changed = True
        if changed:
            self._current = None

    def apply_snapshot(self, event: RawEvent) -> None:
        """Replace the carried snapshot with the one in ``event``."""
        raw_participants = event.payload.get("participants")
        states: list[ParticipantFrameState] = []
        seen: set[int] = set()
        for raw in raw_participants if isinstance(raw_participants, list) else []:
            if not isinstance(raw, dict):
                continue
            participant_id = as_int(raw.get("participantID"))
            identity = self._roster.get(participant_id)
            if identity is None or participant_id in seen:
                continue
            seen.add(participant_id)
            states.append(parse_participant_state(raw, identity))
        states.sort(key=lambda state: state.participant_id)

        teams: dict[int, TeamAggregate] = {}
        raw_teams = event.payload.get("teams")
        for raw in raw_teams if isinstance(raw_teams, list) else []:
            team = _parse_team(raw, states)
            if team is not None:
                teams.setdefault(team.team_id, team)
        for team_id in sorted({p.team_id for p in self._roster.values()}):
            if team_id not in teams:
                teams[team_id] = TeamAggregate(
                    team_id=team_id,
                    total_gold=sum(s.total_gold for s in states if s.team_id == team_id),
                )

        self._last_snapshot = FrameSnapshot(
            game_time_ms=event.game_time_ms,
            participants=states,
            teams=[teams[team_id] for team_id in sorted(teams)],
        )
        self._current = None

    def current_snapshot(self) -> FrameSnapshot | None:
        """Last snapshot with live combat counters; None before any snapshot."""
        if self._last_snapshot is None:
            return None
        if self._current is not None:
            return self._current

        participants = []
        for state in self._last_snapshot.participants:
            counters = self._counters.get(state.participant_id, CombatCounters())
            if (state.kills, state.deaths, state.assists) != (
                counters.kills,
                counters.deaths,
                counters.assists,
            ):
                state = state.model_copy(
                    update={
                        "kills": counters.kills,
                        "deaths": counters.deaths,
                        "assists": counters.assists,
                    }
                )
            participants.append(state)

        teams = []
        for team in self._last_snapshot.teams:
            members = [p for p in self._roster.values() if p.team_id == team.team_id]
            teams.append(
                team.model_copy(
                    update={
                        "kills": sum(self._counters[p.participant_id].kills for p in members),
                        "deaths": sum(self._counters[p.participant_id].deaths for p in members),
                        "assists": sum(self._counters[p.participant_id].assists for p in members),
                    }
                )
            )

        self._current = self._last_snapshot.model_copy(
            update={"participants": tuple(participants), "teams": tuple(teams)}
        )
        return self._current
