"""Festival submissions and the annual awards ceremony."""

from __future__ import annotations

import logging

from reelhouse_backend.game_logic.balance import clamp
from reelhouse_backend.game_logic.configuration import (  # noqa: TC001
    BalanceConfiguration,
)
from reelhouse_backend.game_logic.progression import ArcManager  # noqa: TC001
from reelhouse_backend.game_logic.results import (
    ActionApplied,
    ActionRejected,
    rejected,
)
from reelhouse_backend.game_logic.state import (
    FestivalSubmission,
    MovieProject,
    StudioState,
)
from reelhouse_backend.shared.enums import (
    ChronicleCategory,
    ChronicleImpact,
    Festival,
    FestivalResult,
    ProjectPhase,
)
from reelhouse_backend.shared.events import ChronicleLog  # noqa: TC001
from reelhouse_backend.shared.rng import DeterministicRandomService  # noqa: TC001

logger = logging.getLogger(__name__)

FESTIVAL_ELIGIBLE_PHASES = frozenset(
    {ProjectPhase.POST_PRODUCTION, ProjectPhase.DISTRIBUTION}
)

# Harder festivals need a stronger film to be selected.
FESTIVAL_BARS: dict[Festival, float] = {
    Festival.CANNES: 7.4,
    Festival.SUNDANCE: 6.4,
    Festival.TORONTO: 6.9,
}

FESTIVAL_HYPE: dict[FestivalResult, float] = {
    FestivalResult.SELECTED: 8.0,
    FestivalResult.BUZZED: 3.0,
    FestivalResult.SNUBBED: -2.0,
}

AWARDS_WIN_HEAT = 3.0
AWARDS_NOMINATION_HEAT = 0.5


class FestivalCircuit:
    """Accept festival submissions and settle them a few weeks later."""

    def __init__(
        self,
        state: StudioState,
        chronicle: ChronicleLog,
        rng: DeterministicRandomService,
        configuration: BalanceConfiguration,
    ) -> None:
        self._state = state
        self._chronicle = chronicle
        self._rng = rng
        self._configuration = configuration

    def submit(
        self, project_id: str, festival: Festival
    ) -> ActionApplied | ActionRejected:
        """Enter *project_id* into *festival*; each film gets one submission."""
        project = self._state.find_project(project_id)
        if project is None:
            return rejected(f"Project '{project_id}' not found.")
        blockers: list[str] = []
        if project.phase not in FESTIVAL_ELIGIBLE_PHASES:
            blockers.append("Festivals take finished cuts in post or distribution.")
        if project.festival is not None:
            blockers.append(f"{project.title} already went to {project.festival}.")
        if blockers:
            return ActionRejected(
                message=f"Cannot submit {project.title}.", blockers=tuple(blockers)
            )
        project.festival = festival
        resolves = self._state.week + self._configuration.festival_resolution_weeks
        self._state.festival_submissions.append(
            FestivalSubmission(
                project_id=project.id,
                festival=festival,
                submitted_week=self._state.week,
                resolves_week=resolves,
            )
        )
        return ActionApplied(
            message=(
                f"{project.title} submitted to {festival}; "
                f"word in week {resolves}."
            ),
            project_id=project.id,
        )

    def resolve_due(self, events: list[str]) -> list[FestivalSubmission]:
        """Settle every submission whose decision week has arrived."""
        # Runs before the week counter moves, so compare with the week being entered.
        entering = self._state.week + 1
        due = [
            entry
            for entry in self._state.festival_submissions
            if entry.resolves_week <= entering
        ]
        for submission in due:
            self._state.festival_submissions.remove(submission)
            project = self._state.find_project(submission.project_id)
            if project is None:
                continue
            result = self._judge(project, submission.festival)
            project.festival_result = result
            project.hype = clamp(project.hype + FESTIVAL_HYPE[result], 0.0, 100.0)
            self._chronicle.record(
                week=self._state.week,
                category=ChronicleCategory.FESTIVAL_OUTCOME,
                headline=f"{project.title} {result} at {submission.festival}",
                project_title=project.title,
                impact=(
                    ChronicleImpact.NEGATIVE
                    if result is FestivalResult.SNUBBED
                    else ChronicleImpact.POSITIVE
                ),
            )
            events.append(f"{project.title} was {result} at {submission.festival}.")
        return due

    def _judge(self, project: MovieProject, festival: Festival) -> FestivalResult:
        strength = (
            project.script_quality * 0.7
            + project.concept_strength * 0.3
            + self._rng.uniform(-1.0, 1.0)
        )
        bar = FESTIVAL_BARS[festival]
        if strength >= bar:
            return FestivalResult.SELECTED
        if strength >= bar - 1.0:
            return FestivalResult.BUZZED
        return FestivalResult.SNUBBED


class AwardsCeremony:
    """Annual ceremony honouring the past year's releases."""

    def __init__(
        self,
        state: StudioState,
        chronicle: ChronicleLog,
        arcs: ArcManager,
        configuration: BalanceConfiguration,
    ) -> None:
        self._state = state
        self._chronicle = chronicle
        self._arcs = arcs
        self._configuration = configuration

    def is_due(self) -> bool:
        """Return ``True`` on the week a ceremony takes place."""
        interval = self._configuration.awards_interval_weeks
        return (self._state.week - 1) % interval == 0 and self._state.week > 1

    def hold(self, events: list[str]) -> list[MovieProject]:
        """Honour films released during the closing year."""
        interval = self._configuration.awards_interval_weeks
        season_start = self._state.week - interval
        honoured = [
            project
            for project in self._state.projects
            if project.release_report is not None
            and project.release_report.release_week >= season_start
            and (project.awards_nominations or 0) > 0
        ]
        for project in honoured:
            nominations = project.awards_nominations or 0
            wins = project.awards_wins or 0
            self._state.adjust_heat(
                wins * AWARDS_WIN_HEAT + nominations * AWARDS_NOMINATION_HEAT
            )
            self._chronicle.record(
                week=self._state.week,
                category=ChronicleCategory.AWARDS_OUTCOME,
                headline=(
                    f"{project.title}: {wins} win(s) from "
                    f"{nominations} nomination(s)"
                ),
                project_title=project.title,
                impact=(
                    ChronicleImpact.POSITIVE if wins else ChronicleImpact.NEUTRAL
                ),
            )
            events.append(f"{project.title} collected {wins} award(s).")
        self._arcs.on_awards()
        logger.info(
            "Awards held in week %s for %d film(s)", self._state.week, len(honoured)
        )
        return honoured


__all__ = ["AwardsCeremony", "FestivalCircuit"]
