"""Core rules and mechanics that drive the Reelhouse studio simulation."""

from reelhouse_backend.game_logic.configuration import (
    BalanceConfiguration,
    BalanceDefaults,
    StudioOverrides,
    build_studio_configuration,
    get_default_balance_configuration,
)
from reelhouse_backend.game_logic.errors import (
    SnapshotRestoreError,
    UnknownCrisisError,
    UnknownDecisionError,
    UnknownOptionError,
)
from reelhouse_backend.game_logic.franchise import (
    SequelEligibility,
    SequelEligibilityCalculator,
)
from reelhouse_backend.game_logic.manager import StudioManager
from reelhouse_backend.game_logic.orchestration import StudioSession
from reelhouse_backend.game_logic.persistence import (
    InMemorySnapshotStore,
    SnapshotStore,
    StudioSnapshot,
)
from reelhouse_backend.game_logic.release import ReleaseSimulator
from reelhouse_backend.game_logic.results import (
    ActionApplied,
    ActionRejected,
    ActionResult,
    CrisisResolved,
    DecisionResolved,
    OptionalActionApplied,
    PhaseAdvanced,
    ScriptAcquired,
    ScriptPassed,
    SequelStarted,
    TalentAttached,
    WeekAdvanced,
)
from reelhouse_backend.game_logic.state import (
    Crisis,
    CrisisOption,
    DecisionItem,
    DecisionOption,
    DistributionOffer,
    MovieProject,
    NarrativeArc,
    ReleaseReport,
    ScriptPitch,
    StudioState,
    Talent,
)

__all__ = [
    "ActionApplied",
    "ActionRejected",
    "ActionResult",
    "BalanceConfiguration",
    "BalanceDefaults",
    "Crisis",
    "CrisisOption",
    "CrisisResolved",
    "DecisionItem",
    "DecisionOption",
    "DecisionResolved",
    "DistributionOffer",
    "InMemorySnapshotStore",
    "MovieProject",
    "NarrativeArc",
    "OptionalActionApplied",
    "PhaseAdvanced",
    "ReleaseReport",
    "ReleaseSimulator",
    "ScriptAcquired",
    "ScriptPassed",
    "ScriptPitch",
    "SequelEligibility",
    "SequelEligibilityCalculator",
    "SequelStarted",
    "SnapshotRestoreError",
    "SnapshotStore",
    "StudioManager",
    "StudioOverrides",
    "StudioSession",
    "StudioSnapshot",
    "StudioState",
    "Talent",
    "TalentAttached",
    "UnknownCrisisError",
    "UnknownDecisionError",
    "UnknownOptionError",
    "WeekAdvanced",
    "build_studio_configuration",
    "get_default_balance_configuration",
]
