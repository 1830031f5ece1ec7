"""Rotating script market."""

from __future__ import annotations

import logging

from reelhouse_backend.game_logic.seeds import MARKET_SIZE, PITCH_CATALOG, build_pitch
from reelhouse_backend.game_logic.state import ScriptPitch, StudioState  # noqa: TC001
from reelhouse_backend.shared.rng import DeterministicRandomService  # noqa: TC001

logger = logging.getLogger(__name__)

MIN_PITCH_SHELF_WEEKS = 3
MAX_PITCH_SHELF_WEEKS = 6


class ScriptMarket:
    """Age pitches off the market and restock it from the catalog."""

    def __init__(self, state: StudioState, rng: DeterministicRandomService) -> None:
        self._state = state
        self._rng = rng

    def tick(self, events: list[str]) -> list[ScriptPitch]:
        """Count every pitch down, drop the expired ones and restock."""
        expired: list[ScriptPitch] = []
        for pitch in list(self._state.script_market):
            pitch.expires_in_weeks -= 1
            if pitch.expires_in_weeks <= 0:
                self._state.script_market.remove(pitch)
                expired.append(pitch)
                events.append(f"{pitch.title} was taken off the market.")
        for pitch in self.refill():
            events.append(f"New script on the market: {pitch.title}.")
        return expired

    def refill(self) -> list[ScriptPitch]:
        """Top the market up to its standing size with unseen titles."""
        listed = {pitch.title for pitch in self._state.script_market}
        candidates = [t for t in PITCH_CATALOG if t.title not in listed]
        added: list[ScriptPitch] = []
        for template in self._rng.shuffle(candidates):
            if len(self._state.script_market) >= MARKET_SIZE:
                break
            pitch = build_pitch(
                template,
                pitch_id=self._state.next_id("script"),
                script_quality=self._rng.uniform(5.0, 8.2),
                concept_strength=self._rng.uniform(4.0, 9.0),
                expires_in_weeks=self._rng.randint(
                    MIN_PITCH_SHELF_WEEKS, MAX_PITCH_SHELF_WEEKS
                ),
            )
            self._state.script_market.append(pitch)
            added.append(pitch)
        if added:
            logger.debug("Script market restocked with %d pitch(es)", len(added))
        return added


__all__ = ["ScriptMarket"]
