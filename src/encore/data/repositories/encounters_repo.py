"""Scripted encounter repository."""
from __future__ import annotations

from typing import Dict

from encore.data.errors import DataValidationError
from encore.data.repositories.base import RepositoryBase
from encore.domain.defs import BattleOptions, EncounterDef

_OPTION_FIELDS = {
    "allow_bet",
    "allow_escape",
    "intro",
    "victory",
    "defeat",
    "reward_xp",
    "reward_gold",
    "reward_wager_points",
    "is_boss",
}


class EncountersRepository(RepositoryBase[EncounterDef]):
    """Loads encounter line-ups and their battle options."""

    def __init__(self, base_path=None) -> None:
        super().__init__("encounters.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, EncounterDef]:
        encounters: Dict[str, EncounterDef] = {}
        for raw_id, payload in raw.items():
            context = f"encounter '{raw_id}'"
            data = self._require_mapping(payload, context)
            self._assert_required(data, {"mode", "enemy_ids"}, context)
            self._assert_known(data, {"mode", "enemy_ids", "options"}, context)
            mode = self._require_str(data["mode"], f"{context} mode")
            if mode not in ("solo", "party"):
                raise DataValidationError(f"{context} mode must be 'solo' or 'party'.")
            enemy_ids = tuple(self._require_str_list(data["enemy_ids"], f"{context} enemy_ids"))
            if not enemy_ids:
                raise DataValidationError(f"{context} needs at least one enemy.")
            if mode == "solo" and len(enemy_ids) != 1:
                raise DataValidationError(f"{context} solo encounters face exactly one enemy.")
            options = self._parse_options(data.get("options", {}), context)
            encounters[raw_id] = EncounterDef(
                id=raw_id,
                mode=mode,  # type: ignore[arg-type]
                enemy_ids=enemy_ids,
                options=options,
            )
        return encounters

    def _parse_options(self, payload: object, context: str) -> BattleOptions:
        data = self._require_mapping(payload, f"{context} options")
        self._assert_known(data, _OPTION_FIELDS, f"{context} options")
        return BattleOptions(
            allow_bet=self._require_bool(data.get("allow_bet", False), f"{context} allow_bet"),
            allow_escape=self._require_bool(data.get("allow_escape", False), f"{context} allow_escape"),
            intro=tuple(self._require_str_list(data.get("intro", []), f"{context} intro")),
            victory=tuple(self._require_str_list(data.get("victory", []), f"{context} victory")),
            defeat=tuple(self._require_str_list(data.get("defeat", []), f"{context} defeat")),
            reward_xp=self._require_int(data.get("reward_xp", 0), f"{context} reward_xp"),
            reward_gold=self._require_int(data.get("reward_gold", 0), f"{context} reward_gold"),
            reward_wager_points=self._require_int(
                data.get("reward_wager_points", 0), f"{context} reward_wager_points"
            ),
            is_boss=self._require_bool(data.get("is_boss", False), f"{context} is_boss"),
        )
