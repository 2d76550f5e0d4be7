"""Combat tuning loaded from rules.json."""
from __future__ import annotations

from dataclasses import fields
from pathlib import Path

from encore.data import paths
from encore.data.errors import DataValidationError
from encore.data.json_loader import load_json
from encore.domain.rules import CombatRules


class RulesRepository:
    """Loads a single CombatRules object; absent keys keep their defaults."""

    def __init__(self, base_path: Path | str | None = None) -> None:
        self._base_path = Path(base_path) if base_path is not None else None
        self._rules: CombatRules | None = None

    def get(self) -> CombatRules:
        if self._rules is None:
            self._rules = self._build(load_json(paths.get_definitions_path(self._base_path) / "rules.json"))
        return self._rules

    @staticmethod
    def _build(raw: object) -> CombatRules:
        if not isinstance(raw, dict):
            raise DataValidationError("rules.json must contain a top-level object.")
        known = {field.name: field for field in fields(CombatRules)}
        unknown = raw.keys() - known.keys()
        if unknown:
            raise DataValidationError(f"rules.json has unknown fields: {sorted(unknown)}")
        values: dict[str, object] = {}
        for key, value in raw.items():
            if key == "weaken_factor":
                if isinstance(value, bool) or not isinstance(value, (int, float)) or not 0 < value <= 1:
                    raise DataValidationError("rules.json weaken_factor must be a number in (0, 1].")
                values[key] = float(value)
                continue
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise DataValidationError(f"rules.json {key} must be a non-negative integer.")
            values[key] = value
        rules = CombatRules(**values)  # type: ignore[arg-type]
        for key in ("xp_per_level", "crit_reset", "max_bet"):
            if getattr(rules, key) < 1:
                raise DataValidationError(f"rules.json {key} must be at least 1.")
        return rules
