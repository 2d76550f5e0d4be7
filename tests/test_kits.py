from __future__ import annotations

import pytest

from encore.domain.kits import KITS, kit_for


def test_every_archetype_has_a_kit() -> None:
    assert set(KITS) == {"idol", "street", "strategist", "pop"}
    assert {kit.base_attack for kit in KITS.values()} == {9, 10, 12}


def test_branch_tables() -> None:
    assert [move.key for move in kit_for("street").specials] == ["crew_strike", "steel_shield", "crew_wall"]
    assert [move.cost for move in kit_for("pop").specials] == [8, 12, 18]
    assert kit_for("idol").specials[0].requires_spell is True
    assert kit_for("idol").signature is not None


def test_only_the_silence_leaves_the_turn_open() -> None:
    free = [move.key for kit in KITS.values() for move in kit.specials if not move.consumes_turn]
    assert free == ["singing_ban"]


def test_unknown_archetype_raises() -> None:
    with pytest.raises(KeyError):
        kit_for("bard")
