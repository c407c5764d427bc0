"""Tests for automatic bonus progression."""

import pytest

from ruleset_core.systems.automatic_bonus import (
    AutomaticBonusLoadError,
    AutomaticBonusValues,
    AutomaticBonusVariant,
    apply_automatic_bonuses,
    bonus_values,
    load_bonus_table,
    potency_modifiers,
)
from ruleset_core.systems.modifiers import Modifier, ModifierType
from ruleset_core.systems.statistic import StatisticModifier


class TestBonusValues:
    """Level thresholds from the packaged table."""

    def test_level_one_has_nothing(self):
        assert bonus_values(1) == AutomaticBonusValues(attack=0, damage=0, ac=0, perception=0, save=0)

    @pytest.mark.parametrize(
        "level,expected",
        [
            (2, AutomaticBonusValues(attack=1, damage=0, ac=0, perception=0, save=0)),
            (5, AutomaticBonusValues(attack=1, damage=1, ac=1, perception=0, save=0)),
            (8, AutomaticBonusValues(attack=1, damage=1, ac=1, perception=1, save=1)),
            (10, AutomaticBonusValues(attack=2, damage=1, ac=1, perception=1, save=1)),
            (14, AutomaticBonusValues(attack=2, damage=2, ac=2, perception=2, save=2)),
            (19, AutomaticBonusValues(attack=3, damage=3, ac=3, perception=3, save=2)),
            (20, AutomaticBonusValues(attack=3, damage=3, ac=3, perception=3, save=3)),
        ],
    )
    def test_thresholds(self, level, expected):
        assert bonus_values(level) == expected

    def test_level_just_below_threshold(self):
        assert bonus_values(9).attack == 1
        assert bonus_values(17).ac == 2


class TestPotencyModifiers:
    """Modifiers produced per selector."""

    def test_none_variant_grants_nothing(self):
        assert potency_modifiers(20, AutomaticBonusVariant.NONE) == {}

    def test_zero_bonuses_omitted(self):
        assert potency_modifiers(1, "rules_as_written") == {}
        assert set(potency_modifiers(2, "rules_as_written")) == {"mundane-attack"}

    @pytest.mark.parametrize("variant", ["rules_as_written", "fundamental_potency"])
    def test_modifiers_at_level_twenty(self, variant):
        synthetics = potency_modifiers(20, variant)
        assert set(synthetics) == {"mundane-attack", "ac", "perception", "saving-throw"}

        save = synthetics["saving-throw"][0]
        assert save.name == "save-potency"
        assert save.value == 3
        assert save.type is ModifierType.POTENCY
        assert save.source == f"automatic-bonus:{variant}"

    def test_unknown_variant(self):
        with pytest.raises(ValueError):
            potency_modifiers(5, "sometimes")


class TestApplyAutomaticBonuses:
    """The variant producer goes through the ordinary add contract."""

    def test_adds_to_statistic(self):
        statistic = StatisticModifier("ac", [Modifier("armor", 1, ModifierType.ITEM)])
        added = apply_automatic_bonuses(statistic, "ac", 11, AutomaticBonusVariant.RULES_AS_WRITTEN)
        assert added == 1
        assert statistic.total == 3

    def test_potency_does_not_stack_with_itself(self):
        statistic = StatisticModifier("attack", [Modifier("weapon-potency", 1, ModifierType.POTENCY)])
        apply_automatic_bonuses(statistic, "mundane-attack", 10, "fundamental_potency")
        assert statistic.total == 2
        assert not statistic.is_enabled("weapon-potency")

    def test_repeated_application_is_idempotent(self):
        statistic = StatisticModifier("perception")
        assert apply_automatic_bonuses(statistic, "perception", 13, "rules_as_written") == 1
        assert apply_automatic_bonuses(statistic, "perception", 13, "rules_as_written") == 0
        assert statistic.total == 2

    def test_unknown_selector_adds_nothing(self):
        statistic = StatisticModifier("fortitude")
        assert apply_automatic_bonuses(statistic, "fortitude", 20, "rules_as_written") == 0


class TestLoadBonusTable:
    """Tests for loading the YAML table."""

    def test_packaged_table(self):
        table = load_bonus_table()
        assert table["attack"] == [(2, 1), (10, 2), (16, 3)]

    def test_custom_table(self, tmp_path):
        path = tmp_path / "abp.yaml"
        path.write_text(
            "tracks:\n"
            "  attack: [[1, 5]]\n"
            "  damage: [[1, 0]]\n"
            "  ac: [[1, 0]]\n"
            "  perception: [[1, 0]]\n"
            "  save: [[1, 0]]\n",
            encoding="utf-8",
        )
        table = load_bonus_table(path)
        assert bonus_values(1, table).attack == 5

    def test_missing_file(self, tmp_path):
        with pytest.raises(AutomaticBonusLoadError, match="File not found"):
            load_bonus_table(tmp_path / "missing.yaml")

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        with pytest.raises(AutomaticBonusLoadError, match="Empty"):
            load_bonus_table(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("tracks: [unclosed", encoding="utf-8")
        with pytest.raises(AutomaticBonusLoadError, match="YAML parsing error"):
            load_bonus_table(path)

    def test_missing_track(self, tmp_path):
        path = tmp_path / "partial.yaml"
        path.write_text("tracks:\n  attack: [[2, 1]]\n", encoding="utf-8")
        with pytest.raises(AutomaticBonusLoadError, match="Missing tracks"):
            load_bonus_table(path)

    def test_descending_levels(self, tmp_path):
        path = tmp_path / "descending.yaml"
        path.write_text(
            "tracks:\n"
            "  attack: [[10, 2], [2, 1]]\n"
            "  damage: [[1, 0]]\n"
            "  ac: [[1, 0]]\n"
            "  perception: [[1, 0]]\n"
            "  save: [[1, 0]]\n",
            encoding="utf-8",
        )
        with pytest.raises(AutomaticBonusLoadError, match="ascend"):
            load_bonus_table(path)


class TestAttackSelector:
    """Attack potency lands on the mundane attack selector."""

    def test_attack_potency_selector(self):
        synthetics = potency_modifiers(10, "rules_as_written")
        assert synthetics["mundane-attack"][0].name == "attack-potency"
        assert "attack" not in synthetics

    def test_plain_attack_selector_adds_nothing(self):
        statistic = StatisticModifier("attack")
        assert apply_automatic_bonuses(statistic, "attack", 10, "rules_as_written") == 0
