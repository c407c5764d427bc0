"""
Automatic bonus progression.

A rule variant that grants potency bonuses by character level instead of
through magic items. The level thresholds live in ``data/automatic_bonus.yaml``.
The variant in play is always passed in explicitly; nothing here reads
settings.
"""

from dataclasses import dataclass
from enum import StrEnum
from functools import lru_cache
from pathlib import Path
from typing import Any

import structlog
import yaml

from ruleset_core.systems.modifiers import Modifier, ModifierType
from ruleset_core.systems.statistic import StatisticModifier

logger = structlog.get_logger(__name__)

DEFAULT_TABLE_PATH = Path(__file__).parent.parent / "data" / "automatic_bonus.yaml"

TRACKS = ("attack", "damage", "ac", "perception", "save")


class AutomaticBonusLoadError(Exception):
    """Raised when the bonus progression table cannot be loaded."""

    pass


class AutomaticBonusVariant(StrEnum):
    """Which automatic bonus progression rules are in play."""

    NONE = "none"
    RULES_AS_WRITTEN = "rules_as_written"
    FUNDAMENTAL_POTENCY = "fundamental_potency"


@dataclass(frozen=True)
class AutomaticBonusValues:
    """Bonuses granted at a given level."""

    attack: int
    damage: int  # extra weapon damage dice (devastating attacks)
    ac: int
    perception: int
    save: int


# selector -> (track, modifier name, label)
POTENCY_SELECTORS: dict[str, tuple[str, str, str]] = {
    "mundane-attack": ("attack", "attack-potency", "Attack Potency"),
    "ac": ("ac", "defense-potency", "Defense Potency"),
    "perception": ("perception", "perception-potency", "Perception Potency"),
    "saving-throw": ("save", "save-potency", "Save Potency"),
}


def _validate_track(name: str, steps: Any, file_path: Path) -> list[tuple[int, int]]:
    if not isinstance(steps, list) or not steps:
        raise AutomaticBonusLoadError(f"Track '{name}' must be a non-empty list in {file_path}")

    parsed: list[tuple[int, int]] = []
    for step in steps:
        if (
            not isinstance(step, list)
            or len(step) != 2
            or not all(isinstance(n, int) and not isinstance(n, bool) for n in step)
        ):
            raise AutomaticBonusLoadError(
                f"Track '{name}' has invalid step {step!r} in {file_path} "
                "(must be [level, bonus])"
            )
        parsed.append((step[0], step[1]))

    levels = [level for level, _ in parsed]
    if levels != sorted(levels):
        raise AutomaticBonusLoadError(f"Track '{name}' levels must ascend in {file_path}")

    return parsed


def load_bonus_table(file_path: Path | None = None) -> dict[str, list[tuple[int, int]]]:
    """
    Load the level thresholds for each bonus track.

    Args:
        file_path: YAML file to read; defaults to the packaged table

    Returns:
        Mapping of track name to ascending (min_level, bonus) steps

    Raises:
        AutomaticBonusLoadError: If the file is missing, unparsable or malformed
    """
    if file_path is None:
        file_path = DEFAULT_TABLE_PATH

    try:
        with open(file_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise AutomaticBonusLoadError(f"YAML parsing error in {file_path}: {e}") from e
    except FileNotFoundError as e:
        raise AutomaticBonusLoadError(f"File not found: {file_path}") from e

    if not data:
        raise AutomaticBonusLoadError(f"Empty YAML file: {file_path}")

    tracks = data.get("tracks") if isinstance(data, dict) else None
    if not isinstance(tracks, dict):
        raise AutomaticBonusLoadError(f"Missing 'tracks' mapping in {file_path}")

    missing = [track for track in TRACKS if track not in tracks]
    if missing:
        raise AutomaticBonusLoadError(f"Missing tracks {missing} in {file_path}")

    table = {track: _validate_track(track, tracks[track], file_path) for track in TRACKS}
    logger.debug("automatic_bonus_table_loaded", path=str(file_path))
    return table


@lru_cache
def _default_table() -> dict[str, list[tuple[int, int]]]:
    return load_bonus_table()


def _bonus_for_level(steps: list[tuple[int, int]], level: int) -> int:
    bonus = 0
    for min_level, step_bonus in steps:
        if level < min_level:
            break
        bonus = step_bonus
    return bonus


def bonus_values(
    level: int, table: dict[str, list[tuple[int, int]]] | None = None
) -> AutomaticBonusValues:
    """
    Look up every bonus granted at ``level``.

    Args:
        level: Character level
        table: Track table from :func:`load_bonus_table`; defaults to the packaged one

    Returns:
        AutomaticBonusValues for the level
    """
    if table is None:
        table = _default_table()
    return AutomaticBonusValues(**{track: _bonus_for_level(table[track], level) for track in TRACKS})


def potency_modifiers(
    level: int,
    variant: AutomaticBonusVariant | str,
    table: dict[str, list[tuple[int, int]]] | None = None,
) -> dict[str, list[Modifier]]:
    """
    Build the potency modifiers granted at ``level``, keyed by statistic selector.

    Selectors are "mundane-attack", "ac", "perception" and "saving-throw".
    Zero bonuses are omitted, and the "none" variant grants nothing.
    """
    variant = AutomaticBonusVariant(variant)
    if variant is AutomaticBonusVariant.NONE:
        return {}

    values = bonus_values(level, table)
    synthetics: dict[str, list[Modifier]] = {}
    for selector, (track, name, label) in POTENCY_SELECTORS.items():
        bonus = getattr(values, track)
        if bonus > 0:
            synthetics.setdefault(selector, []).append(
                Modifier(
                    name=name,
                    value=bonus,
                    type=ModifierType.POTENCY,
                    label=label,
                    source=f"automatic-bonus:{variant.value}",
                )
            )
    return synthetics


def apply_automatic_bonuses(
    statistic: StatisticModifier,
    selector: str,
    level: int,
    variant: AutomaticBonusVariant | str,
    table: dict[str, list[tuple[int, int]]] | None = None,
) -> int:
    """
    Add the potency modifiers for ``selector`` to a statistic.

    Goes through the statistic's ordinary ``add``, so an existing modifier with
    the same name is kept.

    Returns:
        Number of modifiers added
    """
    added = 0
    for modifier in potency_modifiers(level, variant, table).get(selector, []):
        if statistic.add(modifier):
            added += 1
    return added
