from collections import Counter
from typing import Iterable, List, Optional, Sequence

from echo.mood.schemas import EnergyLevel, MoodEnergyEntryBase, MoodLevel


def _most_common(levels: Iterable, order: Iterable):
    counts = Counter(levels)
    if not counts:
        return None
    best = max(counts.values())
    # Ties go to the level declared first in the enum.
    for level in order:
        if counts.get(level) == best:
            return level
    return None


def most_common_mood(entries: Sequence[MoodEnergyEntryBase]) -> Optional[MoodLevel]:
    return _most_common((e.mood_level for e in entries), MoodLevel)


def most_common_energy(entries: Sequence[MoodEnergyEntryBase]) -> Optional[EnergyLevel]:
    return _most_common((e.energy_level for e in entries), EnergyLevel)


def most_recent_entries(entries: Sequence[MoodEnergyEntryBase], limit: int = 5) -> List[MoodEnergyEntryBase]:
    return sorted(entries, key=lambda e: e.created_at, reverse=True)[:limit]
