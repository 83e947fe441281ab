"""Stapelauswahl von Semesterwochen (alle / ungerade / gerade / erste / zweite Hälfte).

Alle Funktionen sind rein: gleiche Eingaben liefern immer dieselbe WeekSet,
Seiteneffekte gibt es keine.
"""

from enum import Enum
from typing import Iterable, Optional

from models.week_set import WeekSet


class WeekPattern(str, Enum):
    ALL = "all"
    ODD = "odd"
    EVEN = "even"
    FIRST_HALF = "first-half"
    SECOND_HALF = "second-half"


PATTERN_LABELS: dict[WeekPattern, str] = {
    WeekPattern.ALL: "alle Wochen",
    WeekPattern.ODD: "ungerade Wochen",
    WeekPattern.EVEN: "gerade Wochen",
    WeekPattern.FIRST_HALF: "erste Semesterhälfte",
    WeekPattern.SECOND_HALF: "zweite Semesterhälfte",
}


def _check_length(n: int) -> None:
    if n < 0:
        raise ValueError(f"Semesterlänge darf nicht negativ sein: {n}")


def select_all(n: int) -> WeekSet:
    """{1..n}"""
    _check_length(n)
    return WeekSet(range(1, n + 1))


def select_odd(n: int) -> WeekSet:
    """Alle ungeraden Wochen ≤ n, Größe ceil(n/2)."""
    _check_length(n)
    return WeekSet(range(1, n + 1, 2))


def select_even(n: int) -> WeekSet:
    """Alle geraden Wochen ≤ n, Größe floor(n/2)."""
    _check_length(n)
    return WeekSet(range(2, n + 1, 2))


def select_first_half(n: int) -> WeekSet:
    """{1..floor(n/2)}"""
    _check_length(n)
    return WeekSet(range(1, n // 2 + 1))


def select_second_half(n: int) -> WeekSet:
    """{floor(n/2)+1..n} — bei ungeradem n liegt die mittlere Woche hier."""
    _check_length(n)
    return WeekSet(range(n // 2 + 1, n + 1))


def clear() -> WeekSet:
    return WeekSet()


def toggle(weeks: Iterable[int], week: int, semester_length: Optional[int] = None) -> WeekSet:
    """Fügt week hinzu, falls nicht enthalten, sonst wird sie entfernt.

    Mit semester_length wird geprüft, dass week in [1, semester_length] liegt.
    """
    if semester_length is not None and not 1 <= week <= semester_length:
        raise ValueError(f"Woche {week} liegt außerhalb von 1..{semester_length}")
    current = weeks if isinstance(weeks, WeekSet) else WeekSet(weeks)
    if week in current:
        return current.without_week(week)
    return current.with_week(week)


_SELECTORS = {
    WeekPattern.ALL: select_all,
    WeekPattern.ODD: select_odd,
    WeekPattern.EVEN: select_even,
    WeekPattern.FIRST_HALF: select_first_half,
    WeekPattern.SECOND_HALF: select_second_half,
}


def select_weeks(pattern: WeekPattern | str, n: int) -> WeekSet:
    """Erzeugt die WeekSet für ein benanntes Muster ("odd", "first-half", ...)."""
    return _SELECTORS[WeekPattern(pattern)](n)


def detect_pattern(weeks: WeekSet, n: int) -> Optional[WeekPattern]:
    """Gibt das Muster zurück, das genau diese Wochen erzeugt (oder None)."""
    if not weeks:
        return None
    for pattern, selector in _SELECTORS.items():
        if selector(n) == weeks:
            return pattern
    return None


def format_weeks(weeks: Iterable[int]) -> str:
    """Kompakte Darstellung zusammenhängender Bereiche: "1-10, 12, 14-16"."""
    ordered = list(weeks if isinstance(weeks, WeekSet) else WeekSet(weeks))
    if not ordered:
        return "—"
    parts: list[str] = []
    run_start = prev = ordered[0]
    for w in ordered[1:] + [None]:
        if w is not None and w == prev + 1:
            prev = w
            continue
        parts.append(str(run_start) if run_start == prev else f"{run_start}-{prev}")
        if w is not None:
            run_start = prev = w
    return ", ".join(parts)


def parse_weeks(text: str, n: int) -> WeekSet:
    """Liest Einzelwochen und Bereiche ("1,3,5-8"); Umkehrung von format_weeks.

    Mehrfach genannte Wochen zählen einmal. Teile, die keine Woche in [1, n]
    bezeichnen, werden ignoriert.
    """
    picked: set[int] = set()
    for part in text.split(","):
        first, sep, last = part.strip().partition("-")
        if not first.isdigit() or (sep and not last.isdigit()):
            continue
        lo, hi = int(first), int(last) if sep else int(first)
        picked.update(w for w in range(lo, hi + 1) if 1 <= w <= n)
    return WeekSet(picked)


def describe_weeks(weeks: WeekSet, n: int) -> str:
    """Lesbare Beschreibung, bevorzugt über das erkannte Muster.

    Beispiel: describe_weeks(select_odd(20), 20) → "ungerade Wochen (1-19)".
    Bereiche werden nur zusammengefasst, wenn sie lückenlos sind.
    """
    pattern = detect_pattern(weeks, n)
    if pattern is None:
        return format_weeks(weeks)
    if pattern in (WeekPattern.ODD, WeekPattern.EVEN):
        return f"{PATTERN_LABELS[pattern]} ({weeks.first}-{weeks.last})"
    return f"{PATTERN_LABELS[pattern]} ({format_weeks(weeks)})"
