"""WeekSet: unveränderliche, sortierte Menge von Semesterwochen."""

from typing import Iterable, Iterator


class WeekSet:
    """Menge von Semesterwochen (1-basiert), immer aufsteigend und ohne Duplikate.

    Eine leere Menge ist als Zwischenstand beim Bearbeiten erlaubt; für einen
    aktiven Eintrag ist sie ungültig (geprüft in scheduling.entries).

    Lässt sich direkt als Pydantic-Feld verwenden und wird als Liste serialisiert.
    """

    __slots__ = ("_weeks",)

    def __init__(self, weeks: Iterable[int] = ()) -> None:
        normalized = set()
        for w in weeks:
            if isinstance(w, bool) or not isinstance(w, int):
                raise TypeError(f"Woche muss eine Ganzzahl sein, nicht {w!r}")
            if w < 1:
                raise ValueError(f"Woche {w} ungültig (Wochen beginnen bei 1)")
            normalized.add(w)
        self._weeks: tuple[int, ...] = tuple(sorted(normalized))

    # ─── Konstruktion ───

    @classmethod
    def range(cls, first: int, last: int) -> "WeekSet":
        """Alle Wochen von first bis einschließlich last."""
        return cls(range(first, last + 1))

    @classmethod
    def from_mask(cls, mask: int) -> "WeekSet":
        """Umkehrung von to_mask(): Bit i-1 gesetzt ⇔ Woche i enthalten."""
        if mask < 0:
            raise ValueError("Bitmaske darf nicht negativ sein")
        return cls(i + 1 for i in range(mask.bit_length()) if mask >> i & 1)

    # ─── Abfragen ───

    def to_list(self) -> list[int]:
        return list(self._weeks)

    def to_mask(self) -> int:
        """Kompakte Bitmasken-Darstellung (Bit 0 = Woche 1)."""
        mask = 0
        for w in self._weeks:
            mask |= 1 << (w - 1)
        return mask

    def within(self, semester_length: int) -> bool:
        """True wenn alle Wochen in [1, semester_length] liegen."""
        return not self._weeks or self._weeks[-1] <= semester_length

    @property
    def first(self) -> int | None:
        return self._weeks[0] if self._weeks else None

    @property
    def last(self) -> int | None:
        return self._weeks[-1] if self._weeks else None

    # ─── Mengenoperationen ───

    def with_week(self, week: int) -> "WeekSet":
        return WeekSet(self._weeks + (week,))

    def without_week(self, week: int) -> "WeekSet":
        return WeekSet(w for w in self._weeks if w != week)

    def isdisjoint(self, other: "WeekSet") -> bool:
        return not (self.to_mask() & other.to_mask())

    def __or__(self, other: "WeekSet") -> "WeekSet":
        if not isinstance(other, WeekSet):
            return NotImplemented
        return WeekSet(self._weeks + other._weeks)

    def __and__(self, other: "WeekSet") -> "WeekSet":
        if not isinstance(other, WeekSet):
            return NotImplemented
        return WeekSet.from_mask(self.to_mask() & other.to_mask())

    # ─── Dunder ───

    def __iter__(self) -> Iterator[int]:
        return iter(self._weeks)

    def __len__(self) -> int:
        return len(self._weeks)

    def __contains__(self, week: object) -> bool:
        return week in self._weeks

    def __bool__(self) -> bool:
        return bool(self._weeks)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WeekSet):
            return NotImplemented
        return self._weeks == other._weeks

    def __hash__(self) -> int:
        return hash(self._weeks)

    def __repr__(self) -> str:
        return f"WeekSet({list(self._weeks)})"

    # ─── Pydantic-Integration ───

    @classmethod
    def _coerce(cls, value) -> "WeekSet":
        if isinstance(value, WeekSet):
            return value
        if isinstance(value, (str, bytes)):
            raise ValueError("Wochen müssen als Liste von Ganzzahlen angegeben werden")
        try:
            return cls(value)
        except TypeError as e:
            raise ValueError(str(e)) from e

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type, handler):
        from pydantic_core import core_schema

        return core_schema.no_info_plain_validator_function(
            cls._coerce,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda ws: ws.to_list()
            ),
        )
