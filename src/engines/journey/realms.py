"""
Realm Catalog - Themed, contiguous level ranges.

10 realms of 25 levels each cover the nominal journey (levels 1-250).
"""

from typing import Iterator, List, Sequence

from pydantic import BaseModel, ConfigDict

from src.engines.journey.errors import require_level


class RealmColors(BaseModel):
    """Visual theme tokens for a realm (hex colors)."""

    model_config = ConfigDict(frozen=True)

    primary: str
    secondary: str
    accent: str


class Realm(BaseModel):
    """A themed tier spanning the inclusive level range [start, end]."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    theme: str
    description: str
    colors: RealmColors
    start: int
    end: int

    @property
    def size(self) -> int:
        return self.end - self.start + 1

    def contains(self, level: int) -> bool:
        return self.start <= level <= self.end


class RealmCatalog:
    """
    Immutable, ordered realm table.

    The ranges must start at level 1 and follow each other without gaps or
    overlaps; this is checked once at construction.
    """

    def __init__(self, realms: Sequence[Realm]):
        if not realms:
            raise ValueError("Realm catalog cannot be empty")
        expected_start = 1
        for realm in realms:
            if realm.start != expected_start or realm.end < realm.start:
                raise ValueError(
                    f"Realm {realm.id} ({realm.name}) covers {realm.start}-{realm.end}, "
                    f"expected a range starting at {expected_start}"
                )
            expected_start = realm.end + 1
        self._realms = tuple(realms)

    def __iter__(self) -> Iterator[Realm]:
        return iter(self._realms)

    def __len__(self) -> int:
        return len(self._realms)

    @property
    def realms(self) -> List[Realm]:
        return list(self._realms)

    @property
    def first(self) -> Realm:
        return self._realms[0]

    @property
    def max_level(self) -> int:
        return self._realms[-1].end

    def realm_for_level(self, level: int) -> Realm:
        """
        Return the realm whose range contains `level`.

        Levels outside the catalog (past the last realm) resolve to the first
        realm. This is a tolerated extrapolation, not an error: the table is
        finite while the level space is not.
        """
        level = require_level(level)
        for realm in self._realms:
            if realm.contains(level):
                return realm
        return self._realms[0]


DEFAULT_REALMS: List[Realm] = [
    Realm(
        id=1,
        name="Awakening",
        theme="First Light",
        description="Your journey begins in the depths",
        colors=RealmColors(primary="#6B5B95", secondary="#402E7A", accent="#9D84B7"),
        start=1,
        end=25,
    ),
    Realm(
        id=2,
        name="Breath",
        theme="Steady Rhythm",
        description="Find your center through breathing",
        colors=RealmColors(primary="#4A90A4", secondary="#2E5266", accent="#7EBDCE"),
        start=26,
        end=50,
    ),
    Realm(
        id=3,
        name="Stillness",
        theme="Inner Peace",
        description="Embrace the quiet within",
        colors=RealmColors(primary="#3D8B7C", secondary="#2D5F52", accent="#5EBAA8"),
        start=51,
        end=75,
    ),
    Realm(
        id=4,
        name="Clarity",
        theme="Open Eyes",
        description="See clearly without judgment",
        colors=RealmColors(primary="#5BA3BF", secondary="#3E6F85", accent="#82C4DB"),
        start=76,
        end=100,
    ),
    Realm(
        id=5,
        name="Flow",
        theme="Effortless Motion",
        description="Move like water through obstacles",
        colors=RealmColors(primary="#8B5A9B", secondary="#5A3D66", accent="#B87DD1"),
        start=101,
        end=125,
    ),
    Realm(
        id=6,
        name="Discipline",
        theme="Iron Will",
        description="Forge yourself through repetition",
        colors=RealmColors(primary="#A85A85", secondary="#7A3D5E", accent="#D17AAF"),
        start=126,
        end=150,
    ),
    Realm(
        id=7,
        name="Resilience",
        theme="Unbreakable",
        description="Bend but never break",
        colors=RealmColors(primary="#D14471", secondary="#A82E52", accent="#E57A99"),
        start=151,
        end=175,
    ),
    Realm(
        id=8,
        name="Insight",
        theme="Deep Understanding",
        description="See the patterns beneath",
        colors=RealmColors(primary="#D17A99", secondary="#A85A7A", accent="#E5A3BF"),
        start=176,
        end=200,
    ),
    Realm(
        id=9,
        name="Ascension",
        theme="Rising Above",
        description="Elevate to higher consciousness",
        colors=RealmColors(primary="#9D71E5", secondary="#7A52C9", accent="#C9A3FF"),
        start=201,
        end=225,
    ),
    Realm(
        id=10,
        name="Absolute",
        theme="Ultimate Reality",
        description="The final truth of complete focus",
        colors=RealmColors(primary="#D4C9FF", secondary="#B7A3E5", accent="#F0E5FF"),
        start=226,
        end=250,
    ),
]

DEFAULT_CATALOG = RealmCatalog(DEFAULT_REALMS)
