"""Players and the ordered roster of a game."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Tuple

from x01_darts.errors import EmptyParticipantsError, InvalidPlayerNameError


@dataclass(frozen=True, slots=True)
class Player:
    name: str

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise InvalidPlayerNameError(self.name)


@dataclass(frozen=True, slots=True)
class Participant:
    """A player taking part in a game."""

    player: Player


@dataclass(frozen=True, slots=True)
class Participants:
    """Ordered, non-empty roster. Players are referenced by zero-based index."""

    participants: Tuple[Participant, ...]

    def __post_init__(self) -> None:
        if not self.participants:
            raise EmptyParticipantsError()

    @classmethod
    def from_players(cls, players: Iterable[Player]) -> Participants:
        return cls(tuple(Participant(p) for p in players))

    @classmethod
    def from_names(cls, names: Iterable[str]) -> Participants:
        return cls.from_players(Player(n) for n in names)

    def count(self) -> int:
        return len(self.participants)

    def player(self, index: int) -> Player:
        return self.participants[index].player

    def next_index(self, index: int) -> int:
        return (index + 1) % self.count()

    def __len__(self) -> int:
        return len(self.participants)

    def __getitem__(self, index: int) -> Participant:
        return self.participants[index]

    def __iter__(self) -> Iterator[Participant]:
        return iter(self.participants)
