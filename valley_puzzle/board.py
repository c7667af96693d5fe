"""
Board state and placement engine for the fill-in-the-blank puzzle.

Every token lives in exactly one location: the pool, or one blank.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple, Union

from .definition import PuzzleDefinition, Token

logger = logging.getLogger(__name__)


class InvariantViolation(AssertionError):
    """A token was lost or duplicated. Always a defect in the engine."""


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Dragging:
    token_id: str
    source_blank: Optional[str] = None  # None when the token left the pool


DragSession = Union[Idle, Dragging]
IDLE = Idle()


class BoardState:
    """
    Mutable placement of tokens across the pool and the blanks.

    `placements` has one entry per blank for the whole session; its keys are
    fixed when the board is built. The pool is kept in the definition's token
    order, so sending a token back restores the exact earlier pool.
    """

    def __init__(self, definition: PuzzleDefinition):
        self.definition = definition
        self._tokens: Dict[str, Token] = {t.id: t for t in definition.pool}
        self._order: Dict[str, int] = {t.id: i for i, t in enumerate(definition.pool)}
        self._pool: List[Token] = list(definition.pool)
        self._placements: Dict[str, Optional[Token]] = {b: None for b in definition.blank_ids}
        self.check_invariant()

    @property
    def pool(self) -> Tuple[Token, ...]:
        return tuple(self._pool)

    @property
    def placements(self) -> Mapping[str, Optional[Token]]:
        return MappingProxyType(self._placements)

    @property
    def empty_blanks(self) -> List[str]:
        return [b for b, t in self._placements.items() if t is None]

    @property
    def is_complete(self) -> bool:
        return all(t is not None for t in self._placements.values())

    def has_token(self, token_id: str) -> bool:
        return token_id in self._tokens

    def has_blank(self, blank_id: str) -> bool:
        return blank_id in self._placements

    def locate(self, token_id: str) -> Optional[str]:
        """
        Return the blank holding the token, or None if it sits in the pool.

        Raises:
            KeyError: If the token is not part of this puzzle
            InvariantViolation: If a known token is nowhere on the board
        """
        if token_id not in self._tokens:
            raise KeyError(token_id)
        for blank_id, token in self._placements.items():
            if token is not None and token.id == token_id:
                return blank_id
        if any(t.id == token_id for t in self._pool):
            return None
        raise InvariantViolation(f"Token {token_id} is neither in the pool nor in a blank")

    def snapshot(self) -> Tuple[Tuple[str, ...], Tuple[Tuple[str, Optional[str]], ...]]:
        """Hashable view of the board: (pool ids, (blank id, token id or None) pairs)."""
        return (
            tuple(t.id for t in self._pool),
            tuple((b, t.id if t else None) for b, t in self._placements.items()),
        )

    def place(self, token_id: str, blank_id: str) -> bool:
        """
        Move a token into a blank, sending any different occupant to the pool.

        Returns True if the board changed. Unknown ids and placing a token
        onto the blank it already occupies are no-ops.
        """
        if not self.has_token(token_id) or not self.has_blank(blank_id):
            logger.warning("Ignoring placement of %s into %s: unknown token or blank", token_id, blank_id)
            return False

        source = self.locate(token_id)
        if source == blank_id:
            return False

        token = self._tokens[token_id]
        displaced = self._placements[blank_id]

        pool = [t for t in self._pool if t.id != token_id]
        placements = dict(self._placements)
        if source is not None:
            placements[source] = None
        if displaced is not None:
            pool.append(displaced)
        placements[blank_id] = token

        self._commit(pool, placements)
        logger.debug(
            "Placed %s (%s) from %s into %s%s",
            token_id, token.value, source or "pool", blank_id,
            f", displaced {displaced.id} to pool" if displaced else "",
        )
        return True

    def return_to_pool(self, token_id: str) -> bool:
        """Take a token out of its blank and put it back in the pool."""
        if not self.has_token(token_id):
            logger.warning("Ignoring return of unknown token %s", token_id)
            return False

        source = self.locate(token_id)
        if source is None:
            return False

        placements = dict(self._placements)
        placements[source] = None
        self._commit(self._pool + [self._tokens[token_id]], placements)
        logger.debug("Returned %s from %s to pool", token_id, source)
        return True

    def _commit(self, pool: List[Token], placements: Dict[str, Optional[Token]]) -> None:
        pool.sort(key=lambda t: self._order[t.id])
        self._pool = pool
        self._placements = placements
        self.check_invariant()

    def check_invariant(self) -> None:
        """
        Raises:
            InvariantViolation: If any token appears zero or several times,
                or the placement entries do not match the puzzle's blanks
        """
        if tuple(self._placements) != self.definition.blank_ids:
            raise InvariantViolation(
                f"Placement entries {list(self._placements)} do not match blanks {list(self.definition.blank_ids)}"
            )
        seen = Counter(t.id for t in self._pool)
        seen.update(t.id for t in self._placements.values() if t is not None)
        if seen != Counter(self._tokens.keys()):
            lost = sorted(set(self._tokens) - set(seen))
            dupes = sorted(t for t, c in seen.items() if c > 1)
            raise InvariantViolation(f"Token bookkeeping broken: lost={lost} duplicated={dupes}")
