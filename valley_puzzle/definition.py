"""
Puzzle definitions: sentences with blanks, the answer key, and the initial word pool.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

import orjson

BUNDLED_PUZZLE = Path(__file__).parent / "data" / "murder_in_the_valley.json"


class PuzzleDefinitionError(ValueError):
    """Raised when a puzzle definition is malformed or cannot be solved."""


@dataclass(frozen=True)
class Token:
    """A relocatable word. Two tokens may share a value but never an id."""
    id: str
    value: str


@dataclass(frozen=True)
class Blank:
    id: str
    expected_value: str


@dataclass(frozen=True)
class TextSegment:
    text: str


@dataclass(frozen=True)
class BlankSegment:
    blank: Blank


Segment = Union[TextSegment, BlankSegment]


@dataclass(frozen=True)
class Sentence:
    segments: Tuple[Segment, ...]

    @property
    def blanks(self) -> Tuple[Blank, ...]:
        return tuple(s.blank for s in self.segments if isinstance(s, BlankSegment))


@dataclass(frozen=True)
class PuzzleDefinition:
    """
    Static puzzle content supplied to the board.

    Attributes:
        sentences: Ordered sentences, each made of text and blank segments
        pool: Initial word tokens, in display order
        title: Optional heading shown above the board
    """
    sentences: Tuple[Sentence, ...]
    pool: Tuple[Token, ...]
    title: str = ""

    @property
    def blanks(self) -> Tuple[Blank, ...]:
        return tuple(b for s in self.sentences for b in s.blanks)

    @property
    def blank_ids(self) -> Tuple[str, ...]:
        return tuple(b.id for b in self.blanks)


def _require(obj: Dict[str, Any], key: str, where: str) -> Any:
    if not isinstance(obj, dict) or key not in obj:
        raise PuzzleDefinitionError(f"{where}: missing '{key}'")
    return obj[key]


def _parse_segment(raw: Dict[str, Any], where: str) -> Segment:
    kind = _require(raw, "type", where)
    if kind == "text":
        return TextSegment(text=str(_require(raw, "text", where)))
    if kind == "blank":
        blank_id = str(_require(raw, "id", where))
        answer = str(_require(raw, "answer", where)).strip()
        if not answer:
            raise PuzzleDefinitionError(f"{where}: blank '{blank_id}' has an empty answer")
        return BlankSegment(blank=Blank(id=blank_id, expected_value=answer))
    raise PuzzleDefinitionError(f"{where}: unknown segment type {kind!r}")


def validate_definition(definition: PuzzleDefinition) -> None:
    """
    Check the configuration-time invariants of a definition.

    Blank ids and token ids must be unique, there must be at least one blank,
    and the pool must hold enough tokens of each value to fill every blank
    correctly.

    Raises:
        PuzzleDefinitionError: On the first problem found
    """
    blank_ids = definition.blank_ids
    if not blank_ids:
        raise PuzzleDefinitionError("Puzzle defines no blanks")

    dupes = [b for b, c in Counter(blank_ids).items() if c > 1]
    if dupes:
        raise PuzzleDefinitionError(f"Duplicate blank ids: {dupes}")

    token_ids = [t.id for t in definition.pool]
    dupes = [t for t, c in Counter(token_ids).items() if c > 1]
    if dupes:
        raise PuzzleDefinitionError(f"Duplicate token ids: {dupes}")

    empty = [t.id for t in definition.pool if not t.value.strip()]
    if empty:
        raise PuzzleDefinitionError(f"Tokens with empty values: {empty}")

    needed = Counter(b.expected_value for b in definition.blanks)
    available = Counter(t.value for t in definition.pool)
    missing = list((needed - available).elements())
    if missing:
        raise PuzzleDefinitionError(f"Pool cannot fill every blank correctly, missing: {missing}")


def parse_definition(data: Dict[str, Any]) -> PuzzleDefinition:
    """
    Build a PuzzleDefinition from its JSON form.

    Expected shape:
        {
          "title": "...",
          "sentences": [[{"type": "text", "text": "..."},
                         {"type": "blank", "id": "b1", "answer": "Elon"}], ...],
          "pool": [{"id": "t1", "value": "Sam"}, ...]
        }
    """
    raw_sentences = _require(data, "sentences", "puzzle")
    raw_pool = _require(data, "pool", "puzzle")
    if not isinstance(raw_sentences, list) or not isinstance(raw_pool, list):
        raise PuzzleDefinitionError("puzzle: 'sentences' and 'pool' must be lists")

    sentences: List[Sentence] = []
    for i, raw in enumerate(raw_sentences):
        if not isinstance(raw, list) or not raw:
            raise PuzzleDefinitionError(f"sentence {i}: must be a non-empty list of segments")
        segments = tuple(_parse_segment(seg, f"sentence {i}") for seg in raw)
        sentences.append(Sentence(segments=segments))

    pool = tuple(
        Token(id=str(_require(t, "id", f"pool[{i}]")), value=str(_require(t, "value", f"pool[{i}]")).strip())
        for i, t in enumerate(raw_pool)
    )

    definition = PuzzleDefinition(
        sentences=tuple(sentences),
        pool=pool,
        title=str(data.get("title", "")),
    )
    validate_definition(definition)
    return definition


def load_definition(path: Union[str, Path]) -> PuzzleDefinition:
    """Load and validate a puzzle definition from a JSON file."""
    try:
        with open(path, "rb") as f:
            data = orjson.loads(f.read())
    except FileNotFoundError as e:
        raise PuzzleDefinitionError(f"Puzzle file not found: {path}") from e
    except orjson.JSONDecodeError as e:
        raise PuzzleDefinitionError(f"Invalid JSON in {path}: {e}") from e
    return parse_definition(data)


def load_bundled() -> PuzzleDefinition:
    """The 'murder in the valley' deduction puzzle shipped with the package."""
    return load_definition(BUNDLED_PUZZLE)
