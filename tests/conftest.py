import pytest

from valley_puzzle.channels import RecordingChannel
from valley_puzzle.controller import BoardController
from valley_puzzle.definition import load_bundled, parse_definition


def make_puzzle(extra_pool=()):
    """Three blanks expecting Sam, Elon and AGI, with a matching pool."""
    return {
        "title": "Three blanks",
        "sentences": [
            [
                {"type": "blank", "id": "who", "answer": "Sam"},
                {"type": "text", "text": " blamed "},
                {"type": "blank", "id": "culprit", "answer": "Elon"},
                {"type": "text", "text": "."},
            ],
            [
                {"type": "text", "text": "The motive was "},
                {"type": "blank", "id": "motive", "answer": "AGI"},
                {"type": "text", "text": "."},
            ],
        ],
        "pool": [
            {"id": "t1", "value": "Sam"},
            {"id": "t2", "value": "Elon"},
            {"id": "t3", "value": "AGI"},
            *extra_pool,
        ],
    }


@pytest.fixture
def exact_definition():
    return parse_definition(make_puzzle())


@pytest.fixture
def definition():
    # Same puzzle plus a distractor
    return parse_definition(make_puzzle(extra_pool=[{"id": "t4", "value": "Dario"}]))


@pytest.fixture
def bundled():
    return load_bundled()


@pytest.fixture
def channel():
    return RecordingChannel()


@pytest.fixture
def victories():
    return []


@pytest.fixture
def controller(definition, channel, victories):
    return BoardController(definition, on_victory=lambda: victories.append(True), channel=channel)
