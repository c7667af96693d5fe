from valley_puzzle.controller import VICTORY_MESSAGE, BoardStatus
from valley_puzzle.scenes import INTRO_DIALOGUE, Scene, SceneFlow


def to_interrogation(flow):
    flow.start()
    flow.skip_intro()
    return flow


def test_intro_walks_every_line(channel):
    flow = SceneFlow(channel=channel)
    assert flow.scene is Scene.START
    assert flow.intro_line is None
    assert flow.start()

    seen = []
    while flow.scene is Scene.INTRO:
        seen.append(flow.intro_line)
        assert flow.next_intro_line()

    assert seen == list(INTRO_DIALOGUE)
    assert flow.scene is Scene.INTERROGATION


def test_out_of_order_calls_are_ignored(definition):
    flow = SceneFlow()
    assert not flow.next_intro_line()
    assert not flow.interrogate("Sam")
    assert flow.open_puzzle(definition) is None
    assert not flow.close_puzzle()
    assert flow.scene is Scene.START
    flow.start()
    assert not flow.start()


def test_interrogation_sends_follow_up(channel):
    flow = to_interrogation(SceneFlow(channel=channel))
    assert flow.interrogate("elon")
    assert flow.highlighted_suspect == "Elon"
    flow.notification.join(timeout=5)
    assert channel.messages == ["User has decided to interrogate Elon"]


def test_unknown_suspect_is_ignored(channel):
    flow = to_interrogation(SceneFlow(channel=channel))
    assert not flow.interrogate("Donald")
    assert flow.highlighted_suspect is None
    assert channel.messages == []


def test_solving_the_puzzle_reaches_victory(definition, channel):
    flow = to_interrogation(SceneFlow(channel=channel))
    controller = flow.open_puzzle(definition)
    assert flow.scene is Scene.PUZZLE

    controller.place("t1", "who")
    controller.place("t2", "culprit")
    controller.place("t3", "motive")
    controller.submit()

    assert flow.scene is Scene.VICTORY
    assert flow.controller is None
    controller.notification.join(timeout=5)
    assert channel.messages == [VICTORY_MESSAGE]


def test_closing_the_puzzle_returns_to_suspects(definition):
    flow = to_interrogation(SceneFlow())
    controller = flow.open_puzzle(definition)
    controller.place("t1", "who")

    assert flow.close_puzzle()

    assert flow.scene is Scene.INTERROGATION
    assert controller.status is BoardStatus.CLOSED
    # a fresh board on reopening
    again = flow.open_puzzle(definition)
    assert again is not controller
    assert again.board.placements["who"] is None
