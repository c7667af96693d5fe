import logging
from types import SimpleNamespace

import pytest

from valley_puzzle.channels import (
    BACKSTORY_PROMPT,
    ChannelError,
    ConsoleChannel,
    NullChannel,
    RecordingChannel,
    get_channel,
    send_in_background,
)
from valley_puzzle.channels.anthropic_channel import AnthropicChannel


class FakeMessages:
    def __init__(self, replies=None, error=None):
        self.replies = list(replies or [])
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        return SimpleNamespace(content=[SimpleNamespace(type="text", text=self.replies.pop(0))])


def fake_client(**kwargs):
    return SimpleNamespace(messages=FakeMessages(**kwargs))


def test_factory_builds_local_channels():
    assert isinstance(get_channel("console"), ConsoleChannel)
    assert isinstance(get_channel("none"), NullChannel)
    with pytest.raises(ValueError, match="Unknown channel"):
        get_channel("carrier-pigeon")


def test_recording_and_null_channels():
    rec = RecordingChannel()
    assert rec.send_follow_up("hello") is None
    assert rec.messages == ["hello"]
    assert NullChannel().send_follow_up("hello") is None


def test_anthropic_channel_sends_prompt_with_briefing():
    client = fake_client(replies=["Well done, detective."])
    replies = []
    chan = AnthropicChannel(model="claude-test", client=client, on_reply=replies.append)

    reply = chan.send_follow_up("User has solved the puzzle")

    assert reply == "Well done, detective."
    assert replies == ["Well done, detective."]
    call = client.messages.calls[0]
    assert call["model"] == "claude-test"
    assert call["system"] == BACKSTORY_PROMPT
    assert call["messages"] == [{"role": "user", "content": "User has solved the puzzle"}]


def test_anthropic_channel_keeps_conversation():
    client = fake_client(replies=["You're now interrogating Sam", "Congrats."])
    chan = AnthropicChannel(client=client)
    chan.send_follow_up("User has decided to interrogate Sam")
    chan.send_follow_up("User has solved the puzzle")

    second = client.messages.calls[1]["messages"]
    assert [m["role"] for m in second] == ["user", "assistant", "user"]
    assert second[1]["content"] == "You're now interrogating Sam"


def test_anthropic_channel_wraps_errors_after_retries(monkeypatch):
    monkeypatch.setattr(AnthropicChannel._create.retry, "sleep", lambda seconds: None)
    client = fake_client(error=RuntimeError("overloaded"))
    chan = AnthropicChannel(client=client)

    with pytest.raises(ChannelError, match="overloaded"):
        chan.send_follow_up("User has solved the puzzle")

    assert len(client.messages.calls) == 3
    assert chan.history == []


def test_send_in_background_delivers_and_logs_failures(caplog):
    rec = RecordingChannel()
    thread = send_in_background(rec, "User has decided to interrogate Dario")
    thread.join(timeout=5)
    assert thread.daemon
    assert rec.messages == ["User has decided to interrogate Dario"]

    class Broken:
        def send_follow_up(self, prompt):
            raise OSError("terminal closed")

    with caplog.at_level(logging.ERROR, logger="valley_puzzle.channels.base_channel"):
        send_in_background(Broken(), "hello").join(timeout=5)
    assert "Follow-up message crashed" in caplog.text
    assert "terminal closed" in caplog.text
