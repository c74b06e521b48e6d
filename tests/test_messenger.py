from __future__ import annotations

import logging

from loveletter.messenger import LoggingMessenger, RecordingMessenger, to_all, to_player


def test_recording_messenger_keeps_order():
    messenger = RecordingMessenger()
    to_all(messenger, "foobar")
    to_player(messenger, 1, "quux")
    to_player(messenger, 2, "secret")

    assert messenger.messages == [(None, "foobar"), (1, "quux"), (2, "secret")]
    assert messenger.inbox(1) == ["foobar", "quux"]
    assert messenger.broadcasts() == ["foobar"]
    messenger.clear()
    assert messenger.messages == []


def test_logging_messenger_labels_recipients(caplog):
    messenger = LoggingMessenger(names=["Henry", "Ida"])
    with caplog.at_level(logging.INFO, logger="loveletter.messenger"):
        to_all(messenger, "foobar")
        to_player(messenger, 0, "quux")
        to_player(messenger, 5, "lost")

    assert [record.getMessage() for record in caplog.records] == [
        "All: foobar",
        "Henry: quux",
        "Player 5: lost",
    ]
