"""
Tests for the per-client session state machine.
"""

import pytest

from wordle_net.server.game import SessionClosedError, WordleSession
from wordle_net.shared import protocols
from wordle_net.shared.constants import (
    STATE_AWAITING_CONTINUE,
    STATE_AWAITING_GUESS,
    STATE_CLOSED,
)
from wordle_net.shared.words import WordStore


def test_start_sends_first_prompt(store):
    session = WordleSession(store)
    assert session.start() == [protocols.guess_prompt(6)]
    assert session.state == STATE_AWAITING_GUESS
    assert session.round == 0
    assert session.attempts_remaining == 6


@pytest.mark.parametrize("text", ["trai", "trains", "", "12345"])
def test_wrong_length_rejected_without_using_attempt(store, text):
    session = WordleSession(store)
    session.start()
    out = session.handle_input(text)
    assert out == [protocols.MSG_INVALID_LENGTH, protocols.guess_prompt(6)]
    assert session.attempts_remaining == 6


def test_unknown_word_rejected_without_using_attempt(store):
    session = WordleSession(store)
    session.start()
    out = session.handle_input("zebra")
    assert out == [protocols.MSG_NOT_IN_LIST, protocols.guess_prompt(6)]
    assert session.attempts_remaining == 6


def test_wrong_guess_uses_attempt(store):
    session = WordleSession(store)
    session.start()
    out = session.handle_input("mango")
    assert out[0].endswith("\n") and len(out[0]) == 6
    assert out[1] == protocols.guess_prompt(5)
    assert session.attempts_remaining == 5


def test_input_is_normalized(store):
    session = WordleSession(store)
    session.start()
    out = session.handle_input("ApPlE!\r")
    assert out[:2] == ["APPLE\n", protocols.MSG_WON]


def test_win_moves_to_continue_prompt(store):
    session = WordleSession(store)
    session.start()
    out = session.handle_input("apple")
    assert out == ["APPLE\n", protocols.MSG_WON, protocols.MSG_CONTINUE_PROMPT]
    assert session.state == STATE_AWAITING_CONTINUE
    assert session.round == 0


def test_continue_yes_starts_next_round(store):
    session = WordleSession(store)
    session.start()
    session.handle_input("mango")
    session.handle_input("apple")
    out = session.handle_input("Yes please")
    assert out == [protocols.MSG_NEW_GAME, protocols.guess_prompt(6)]
    assert session.round == 1
    assert session.attempts_remaining == 6
    assert session.answer == "mango"


def test_continue_no_closes(store):
    session = WordleSession(store)
    session.start()
    session.handle_input("apple")
    assert session.handle_input("N") == []
    assert session.closed
    with pytest.raises(SessionClosedError):
        session.handle_input("y")


def test_continue_other_input_waits_silently(store):
    session = WordleSession(store)
    session.start()
    session.handle_input("apple")
    assert session.handle_input("maybe") == []
    assert session.handle_input("") == []
    assert session.state == STATE_AWAITING_CONTINUE


def test_running_out_of_attempts_reveals_answer_once(store):
    session = WordleSession(store)
    session.start()
    outputs = []
    for _ in range(6):
        outputs.extend(session.handle_input("crane"))
    lost = protocols.lost_message("apple")
    assert outputs.count(lost) == 1
    assert outputs[-2:] == [lost, protocols.MSG_CONTINUE_PROMPT]
    assert session.state == STATE_AWAITING_CONTINUE
    assert session.rounds_lost == 1


def test_last_round_completes_without_continue_prompt(store):
    session = WordleSession(store)
    session.start()
    session.handle_input("apple")
    session.handle_input("y")
    out = session.handle_input("mango")
    assert out == ["MANGO\n", protocols.MSG_WON, protocols.MSG_ALL_COMPLETE]
    assert protocols.MSG_CONTINUE_PROMPT not in out
    assert session.state == STATE_CLOSED


def test_losing_last_round_also_completes(single_round_store):
    session = WordleSession(single_round_store)
    session.start()
    out = []
    for _ in range(6):
        out.extend(session.handle_input("train"))
    assert out[-2:] == [protocols.lost_message("crane"), protocols.MSG_ALL_COMPLETE]
    assert session.closed


def test_single_round_scenario(single_round_store):
    session = WordleSession(single_round_store)
    session.start()
    assert session.handle_input("train") == ["*RA*n\n", protocols.guess_prompt(5)]
    assert session.handle_input("crane") == ["CRANE\n", protocols.MSG_WON, protocols.MSG_ALL_COMPLETE]
    assert session.closed


def test_canonical_rules_are_used(sample_words):
    session = WordleSession(WordStore(sample_words, ["abide"]), hint_rules="canonical")
    session.start()
    assert session.handle_input("speed")[0] == "**e*d\n"


def test_invalid_rules_rejected(store):
    with pytest.raises(ValueError):
        WordleSession(store, hint_rules="fuzzy")


def test_sessions_do_not_share_state(store):
    first = WordleSession(store)
    second = WordleSession(store)
    first.start()
    second.start()
    first.handle_input("mango")
    assert first.attempts_remaining == 5
    assert second.attempts_remaining == 6


def test_continue_reads_first_character_as_sent(store):
    session = WordleSession(store)
    session.start()
    session.handle_input("apple")
    assert session.handle_input(" y") == []
    assert session.state == STATE_AWAITING_CONTINUE
    assert session.handle_input("y") == [protocols.MSG_NEW_GAME, protocols.guess_prompt(6)]
