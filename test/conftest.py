"""
Pytest configuration and shared fixtures for the Wordle server.
"""

import os
import sys

import pytest

# Add src to path for testing
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from wordle_net.shared.words import WordStore  # noqa: E402


@pytest.fixture
def sample_words():
    """Small dictionary used across game and network tests."""
    return ["apple", "mango", "crane", "train", "speed", "abide", "erase", "steep"]


@pytest.fixture
def store(sample_words):
    """Two-round store: apple, then mango."""
    return WordStore(sample_words, ["apple", "mango"])


@pytest.fixture
def single_round_store():
    return WordStore(["crane", "train"], ["crane"])


@pytest.fixture
def word_files(tmp_path):
    """Write a word list and an answer list to disk, return their paths."""
    wordlist = tmp_path / "words.txt"
    answers = tmp_path / "answers.txt"
    wordlist.write_text("Apple mango\ncrane\ntrain  too long\nab1de\n", encoding="utf-8")
    answers.write_text("mango\nzebra\nCRANE\n", encoding="utf-8")
    return str(wordlist), str(answers)
