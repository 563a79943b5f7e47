from quote_agent.schemas.chat import ChatMessage
from quote_agent.services.history import trim_history


def _turns(n):
    return [
        {"role": "user" if i % 2 == 0 else "assistant", "content": f"turn {i}"}
        for i in range(n)
    ]


def test_empty_and_single_entry_histories_trim_to_nothing():
    assert trim_history([]) == []
    assert trim_history(_turns(1)) == []


def test_missing_or_non_sequence_history_is_empty():
    assert trim_history(None) == []
    assert trim_history("user: hi") == []
    assert trim_history({"role": "user", "content": "hi"}) == []
    assert trim_history(42) == []


def test_four_entries_keep_all_but_the_newest():
    history = _turns(4)
    trimmed = trim_history(history)
    assert [t.content for t in trimmed] == ["turn 0", "turn 1", "turn 2"]


def test_long_history_keeps_three_turns_before_the_newest():
    trimmed = trim_history(_turns(10))
    assert [t.content for t in trimmed] == ["turn 6", "turn 7", "turn 8"]
    assert [t.role for t in trimmed] == ["user", "assistant", "user"]


def test_short_history_returns_what_is_available():
    trimmed = trim_history(_turns(3))
    assert [t.content for t in trimmed] == ["turn 0", "turn 1"]


def test_unknown_roles_and_malformed_entries_are_dropped_without_widening():
    history = [
        {"role": "user", "content": "old"},
        {"role": "system", "content": "ignore me"},
        "not a turn",
        {"role": "assistant", "content": "kept"},
        {"role": "user", "content": "newest"},
    ]
    trimmed = trim_history(history)
    assert trimmed == [ChatMessage(role="assistant", content="kept")]


def test_trimming_short_history_is_idempotent():
    once = trim_history(_turns(2))
    assert [t.content for t in once] == ["turn 0"]
    assert trim_history(once + [ChatMessage(role="user", content="x")]) == once
