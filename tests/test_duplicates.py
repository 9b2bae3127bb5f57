from task_intelligence.duplicates import (
    FUZZY_THRESHOLD,
    calculate_similarity,
    check_capture_for_duplicate,
    deduplicate_tasks,
    find_duplicate,
    get_task_location,
    levenshtein_distance,
    normalize_text,
)
from task_intelligence.schema import TaskRecord


def test_normalize_text_strips_case_punctuation_and_article():
    assert normalize_text("  The   Quick, brown fox!  ") == "quick brown fox"
    assert normalize_text("An apple a day") == "apple a day"
    assert normalize_text("Thesis review") == "thesis review"


def test_normalize_text_idempotent():
    for text in ["Buy milk", "  The report.  ", "an apple a day", "Call   Sam; re: contract?", ""]:
        once = normalize_text(text)
        assert normalize_text(once) == once


def test_normalize_text_keeps_space_left_by_trailing_punctuation():
    once = normalize_text("Buy milk !")
    assert once == "buy milk "
    assert normalize_text(once) == "buy milk"


def test_levenshtein_distance():
    assert levenshtein_distance("kitten", "sitting") == 3
    assert levenshtein_distance("", "abc") == 3
    assert levenshtein_distance("same", "same") == 0
    assert levenshtein_distance("flaw", "lawn") == 2
    assert levenshtein_distance("intention", "execution") == 5
    assert levenshtein_distance("abc", "") == 3
    assert levenshtein_distance("", "") == 0
    assert levenshtein_distance("sitting", "kitten") == 3


def test_similarity_identity_and_punctuation():
    assert calculate_similarity("Buy milk", "buy milk!") == 1.0
    assert calculate_similarity("Water plants", "Water plants") == 1.0


def test_similarity_empty_inputs():
    assert calculate_similarity("", "something") == 0.0
    assert calculate_similarity("!!!", "abc") == 0.0
    assert calculate_similarity("", "") == 1.0


def test_similarity_containment_ratio():
    score = calculate_similarity("Schedule team meeting", "schedule team meetings")
    assert score == 21 / 22
    assert score >= FUZZY_THRESHOLD


def test_similarity_edit_distance():
    assert abs(calculate_similarity("kitten", "sitting") - (1 - 3 / 7)) < 1e-9


def test_similarity_symmetric():
    pairs = [
        ("Call the dentist", "Call dentist"),
        ("kitten", "sitting"),
        ("Plan trip", "Plan trips"),
        ("Buy milk", ""),
    ]
    for a, b in pairs:
        assert calculate_similarity(a, b) == calculate_similarity(b, a)
        assert 0.0 <= calculate_similarity(a, b) <= 1.0


def test_find_duplicate_no_candidates():
    info = find_duplicate(TaskRecord("t1", "Buy milk"), [])
    assert info.is_duplicate is False
    assert info.match_type == "none"
    assert info.similarity == 0.0


def test_find_duplicate_exact_with_location():
    candidates = [TaskRecord("a", "Buy milk!", scheduled_bucket="today")]
    info = find_duplicate(TaskRecord("t1", "buy milk"), candidates)
    assert info.is_duplicate is True
    assert info.match_type == "exact"
    assert info.duplicate_of == "a"
    assert info.duplicate_text == "Buy milk!"
    assert info.similarity == 1.0
    assert info.location == "Today"


def test_find_duplicate_reports_first_match_not_best():
    candidates = [
        TaskRecord("fuzzy", "Schedule team meetings"),
        TaskRecord("exact", "Schedule team meeting"),
    ]
    info = find_duplicate(TaskRecord("t1", "schedule team meeting"), candidates)
    assert info.duplicate_of == "fuzzy"
    assert info.match_type == "fuzzy"


def test_find_duplicate_skips_self_and_excluded():
    candidates = [TaskRecord("t1", "Buy milk"), TaskRecord("a", "Buy milk"), TaskRecord("b", "Buy milk")]
    info = find_duplicate(TaskRecord("t1", "Buy milk"), candidates, exclude_ids=["a"])
    assert info.duplicate_of == "b"


def test_find_duplicate_prefers_ai_summary():
    task = TaskRecord("t1", "remember the thing with the milk", ai_summary="Buy milk")
    info = find_duplicate(task, [TaskRecord("a", "Buy milk", category="home")])
    assert info.match_type == "exact"
    assert info.location == "Home"


def test_get_task_location_order():
    assert get_task_location(TaskRecord("a", "x", scheduled_bucket="someday", category="work")) == "Someday"
    assert get_task_location(TaskRecord("a", "x", scheduled_bucket="upcoming")) == "Upcoming"
    assert get_task_location(TaskRecord("a", "x", category="work")) == "Work"
    assert get_task_location(TaskRecord("a", "x")) == "Inbox"
    assert get_task_location(TaskRecord("a", "x", category=None)) == "Inbox"
    assert get_task_location(TaskRecord("a", "x", category="errands", scheduled_bucket="later")) == "errands"


def test_deduplicate_tasks_keeps_preferred_survivor():
    tasks = [
        TaskRecord("a", "Buy milk", category="inbox"),
        TaskRecord("b", "buy milk!", scheduled_bucket="today"),
        TaskRecord("c", "Plan trip", category="work"),
        TaskRecord("d", "Plan trips", category="home"),
    ]
    result = deduplicate_tasks(tasks)
    assert [task.id for task in result] == ["b", "c"]


def test_deduplicate_tasks_substring_preference_quirk():
    tasks = [
        TaskRecord("x", "Read chapter", category="inbox"),
        TaskRecord("y", "Do exercises", category="homework"),
    ]
    result = deduplicate_tasks(tasks, preference_order=["work"])
    assert [task.id for task in result] == ["y", "x"]


def test_deduplicate_tasks_survivors_are_distinct():
    tasks = [
        TaskRecord("1", "Call mom"),
        TaskRecord("2", "call mom."),
        TaskRecord("3", "Schedule team meeting"),
        TaskRecord("4", "Schedule team meetings"),
        TaskRecord("5", "Renew passport"),
        TaskRecord("6", "The renew passport"),
    ]
    result = deduplicate_tasks(tasks)
    assert len(result) <= len(tasks)
    for i, first in enumerate(result):
        for second in result[i + 1 :]:
            assert calculate_similarity(first.text, second.text) < FUZZY_THRESHOLD
    assert [task.id for task in result] == ["1", "3", "5"]


def test_deduplicate_tasks_empty():
    assert deduplicate_tasks([]) == []


def test_check_capture_for_duplicate():
    existing = [TaskRecord("a", "Pay electricity bill", category="home")]
    info = check_capture_for_duplicate("pay the electricity bill?", existing)
    assert info.is_duplicate is False

    info = check_capture_for_duplicate("Pay electricity bill!", existing)
    assert info.match_type == "exact"
    assert info.duplicate_of == "a"
