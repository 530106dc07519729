"""Tests for the keyword-overlap achievement matcher."""

from lifeup_agent.services.achievement_matcher import extract_keywords, find_matches


def _achievement(id: int, name: str, description: str = "", category_id: int = 1) -> dict:
    return {"id": id, "name": name, "description": description, "category_id": category_id}


# ---------------------------------------------------------------------------
# extract_keywords
# ---------------------------------------------------------------------------


def test_splits_on_whitespace_hyphen_underscore():
    assert extract_keywords("Read the new Programming-Book_today") == ["read", "programming", "book", "today"]


def test_drops_short_tokens_and_stop_words():
    assert extract_keywords("go to the gym and finish my task") == ["gym"]


def test_keeps_first_five_in_order():
    text = "alpha bravo charlie delta echo foxtrot golf"
    assert extract_keywords(text) == ["alpha", "bravo", "charlie", "delta", "echo"]


def test_empty_text():
    assert extract_keywords("") == []
    assert extract_keywords("   ") == []


def test_extraction_is_idempotent_on_its_output():
    first = extract_keywords("Finish reading the Clean-Code book before Friday evening")
    second = extract_keywords(" ".join(first))
    assert set(second) <= set(first)
    assert second == first


# ---------------------------------------------------------------------------
# find_matches
# ---------------------------------------------------------------------------


def test_scenario_reading_and_programming():
    achievements = [
        _achievement(1, "Reading Master", "Read 10 books"),
        _achievement(2, "Programming Expert", "Write code every day"),
        _achievement(3, "Unrelated", "Something else entirely"),
    ]
    matches = find_matches("read programming book", achievements)
    assert [m.achievement["id"] for m in matches] == [1, 2]
    # read (+20) + book (+20) + name overlap "read"/"reading" (+15)
    assert matches[0].confidence == 55
    assert matches[0].reasons == ['Contains "read"', 'Contains "book"']
    assert matches[1].confidence == 35


def test_empty_task_name_returns_nothing():
    assert find_matches("", [_achievement(1, "Reading Master")]) == []


def test_zero_score_achievements_are_excluded():
    assert find_matches("swim laps", [_achievement(1, "Reading Master", "Read books")]) == []


def test_desc_key_is_used_when_description_missing():
    matches = find_matches("meditate", [{"id": 1, "name": "Calm", "desc": "Meditate daily"}])
    assert len(matches) == 1
    assert matches[0].confidence == 20


def test_category_bonus_and_reason():
    achievements = [
        _achievement(1, "Runner", "run daily", category_id=1),
        _achievement(2, "Runner", "run daily", category_id=2),
    ]
    matches = find_matches("morning run", achievements, category_id=2)
    assert [m.achievement["id"] for m in matches] == [2, 1]
    assert matches[0].confidence == matches[1].confidence + 10
    assert "Same category" in matches[0].reasons


def test_category_alone_is_a_match_without_keywords():
    matches = find_matches("the task", [_achievement(1, "Anything", category_id=5)], category_id=5)
    assert len(matches) == 1
    assert matches[0].confidence == 10
    assert matches[0].reasons == ["Same category"]


def test_no_keywords_and_no_category_returns_nothing():
    assert find_matches("the task", [_achievement(1, "Anything", category_id=5)]) == []


def test_confidence_is_capped_at_100_and_reasons_at_three():
    achievement = _achievement(1, "Marathon training plan", "marathon training plan weekly long runs")
    matches = find_matches("marathon training plan weekly long", [achievement], category_id=1)
    assert matches[0].confidence == 100
    assert len(matches[0].reasons) == 3


def test_ties_keep_input_order_and_top_five():
    achievements = [_achievement(i, f"Guitar level {i}") for i in range(1, 9)]
    matches = find_matches("guitar practice", achievements)
    assert [m.achievement["id"] for m in matches] == [1, 2, 3, 4, 5]
    assert all(m.confidence == 35 for m in matches)


def test_higher_scores_rank_first():
    achievements = [
        _achievement(1, "Daily habit", "practice guitar"),
        _achievement(2, "Guitar Hero", "guitar practice every day"),
    ]
    matches = find_matches("guitar practice", achievements)
    assert [m.achievement["id"] for m in matches] == [2, 1]
    assert matches[0].confidence > matches[1].confidence
    assert all(0 <= m.confidence <= 100 for m in matches)


def test_results_are_deterministic():
    achievements = [
        _achievement(1, "Reading Master", "Read 10 books"),
        _achievement(2, "Bookworm", "Finish a book"),
        _achievement(3, "Programming Expert"),
    ]
    first = [m.to_dict() for m in find_matches("read a programming book", achievements)]
    second = [m.to_dict() for m in find_matches("read a programming book", achievements)]
    assert first == second
