# tests/test_property_based.py
"""
Property-based tests for the score engine (Hypothesis).
"""

from types import SimpleNamespace

from hypothesis import given, settings
from hypothesis import strategies as st

from application_service.models import ApplicationStatus
from scoring_engine.scoring_logic import compute_scores

TAGS = ["Math", "Art", "Code", "Bio", "History", "Music", "Law"]

tag_list_st = st.lists(st.sampled_from(TAGS), max_size=7)
status_st = st.one_of(st.none(), st.sampled_from(list(ApplicationStatus)))
event_count_st = st.integers(min_value=0, max_value=60)


def _inputs(interests, tags, n_events, status):
    profile = SimpleNamespace(interests=interests)
    program = SimpleNamespace(tags=tags)
    events = [SimpleNamespace(type="VIEW")] * n_events
    app = SimpleNamespace(status=status) if status is not None else None
    return profile, program, events, app


@settings(max_examples=300)
@given(tag_list_st, st.lists(st.sampled_from(TAGS), max_size=7, unique=True), event_count_st, status_st)
def test_scores_are_bounded(interests, tags, n_events, status):
    result = compute_scores(*_inputs(interests, tags, n_events, status))
    for value in (result.engagement_score, result.fit_score, result.yield_risk_score):
        assert 0.0 <= value <= 100.0


@settings(max_examples=200)
@given(tag_list_st, tag_list_st, event_count_st, status_st)
def test_identical_inputs_give_identical_scores(interests, tags, n_events, status):
    args = _inputs(interests, tags, n_events, status)
    assert compute_scores(*args) == compute_scores(*args)


@settings(max_examples=200)
@given(tag_list_st, tag_list_st, event_count_st, status_st)
def test_one_more_event_never_lowers_engagement(interests, tags, n_events, status):
    before = compute_scores(*_inputs(interests, tags, n_events, status))
    after = compute_scores(*_inputs(interests, tags, n_events + 1, status))
    assert after.engagement_score >= before.engagement_score


@settings(max_examples=200)
@given(
    st.lists(st.sampled_from(TAGS), min_size=3, max_size=7, unique=True),
    st.lists(st.sampled_from(TAGS), max_size=4),
)
def test_three_shared_tags_is_a_full_fit(shared, extra):
    profile, program, events, app = _inputs(shared + extra, shared, 0, None)
    assert compute_scores(profile, program, events, app).fit_score == 100.0


@settings(max_examples=200)
@given(tag_list_st, tag_list_st)
def test_fit_counts_distinct_shared_tags(interests, tags):
    profile, program, events, app = _inputs(interests, tags, 0, None)
    expected = min(100.0, len(set(interests) & set(tags)) / 3 * 100.0)
    assert compute_scores(profile, program, events, app).fit_score == expected
