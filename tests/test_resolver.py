"""Tests for the staged resolver."""

import pytest

from college_resolver.config_loader import ConfidenceLevels
from college_resolver.dataset import CUSTOM_ENTRIES
from college_resolver.indexing.reference_index import ReferenceIndex
from college_resolver.models import InstitutionRecord, MatchSource, MatchStage
from college_resolver.resolution.resolver import Resolver, calculate_match_score


@pytest.fixture
def resolver(records):
    return Resolver(ReferenceIndex.build([*records, *CUSTOM_ENTRIES]))


@pytest.mark.parametrize("name", ["", "   ", None])
def test_blank_is_unmatched(resolver, name):
    result = resolver.resolve([name])[0]

    assert result.standard_name is None
    assert result.confidence == 0
    assert result.source == MatchSource.UNMATCHED
    assert result.latitude is None and result.longitude is None


def test_special_case(resolver):
    result = resolver.resolve(["Army National Guard"])[0]

    assert result.standard_name == "Army National Guard"
    assert result.confidence == 1.0
    assert result.match_stage == MatchStage.SPECIAL
    assert result.latitude is None


def test_exact_match_for_every_dataset_name(resolver, records):
    for record in records:
        result = resolver.resolve([record.name])[0]
        assert result.standard_name == record.name
        assert result.confidence == 1.0


def test_exact_match_carries_coordinates(resolver):
    result = resolver.resolve(["harvard university"])[0]

    assert result.standard_name == "Harvard University"
    assert result.latitude == pytest.approx(42.3770)
    assert result.longitude == pytest.approx(-71.1167)
    assert result.source == MatchSource.REFERENCE
    assert result.match_stage == MatchStage.EXACT


@pytest.mark.parametrize("name", ["marines", "MARINES", "Marines", "usmc", "US Marine Corps"])
def test_alias_resolution(resolver, name):
    result = resolver.resolve([name])[0]

    assert result.standard_name == "Marine Corps"
    assert result.confidence == 1.0


def test_normalized_match(resolver):
    result = resolver.resolve(["Hobart and William Smith Colleges"])[0]

    assert result.standard_name == "Hobart William Smith Colleges"
    assert result.confidence == 0.9
    assert result.match_stage == MatchStage.NORMALIZED


def test_normalized_match_drops_parenthetical(resolver):
    result = resolver.resolve(["University of the Pacific (Online)"])[0]

    assert result.standard_name == "University of the Pacific"
    assert result.confidence == 0.9


def test_substring_match(resolver):
    result = resolver.resolve(["SUNY MARITIME"])[0]

    assert result.standard_name == "SUNY Maritime College"
    assert result.confidence >= 0.8
    assert result.match_stage == MatchStage.SUBSTRING
    assert result.latitude == pytest.approx(40.8069)


def test_substring_takes_first_key_in_index_order():
    first = InstitutionRecord(id=1, name="Alpha Beta College", city="A", state="NY")
    second = InstitutionRecord(id=2, name="Beta College", city="B", state="NY")
    resolver = Resolver(ReferenceIndex.build([first, second]))

    result = resolver.resolve(["Beta Coll"])[0]

    assert result.standard_name == "Alpha Beta College"
    assert result.confidence == 0.8


def test_prefix_match(resolver):
    # "lake co" expands to "lake community college", which no key contains
    result = resolver.resolve(["Lake Co"])[0]

    assert result.standard_name == "Lake Cook Institute"
    assert result.confidence == 0.9
    assert result.match_stage == MatchStage.PREFIX


def test_prefix_match_ranks_candidates():
    long_name = InstitutionRecord(
        id=1, name="Lake Cook Institute of Extended Learning Programs", city="A", state="IL"
    )
    short_name = InstitutionRecord(id=2, name="Lake Cook Institute", city="B", state="IL")
    resolver = Resolver(ReferenceIndex.build([long_name, short_name]))

    result = resolver.resolve(["Lake Co"])[0]

    assert result.standard_name == "Lake Cook Institute"


def test_prefix_requires_minimum_length():
    record = InstitutionRecord(id=1, name="Coastal Institute", city="A", state="SC")
    resolver = Resolver(ReferenceIndex.build([record]), prefix_min_length=10)

    result = resolver.resolve(["Co"])[0]

    assert result.source == MatchSource.UNMATCHED


def test_no_match(resolver):
    result = resolver.resolve(["Completely Unknown Academy of Nowhere"])[0]

    assert result.standard_name is None
    assert result.confidence == 0
    assert result.source == MatchSource.UNMATCHED
    assert result.match_stage == MatchStage.NONE


def test_location_suffix_is_stripped(resolver):
    result = resolver.resolve(["SUNY Maritime College — Bronx, NY"])[0]

    assert result.standard_name == "SUNY Maritime College"
    assert result.original_name == "SUNY Maritime College — Bronx, NY"
    assert result.confidence == 1.0


def test_location_suffix_kept_when_disabled(records):
    resolver = Resolver(ReferenceIndex.build(records), strip_label_suffix=False)

    result = resolver.resolve(["Harvard University — Cambridge, MA"])[0]

    assert result.source == MatchSource.UNMATCHED


def test_custom_confidence_levels(records):
    resolver = Resolver(
        ReferenceIndex.build(records), confidence=ConfidenceLevels(SUBSTRING=0.5)
    )

    assert resolver.resolve(["SUNY MARITIME"])[0].confidence == 0.5


def test_preserves_order_and_length(resolver):
    names = ["Harvard", "", "SUNY MARITIME", "Nowhere Tech"]

    results = resolver.resolve(names)

    assert [r.original_name for r in results] == names


def test_resolution_is_idempotent(resolver):
    assert resolver.resolve(["SUNY MARITIME"]) == resolver.resolve(["SUNY MARITIME"])


def test_match_score_prefers_similar_length():
    short = calculate_match_score("harvard", "Harvard College")
    long = calculate_match_score("harvard", "Harvard Graduate School of Design Extension")

    assert short > long


def test_match_score_whole_word_bonus():
    assert calculate_match_score("harvard", "Harvard") == 10 + 5 + 3 + 5


def test_match_score_counts_words_on_single_spaces():
    # "lake  cook" splits into three parts, matching the three-word candidate;
    # it is not a true prefix, so no prefix bonus
    assert calculate_match_score("lake  cook", "Lake Cook Institute") == pytest.approx(
        (5 - 9 / 10) + 3
    )
    assert calculate_match_score("lake cook", "Lake Cook Institute") == pytest.approx(
        10 + (5 - 10 / 10) + 2
    )
