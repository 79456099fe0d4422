"""Tests for ranking roster members against an opponent."""

import pytest

from effectivedex.errors import NotFound, RemoteUnreachable
from effectivedex.models.team import RosterMember
from effectivedex.repositories.team_store import TeamStore
from effectivedex.services.effectiveness_engine import EffectivenessEngine
from effectivedex.services.recommendation_scorer import RecommendationScorer

pytestmark = pytest.mark.anyio


def member(member_id, name, types):
    return RosterMember(id=member_id, canonical_name=name, type_tags=types)


@pytest.fixture
def team_store(kv_store):
    return TeamStore(kv_store)


@pytest.fixture
def scorer(cache, team_store):
    return RecommendationScorer(EffectivenessEngine(cache), team_store)


async def test_double_super_effective_ranks_first(scorer):
    roster = [
        member(7, "squirtle", ["water"]),
        member(4, "charmander", ["fire"]),
    ]

    result = await scorer.recommend(["grass", "ice"], roster)

    assert [m.canonical_name for m in result.ranked] == ["charmander"]
    assert result.multipliers == {4: 4.0}
    assert [reason for reason in result.reasons if reason.startswith("fire ")] == [
        "fire is super effective against grass",
        "fire is super effective against ice",
    ]
    # squirtle is not ranked but its pair still explains the result
    assert result.reasons == [
        "water is not very effective against grass",
        "fire is super effective against grass",
        "fire is super effective against ice",
    ]


async def test_reasons_include_unranked_members(scorer):
    roster = [member(7, "squirtle", ["water"]), member(4, "charmander", ["fire"])]

    result = await scorer.recommend(["grass"], roster)

    assert [m.id for m in result.ranked] == [4]
    assert result.reasons == [
        "water is not very effective against grass",
        "fire is super effective against grass",
    ]
    assert 7 not in result.multipliers


async def test_ranking_is_descending_and_stable_on_ties(scorer):
    roster = [
        member(1, "vulpix", ["fire"]),
        member(2, "snorunt", ["ice"]),
        member(3, "ponyta", ["fire"]),
        member(4, "glalie", ["ice", "ground"]),
    ]

    # ice+ground vs grass: 2 * 0.5, not ranked
    result = await scorer.recommend(["grass"], roster)

    assert [m.id for m in result.ranked] == [1, 2, 3]
    assert set(result.multipliers.values()) == {2.0}


async def test_higher_multiplier_outranks_roster_order(scorer):
    roster = [
        member(1, "lapras", ["water", "ice"]),
        member(2, "dewgong", ["ice"]),
    ]

    # water+ice vs ground: 2 * 2 = 4; ice alone: 2
    result = await scorer.recommend(["ground"], roster)

    assert [m.id for m in result.ranked] == [1, 2]
    assert result.multipliers == {1: 4.0, 2: 2.0}


async def test_empty_inputs_give_empty_result(scorer):
    assert (await scorer.recommend([], [member(4, "charmander", ["fire"])])).ranked == []
    empty = await scorer.recommend(["grass"], [])
    assert empty.ranked == []
    assert empty.reasons == []


async def test_unknown_opponent_type_is_rejected(scorer):
    with pytest.raises(ValueError):
        await scorer.recommend(["shadow"], [member(4, "charmander", ["fire"])])


async def test_member_with_unavailable_data_is_skipped(scorer, remote):
    remote.documents["/type/electric"] = RemoteUnreachable("/type/electric", "offline")
    roster = [member(25, "pikachu", ["electric"]), member(4, "charmander", ["fire"])]

    result = await scorer.recommend(["grass"], roster)

    assert [m.id for m in result.ranked] == [4]
    assert all("electric" not in reason for reason in result.reasons)


async def test_recommend_for_roster(scorer, team_store):
    roster = await team_store.create("Rain")
    await team_store.add_member(roster.id, member(7, "squirtle", ["water"]))

    result = await scorer.recommend_for_roster(["fire"], roster.id)

    assert [m.id for m in result.ranked] == [7]

    with pytest.raises(NotFound):
        await scorer.recommend_for_roster(["fire"], "team_missing")


async def test_recommend_for_main(scorer, team_store):
    assert (await scorer.recommend_for_main(["fire"])).ranked == []

    await team_store.add_to_main(member(7, "squirtle", ["water"]))
    result = await scorer.recommend_for_main(["fire"])

    assert [m.canonical_name for m in result.ranked] == ["squirtle"]
    assert result.to_dict()["ranked"][0]["multiplier"] == 2.0
