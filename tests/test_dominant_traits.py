# tests/test_dominant_traits.py
"""
Dominant trait selection, overall and per group.
"""

from assessment_platform.scoring.dominant_traits import DominantTraitResolver
from assessment_platform.scoring.records import ProcessConfig, TraitConfig, TraitGroupConfig
from assessment_platform.scoring.trait_aggregator import TraitAggregator

from conftest import group_config, resolve, trait_choices


def _dominant(responses, config=None):
    aggregation = TraitAggregator().aggregate(resolve(responses), config)
    return DominantTraitResolver().resolve(aggregation.records)


class TestDominantTraitResolver:

    def test_tie_returns_full_set(self, scenario_b_responses, scenario_b_config):
        dominant = _dominant(scenario_b_responses, scenario_b_config)

        assert {r.trait for r in dominant.overall} == {"A", "B"}
        assert dominant.is_tied

    def test_single_leader(self):
        dominant = _dominant(trait_choices(["A", "B", "B"]))

        assert [r.trait for r in dominant.overall] == ["B"]
        assert not dominant.is_tied

    def test_group_tie_picks_first_discovered(self, scenario_b_responses, scenario_b_config):
        dominant = _dominant(scenario_b_responses, scenario_b_config)

        assert dominant.by_group["G"].trait == "A"
        assert [r.trait for r in dominant.group_ties["G"]] == ["A", "B"]

    def test_one_winner_per_group(self):
        config = ProcessConfig(trait_groups=(
            TraitGroupConfig(id="G1", traits=(TraitConfig("A"), TraitConfig("B"))),
            TraitGroupConfig(id="G2", traits=(TraitConfig("C"), TraitConfig("D"))),
        ))
        responses = trait_choices(["A", "B", "B", "C", "D", "D", "D"])

        dominant = _dominant(responses, config)

        assert dominant.by_group["G1"].trait == "B"
        assert dominant.by_group["G2"].trait == "D"
        assert len(dominant.group_ties["G2"]) == 1
        # 75.0 in G2 beats 66.7 in G1
        assert [r.trait for r in dominant.overall] == ["D"]

    def test_ungrouped_traits_have_no_group_winner(self):
        dominant = _dominant(trait_choices(["A"]), group_config("G", [("Z", 1)]))

        assert dominant.by_group == {}
        assert [r.trait for r in dominant.overall] == ["A"]

    def test_no_records(self):
        dominant = DominantTraitResolver().resolve(())
        assert dominant.overall == ()
        assert dominant.by_group == {}
        assert not dominant.is_tied
