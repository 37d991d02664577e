"""Tests for the tier table."""

import pytest

from emberwood.core.config import EconomyConfig
from emberwood.core.tiers import TierId, TierTable


@pytest.fixture
def table():
    return TierTable(EconomyConfig())


class TestClassification:
    @pytest.mark.parametrize("prosperity,expected", [
        (0, TierId.STRUGGLING),
        (34, TierId.STRUGGLING),
        (35, TierId.STABLE),
        (50, TierId.STABLE),
        (70, TierId.STABLE),
        (71, TierId.THRIVING),
        (100, TierId.THRIVING),
    ])
    def test_boundaries(self, table, prosperity, expected):
        assert table.tier_id_for(prosperity) is expected
        assert table.classify(prosperity).id is expected

    def test_every_value_has_exactly_one_tier(self, table):
        counts = {t: 0 for t in TierId}
        for p in range(101):
            counts[table.tier_id_for(p)] += 1
        assert counts == {
            TierId.STRUGGLING: 35, TierId.STABLE: 36, TierId.THRIVING: 30,
        }

    def test_custom_thresholds(self):
        table = TierTable(EconomyConfig(struggling_below=20, thriving_above=80))
        assert table.tier_id_for(25) is TierId.STABLE
        assert table.tier_id_for(81) is TierId.THRIVING


class TestTierData:
    def test_price_data(self, table):
        assert table.get(TierId.STRUGGLING).merchant_price_multiplier == 1.2
        assert table.get("thriving").rest_cost_base == 12
        assert table.get("stable").price_descriptor == "about normal"

    def test_unknown_id_resolves_to_stable(self, table):
        assert table.get("booming").id is TierId.STABLE

    def test_all_in_ascending_order(self, table):
        assert [t.id for t in table.all()] == [
            TierId.STRUGGLING, TierId.STABLE, TierId.THRIVING,
        ]

    def test_parse(self):
        assert TierId.parse("stable") is TierId.STABLE
        assert TierId.parse(TierId.THRIVING) is TierId.THRIVING
        assert TierId.parse("nope") is None
