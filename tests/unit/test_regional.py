"""Tests for the synthetic regional threshold model."""

import random
from concurrent.futures import ThreadPoolExecutor

import pytest

from wagelevels.sdk.reference import load_reference_data
from wagelevels.sdk.regional import RegionalModel

BASE = (60000, 85000, 110000)
MULTIPLIERS = {"CA": 1.35, "TX": 0.98}


@pytest.fixture
def model():
    return RegionalModel(BASE, MULTIPLIERS, rng=random.Random(42))


class TestThresholds:
    """Tests for threshold computation."""

    def test_neutral_variation_uses_state_multiplier(self):
        model = RegionalModel(BASE, MULTIPLIERS, variations={"06085": 0.5})
        assert model.thresholds("CA", "06085") == (81000, 114750, 148500)

    def test_low_variation_lowers_by_ten_percent(self):
        """variation 0.0 -> county multiplier 0.9."""
        model = RegionalModel(BASE, MULTIPLIERS, variations={"48441": 0.0})
        assert model.thresholds("TX", "48441") == (52920, 74970, 97020)

    def test_unknown_state_defaults_to_one(self):
        model = RegionalModel(BASE, MULTIPLIERS, variations={"99001": 0.5})
        assert model.thresholds("ZZ", "99001") == BASE

    def test_missing_state_defaults_to_one(self):
        assert RegionalModel(BASE, MULTIPLIERS).thresholds(None, None) == BASE

    def test_state_code_case_insensitive(self):
        model = RegionalModel(BASE, MULTIPLIERS)
        assert model.thresholds("ca") == model.thresholds("CA")

    def test_thresholds_within_ten_percent_band(self, model):
        for county in range(1000, 1100):
            low, mid, high = model.thresholds("CA", f"06{county}")
            for value, base in zip((low, mid, high), BASE):
                assert base * 1.35 * 0.9 - 1 <= value <= base * 1.35 * 1.1 + 1

    def test_thresholds_ascending(self, model):
        for county in range(100):
            low, mid, high = model.thresholds("TX", f"48{county:03d}")
            assert low <= mid <= high


class TestVariationMemoization:
    """Sub-area variations are drawn once and then stable."""

    def test_repeated_calls_are_identical(self, model):
        first = model.thresholds("CA", "06085")
        second = model.thresholds("CA", "06085")
        assert first == second

    def test_variation_stored_on_first_access(self, model):
        assert "06085" not in model.variations
        value = model.variation("06085")
        assert model.variations["06085"] == value
        assert 0 <= value < 1

    def test_existing_variation_never_overwritten(self):
        model = RegionalModel(BASE, MULTIPLIERS, variations={"06085": 0.25})
        model.variation("06085")
        model.thresholds("CA", "06085")
        assert model.variations["06085"] == 0.25

    def test_missing_sub_area_uses_neutral_without_caching(self, model):
        assert model.variation(None) == 0.5
        assert model.variation("") == 0.5
        assert len(model.variations) == 0

    def test_variations_snapshot_is_read_only(self, model):
        model.variation("06085")
        with pytest.raises(TypeError):
            model.variations["06085"] = 0.9

    def test_seeded_models_agree(self):
        a = RegionalModel(BASE, MULTIPLIERS, rng=random.Random(7))
        b = RegionalModel(BASE, MULTIPLIERS, rng=random.Random(7))
        assert a.thresholds("CA", "06001") == b.thresholds("CA", "06001")

    def test_concurrent_first_access_agrees(self, model):
        with ThreadPoolExecutor(max_workers=8) as pool:
            values = list(pool.map(lambda _: model.variation("36061"), range(50)))
        assert len(set(values)) == 1

    def test_invalid_preset_variation_rejected(self):
        with pytest.raises(ValueError):
            RegionalModel(BASE, MULTIPLIERS, variations={"06085": 1.0})


class TestFromReference:

    def test_uses_bundled_tables(self):
        model = RegionalModel.from_reference(load_reference_data())
        assert model.base_thresholds == BASE
        assert model.state_multiplier("CA") == 1.35
        assert model.state_multiplier("GU") == 1.0
