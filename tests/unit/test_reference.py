"""Tests for the bundled reference tables."""

from wagelevels.sdk.reference import load_reference_data


class TestReferenceData:

    def test_all_states_present(self):
        reference = load_reference_data()
        assert len(reference.states) == 51
        assert reference.state_name("DC") == "District of Columbia"

    def test_fips_lookup(self):
        reference = load_reference_data()
        assert reference.state_for_fips("06") == "CA"
        assert reference.state_for_fips("48441") == "TX"
        assert reference.state_for_fips("99") is None
        assert reference.state_for_fips(None) is None

    def test_explicit_state_wins_over_fips(self):
        reference = load_reference_data()
        assert reference.resolve_state("ny", "06085") == "NY"
        assert reference.resolve_state(None, "06085") == "CA"
        assert reference.resolve_state(None, None) is None

    def test_regional_parameters(self):
        regional = load_reference_data().regional
        assert regional.base_thresholds.as_tuple() == (60000, 85000, 110000)
        assert regional.regional_multipliers["NY"] == 1.30
        assert regional.sub_area_spread == 0.10

    def test_loaded_once(self):
        assert load_reference_data() is load_reference_data()
