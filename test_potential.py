"""
TEST FILE: POTENTIAL ESTIMATOR
Season mapping, per-month rounding and coefficient effects
"""

from dataclasses import replace

import pytest

from varsha_core.models.potential import PotentialEstimator, get_season


@pytest.mark.parametrize("month,season", [
    (0, 'winter'), (1, 'winter'), (2, 'premonsoon'), (4, 'premonsoon'),
    (5, 'monsoon'), (8, 'monsoon'), (9, 'postmonsoon'), (10, 'postmonsoon'), (11, 'winter'),
])
def test_get_season(month, season):
    assert get_season(month) == season


def test_rainwater_monthly_values(coefficients, raincity, rainwater_site):
    potential = PotentialEstimator(coefficients).estimate_rainwater(rainwater_site, raincity)

    assert len(potential.monthly) == 12
    assert all(isinstance(v, int) and v >= 0 for v in potential.monthly)
    assert potential.annual == sum(potential.monthly)
    # 150 m2 x 10 mm x 0.85 RCC x 0.95 residential x 0.85 winter x 0.92 (South evaporation)
    assert potential.monthly[0] == 947


def test_bird_nesting_lowers_potential(coefficients, raincity, rainwater_site):
    estimator = PotentialEstimator(coefficients)
    clean = estimator.estimate_rainwater(rainwater_site, raincity)
    nesting = estimator.estimate_rainwater(replace(rainwater_site, bird_nesting=True), raincity)

    assert nesting.annual < clean.annual


def test_roof_material_ordering(coefficients, raincity, rainwater_site):
    estimator = PotentialEstimator(coefficients)
    rcc = estimator.estimate_rainwater(rainwater_site, raincity).annual
    tiles = estimator.estimate_rainwater(replace(rainwater_site, roof_type='Tiles'), raincity).annual

    assert tiles < rcc


def test_open_ground_catchment_markedly_lower(coefficients, raincity, recharge_site):
    estimator = PotentialEstimator(coefficients)
    rooftop = estimator.estimate_recharge(recharge_site, raincity)
    open_ground = estimator.estimate_recharge(replace(recharge_site, catchment_type='Open Ground'), raincity)

    assert open_ground.annual < rooftop.annual * 0.3
    assert open_ground.annual == sum(open_ground.monthly)


def test_recharge_uses_half_evaporation(coefficients, raincity, recharge_site):
    potential = PotentialEstimator(coefficients).estimate_recharge(recharge_site, raincity)
    # 200 m2 x 300 mm x 0.85 rooftop x 1.0 monsoon x (1 - 0.08 / 2)
    assert potential.monthly[6] == 48960


def test_zero_rainfall_month(coefficients, drytown, rainwater_site):
    dry = replace(drytown, monthly_rainfall=(0.0,) * 12, annual_rainfall=0.0)
    potential = PotentialEstimator(coefficients).estimate_rainwater(rainwater_site, dry)

    assert potential.monthly == (0,) * 12
    assert potential.annual == 0
