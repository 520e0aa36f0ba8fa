"""
TEST FILE: COST MODEL & FEASIBILITY SCORING
"""

from dataclasses import replace

import pytest

from varsha_core.models.cost import CostModel
from varsha_core.models.feasibility import FeasibilityScorer, rainfall_tier
from varsha_core.models.recharge import RechargeStructureSizer
from varsha_core.models.results import MonthlyPotential
from varsha_core.models.site import BorewellInfo
from varsha_core.utils.core import FeasibilityClassifier


# ---------------------------------------------------------------- cost model

def test_filtration_cost_multipliers_compound(rainwater_site):
    assert CostModel.filtration_cost(rainwater_site) == 12000
    assert CostModel.filtration_cost(replace(rainwater_site, purpose='Irrigation')) == 5000

    harsh = replace(rainwater_site, environment='Industrial', bird_nesting=True)
    assert CostModel.filtration_cost(harsh) == 21600


def test_system_efficiency_bands(rainwater_site):
    rcc = CostModel.system_efficiency(rainwater_site, 5000)
    gi_large = CostModel.system_efficiency(replace(rainwater_site, roof_type='GI'), 12000)
    asbestos_small = CostModel.system_efficiency(replace(rainwater_site, roof_type='Asbestos'), 2000)

    assert rcc == pytest.approx(0.85 * 0.95)
    assert gi_large == pytest.approx(0.85 * 1.05)
    assert asbestos_small == pytest.approx(0.85 * 0.9 * 0.85)
    assert max(rcc, gi_large, asbestos_small) <= 0.95


def test_harvesting_cost_tiers(coefficients, rainwater_site):
    site = replace(rainwater_site, roof_area=100)
    estimate = CostModel(coefficients).harvesting(site, potential=80000, demand=196344, tank_capacity=5000)

    # 100 x 150 + 5000 x 0.85 + 4500 pump + 12000 filtration
    assert estimate.system_cost.medium == 35750
    assert estimate.system_cost.low == 28600
    assert estimate.system_cost.high == pytest.approx(48263, abs=1)
    assert estimate.maintenance_cost == pytest.approx(35750 * 0.03, abs=1)
    assert estimate.life_cycle_cost == pytest.approx(35750 + 35750 * 0.03 * 20, abs=1)
    assert estimate.system_efficiency is not None


def test_savings_limited_by_demand(coefficients, rainwater_site):
    model = CostModel(coefficients)
    capped = model.harvesting(rainwater_site, potential=10_000_000, demand=50000, tank_capacity=20000)

    # usable water cannot exceed demand: 50000 x (0.05 + 0.015)
    assert capped.annual_savings == 3250


def test_payback_capped_at_25_years(coefficients, rainwater_site):
    estimate = CostModel(coefficients).harvesting(rainwater_site, potential=100, demand=196344,
                                                  tank_capacity=3000)
    assert estimate.payback_period == 25


def test_recharge_cost(coefficients, recharge_site):
    model = CostModel(coefficients)
    plain = model.recharge(replace(recharge_site, has_open_space=False, open_space_area=None, borewell=None))
    full = model.recharge(recharge_site)

    # 200 x 250 + 45000 pit
    assert plain.system_cost.medium == 95000
    assert plain.groundwater_value == 5000
    assert plain.payback_period == 19
    assert plain.annual_savings == 0

    # + 100 x 150 trench + 35000 borewell setup
    assert full.system_cost.medium == 145000
    assert full.groundwater_value == 12000
    assert full.payback_period == 12


def test_recharge_payback_capped_at_30_years(coefficients, recharge_site):
    huge = replace(recharge_site, catchment_area=50000, borewell=None)
    assert CostModel(coefficients).recharge(huge).payback_period == 30


# ---------------------------------------------------------------- feasibility

@pytest.mark.parametrize("score,level", [
    (100, 'High'), (80, 'High'), (79, 'Medium'), (60, 'Medium'), (59, 'Low'), (0, 'Low'),
])
def test_level_thresholds(score, level):
    assert FeasibilityClassifier.classify(score) == level


def test_score_clamped():
    assert FeasibilityClassifier.clamp_score(130) == 100
    assert FeasibilityClassifier.clamp_score(-5) == 0


def test_rainfall_tiers():
    assert rainfall_tier(1400) == 'excellent'
    assert rainfall_tier(1000) == 'good'
    assert rainfall_tier(600) == 'low'


def test_rainwater_feasibility_high(raincity, rainwater_site):
    assessment = FeasibilityScorer().score_rainwater(rainwater_site, raincity, 150000, 196344)

    # 50 + 25 rainfall + 20 RCC + 7 coverage, clamped
    assert assessment.score == 100
    assert assessment.level == 'High'
    assert 'Excellent rainfall - consider larger storage capacity' in assessment.recommendations
    assert 'Install first flush diverter to improve water quality' in assessment.recommendations
    assert 'Consider UV/RO purification for drinking water use' in assessment.recommendations
    assert assessment.warnings == ()


def test_rainwater_feasibility_dry_asbestos(drytown, rainwater_site):
    site = replace(rainwater_site, roof_type='Asbestos', purpose='Irrigation')
    assessment = FeasibilityScorer().score_rainwater(site, drytown, 20000, 196344)

    # 50 + 5 + 10 + 3
    assert assessment.score == 68
    assert assessment.level == 'Medium'
    assert 'Low rainfall area - consider supplementary water sources' in assessment.warnings
    assert 'Asbestos roofs require regular cleaning and filtration' in assessment.warnings
    assert 'High monsoon dependency - 70%+ rainfall in 4 months' in assessment.warnings
    assert 'Consider UV/RO purification for drinking water use' not in assessment.recommendations


def test_rainwater_risk_warnings(raincity, rainwater_site):
    site = replace(rainwater_site, bird_nesting=True, environment='Industrial', has_open_space=True,
                   open_space_area=30)
    assessment = FeasibilityScorer().score_rainwater(site, raincity, 150000, 196344)

    assert any('Bird nesting' in w for w in assessment.warnings)
    assert any('Industrial area' in w for w in assessment.warnings)
    assert 'Connect overflow to recharge pit for maximum benefit' in assessment.recommendations


def test_coverage_with_zero_demand_does_not_divide_by_zero(raincity, rainwater_site):
    assessment = FeasibilityScorer().score_rainwater(rainwater_site, raincity, 150000, 0)
    assert 0 <= assessment.score <= 100


def _sizing(coefficients, site, annual=200000):
    potential = MonthlyPotential(annual=annual, monthly=(annual // 12,) * 12)
    return RechargeStructureSizer(coefficients).size(potential, site)


def test_recharge_feasibility_best_case(coefficients, raincity, recharge_site):
    site = replace(recharge_site, soil_type='Sandy')
    assessment = FeasibilityScorer().score_recharge(site, raincity, _sizing(coefficients, site))

    # 50 + 20 + 25 + 15 + 10 borewell + 10 open space
    assert assessment.score == 100
    assert assessment.level == 'High'
    assert 'Sandy soil is ideal for groundwater recharge' in assessment.recommendations
    assert any('rejuvenated' in r for r in assessment.recommendations)
    assert any('trench' in r for r in assessment.recommendations)


def test_recharge_feasibility_deep_dry_clay(coefficients, drytown, recharge_site):
    site = replace(recharge_site, soil_type='Clayey', groundwater_depth=40,
                   has_open_space=False, open_space_area=None, borewell=None)
    assessment = FeasibilityScorer().score_recharge(site, drytown, _sizing(coefficients, site))

    # 50 + 5 + 10 + 10
    assert assessment.score == 75
    assert assessment.level == 'Medium'
    assert 'Deep groundwater - recharge benefits may take longer to realize' in assessment.warnings
    assert any('No open space' in w for w in assessment.warnings)


def test_recharge_feasibility_shallow_groundwater(coefficients, drytown, recharge_site):
    site = replace(recharge_site, soil_type='Clayey', groundwater_depth=2, has_open_space=False,
                   open_space_area=None,
                   borewell=BorewellInfo(has_borewell=True, count=1, depth=20, condition='Working'))
    assessment = FeasibilityScorer().score_recharge(site, drytown, _sizing(coefficients, site))

    # 50 + 5 + 10 + 5 + 8
    assert assessment.score == 78
    assert any('waterlogging' in w for w in assessment.warnings)
    assert any('preventive' in r for r in assessment.recommendations)


@pytest.mark.parametrize("depth, expected_score, expected_warning", [
    # 50 + 5 + 10 + groundwater band
    (3, 70, 'Shallow groundwater - ensure proper drainage to prevent waterlogging'),
    (3.1, 80, None),
    (29.9, 80, None),
    (30, 75, 'Deep groundwater - recharge benefits may take longer to realize'),
])
def test_recharge_groundwater_band_edges(coefficients, drytown, recharge_site,
                                         depth, expected_score, expected_warning):
    site = replace(recharge_site, soil_type='Clayey', groundwater_depth=depth,
                   has_open_space=False, open_space_area=None, borewell=None)
    assessment = FeasibilityScorer().score_recharge(site, drytown, _sizing(coefficients, site))

    assert assessment.score == expected_score
    groundwater_warnings = [w for w in assessment.warnings if 'groundwater' in w.lower()]
    if expected_warning is None:
        assert groundwater_warnings == []
        assert 'Optimal groundwater depth for recharge systems' in assessment.recommendations
    else:
        assert groundwater_warnings == [expected_warning]
