"""
FEASIBILITY SCORER
Flat accumulation of weighted contributions onto a base score of 50

Harvesting: rainfall adequacy, roof suitability, demand coverage
Recharge: rainfall adequacy, soil infiltration, groundwater depth band,
existing borewell and open space

Each contribution appends its recommendation or warning. The score is
clamped to [0, 100] and classified High (>=80), Medium (>=60) or Low.
"""

import logging
from typing import List, Tuple

from varsha_core.config.settings import (
    FEASIBILITY_BASE_SCORE, RAINFALL_TIERS_MM, HARVESTING_FEASIBILITY_POINTS,
    COVERAGE_TIERS_PERCENT, RECHARGE_FEASIBILITY_POINTS, GROUNDWATER_BANDS_M,
    MONSOON_DEPENDENCY_THRESHOLD
)
from varsha_core.data_sources import CityRecord
from varsha_core.models.results import FeasibilityAssessment, RechargeSizing
from varsha_core.models.site import RainwaterInput, RechargeInput
from varsha_core.utils.core import FeasibilityClassifier

logger = logging.getLogger(__name__)


def rainfall_tier(annual_rainfall_mm: float) -> str:
    if annual_rainfall_mm > RAINFALL_TIERS_MM['excellent']:
        return 'excellent'
    elif annual_rainfall_mm > RAINFALL_TIERS_MM['good']:
        return 'good'
    return 'low'


class FeasibilityScorer:

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def _assess(self, score: float, recommendations: List[str],
                warnings: List[str]) -> FeasibilityAssessment:
        clamped = FeasibilityClassifier.clamp_score(score)
        return FeasibilityAssessment(
            score=clamped,
            level=FeasibilityClassifier.classify(clamped),
            recommendations=tuple(recommendations),
            warnings=tuple(warnings),
        )

    def score_rainwater(self, site: RainwaterInput, city: CityRecord,
                        potential: int, demand: int) -> FeasibilityAssessment:
        """
        Score a rooftop harvesting site

        Args:
            site: validated rainwater input
            city: resolved reference city
            potential: annual harvest potential (L)
            demand: annual household demand (L)
        """
        points = HARVESTING_FEASIBILITY_POINTS
        score = FEASIBILITY_BASE_SCORE
        recommendations: List[str] = []
        warnings: List[str] = []

        # Rainfall adequacy
        tier = rainfall_tier(city.annual_rainfall)
        score += points['rainfall'][tier]
        if tier == 'excellent':
            recommendations.append('Excellent rainfall - consider larger storage capacity')
        elif tier == 'good':
            recommendations.append('Good rainfall - standard system recommended')
        else:
            warnings.append('Low rainfall area - consider supplementary water sources')

        # Roof suitability
        if site.roof_type in ('RCC', 'GI'):
            score += points['roof'][site.roof_type]
            recommendations.append(f'{site.roof_type} roof is excellent for rainwater harvesting')
        elif site.roof_type == 'Tiles':
            score += points['roof']['Tiles']
            recommendations.append('Clay/concrete tiles are suitable with proper first flush diverter')
        else:
            score += points['roof']['other']
            warnings.append('Asbestos roofs require regular cleaning and filtration')

        # Coverage of demand (unclamped ratio)
        coverage = potential / max(demand, 1) * 100
        if coverage > COVERAGE_TIERS_PERCENT['excellent']:
            score += points['coverage']['excellent']
            recommendations.append('Excellent coverage - consider selling excess water or larger recharge')
        elif coverage > COVERAGE_TIERS_PERCENT['good']:
            score += points['coverage']['good']
            recommendations.append('Good coverage - system will significantly reduce water bills')
        else:
            score += points['coverage']['partial']
            recommendations.append('Partial coverage - combine with water conservation measures')

        # Site risk flags
        if site.bird_nesting:
            warnings.append('Bird nesting detected - install mesh covers and regular cleaning required')
        if site.environment == 'Industrial':
            warnings.append('Industrial area - test water quality regularly and use appropriate filtration')
        if city.monsoon_share > MONSOON_DEPENDENCY_THRESHOLD:
            warnings.append('High monsoon dependency - 70%+ rainfall in 4 months')

        recommendations.append('Install first flush diverter to improve water quality')
        if site.purpose == 'Domestic':
            recommendations.append('Consider UV/RO purification for drinking water use')
        if site.has_open_space:
            recommendations.append('Connect overflow to recharge pit for maximum benefit')

        assessment = self._assess(score, recommendations, warnings)
        self.logger.debug(f"Harvesting feasibility {assessment.score} ({assessment.level}), coverage {coverage:.0f}%")
        return assessment

    def score_recharge(self, site: RechargeInput, city: CityRecord,
                       sizing: RechargeSizing) -> FeasibilityAssessment:
        points = RECHARGE_FEASIBILITY_POINTS
        score = FEASIBILITY_BASE_SCORE
        recommendations: List[str] = []
        warnings: List[str] = []

        tier = rainfall_tier(city.annual_rainfall)
        score += points['rainfall'][tier]
        if tier == 'excellent':
            recommendations.append('Excellent rainfall - high recharge potential every monsoon')
        elif tier == 'good':
            recommendations.append('Good rainfall - standard recharge structures recommended')
        else:
            warnings.append('Low rainfall area - recharge volumes will be limited')

        score += points['soil'][site.soil_type]
        recommendations.append(self._soil_message(site.soil_type))

        band, message, is_warning = self._groundwater_band(site.groundwater_depth)
        score += points['groundwater'][band]
        (warnings if is_warning else recommendations).append(message)

        if site.has_borewell:
            borewell = site.borewell
            rejuvenation = sizing.borewell_rejuvenation
            if rejuvenation is not None and rejuvenation.recommended:
                score += points['borewell']['rejuvenation']
                recommendations.append(
                    f'{borewell.condition} borewell can be rejuvenated - {rejuvenation.method.lower()}'
                )
            else:
                score += points['borewell']['preventive']
                recommendations.append('Working borewell - add preventive recharge to sustain its yield')
            if sizing.borewell_recharge is not None:
                recommendations.append(
                    f'Borewell recharge capacity of about {sizing.borewell_recharge.total_capacity_lph:,} L/hr'
                )

        if site.has_open_space:
            score += points['open_space']
            if sizing.trench_dimensions is not None:
                trenches = sizing.trench_dimensions
                recommendations.append(
                    f'Use the open space for {trenches.count} recharge trench(es) of about {trenches.length}m'
                )
            else:
                recommendations.append('Use the open space for recharge trenches')
        else:
            warnings.append('No open space declared - recharge limited to a single pit')

        recommendations.append('Install first flush diverter and silt filter before the recharge structure')

        assessment = self._assess(score, recommendations, warnings)
        self.logger.debug(f"Recharge feasibility {assessment.score} ({assessment.level})")
        return assessment

    @staticmethod
    def _soil_message(soil_type: str) -> str:
        if soil_type == 'Sandy':
            return 'Sandy soil is ideal for groundwater recharge'
        elif soil_type == 'Loamy':
            return 'Loamy soil provides good infiltration for recharge'
        return 'Clayey soil requires larger recharge structures'

    @staticmethod
    def _groundwater_band(depth_m: float) -> Tuple[str, str, bool]:
        """(band, message, is_warning) for a groundwater depth"""
        if GROUNDWATER_BANDS_M['shallow_max'] < depth_m < GROUNDWATER_BANDS_M['deep_min']:
            return 'optimal', 'Optimal groundwater depth for recharge systems', False
        elif depth_m <= GROUNDWATER_BANDS_M['shallow_max']:
            return 'shallow', 'Shallow groundwater - ensure proper drainage to prevent waterlogging', True
        return 'deep', 'Deep groundwater - recharge benefits may take longer to realize', True
