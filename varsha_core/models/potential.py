"""
POTENTIAL ESTIMATOR
Monthly and annual rainwater capture volume for a site

Rainwater mode: roof area x rainfall x roof runoff coefficient, adjusted for
surrounding environment, bird nesting, season and regional evaporation.
Recharge mode: catchment area x rainfall x catchment runoff coefficient,
seasonal adjustment and half-weight evaporation (no quality term).
"""

import logging
from typing import Sequence

import numpy as np

from varsha_core.config.settings import (
    SEASON_PREMONSOON_MONTHS, SEASON_MONSOON_MONTHS, SEASON_POSTMONSOON_MONTHS,
    CATCHMENT_RUNOFF_COEFFICIENTS, RECHARGE_EVAPORATION_WEIGHT
)
from varsha_core.data_sources import CityRecord, CoefficientTable
from varsha_core.models.results import MonthlyPotential
from varsha_core.models.site import RainwaterInput, RechargeInput
from varsha_core.utils.core import round_half_up

logger = logging.getLogger(__name__)


def get_season(month_index: int) -> str:
    """Season name for a 0-based month index"""
    if month_index in SEASON_PREMONSOON_MONTHS:
        return 'premonsoon'
    if month_index in SEASON_MONSOON_MONTHS:
        return 'monsoon'
    if month_index in SEASON_POSTMONSOON_MONTHS:
        return 'postmonsoon'
    return 'winter'


class PotentialEstimator:
    """Rainwater and recharge-catchment potential in liters"""

    def __init__(self, coefficients: CoefficientTable):
        self.logger = logging.getLogger(__name__)
        self.coefficients = coefficients

    def _seasonal_factors(self) -> np.ndarray:
        return np.array([
            self.coefficients.seasonal_variation[get_season(m)] for m in range(12)
        ])

    @staticmethod
    def _round_months(values: Sequence[float]) -> MonthlyPotential:
        # Months are rounded individually; annual is the sum of rounded months
        monthly = tuple(round_half_up(v) for v in values)
        return MonthlyPotential(annual=int(sum(monthly)), monthly=monthly)

    def estimate_rainwater(self, site: RainwaterInput, city: CityRecord) -> MonthlyPotential:
        """
        Rooftop harvesting potential

        Args:
            site: validated rainwater input
            city: resolved reference city

        Returns:
            MonthlyPotential with 12 non-negative monthly liters
        """
        coeff = self.coefficients
        rainfall = np.asarray(city.monthly_rainfall, dtype=float)

        runoff = coeff.runoff_coefficients[site.roof_type]
        quality = coeff.environment_quality[site.environment]
        if site.bird_nesting:
            quality *= coeff.bird_nesting_factor
        evaporation = coeff.evaporation_loss[city.region]

        raw = site.roof_area * rainfall * runoff
        adjusted = raw * quality * self._seasonal_factors()
        final = adjusted * (1 - evaporation)

        potential = self._round_months(final)
        self.logger.debug(
            f"Rainwater potential for {site.roof_area}m2 {site.roof_type} roof in {city.city}: "
            f"{potential.annual:,}L (runoff {runoff}, quality {quality:.3f}, evaporation {evaporation})"
        )
        return potential

    def estimate_recharge(self, site: RechargeInput, city: CityRecord) -> MonthlyPotential:
        """Recharge catchment potential - runoff by surface type, half-weight evaporation"""
        rainfall = np.asarray(city.monthly_rainfall, dtype=float)

        runoff = CATCHMENT_RUNOFF_COEFFICIENTS[site.catchment_type]
        evaporation = self.coefficients.evaporation_loss[city.region] * RECHARGE_EVAPORATION_WEIGHT

        raw = site.catchment_area * rainfall * runoff
        final = raw * self._seasonal_factors() * (1 - evaporation)

        potential = self._round_months(final)
        self.logger.debug(
            f"Recharge potential for {site.catchment_area}m2 {site.catchment_type} in {city.city}: "
            f"{potential.annual:,}L (runoff {runoff}, evaporation {evaporation:.3f})"
        )
        return potential
