"""
DEMAND ESTIMATOR
Annual water demand of a harvesting site from occupants, purpose and
month-by-month seasonal variation
"""

import logging

import numpy as np

from varsha_core.config.settings import DAYS_IN_MONTH, PURPOSE_DEMAND_FACTORS
from varsha_core.data_sources import CoefficientTable
from varsha_core.models.site import RainwaterInput
from varsha_core.utils.core import round_half_up

logger = logging.getLogger(__name__)


class DemandEstimator:
    """Annual household demand from dwellers, purpose and monthly seasonal multipliers"""

    def __init__(self, coefficients: CoefficientTable):
        self.logger = logging.getLogger(__name__)
        self.coefficients = coefficients

    def monthly_demand(self, site: RainwaterInput) -> np.ndarray:
        """Unrounded liters per calendar month (365-day year)"""
        purpose_factor = PURPOSE_DEMAND_FACTORS[site.purpose]
        multipliers = np.asarray(self.coefficients.seasonal_demand_multipliers[site.purpose])
        days = np.asarray(DAYS_IN_MONTH, dtype=float)

        return (site.dwellers * self.coefficients.domestic_consumption
                * days * purpose_factor * multipliers)

    def estimate(self, site: RainwaterInput) -> int:
        """Annual demand in liters, rounded once after summing the months"""
        demand = round_half_up(float(self.monthly_demand(site).sum()))
        self.logger.debug(
            f"Demand for {site.dwellers} dweller(s), {site.purpose}: {demand:,}L/year"
        )
        return demand
