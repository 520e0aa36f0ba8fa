"""
TANK SIZING MODEL
Storage capacity for rooftop harvesting from dry-period deficit and
monsoon-surplus analysis, plus cylindrical tank dimensions
"""

import logging
import math
from typing import Sequence

from varsha_core.config.settings import (
    TANK_PARAMS, TANK_HEIGHT_TIERS, SEASON_MONSOON_MONTHS, FIRST_FLUSH_MM
)
from varsha_core.models.results import MonthlyPotential, TankDimensions, TankSizing
from varsha_core.utils.core import round_half_up

logger = logging.getLogger(__name__)


class TankSizer:
    """
    Candidate capacities:
    - demand-based: 45 days of average demand
    - potential-based: 25% of annual potential
    - dry-period-based: 80% of worst cumulative shortfall
    - monsoon-based: monsoon surplus, capped at 20,000 L

    The tighter of demand/potential is raised to cover the dry period,
    capped by the monsoon candidate, and never drops below 3,000 L.
    """

    def __init__(self, params: dict = None):
        self.logger = logging.getLogger(__name__)
        self.params = dict(TANK_PARAMS if params is None else params)

    @staticmethod
    def dry_period_deficit(monthly_potential: Sequence[int], annual_demand: float) -> int:
        """Largest cumulative shortfall of supply against flat monthly demand"""
        monthly_demand = annual_demand / 12
        max_deficit = 0.0
        cumulative = 0.0

        for potential in monthly_potential:
            cumulative = max(0.0, cumulative + (monthly_demand - potential))
            max_deficit = max(max_deficit, cumulative)

        return round_half_up(max_deficit)

    @staticmethod
    def monsoon_surplus(monthly_potential: Sequence[int], annual_demand: float) -> int:
        """Jun-Sep supply in excess of flat monthly demand"""
        monthly_demand = annual_demand / 12
        surplus = sum(
            max(0.0, monthly_potential[m] - monthly_demand) for m in SEASON_MONSOON_MONTHS
        )
        return round_half_up(surplus)

    @staticmethod
    def dimensions(capacity_liters: float) -> TankDimensions:
        volume_m3 = capacity_liters / 1000
        height = TANK_HEIGHT_TIERS[-1][1]
        for max_volume, tier_height in TANK_HEIGHT_TIERS:
            if volume_m3 <= max_volume:
                height = tier_height
                break

        diameter = math.sqrt((volume_m3 * 4) / (math.pi * height))
        return TankDimensions(diameter=round(diameter, 1), height=height)

    @staticmethod
    def first_flush(roof_area: float) -> int:
        """Liters diverted before collection (2 mm over the roof)"""
        return round_half_up(roof_area * FIRST_FLUSH_MM)

    def size(self, potential: MonthlyPotential, annual_demand: int) -> TankSizing:
        p = self.params
        minimum = p['minimum_capacity_liters']

        deficit = self.dry_period_deficit(potential.monthly, annual_demand)
        surplus = self.monsoon_surplus(potential.monthly, annual_demand)

        demand_based = round_half_up(annual_demand / 365 * p['demand_storage_days'])
        potential_based = round_half_up(potential.annual * p['potential_fraction'])
        dry_period_based = deficit * p['dry_period_fraction']
        monsoon_based = min(surplus, p['monsoon_cap_liters'])

        capacity = max(min(demand_based, potential_based), dry_period_based, minimum)
        capacity = max(minimum, min(capacity, monsoon_based))
        capacity = round_half_up(capacity)

        self.logger.debug(
            f"Tank candidates: demand {demand_based}L, potential {potential_based}L, "
            f"dry period {dry_period_based:.0f}L, monsoon {monsoon_based}L -> {capacity}L"
        )

        return TankSizing(
            capacity=capacity,
            dimensions=self.dimensions(capacity),
            dry_period_deficit=deficit,
            monsoon_surplus=surplus,
        )
