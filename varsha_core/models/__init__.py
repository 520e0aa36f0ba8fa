"""
Models module initialization - calculation pipeline stages
"""

from .site import (
    BorewellInfo, SiteInput, RainwaterInput, RechargeInput,
    site_input_from_dict, validate_site_input
)
from .site_resolver import SiteResolver
from .potential import PotentialEstimator, get_season
from .demand import DemandEstimator
from .storage import TankSizer
from .recharge import RechargeStructureSizer
from .cost import CostModel
from .feasibility import FeasibilityScorer
from .results import CalculationResult, RainwaterResults, RechargeResults

__all__ = [
    'BorewellInfo',
    'SiteInput',
    'RainwaterInput',
    'RechargeInput',
    'site_input_from_dict',
    'validate_site_input',
    'SiteResolver',
    'PotentialEstimator',
    'get_season',
    'DemandEstimator',
    'TankSizer',
    'RechargeStructureSizer',
    'CostModel',
    'FeasibilityScorer',
    'CalculationResult',
    'RainwaterResults',
    'RechargeResults'
]
