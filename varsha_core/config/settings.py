"""
Configuration settings for Varsha rainwater harvesting platform
Rooftop harvesting and artificial recharge sizing for sites in India

This module contains ONLY configuration constants.
Reference tables (city rainfall, coefficients) live in varsha_core/data
and are loaded once by varsha_core.data_sources.ReferenceDataStore.
"""

from pathlib import Path
import os

# Project Root
PROJECT_ROOT = Path(__file__).parent.parent.parent
PACKAGE_ROOT = Path(__file__).parent.parent

# Reference data directory (override with VARSHA_DATA_DIR)
DATA_DIR = Path(os.getenv('VARSHA_DATA_DIR', PACKAGE_ROOT / 'data'))
CITIES_FILE = 'cities.json'
COEFFICIENTS_FILE = 'coefficients.json'

# Output directories, created on demand
OUTPUT_DIR = Path(os.getenv('VARSHA_OUTPUT_DIR', PROJECT_ROOT / 'varsha_outputs'))
REPORTS_DIR = OUTPUT_DIR / 'reports'

# Submission history database
SUBMISSION_DB_PATH = os.getenv('VARSHA_DB_PATH', str(OUTPUT_DIR / 'submissions.db'))
HISTORY_DEFAULT_LIMIT = 10

# MODEL VERSION TRACKING
MODEL_VERSION = "1.0.0"

# ======================== INPUT DOMAINS ========================

CALCULATION_MODES = ('rainwater', 'recharge')
MODE_RAINWATER = 'rainwater'
MODE_RECHARGE = 'recharge'

SOIL_TYPES = ('Sandy', 'Loamy', 'Clayey')
BUDGET_TIERS = ('Low', 'Medium', 'High')
ROOF_TYPES = ('RCC', 'GI', 'Asbestos', 'Tiles')
ENVIRONMENTS = ('Residential', 'Industrial', 'Agricultural')
PURPOSES = ('Domestic', 'Irrigation', 'Industrial')
CATCHMENT_TYPES = ('Rooftop', 'Terrace', 'Paved', 'Open Ground')
BOREWELL_CONDITIONS = ('Working', 'Partially-Dead', 'Dead')
AQUIFER_TYPES = ('Alluvial', 'Hard Rock', 'Coastal', 'Desert')
CLIMATIC_REGIONS = ('North', 'South', 'East', 'West', 'Central', 'Northeast')

PINCODE_PATTERN = r'^\d{6}$'
PINCODE_PREFIX_LENGTH = 3
NAME_MIN_LENGTH = 2
GROUNDWATER_DEPTH_RANGE_M = (0.0, 500.0)

# ======================== SITE RESOLUTION ========================

# Used when neither pincode prefix nor location text matches a city
DEFAULT_CITY = 'Delhi'

# ======================== SEASONS & CALENDAR ========================

MONTH_NAMES = ('Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
               'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec')
DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)  # no leap year

# 0-based month indices
SEASON_PREMONSOON_MONTHS = (2, 3, 4)        # Mar-May
SEASON_MONSOON_MONTHS = (5, 6, 7, 8)        # Jun-Sep
SEASON_POSTMONSOON_MONTHS = (9, 10)         # Oct-Nov
MONSOON_DEPENDENCY_THRESHOLD = 0.70         # share of annual rain in Jun-Sep

# ======================== POTENTIAL ESTIMATION ========================

# Runoff coefficients for recharge catchments (roof materials come from coefficients.json)
CATCHMENT_RUNOFF_COEFFICIENTS = {
    'Rooftop': 0.85,
    'Terrace': 0.90,
    'Paved': 0.80,
    'Open Ground': 0.20,
}
# Recharge water infiltrates soon after it falls, so only half the evaporation applies
RECHARGE_EVAPORATION_WEIGHT = 0.5

# ======================== DEMAND ESTIMATION ========================

PURPOSE_DEMAND_FACTORS = {
    'Domestic': 1.0,
    'Irrigation': 1.8,
    'Industrial': 2.3,
}

# ======================== TANK SIZING ========================

TANK_PARAMS = {
    'demand_storage_days': 45,              # days of average demand
    'potential_fraction': 0.25,             # share of annual potential
    'dry_period_fraction': 0.80,            # share of worst cumulative deficit
    'monsoon_cap_liters': 20000,            # ceiling on monsoon-surplus storage
    'minimum_capacity_liters': 3000,        # absolute floor
}
# (max volume m3, height m) - last tier applies above the largest bound
TANK_HEIGHT_TIERS = (
    (8.0, 2.0),
    (20.0, 2.5),
    (float('inf'), 3.0),
)
FIRST_FLUSH_MM = 2                          # 2 mm over the roof = 2 L per m2

# ======================== RECHARGE STRUCTURES ========================

RECHARGE_SOIL_FACTORS = {
    'Sandy': 0.9,
    'Loamy': 0.8,
    'Clayey': 0.7,
}
RECHARGE_PARAMS = {
    'effective_rainy_days': 120,            # days of inflow per year
    'infiltration_hours_per_day': 8,
    'pit_min_area_m2': 9.0,
    'pit_depth_fraction_of_gw': 0.3,
    'pit_depth_min_m': 2.0,
    'pit_depth_max_m': 4.0,
    'pit_min_side_m': 3,
    'trench_width_m': 0.5,
    'trench_depth_max_m': 1.5,
    'trench_depth_fraction_of_gw': 0.15,
    'trench_length_fraction_of_side': 0.8,
}
BOREWELL_RECHARGE_PARAMS = {
    'base_rate_lph': 2000,                  # liters per hour
    'reference_depth_m': 30.0,
    'max_depth_factor': 1.5,
}
BOREWELL_CONDITION_FACTORS = {
    'Dead': 0.6,
    'Partially-Dead': 0.75,
    'Working': 1.0,
}
BOREWELL_REJUVENATION = {
    'Dead': {
        'recommended': True,
        'method': 'Direct recharge through the borewell casing with a filter chamber',
        'expected_improvement': 'Yield can be partially restored within 1-2 monsoon seasons',
    },
    'Partially-Dead': {
        'recommended': True,
        'method': 'Adjacent recharge pit connected to the borewell zone',
        'expected_improvement': 'Yield improvement of 30-50% expected after one monsoon',
    },
    'Working': {
        'recommended': False,
        'method': 'Preventive recharge to sustain the current yield',
        'expected_improvement': 'Maintains yield and delays water-table decline',
    },
}

# ======================== COST MODEL ========================

HARVESTING_COST_PARAMS = {
    'tank_rate_bulk': 0.75,                 # per liter above the bulk threshold
    'tank_rate_standard': 0.85,
    'tank_bulk_threshold_liters': 10000,
    'pump_cost_small': 4500,
    'pump_cost_large': 8000,
    'pump_large_threshold_liters': 5000,
    'filtration_base': 5000,
    'filtration_domestic': 12000,           # UV + RO
    'filtration_industrial_multiplier': 1.5,
    'filtration_bird_nesting_multiplier': 1.2,
    'payback_cap_years': 25,
}
SYSTEM_EFFICIENCY_PARAMS = {
    'base': 0.85,
    'small_tank_threshold_liters': 3000,
    'small_tank_factor': 0.9,
    'large_tank_threshold_liters': 10000,
    'large_tank_factor': 1.05,
    'industrial_factor': 0.92,
    'bird_nesting_factor': 0.95,
    'cap': 0.95,
}
ROOF_EFFICIENCY_FACTORS = {
    'RCC': 0.95,
    'GI': 1.0,
    'Asbestos': 0.85,
    'Tiles': 0.90,
}
WATER_QUALITY_PREMIUM = {
    'Domestic': 0.015,                      # RO water saving per liter
    'default': 0.005,
}
RECHARGE_COST_PARAMS = {
    'catchment_cost_per_sqm': 250,
    'pit_cost': 45000,
    'trench_cost_per_sqm': 150,
    'borewell_setup_cost': 35000,
    'groundwater_value_with_borewell': 12000,
    'groundwater_value_without_borewell': 5000,
    'payback_cap_years': 30,
}

# ======================== FEASIBILITY ========================

FEASIBILITY_BASE_SCORE = 50
FEASIBILITY_SCORE_RANGE = (0, 100)
FEASIBILITY_LEVELS = {
    'High': 80,
    'Medium': 60,
}
RAINFALL_TIERS_MM = {
    'excellent': 1000,
    'good': 600,
}
HARVESTING_FEASIBILITY_POINTS = {
    'rainfall': {'excellent': 25, 'good': 15, 'low': 5},
    'roof': {'RCC': 20, 'GI': 20, 'Tiles': 15, 'other': 10},
    'coverage': {'excellent': 10, 'good': 7, 'partial': 3},
}
COVERAGE_TIERS_PERCENT = {
    'excellent': 80,
    'good': 50,
}
RECHARGE_FEASIBILITY_POINTS = {
    'rainfall': {'excellent': 20, 'good': 12, 'low': 5},
    'soil': {'Sandy': 25, 'Loamy': 18, 'Clayey': 10},
    'groundwater': {'optimal': 15, 'shallow': 5, 'deep': 10},
    'borewell': {'rejuvenation': 10, 'preventive': 8},
    'open_space': 10,
}
GROUNDWATER_BANDS_M = {
    'shallow_max': 3.0,
    'deep_min': 30.0,
}

# ======================== REPORTS ========================

COLOR_SCHEME = {
    'High': '#2ecc71',
    'Medium': '#f39c12',
    'Low': '#e74c3c',
    'neutral': '#95a5a6',
}
REPORT_FILENAME_MAX_LENGTH = 50
