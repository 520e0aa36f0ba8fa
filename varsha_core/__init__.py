"""
Package initialization file for Varsha Core
"""

__version__ = "1.0.0"
__description__ = "Varsha - Rooftop Rainwater Harvesting & Artificial Recharge Assessment for India"

from varsha_core.engine import CalculationEngine
from varsha_core.data_sources import ReferenceData, ReferenceDataStore, CityRecord, CoefficientTable
from varsha_core.models.site import (
    BorewellInfo, RainwaterInput, RechargeInput, site_input_from_dict, validate_site_input
)
from varsha_core.models.results import RainwaterResults, RechargeResults
from varsha_core.reports.html_generator import HtmlReportGenerator
from varsha_core.utils.submission_store import SubmissionStore, Submission

from varsha_core.utils.core import (
    VarshaError, InputValidationError, ReferenceDataError, ComputationError,
    DataValidator, ReportExporter
)

__all__ = [
    'CalculationEngine',
    'ReferenceData',
    'ReferenceDataStore',
    'CityRecord',
    'CoefficientTable',
    'BorewellInfo',
    'RainwaterInput',
    'RechargeInput',
    'site_input_from_dict',
    'validate_site_input',
    'RainwaterResults',
    'RechargeResults',
    'HtmlReportGenerator',
    'SubmissionStore',
    'Submission',
    'VarshaError',
    'InputValidationError',
    'ReferenceDataError',
    'ComputationError',
    'DataValidator',
    'ReportExporter'
]
