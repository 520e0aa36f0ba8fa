"""
Core utility functions for Varsha rainwater harvesting platform
"""

import json
import math
import re
import logging
from pathlib import Path
from typing import Dict, List, Tuple, Any, Iterable
from datetime import datetime

import numpy as np
import pandas as pd

from varsha_core.config.settings import (
    PINCODE_PATTERN, NAME_MIN_LENGTH, GROUNDWATER_DEPTH_RANGE_M,
    FEASIBILITY_LEVELS, FEASIBILITY_SCORE_RANGE, REPORT_FILENAME_MAX_LENGTH
)

logger = logging.getLogger(__name__)


class VarshaError(Exception):
    """Base class for all engine errors"""


class InputValidationError(VarshaError):
    """Site input is malformed or violates a conditional requirement"""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "Invalid site input")


class ReferenceDataError(VarshaError):
    """Reference tables are missing, empty or malformed"""


class ComputationError(VarshaError):
    """A pipeline stage produced a non-finite value"""


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positive values"""
    return int(math.floor(value + 0.5))


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def ensure_finite(values: Dict[str, Any], stage: str) -> None:
    """Raise ComputationError if any numeric value in the mapping is NaN or infinite"""
    for name, value in values.items():
        if value is None or isinstance(value, (str, bool)):
            continue
        array = np.asarray(value, dtype=float)
        if not np.all(np.isfinite(array)):
            raise ComputationError(f"{stage}: non-finite value for '{name}': {value}")


class DataValidator:
    """Validates site input fields before they reach the engine"""

    @staticmethod
    def validate_pincode(pincode: str) -> Tuple[bool, str]:
        """Validate 6-digit Indian postal code"""
        if not isinstance(pincode, str) or not re.match(PINCODE_PATTERN, pincode):
            return False, f"Valid 6-digit pincode required, got {pincode!r}"
        return True, "Valid pincode"

    @staticmethod
    def validate_text(value: str, field: str, min_length: int = NAME_MIN_LENGTH) -> Tuple[bool, str]:
        if not isinstance(value, str) or len(value.strip()) < min_length:
            return False, f"{field} must be at least {min_length} characters"
        return True, f"Valid {field}"

    @staticmethod
    def validate_choice(value: str, field: str, allowed: Iterable[str]) -> Tuple[bool, str]:
        allowed = tuple(allowed)
        if value not in allowed:
            return False, f"{field} must be one of {list(allowed)}, got {value!r}"
        return True, f"Valid {field}"

    @staticmethod
    def validate_positive(value: float, field: str) -> Tuple[bool, str]:
        try:
            value = float(value)
        except (TypeError, ValueError):
            return False, f"Invalid {field} type: {type(value).__name__}"

        if not math.isfinite(value) or value <= 0:
            return False, f"{field} must be greater than 0, got {value}"
        return True, f"Valid {field}"

    @staticmethod
    def validate_count(count: int, field: str, minimum: int = 1) -> Tuple[bool, str]:
        if isinstance(count, bool) or not isinstance(count, int):
            return False, f"Invalid {field} type: {type(count).__name__}"
        if count < minimum:
            return False, f"{field} must be at least {minimum}, got {count}"
        return True, f"Valid {field}"

    @staticmethod
    def validate_flag(value: bool, field: str) -> Tuple[bool, str]:
        if not isinstance(value, bool):
            return False, f"{field} must be true or false, got {value!r}"
        return True, f"Valid {field}"

    @staticmethod
    def validate_depth(depth_m: float, field: str = "Groundwater depth") -> Tuple[bool, str]:
        """Validate depth parameter"""
        try:
            depth_m = float(depth_m)
        except (TypeError, ValueError):
            return False, f"Invalid depth type: {type(depth_m).__name__}"

        low, high = GROUNDWATER_DEPTH_RANGE_M
        if not (low <= depth_m <= high):
            return False, f"{field} {depth_m}m outside valid range [{low:.0f}-{high:.0f}m]"

        return True, "Valid depth"

    @staticmethod
    def sanitize_filename(name: str, max_length: int = REPORT_FILENAME_MAX_LENGTH) -> str:
        """Sanitize a user-supplied name for use in report file names"""
        sanitized = re.sub(r'[^a-zA-Z0-9\s_-]', '', str(name))
        sanitized = re.sub(r'\s+', '-', sanitized)
        return sanitized[:max_length]


class FeasibilityClassifier:
    """Map a composite score to a feasibility level"""

    @staticmethod
    def clamp_score(score: float) -> int:
        low, high = FEASIBILITY_SCORE_RANGE
        return int(clamp(score, low, high))

    @staticmethod
    def classify(score: float) -> str:
        if score >= FEASIBILITY_LEVELS['High']:
            return 'High'
        elif score >= FEASIBILITY_LEVELS['Medium']:
            return 'Medium'
        return 'Low'


class ReportExporter:
    """Export calculation results in multiple formats"""

    @staticmethod
    def to_json(payload: Dict, output_path: Path) -> Path:
        """Export a result dictionary to JSON"""
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(payload, f, indent=2, default=str)

        logger.info(f"JSON report exported to {output_path}")
        return output_path

    @staticmethod
    def to_csv(data: pd.DataFrame, output_path: Path) -> Path:
        """Export DataFrame to CSV"""
        output_path.parent.mkdir(parents=True, exist_ok=True)

        data.to_csv(output_path, index=False)
        logger.info(f"CSV report exported to {output_path}")
        return output_path

    @staticmethod
    def to_excel(data: pd.DataFrame, output_path: Path, sheet_name: str = 'Monthly') -> Path:
        """Export DataFrame to an Excel workbook"""
        output_path.parent.mkdir(parents=True, exist_ok=True)

        data.to_excel(output_path, index=False, sheet_name=sheet_name, engine='openpyxl')
        logger.info(f"Excel report exported to {output_path}")
        return output_path


def get_timestamp() -> str:
    """Get current timestamp in ISO format"""
    return datetime.now().isoformat()
