"""
Site input variants for the two calculation modes
RainwaterInput (rooftop harvesting) and RechargeInput (artificial recharge)
share the SiteInput fields; validation lives in validate_site_input
"""

from dataclasses import dataclass, asdict, fields
from typing import Dict, List, Optional, Union

from varsha_core.config.settings import (
    MODE_RAINWATER, MODE_RECHARGE, CALCULATION_MODES,
    SOIL_TYPES, BUDGET_TIERS, ROOF_TYPES, ENVIRONMENTS, PURPOSES,
    CATCHMENT_TYPES, BOREWELL_CONDITIONS, AQUIFER_TYPES
)
from varsha_core.utils.core import DataValidator, InputValidationError


@dataclass(frozen=True)
class BorewellInfo:
    """Existing borewell(s) on the site"""
    has_borewell: bool
    count: int = 1
    depth: Optional[float] = None  # meters
    condition: Optional[str] = None  # Working / Partially-Dead / Dead


@dataclass(frozen=True)
class SiteInput:
    """Fields common to both calculation modes"""
    name: str
    location: str
    pincode: str
    soil_type: str
    groundwater_depth: float  # meters below ground
    budget: str
    has_open_space: bool
    open_space_area: Optional[float] = None  # m2

    mode = None

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass(frozen=True)
class RainwaterInput(SiteInput):
    """Rooftop rainwater harvesting site"""
    roof_area: Optional[float] = None  # m2
    roof_type: Optional[str] = None
    environment: Optional[str] = None
    bird_nesting: Optional[bool] = None
    dwellers: Optional[int] = None
    purpose: Optional[str] = None

    mode = MODE_RAINWATER


@dataclass(frozen=True)
class RechargeInput(SiteInput):
    """Artificial groundwater recharge site"""
    catchment_area: Optional[float] = None  # m2
    catchment_type: Optional[str] = None
    borewell: Optional[BorewellInfo] = None
    aquifer_type: Optional[str] = None

    mode = MODE_RECHARGE

    @property
    def has_borewell(self) -> bool:
        return self.borewell is not None and self.borewell.has_borewell


AnySiteInput = Union[RainwaterInput, RechargeInput]

_INPUT_CLASSES = {
    MODE_RAINWATER: RainwaterInput,
    MODE_RECHARGE: RechargeInput,
}

_COMMON_REQUIRED = ('name', 'location', 'pincode', 'soil_type', 'groundwater_depth',
                    'budget', 'has_open_space')

_REQUIRED_FIELDS = {
    MODE_RAINWATER: _COMMON_REQUIRED + ('roof_area', 'roof_type', 'environment',
                                        'bird_nesting', 'dwellers', 'purpose'),
    MODE_RECHARGE: _COMMON_REQUIRED + ('catchment_area', 'catchment_type'),
}

# camelCase keys used by stored submissions and JSON site files
_CAMEL_KEYS = {
    'soilType': 'soil_type',
    'groundwaterDepth': 'groundwater_depth',
    'hasOpenSpace': 'has_open_space',
    'openSpaceArea': 'open_space_area',
    'roofArea': 'roof_area',
    'roofType': 'roof_type',
    'birdNesting': 'bird_nesting',
    'catchmentArea': 'catchment_area',
    'catchmentType': 'catchment_type',
    'aquiferType': 'aquifer_type',
    'hasBorewell': 'has_borewell',
    'borewellCount': 'borewell_count',
    'borewellDepth': 'borewell_depth',
    'borewellCondition': 'borewell_condition',
}


def _borewell_from_dict(data: Dict) -> BorewellInfo:
    values = {_CAMEL_KEYS.get(k, k): v for k, v in data.items()}
    allowed = {f.name for f in fields(BorewellInfo)}
    unknown = sorted(k for k in values if k not in allowed)
    if unknown:
        raise InputValidationError([f"Unknown borewell field(s): {unknown}"])
    if 'has_borewell' not in values:
        raise InputValidationError(["Missing required borewell field: 'has_borewell'"])
    return BorewellInfo(**values)


def site_input_from_dict(data: Dict, mode: str) -> AnySiteInput:
    """Build the input variant for mode from a camelCase or snake_case mapping"""
    if mode not in _INPUT_CLASSES:
        raise InputValidationError([f"Invalid calculation type {mode!r}, expected one of {list(CALCULATION_MODES)}"])
    if not isinstance(data, dict):
        raise InputValidationError([f"Site input must be a JSON object, got {type(data).__name__}"])

    values = {_CAMEL_KEYS.get(k, k): v for k, v in data.items()}

    # Flat borewell fields (form style) fold into a BorewellInfo
    has_borewell = values.pop('has_borewell', None)
    flat_borewell = {
        'count': values.pop('borewell_count', None),
        'depth': values.pop('borewell_depth', None),
        'condition': values.pop('borewell_condition', None),
    }
    nested = values.get('borewell')
    if isinstance(nested, dict):
        values['borewell'] = _borewell_from_dict(nested)
    elif nested is not None:
        raise InputValidationError([f"Borewell must be an object, got {type(nested).__name__}"])
    elif has_borewell:
        count = flat_borewell['count']
        values['borewell'] = BorewellInfo(
            has_borewell=True,
            count=1 if count is None else count,
            depth=flat_borewell['depth'],
            condition=flat_borewell['condition'],
        )

    cls = _INPUT_CLASSES[mode]
    allowed = {f.name for f in fields(cls)}
    unknown = sorted(k for k in values if k not in allowed)
    if unknown:
        raise InputValidationError([f"Unknown field(s) for {mode} input: {unknown}"])

    missing = [k for k in _REQUIRED_FIELDS[mode] if values.get(k) is None]
    if missing:
        raise InputValidationError([f"Missing required field(s): {missing}"])

    return cls(**values)


def _collect(errors: List[str], check) -> None:
    ok, message = check
    if not ok:
        errors.append(message)


def validate_site_input(site: SiteInput, mode: Optional[str] = None) -> SiteInput:
    """
    Check every field and conditional requirement of a site input

    Raises:
        InputValidationError: listing every problem found
    """
    errors: List[str] = []

    if mode is not None and site.mode != mode:
        raise InputValidationError([
            f"{type(site).__name__} cannot be used for a {mode!r} calculation"
        ])

    _collect(errors, DataValidator.validate_text(site.name, 'Name'))
    _collect(errors, DataValidator.validate_text(site.location, 'Location'))
    _collect(errors, DataValidator.validate_pincode(site.pincode))
    _collect(errors, DataValidator.validate_choice(site.soil_type, 'Soil type', SOIL_TYPES))
    _collect(errors, DataValidator.validate_depth(site.groundwater_depth))
    _collect(errors, DataValidator.validate_choice(site.budget, 'Budget', BUDGET_TIERS))
    _collect(errors, DataValidator.validate_flag(site.has_open_space, 'Open space availability'))

    if site.has_open_space:
        if site.open_space_area is None:
            errors.append("Open space area is required when open space is available")
        else:
            _collect(errors, DataValidator.validate_positive(site.open_space_area, 'Open space area'))

    if isinstance(site, RainwaterInput):
        _collect(errors, DataValidator.validate_positive(site.roof_area, 'Roof area'))
        _collect(errors, DataValidator.validate_choice(site.roof_type, 'Roof type', ROOF_TYPES))
        _collect(errors, DataValidator.validate_choice(site.environment, 'Environment', ENVIRONMENTS))
        _collect(errors, DataValidator.validate_flag(site.bird_nesting, 'Bird nesting'))
        _collect(errors, DataValidator.validate_count(site.dwellers, 'Number of dwellers'))
        _collect(errors, DataValidator.validate_choice(site.purpose, 'Purpose', PURPOSES))

    elif isinstance(site, RechargeInput):
        _collect(errors, DataValidator.validate_positive(site.catchment_area, 'Catchment area'))
        _collect(errors, DataValidator.validate_choice(site.catchment_type, 'Catchment type', CATCHMENT_TYPES))
        if site.aquifer_type is not None:
            _collect(errors, DataValidator.validate_choice(site.aquifer_type, 'Aquifer type', AQUIFER_TYPES))
        if site.has_borewell:
            borewell = site.borewell
            _collect(errors, DataValidator.validate_count(borewell.count, 'Borewell count'))
            if borewell.depth is None:
                errors.append("Borewell depth is required when a borewell is present")
            else:
                _collect(errors, DataValidator.validate_positive(borewell.depth, 'Borewell depth'))
            if borewell.condition is None:
                errors.append("Borewell condition is required when a borewell is present")
            else:
                _collect(errors, DataValidator.validate_choice(
                    borewell.condition, 'Borewell condition', BOREWELL_CONDITIONS))
    else:
        errors.append(f"Unsupported site input type: {type(site).__name__}")

    if errors:
        raise InputValidationError(errors)

    return site
