"""
TEST FILE: SITE INPUT VALIDATION
Field checks, conditional requirements and dict construction
"""

from dataclasses import replace

import pytest

from varsha_core.models.site import (
    BorewellInfo, RechargeInput, site_input_from_dict, validate_site_input
)
from varsha_core.utils.core import DataValidator, InputValidationError


def test_valid_inputs_pass(rainwater_site, recharge_site):
    assert validate_site_input(rainwater_site, 'rainwater') is rainwater_site
    assert validate_site_input(recharge_site, 'recharge') is recharge_site


@pytest.mark.parametrize("pincode", ["12345", "1234567", "abc123", "", None])
def test_bad_pincode(pincode):
    ok, message = DataValidator.validate_pincode(pincode)
    assert not ok
    assert "pincode" in message


def test_errors_are_collected(rainwater_site):
    site = replace(rainwater_site, pincode="12", roof_area=0, dwellers=0, roof_type="Thatch")

    with pytest.raises(InputValidationError) as excinfo:
        validate_site_input(site)

    assert len(excinfo.value.errors) == 4


def test_open_space_requires_area(rainwater_site):
    site = replace(rainwater_site, has_open_space=True, open_space_area=None)
    with pytest.raises(InputValidationError, match="Open space area is required"):
        validate_site_input(site)


def test_open_space_area_must_be_positive(rainwater_site):
    site = replace(rainwater_site, has_open_space=True, open_space_area=-4)
    with pytest.raises(InputValidationError):
        validate_site_input(site)


def test_borewell_requires_depth_and_condition(recharge_site):
    site = replace(recharge_site, borewell=BorewellInfo(has_borewell=True))

    with pytest.raises(InputValidationError) as excinfo:
        validate_site_input(site)

    messages = " ".join(excinfo.value.errors)
    assert "depth is required" in messages
    assert "condition is required" in messages


def test_absent_borewell_needs_no_details(recharge_site):
    site = replace(recharge_site, borewell=BorewellInfo(has_borewell=False))
    validate_site_input(site, 'recharge')


def test_negative_groundwater_depth(recharge_site):
    with pytest.raises(InputValidationError, match="Groundwater depth"):
        validate_site_input(replace(recharge_site, groundwater_depth=-1))


def test_dwellers_must_be_integer(rainwater_site):
    with pytest.raises(InputValidationError):
        validate_site_input(replace(rainwater_site, dwellers=True))


def test_mode_mismatch(rainwater_site):
    with pytest.raises(InputValidationError, match="cannot be used"):
        validate_site_input(rainwater_site, 'recharge')


def test_from_camel_case_dict():
    site = site_input_from_dict({
        "name": "Green Acres Farm",
        "location": "Raincity",
        "pincode": "560034",
        "soilType": "Loamy",
        "groundwaterDepth": 10,
        "budget": "Medium",
        "hasOpenSpace": False,
        "catchmentArea": 200,
        "catchmentType": "Paved",
        "hasBorewell": True,
        "borewellCount": 2,
        "borewellDepth": 60,
        "borewellCondition": "Partially-Dead",
    }, 'recharge')

    assert isinstance(site, RechargeInput)
    assert site.catchment_type == "Paved"
    assert site.borewell == BorewellInfo(has_borewell=True, count=2, depth=60, condition="Partially-Dead")
    validate_site_input(site, 'recharge')


def test_from_dict_round_trips_nested_borewell(recharge_site):
    rebuilt = site_input_from_dict(recharge_site.to_dict(), 'recharge')
    assert rebuilt == recharge_site


def test_from_dict_rejects_unknown_field(rainwater_site):
    data = dict(rainwater_site.to_dict(), catchment_area=10)
    with pytest.raises(InputValidationError, match="Unknown field"):
        site_input_from_dict(data, 'rainwater')


def test_from_dict_rejects_missing_field():
    with pytest.raises(InputValidationError, match="Missing required"):
        site_input_from_dict({"name": "X", "roofArea": 10}, 'rainwater')


def test_from_dict_rejects_unknown_mode(rainwater_site):
    with pytest.raises(InputValidationError):
        site_input_from_dict(rainwater_site.to_dict(), 'desalination')


def test_sanitize_filename():
    assert DataValidator.sanitize_filename('Asha "Residency" / Block B') == 'Asha-Residency-Block-B'
    assert len(DataValidator.sanitize_filename('x' * 80)) == 50


COMMON_FIELDS = {
    "name": "Asha Residency",
    "location": "Raincity",
    "pincode": "560034",
    "soilType": "Sandy",
    "groundwaterDepth": 10,
    "budget": "Medium",
    "hasOpenSpace": False,
}


@pytest.mark.parametrize("dropped", ["roofType", "environment", "birdNesting", "dwellers", "purpose"])
def test_rainwater_fields_are_required(dropped):
    data = dict(COMMON_FIELDS, roofArea=150, roofType="RCC", environment="Residential",
                birdNesting=False, dwellers=4, purpose="Domestic")
    del data[dropped]

    with pytest.raises(InputValidationError, match="Missing required"):
        site_input_from_dict(data, 'rainwater')


def test_rainwater_file_with_only_roof_area_rejected():
    with pytest.raises(InputValidationError) as excinfo:
        site_input_from_dict(dict(COMMON_FIELDS, roofArea=150), 'rainwater')

    message = excinfo.value.errors[0]
    for field in ("roof_type", "environment", "bird_nesting", "dwellers", "purpose"):
        assert field in message


def test_recharge_catchment_type_required():
    with pytest.raises(InputValidationError, match="catchment_type"):
        site_input_from_dict(dict(COMMON_FIELDS, catchmentArea=200), 'recharge')


def test_null_required_field_counts_as_missing():
    data = dict(COMMON_FIELDS, catchmentArea=200, catchmentType=None)
    with pytest.raises(InputValidationError, match="catchment_type"):
        site_input_from_dict(data, 'recharge')


def test_directly_built_input_without_mode_fields_fails_validation():
    site = RechargeInput(name="Green Acres Farm", location="Raincity", pincode="560034",
                         soil_type="Loamy", groundwater_depth=10, budget="Medium",
                         has_open_space=False)
    with pytest.raises(InputValidationError) as excinfo:
        validate_site_input(site, 'recharge')

    assert len(excinfo.value.errors) == 2


def test_bird_nesting_must_be_boolean(rainwater_site):
    with pytest.raises(InputValidationError, match="Bird nesting"):
        validate_site_input(replace(rainwater_site, bird_nesting="yes"))


def test_explicit_zero_borewell_count_is_rejected():
    site = site_input_from_dict(dict(COMMON_FIELDS, catchmentArea=200, catchmentType="Rooftop",
                                     hasBorewell=True, borewellCount=0, borewellDepth=45,
                                     borewellCondition="Dead"), 'recharge')

    assert site.borewell.count == 0
    with pytest.raises(InputValidationError, match="Borewell count"):
        validate_site_input(site, 'recharge')


def test_missing_borewell_count_defaults_to_one():
    site = site_input_from_dict(dict(COMMON_FIELDS, catchmentArea=200, catchmentType="Rooftop",
                                     hasBorewell=True, borewellDepth=45,
                                     borewellCondition="Dead"), 'recharge')
    assert site.borewell.count == 1


def test_nested_borewell_unknown_key_rejected():
    data = dict(COMMON_FIELDS, catchmentArea=200, catchmentType="Rooftop",
                borewell={"has_borewell": True, "diameter": 6})
    with pytest.raises(InputValidationError, match="Unknown borewell field"):
        site_input_from_dict(data, 'recharge')


def test_nested_borewell_must_be_object():
    data = dict(COMMON_FIELDS, catchmentArea=200, catchmentType="Rooftop", borewell=[1, 2])
    with pytest.raises(InputValidationError, match="Borewell must be an object"):
        site_input_from_dict(data, 'recharge')


@pytest.mark.parametrize("data", [[1, 2], "site", 42, None])
def test_non_object_input_rejected(data):
    with pytest.raises(InputValidationError, match="JSON object"):
        site_input_from_dict(data, 'rainwater')
