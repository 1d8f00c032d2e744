import math

import pytest

from biosync.data.descriptor import BiomassDescriptor, InvalidDescriptor, validate_descriptor


def test_valid_descriptor_is_returned(scenario_a):
    assert validate_descriptor(scenario_a) is scenario_a


def test_invalid_descriptor_is_a_value_error():
    assert issubclass(InvalidDescriptor, ValueError)


@pytest.mark.parametrize("quality", ['Excellent', 'good', '', None])
def test_unknown_quality_is_rejected(quality):
    with pytest.raises(InvalidDescriptor, match="quality"):
        validate_descriptor(BiomassDescriptor(25, 40, quality, 1400))


@pytest.mark.parametrize("field", ['moisture', 'size', 'energy'])
@pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf, None, '25', True])
def test_non_finite_or_non_numeric_fields_are_rejected(field, value):
    values = {'moisture': 25, 'size': 40, 'quality': 'Good', 'energy': 1400, field: value}
    with pytest.raises(InvalidDescriptor, match=field):
        validate_descriptor(BiomassDescriptor(**values))


def test_out_of_range_values_pass_by_default():
    descriptor = BiomassDescriptor(moisture=-5, size=0, quality='Average', energy=5000)
    assert validate_descriptor(descriptor) is descriptor


def test_strict_ranges_reject_out_of_range_values():
    with pytest.raises(InvalidDescriptor, match="size must be between 10 and 100"):
        validate_descriptor(BiomassDescriptor(25, 5, 'Good', 1400), strict_ranges=True)


def test_strict_ranges_accept_boundaries():
    for descriptor in (BiomassDescriptor(0, 10, 'Poor', 800), BiomassDescriptor(100, 100, 'Good', 2000)):
        validate_descriptor(descriptor, strict_ranges=True)


def test_strict_ranges_use_custom_bounds():
    ranges = {'moisture': (0, 50), 'size': (10, 100), 'energy': (800, 2000)}
    with pytest.raises(InvalidDescriptor, match="moisture"):
        validate_descriptor(BiomassDescriptor(60, 40, 'Good', 1400), strict_ranges=True, ranges=ranges)


def test_all_errors_are_reported_together():
    with pytest.raises(InvalidDescriptor) as excinfo:
        validate_descriptor(BiomassDescriptor(math.nan, 40, 'Unknown', math.nan))
    message = str(excinfo.value)
    assert 'quality' in message and 'moisture' in message and 'energy' in message


def test_from_dict_builds_descriptor():
    descriptor = BiomassDescriptor.from_dict({'moisture': 25, 'size': 40, 'quality': 'Good', 'energy': 1400})
    assert descriptor == BiomassDescriptor(25, 40, 'Good', 1400)


def test_from_dict_reports_missing_fields():
    with pytest.raises(InvalidDescriptor, match="energy"):
        BiomassDescriptor.from_dict({'moisture': 25, 'size': 40, 'quality': 'Good'})


def test_descriptor_is_immutable(scenario_a):
    with pytest.raises(AttributeError):
        scenario_a.moisture = 50


def test_strict_ranges_fall_back_per_field():
    ranges = {'moisture': (0, 60)}
    assert validate_descriptor(BiomassDescriptor(25, 40, 'Good', 1400), strict_ranges=True, ranges=ranges)
    with pytest.raises(InvalidDescriptor, match="energy must be between 800 and 2000"):
        validate_descriptor(BiomassDescriptor(25, 40, 'Good', 700), strict_ranges=True, ranges=ranges)
