import pytest

from biosync.data.descriptor import BiomassDescriptor


@pytest.fixture
def scenario_a():
    """Dry, well sized, good quality batch"""
    return BiomassDescriptor(moisture=25, size=40, quality='Good', energy=1400)


@pytest.fixture
def scenario_b():
    """Wet, coarse, poor quality, low energy batch"""
    return BiomassDescriptor(moisture=35, size=60, quality='Poor', energy=900)
