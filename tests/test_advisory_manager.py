import json
import math

import pytest
import yaml

from biosync.config_manager import ConfigManager
from biosync.data.descriptor import BiomassDescriptor, InvalidDescriptor
from biosync.utils.advisory_manager import FALLBACK_DESCRIPTOR, AdvisoryManager


@pytest.fixture
def manager(tmp_path):
    return AdvisoryManager(ConfigManager(tmp_path / 'missing.json'))


def test_evaluate_bundles_both_calculators(manager, scenario_a):
    result = manager.evaluate(scenario_a)

    assert result.descriptor == scenario_a
    assert result.roi.monthly_savings == 32000
    assert result.recommendation.status == 'optimal'


def test_evaluate_accepts_form_values(manager):
    result = manager.evaluate({'moisture': 35, 'size': 60, 'quality': 'Poor', 'energy': 900})

    assert result.descriptor == BiomassDescriptor(35, 60, 'Poor', 900)
    assert len(result.recommendation.actions) == 3
    assert result.roi.efficiency == "40.0"


def test_evaluate_rejects_malformed_values(manager):
    with pytest.raises(InvalidDescriptor):
        manager.evaluate({'moisture': math.nan, 'size': 40, 'quality': 'Good', 'energy': 1400})


def test_out_of_range_values_compute_by_default(manager):
    result = manager.evaluate(BiomassDescriptor(25, 5, 'Good', 1400))
    assert result.roi.estimated_volume == 100


def test_strict_ranges_from_config(tmp_path):
    config_manager = ConfigManager(tmp_path / 'missing.json')
    config_manager.update_config('validation', {'strict_ranges': True})
    manager = AdvisoryManager(config_manager)

    with pytest.raises(InvalidDescriptor, match="size"):
        manager.evaluate(BiomassDescriptor(25, 5, 'Good', 1400))


def test_coefficients_from_config(tmp_path, scenario_a):
    config_manager = ConfigManager(tmp_path / 'missing.json')
    config_manager.update_config('roi', {'biofuel_price': 1000})
    config_manager.update_config('recommendation', {'size_limit': 30})
    result = AdvisoryManager(config_manager).evaluate(scenario_a)

    assert result.roi.biofuel_revenue == pytest.approx(480000)
    assert result.recommendation.status == 'warning'


def test_advisory_report(manager, scenario_a, scenario_b):
    report = manager.generate_advisory_report([manager.evaluate(scenario_a), manager.evaluate(scenario_b)])

    assert len(report) == 2
    assert list(report['status']) == ['optimal', 'warning']
    assert report['actions'].iloc[0] == ''
    assert report['actions'].iloc[1].count('; ') == 2
    assert report['efficiency'].iloc[0] == '60.0'
    assert report['efficiency_band'].iloc[0] == 'High (>90%)'
    assert report['suitable_for'].iloc[0] == 'Biofuel Production; Direct Combustion; Premium Grade Bioethanol'


def test_empty_report_keeps_columns(manager):
    report = manager.generate_advisory_report([])
    assert report.empty
    assert 'monthly_savings' in report.columns
    assert 'suitable_for' in report.columns


def test_strict_mode_with_partial_ranges_file(tmp_path):
    path = tmp_path / 'config.json'
    path.write_text(json.dumps({'validation': {'strict_ranges': True, 'ranges': {'moisture': [0, 60]}}}))
    config_manager = ConfigManager(path)
    config_manager.load_config()
    manager = AdvisoryManager(config_manager)

    result = manager.evaluate({'moisture': 25, 'size': 40, 'quality': 'Good', 'energy': 1400})
    assert result.recommendation.status == 'optimal'

    with pytest.raises(InvalidDescriptor, match="moisture must be between 0 and 60"):
        manager.evaluate({'moisture': 70, 'size': 40, 'quality': 'Good', 'energy': 1400})
    with pytest.raises(InvalidDescriptor, match="size must be between 10 and 100"):
        manager.evaluate({'moisture': 25, 'size': 5, 'quality': 'Good', 'energy': 1400})


def test_default_descriptor_from_partial_file(tmp_path):
    path = tmp_path / 'config.yaml'
    path.write_text(yaml.safe_dump({'app': {'default_descriptor': {'moisture': 40}}}))
    config_manager = ConfigManager(path)
    config_manager.load_config()

    assert AdvisoryManager(config_manager).default_descriptor() == BiomassDescriptor(40, 40, 'Good', 1400)


def test_default_descriptor_without_overrides(manager):
    assert manager.default_descriptor() == FALLBACK_DESCRIPTOR


@pytest.mark.parametrize("default", [
    {'size': 500},
    {'quality': 'Excellent'},
    {'energy': math.nan},
    'not a mapping',
])
def test_unusable_default_descriptor_falls_back(tmp_path, default):
    config_manager = ConfigManager(tmp_path / 'missing.json')
    config_manager.update_config('app', {'default_descriptor': default})

    assert AdvisoryManager(config_manager).default_descriptor() == FALLBACK_DESCRIPTOR


def test_default_descriptor_values_fit_integer_sliders(tmp_path):
    config_manager = ConfigManager(tmp_path / 'missing.json')
    config_manager.update_config('app', {'default_descriptor': {'moisture': 27.6, 'energy': 1500.0}})
    descriptor = AdvisoryManager(config_manager).default_descriptor()

    assert descriptor == BiomassDescriptor(27, 40, 'Good', 1500)
    assert all(isinstance(getattr(descriptor, field), int) for field in ('moisture', 'size', 'energy'))
