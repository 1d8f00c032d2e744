from typing import Any, Dict, Iterable, List, Mapping, NamedTuple, Optional, Union
import logging
import pandas as pd
from biosync.config_manager import ConfigManager
from biosync.data.descriptor import BiomassDescriptor, InvalidDescriptor, validate_descriptor
from biosync.economic.roi_analysis import ROIEstimator, ROIProjection
from biosync.process.recommendation import Recommendation, RecommendationEngine

logger = logging.getLogger(__name__)

# Used when the configured form defaults cannot be shown on the sliders
FALLBACK_DESCRIPTOR = BiomassDescriptor(moisture=25, size=40, quality='Good', energy=1400)


class AdvisoryResult(NamedTuple):
    descriptor: BiomassDescriptor
    roi: ROIProjection
    recommendation: Recommendation


class AdvisoryManager:
    """Runs a biomass descriptor through the ROI estimator and the recommendation engine.

    The two calculators are independent leaves over the same descriptor;
    the manager only wires them to the configuration, applies the optional
    strict range check and bundles their outputs for display and export.
    It keeps no history: every evaluation is computed fresh.

    Attributes:
        estimator (ROIEstimator): ROI calculator built from the 'roi' section
        engine (RecommendationEngine): Classifier built from the 'recommendation' section
        strict_ranges (bool): Reject numeric values outside the declared ranges
    """

    def __init__(self, config_manager: Optional[ConfigManager] = None):
        self.config_manager = config_manager or ConfigManager()
        self.estimator = ROIEstimator(**self.config_manager.get_roi_config())
        self.engine = RecommendationEngine(**self.config_manager.get_recommendation_config())

        validation = self.config_manager.get_validation_config()
        self.strict_ranges = bool(validation.get('strict_ranges', False))
        self.ranges = {field: tuple(bounds) for field, bounds in validation.get('ranges', {}).items()} or None

    def build_descriptor(self, values: Union[BiomassDescriptor, Mapping[str, Any]]) -> BiomassDescriptor:
        """Turn form values into a validated descriptor.

        Args:
            values: Descriptor or mapping with moisture, size, quality and energy

        Returns:
            Validated BiomassDescriptor

        Raises:
            InvalidDescriptor: If the values are malformed, or out of range in strict mode
        """
        if isinstance(values, BiomassDescriptor):
            descriptor = values
        else:
            descriptor = BiomassDescriptor.from_dict(values)
        return validate_descriptor(descriptor, strict_ranges=self.strict_ranges, ranges=self.ranges)

    def default_descriptor(self) -> BiomassDescriptor:
        """Form defaults from the 'app' section, checked against the slider ranges.

        The sliders only cover the declared ranges, so the defaults are always
        validated strictly, whatever validation.strict_ranges says. Unusable
        defaults are logged and replaced by FALLBACK_DESCRIPTOR.

        Returns:
            BiomassDescriptor with integer slider values
        """
        configured = self.config_manager.get_app_config().get('default_descriptor', {})
        if not isinstance(configured, Mapping):
            logger.warning("Ignoring configured default descriptor: not a mapping")
            return FALLBACK_DESCRIPTOR

        values = {**FALLBACK_DESCRIPTOR._asdict(), **configured}
        try:
            descriptor = validate_descriptor(BiomassDescriptor.from_dict(values), strict_ranges=True)
        except InvalidDescriptor as e:
            logger.warning("Ignoring configured default descriptor: %s", e)
            return FALLBACK_DESCRIPTOR
        return descriptor._replace(moisture=int(descriptor.moisture), size=int(descriptor.size),
                                   energy=int(descriptor.energy))

    def evaluate(self, values: Union[BiomassDescriptor, Mapping[str, Any]]) -> AdvisoryResult:
        """Evaluate one descriptor with both calculators.

        Args:
            values: Descriptor or mapping of form values

        Returns:
            AdvisoryResult bundling the descriptor, ROI projection and recommendation
        """
        descriptor = self.build_descriptor(values)
        result = AdvisoryResult(
            descriptor=descriptor,
            roi=self.estimator.estimate(descriptor),
            recommendation=self.engine.recommend(descriptor)
        )
        logger.info("Evaluated biomass batch %s: status=%s, monthly savings=%s",
                    descriptor, result.recommendation.status, result.roi.monthly_savings)
        return result

    def generate_advisory_report(self, results: Iterable[AdvisoryResult]) -> pd.DataFrame:
        """Flatten advisory results into a table, one row per evaluation.

        List valued recommendation fields are joined with '; ' so the table
        exports cleanly to CSV.

        Args:
            results: Results returned by evaluate()

        Returns:
            DataFrame with descriptor, ROI and recommendation columns
        """
        rows: List[Dict[str, Any]] = []
        for result in results:
            row = dict(result.descriptor._asdict())
            row.update(result.roi._asdict())
            recommendation = result.recommendation._asdict()
            row.update({
                'status': recommendation['status'],
                'processing_type': recommendation['processing_type'],
                'actions': '; '.join(recommendation['actions']),
                'efficiency_band': recommendation['efficiency'],
                'suitable_for': '; '.join(recommendation['suitable_for'])
            })
            rows.append(row)

        columns = (list(BiomassDescriptor._fields) + list(ROIProjection._fields)
                   + ['status', 'processing_type', 'actions', 'efficiency_band', 'suitable_for'])
        return pd.DataFrame(rows, columns=columns)
