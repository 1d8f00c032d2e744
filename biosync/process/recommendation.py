from typing import List, NamedTuple, Tuple
import logging

from biosync.data.descriptor import BiomassDescriptor, validate_descriptor

logger = logging.getLogger(__name__)

STATUS_OPTIMAL = 'optimal'
STATUS_WARNING = 'warning'

DIRECT_PROCESSING = 'Direct Processing'
PRE_TREATMENT = 'Pre-treatment Required'

HIGH_EFFICIENCY = 'High (>90%)'
MEDIUM_EFFICIENCY = 'Medium (70-80%)'

ACTION_PRE_DRY = 'Pre-dry biomass to reduce moisture content below 30%'
ACTION_REDUCE_SIZE = 'Reduce particle size to 30-40mm for optimal conversion'
ACTION_BLEND = 'Consider blending with higher energy content biomass'

BIOFUEL_PRODUCTION = 'Biofuel Production'
DIRECT_COMBUSTION = 'Direct Combustion'
PREMIUM_BIOETHANOL = 'Premium Grade Bioethanol'
STANDARD_BIOETHANOL = 'Standard Grade Bioethanol'


class Recommendation(NamedTuple):
    status: str
    processing_type: str
    actions: Tuple[str, ...]
    efficiency: str
    suitable_for: Tuple[str, ...]


class RecommendationEngine:
    """Processing recommendation for a biomass batch

    Classifies a descriptor against fixed moisture, size and energy
    thresholds and lists the corrective actions and suitable end uses.
    """

    def __init__(self, moisture_limit=30, size_limit=50, energy_floor=1000,
                 combustion_moisture_limit=25, high_efficiency_moisture=30):
        """Initialize recommendation thresholds

        Args:
            moisture_limit: Moisture percent above which pre-drying is required
            size_limit: Particle size in mm above which size reduction is advised
            energy_floor: Energy content in MJ/kg below which blending is advised
            combustion_moisture_limit: Moisture percent below which direct combustion is suitable
            high_efficiency_moisture: Moisture percent below which efficiency is rated high
        """
        self.moisture_limit = moisture_limit
        self.size_limit = size_limit
        self.energy_floor = energy_floor
        self.combustion_moisture_limit = combustion_moisture_limit
        self.high_efficiency_moisture = high_efficiency_moisture

    def recommend_actions(self, descriptor: BiomassDescriptor) -> Tuple[str, str, List[str]]:
        """Check every threshold and collect the triggered actions

        Args:
            descriptor: Biomass batch to evaluate

        Returns:
            Tuple of (status, processing type, actions in moisture, size, energy order)
        """
        status = STATUS_OPTIMAL
        processing_type = DIRECT_PROCESSING
        actions = []

        if descriptor.moisture > self.moisture_limit:
            status = STATUS_WARNING
            actions.append(ACTION_PRE_DRY)
            processing_type = PRE_TREATMENT

        if descriptor.size > self.size_limit:
            status = STATUS_WARNING
            actions.append(ACTION_REDUCE_SIZE)

        if descriptor.energy < self.energy_floor:
            status = STATUS_WARNING
            actions.append(ACTION_BLEND)

        return status, processing_type, actions

    def efficiency_band(self, moisture) -> str:
        if moisture < self.high_efficiency_moisture:
            return HIGH_EFFICIENCY
        return MEDIUM_EFFICIENCY

    def suitable_uses(self, descriptor: BiomassDescriptor) -> List[str]:
        """List end uses the batch is suitable for. Never empty."""
        uses = [BIOFUEL_PRODUCTION]
        if descriptor.moisture < self.combustion_moisture_limit:
            uses.append(DIRECT_COMBUSTION)
        uses.append(PREMIUM_BIOETHANOL if descriptor.quality == 'Good' else STANDARD_BIOETHANOL)
        return uses

    def recommend(self, descriptor: BiomassDescriptor) -> Recommendation:
        """Generate the processing recommendation for a descriptor

        Args:
            descriptor: Biomass batch to evaluate

        Returns:
            Recommendation with status, processing type, actions,
            efficiency band and suitable end uses

        Raises:
            InvalidDescriptor: If the descriptor is malformed
        """
        validate_descriptor(descriptor)

        status, processing_type, actions = self.recommend_actions(descriptor)
        recommendation = Recommendation(
            status=status,
            processing_type=processing_type,
            actions=tuple(actions),
            efficiency=self.efficiency_band(descriptor.moisture),
            suitable_for=tuple(self.suitable_uses(descriptor))
        )
        logger.debug("Recommendation for %s: %s", descriptor, recommendation)
        return recommendation


_default_engine = RecommendationEngine()


def recommend(descriptor: BiomassDescriptor) -> Recommendation:
    """Generate a recommendation with the default thresholds."""
    return _default_engine.recommend(descriptor)
