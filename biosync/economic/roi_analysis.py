"""ROI Analysis Module

Illustrative return-on-investment figures for switching a biomass stream to
BioSync processing. Two calculators are provided:

- ROIEstimator: the main advisory flow. Volume, conversion rate and quality
  discount are all derived from a BiomassDescriptor.
- CustomROICalculator: a standalone preset where the user types the monthly
  volume, costs, price and conversion rate directly.

The coefficients are business assumptions, not physical models. Both
calculators return raw numbers; formatting is left to the caller.

Typical usage example:
    >>> from biosync.data.descriptor import BiomassDescriptor
    >>> from biosync.economic.roi_analysis import ROIEstimator
    >>> ROIEstimator().estimate(BiomassDescriptor(25, 40, 'Good', 1400)).monthly_savings
    32000
"""

from typing import NamedTuple
import logging
import math
import numbers

from biosync.data.descriptor import BiomassDescriptor, InvalidDescriptor, validate_descriptor
from biosync.utils.helpers import format_number

logger = logging.getLogger(__name__)


class ROIProjection(NamedTuple):
    """Projected returns for one biomass batch.

    Savings, revenue and carbon figures are per month, except annual_savings.

    Attributes:
        monthly_savings: Processing cost saved per month
        annual_savings: Twelve months of monthly_savings
        biofuel_revenue: Monthly biofuel sales
        carbon_reduction: Tons of CO2 avoided per month
        efficiency: Conversion efficiency in percent, one decimal digit
        conversion_rate: Fraction of volume converted to biofuel
        estimated_volume: Monthly volume proxy in tons, derived from particle size
        quality_multiplier: Biofuel output discount for the quality grade
        biofuel_output: Monthly biofuel output in tons
    """
    monthly_savings: float
    annual_savings: float
    biofuel_revenue: float
    carbon_reduction: float
    efficiency: str
    conversion_rate: float
    estimated_volume: float
    quality_multiplier: float
    biofuel_output: float


class CustomROIResult(NamedTuple):
    """Returns from the standalone calculator, per month except annual_savings.

    Attributes:
        monthly_savings: Processing cost saved per month
        annual_savings: Twelve months of monthly_savings
        biofuel_revenue: Monthly biofuel sales
        carbon_reduction: Tons of CO2 avoided per month
    """
    monthly_savings: float
    annual_savings: float
    biofuel_revenue: float
    carbon_reduction: float


class ROIEstimator:
    def __init__(self, processing_cost=100, alt_processing_cost=60, biofuel_price=800,
                 volume_per_mm=20, carbon_per_ton=2.5, high_conversion_rate=0.6,
                 low_conversion_rate=0.4, moisture_threshold=30,
                 reduced_quality_multiplier=0.8):
        """Initialize constants for the advisory ROI estimate

        Args:
            processing_cost: Current processing cost per ton
            alt_processing_cost: Processing cost per ton with BioSync
            biofuel_price: Biofuel sale price per ton
            volume_per_mm: Tons of volume assumed per mm of particle size
            carbon_per_ton: Tons of CO2 avoided per ton processed
            high_conversion_rate: Conversion rate below the moisture threshold
            low_conversion_rate: Conversion rate at or above the moisture threshold
            moisture_threshold: Moisture percent separating the two conversion rates
            reduced_quality_multiplier: Biofuel output discount for non-Good grades
        """
        self.processing_cost = processing_cost
        self.alt_processing_cost = alt_processing_cost
        self.biofuel_price = biofuel_price
        self.volume_per_mm = volume_per_mm
        self.carbon_per_ton = carbon_per_ton
        self.high_conversion_rate = high_conversion_rate
        self.low_conversion_rate = low_conversion_rate
        self.moisture_threshold = moisture_threshold
        self.reduced_quality_multiplier = reduced_quality_multiplier

    def conversion_rate(self, moisture):
        """Fraction of volume convertible to biofuel, gated by moisture."""
        if moisture < self.moisture_threshold:
            return self.high_conversion_rate
        return self.low_conversion_rate

    def estimated_volume(self, size):
        """Volume proxy in tons, derived from particle size."""
        return size * self.volume_per_mm

    def quality_multiplier(self, quality):
        return 1.0 if quality == 'Good' else self.reduced_quality_multiplier

    def estimate(self, descriptor: BiomassDescriptor) -> ROIProjection:
        """Project savings, biofuel revenue and carbon reduction for a descriptor.

        Args:
            descriptor: Biomass batch to evaluate

        Returns:
            ROIProjection with monthly figures and the derived intermediates

        Raises:
            InvalidDescriptor: If the descriptor is malformed
        """
        validate_descriptor(descriptor)

        conversion_rate = self.conversion_rate(descriptor.moisture)
        estimated_volume = self.estimated_volume(descriptor.size)
        quality_multiplier = self.quality_multiplier(descriptor.quality)

        processing_cost_savings = (self.processing_cost - self.alt_processing_cost) * estimated_volume
        biofuel_output = estimated_volume * conversion_rate * quality_multiplier
        biofuel_revenue = biofuel_output * self.biofuel_price
        carbon_reduction = estimated_volume * self.carbon_per_ton

        projection = ROIProjection(
            monthly_savings=processing_cost_savings,
            annual_savings=processing_cost_savings * 12,
            biofuel_revenue=biofuel_revenue,
            carbon_reduction=carbon_reduction,
            efficiency=format_number(conversion_rate * 100, 1),
            conversion_rate=conversion_rate,
            estimated_volume=estimated_volume,
            quality_multiplier=quality_multiplier,
            biofuel_output=biofuel_output
        )
        logger.debug("ROI projection for %s: %s", descriptor, projection)
        return projection


class CustomROICalculator:
    def __init__(self, carbon_per_ton=2.5):
        """Initialize the standalone ROI calculator

        Args:
            carbon_per_ton: Tons of CO2 avoided per ton of biomass processed
        """
        self.carbon_per_ton = carbon_per_ton

    def calculate(self, biomass_volume=1000, current_processing_cost=100,
                  alt_processing_cost=60, biofuel_price=800, conversion_rate=0.6) -> CustomROIResult:
        """Calculate ROI from user supplied volume, costs, price and conversion rate.

        Args:
            biomass_volume: Monthly biomass volume in tons
            current_processing_cost: Current processing cost per ton
            alt_processing_cost: Processing cost per ton with BioSync
            biofuel_price: Biofuel sale price per ton
            conversion_rate: Fraction of biomass converted to biofuel

        Returns:
            CustomROIResult with monthly and annual figures

        Raises:
            InvalidDescriptor: If any input is not a finite number
        """
        inputs = {
            'biomass_volume': biomass_volume,
            'current_processing_cost': current_processing_cost,
            'alt_processing_cost': alt_processing_cost,
            'biofuel_price': biofuel_price,
            'conversion_rate': conversion_rate
        }
        invalid = [name for name, value in inputs.items()
                   if isinstance(value, bool) or not isinstance(value, numbers.Real) or not math.isfinite(value)]
        if invalid:
            raise InvalidDescriptor(f"ROI inputs must be finite numbers: {invalid}")

        processing_cost_savings = (current_processing_cost - alt_processing_cost) * biomass_volume
        biofuel_output = biomass_volume * conversion_rate
        biofuel_revenue = biofuel_output * biofuel_price
        carbon_reduction = biomass_volume * self.carbon_per_ton

        return CustomROIResult(
            monthly_savings=processing_cost_savings,
            annual_savings=processing_cost_savings * 12,
            biofuel_revenue=biofuel_revenue,
            carbon_reduction=carbon_reduction
        )


_default_estimator = ROIEstimator()


def estimate(descriptor: BiomassDescriptor) -> ROIProjection:
    """Estimate ROI with the default coefficients."""
    return _default_estimator.estimate(descriptor)
