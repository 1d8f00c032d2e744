from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Tuple
import logging
import math
import numbers

logger = logging.getLogger(__name__)

QUALITY_GRADES = ('Good', 'Average', 'Poor')
NUMERIC_FIELDS = ('moisture', 'size', 'energy')

# Declared slider ranges, inclusive
DEFAULT_RANGES: Dict[str, Tuple[float, float]] = {
    'moisture': (0, 100),
    'size': (10, 100),
    'energy': (800, 2000)
}


class InvalidDescriptor(ValueError):
    """Raised when a biomass descriptor cannot be evaluated."""


class BiomassDescriptor(NamedTuple):
    """One batch of biomass as described by the user.

    Attributes:
        moisture: Moisture content in percent
        size: Average particle size in mm
        quality: Quality grade, one of QUALITY_GRADES
        energy: Energy content in MJ/kg
    """
    moisture: float
    size: float
    quality: str
    energy: float

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> 'BiomassDescriptor':
        """Build and validate a descriptor from a mapping such as form state."""
        missing = [field for field in cls._fields if field not in values]
        if missing:
            raise InvalidDescriptor(f"Missing descriptor fields: {missing}")

        descriptor = cls(**{field: values[field] for field in cls._fields})
        validate_descriptor(descriptor)
        return descriptor


def _is_finite_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return math.isfinite(value)


def validate_descriptor(descriptor: BiomassDescriptor,
                        strict_ranges: bool = False,
                        ranges: Optional[Mapping[str, Tuple[float, float]]] = None) -> BiomassDescriptor:
    """Check that a descriptor can be evaluated.

    Quality must be a recognised grade and every numeric field must be a
    finite real number. Values outside the declared ranges are accepted
    unless strict_ranges is set.

    Args:
        descriptor: Descriptor to check
        strict_ranges: Reject numeric values outside their declared range
        ranges: Inclusive (low, high) bounds per numeric field, defaults to DEFAULT_RANGES

    Returns:
        The same descriptor, for chaining

    Raises:
        InvalidDescriptor: If the descriptor is malformed
    """
    errors: List[str] = []

    if descriptor.quality not in QUALITY_GRADES:
        errors.append(f"quality must be one of {list(QUALITY_GRADES)}, got {descriptor.quality!r}")

    for field in NUMERIC_FIELDS:
        value = getattr(descriptor, field)
        if not _is_finite_number(value):
            errors.append(f"{field} must be a finite number, got {value!r}")
            continue

        if strict_ranges:
            low, high = (ranges or {}).get(field, DEFAULT_RANGES[field])
            if not low <= value <= high:
                errors.append(f"{field} must be between {low} and {high}, got {value}")

    if errors:
        logger.warning("Rejected biomass descriptor: %s", "; ".join(errors))
        raise InvalidDescriptor("; ".join(errors))

    return descriptor
