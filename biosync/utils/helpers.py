from typing import Optional, Union
from pathlib import Path
import logging
from datetime import datetime

def setup_logging(log_path: Optional[Union[str, Path]] = None,
                 level: Union[int, str] = logging.INFO) -> None:
    """Setup logging configuration.

    Args:
        log_path: Path to log file. If None, logs to console only.
        level: Logging level, either a number or a name such as 'DEBUG'
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown logging level: {level}")

    handlers = [logging.StreamHandler()]
    if log_path:
        handlers.append(logging.FileHandler(log_path))

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )

def get_timestamp() -> str:
    """Get current timestamp in standard format.

    Returns:
        Formatted timestamp string
    """
    return datetime.now().strftime('%Y%m%d_%H%M%S')

def format_number(value: float, precision: int = 2) -> str:
    """Format number with specified precision.

    Args:
        value: Number to format
        precision: Number of decimal places

    Returns:
        Formatted string
    """
    return f"{value:.{precision}f}"

def format_currency(value: float, symbol: str = "₹") -> str:
    """Format a currency amount with thousands separators.

    Whole amounts are shown without decimals, fractional ones keep up to
    three significant decimals.

    Args:
        value: Amount to format
        symbol: Currency symbol placed before the amount

    Returns:
        Formatted string, e.g. '₹32,000'
    """
    return f"{symbol}{format_quantity(value)}"

def format_quantity(value: float) -> str:
    """Format a plain quantity with thousands separators ('2,000', '1,234.5')."""
    if float(value).is_integer():
        return f"{value:,.0f}"
    return f"{value:,.3f}".rstrip('0').rstrip('.')
