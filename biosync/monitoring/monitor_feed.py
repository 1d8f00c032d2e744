from typing import Dict, List, Optional
import pandas as pd
import numpy as np

class MonitorFeed:
    """Simulated real-time process readings for the monitoring view.

    The feed keeps a fixed-size rolling window of samples. The dashboard
    polls snapshot() and calls tick() on a timer; readings are random and
    carry no relation to the advisory calculations.
    """

    def __init__(self, window: int = 30, temperature_base: float = 45.0,
                 temperature_spread: float = 5.0, pressure_base: float = 1.2,
                 pressure_spread: float = 0.2, seed: Optional[int] = None,
                 system_parameters: Optional[Dict[str, str]] = None,
                 uptime: str = '24h 30m'):
        if window < 1:
            raise ValueError(f"Window must hold at least one sample, got {window}")

        self.window = window
        self.temperature_base = temperature_base
        self.temperature_spread = temperature_spread
        self.pressure_base = pressure_base
        self.pressure_spread = pressure_spread
        self.system_parameters = dict(system_parameters or {
            'Temperature': '45.2°C',
            'Pressure': '1.2 bar',
            'Flow Rate': '2.5 m³/h'
        })
        self.uptime = uptime
        self.rng = np.random.default_rng(seed)
        self.samples: List[Dict] = [self._sample(second) for second in range(window)]
        self.elapsed = window

    def _sample(self, second: int) -> Dict:
        return {
            'time': f"{second}s",
            'temperature': self.temperature_base + self.rng.uniform(0, self.temperature_spread),
            'pressure': self.pressure_base + self.rng.uniform(0, self.pressure_spread)
        }

    def tick(self) -> Dict:
        """Drop the oldest sample and append a fresh one.

        Returns:
            The newly generated sample
        """
        sample = self._sample(self.elapsed)
        self.samples = self.samples[1:] + [sample]
        self.elapsed += 1
        return sample

    def snapshot(self) -> pd.DataFrame:
        """Current window as a DataFrame with time, temperature and pressure columns."""
        return pd.DataFrame(self.samples, columns=['time', 'temperature', 'pressure'])

    def get_system_parameters(self) -> Dict[str, str]:
        return dict(self.system_parameters)
