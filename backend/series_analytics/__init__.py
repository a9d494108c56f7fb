"""
series_analytics — Financial measures layered on the price range tree.

Modules
-------
metrics          — range statistics (average, spread, std-dev, growth,
                   stability, volatility index, profit) and prediction.
moving_averages  — SMA / EMA series and their crossover signals.
"""

from series_analytics import metrics, moving_averages
from series_analytics.moving_averages import CrossoverSignal

__all__ = ["metrics", "moving_averages", "CrossoverSignal"]
