"""
podcast_dashboard: interactive podcast episode metrics dashboard.

This package provides:
- series: parse a podcast metrics CSV and derive the episode series,
  summary statistics and narrative insights
- zoom_pan: per-axis domain transform controllers for zoomable charts
- dashboard: a NiceGUI page rendering six Plotly charts

For logging configuration in scripts:
    ```python
    from podcast_dashboard.utils.logging import configure_logging
    configure_logging(level="DEBUG")
    ```
"""

import logging

from podcast_dashboard.utils.logging import configure_logging, get_logger

# NullHandler so library logs don't reach the root logger unless an
# application calls configure_logging().
_logger = logging.getLogger("podcast_dashboard")
if not _logger.handlers:
    _logger.addHandler(logging.NullHandler())

__all__ = [
    "configure_logging",
    "get_logger",
]

__version__ = "0.1.0"
