"""Farm Alerts.

Turns a location's weather forecast and the calendar date into a
prioritized list of farming alerts: planting and harvest windows, drought
and heavy rain warnings, temperature stress, pest risk and market timing.
"""

__version__ = "0.1.0"
