"""
Exception hierarchy for impact-radar.

Per-file and per-import problems never raise; they degrade to skipped files
or counted imports. These exceptions cover the conditions that stop a run
before a graph can be built at all.
"""


class ImpactRadarError(Exception):
    """Base exception for impact-radar errors."""

    pass


class ConfigurationError(ImpactRadarError):
    """Raised when there's a configuration problem."""

    pass


class ScanError(ImpactRadarError):
    """Raised when the candidate file set cannot be obtained."""

    pass
