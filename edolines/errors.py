"""Configuration errors raised before anything is drawn."""


class DiagramError(ValueError):
    """Base class for bad diagram configuration."""


class InvalidInterval(DiagramError):
    """Zero or negative numerator/denominator."""


class InvalidRowHeight(DiagramError):
    """Row too short for the label offset modulus."""


class InvalidEdoValue(DiagramError):
    """EDO with no divisions (N <= 0)."""


class InvalidFrame(DiagramError):
    """Frame dimensions that leave no drawable area."""
