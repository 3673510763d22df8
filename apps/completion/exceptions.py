class UnsupportedCriteriaType(Exception):
    """No evaluator is registered for a stored criteria type."""


class CriteriaConfigurationError(Exception):
    """Criteria configuration refers to activities outside the course."""
