"""Custom exceptions for takehome."""


class TaxComputationError(Exception):
    """Base exception for tax computation errors."""


class ConfigurationError(TaxComputationError):
    """Raised when jurisdiction data is malformed.

    This is a data bug, not a user error. The engine never recovers from it.
    """


class InvalidBracketTableError(ConfigurationError):
    """Raised when a bracket table breaks ordering, contiguity or rate bounds."""

    def __init__(self, table: str, message: str):
        self.table = table
        super().__init__(f"Invalid bracket table '{table}': {message}")


class DataValidationError(TaxComputationError):
    """Raised when calculation input fails validation."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"Validation error on '{field}': {message}")


class UnknownRegimeError(DataValidationError):
    """Raised when a jurisdiction does not offer the requested regime."""

    def __init__(self, regime: str, jurisdiction: str, available: list[str]):
        self.regime = regime
        self.jurisdiction = jurisdiction
        self.available = available
        super().__init__(
            "regime",
            f"{jurisdiction} has no regime '{regime}'. "
            f"Valid: {', '.join(available)}",
        )
