"""Domain errors raised by application services."""


class NutricuError(Exception):
    """Base class for nutrICU domain errors."""


class PatientExistsError(NutricuError):
    """Raised when a patient id is already taken."""


class PatientNotFoundError(NutricuError):
    """Raised when a patient id cannot be resolved."""


class MixtureNameExistsError(NutricuError):
    """Raised when a mixture name is already taken (case-insensitive)."""


class MixtureNotFoundError(NutricuError):
    """Raised when a mixture id cannot be resolved."""


class UnsupportedLanguageError(NutricuError):
    """Raised when no translation table exists for a language."""
