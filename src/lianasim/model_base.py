"""
Base class for parameterized allometric models.

Provides common functionality for loading form-specific coefficients
from JSON configuration files with caching and fallback support.

Usage:
    class ChaveTreeBiomassModel(ParameterizedModel):
        COEFFICIENT_FILE = 'allometric_coefficients.json'
        COEFFICIENT_KEY = 'forms'
        FORM = 'tree'
        FALLBACK_PARAMETERS = {'tree': {'a': 0.0673, 'b': 0.976}}
"""
from abc import ABC
from typing import Dict, Any

from .config_loader import load_coefficient_file
from .exceptions import ConfigFileNotFoundError


class ParameterizedModel(ABC):
    """Base class for models with coefficients kept in the cfg/ directory.

    Subclasses must define:
        COEFFICIENT_FILE: str - Name of the JSON file containing coefficients
        FORM: str - Key of this model's coefficients in the file
        FALLBACK_PARAMETERS: dict - Fallback coefficients by form

    Attributes:
        form: The growth form handled by this model ("tree", "liana")
        coefficients: The loaded coefficients for the form
        raw_data: The complete raw data loaded from the coefficient file
    """

    # Subclasses must override these
    COEFFICIENT_FILE: str = None
    COEFFICIENT_KEY: str = 'forms'
    FORM: str = None
    FALLBACK_PARAMETERS: Dict[str, Dict[str, Any]] = {}

    def __init__(self):
        self.form = self.FORM
        self.coefficients: Dict[str, Any] = {}
        self.raw_data: Dict[str, Any] = {}
        self._load_parameters()

    def _get_coefficient_data(self) -> Dict[str, Any]:
        """Load coefficient data from JSON file using ConfigLoader with caching.

        Returns:
            Dictionary containing the full coefficient file data,
            or empty dict if file not found.
        """
        if self.COEFFICIENT_FILE is None:
            raise NotImplementedError(
                f"{self.__class__.__name__} must define COEFFICIENT_FILE class attribute"
            )

        try:
            return load_coefficient_file(self.COEFFICIENT_FILE)
        except ConfigFileNotFoundError:
            return {}

    def _load_parameters(self) -> None:
        """Load form-specific coefficients, falling back to FALLBACK_PARAMETERS."""
        self.raw_data = self._get_coefficient_data()

        form_coeffs = self.raw_data.get(self.COEFFICIENT_KEY, {}) if self.raw_data else {}
        if self.form in form_coeffs:
            self.coefficients = dict(form_coeffs[self.form])
        else:
            self._load_fallback_parameters()

    def _load_fallback_parameters(self) -> None:
        """Load fallback parameters when coefficient file is not available."""
        self.coefficients = dict(self.FALLBACK_PARAMETERS.get(self.form, {}))

    def get_coefficients(self) -> Dict[str, Any]:
        """Get a copy of the coefficients for this form."""
        return self.coefficients.copy()

    def get_coefficient(self, key: str, default: Any = None) -> Any:
        """Get a specific coefficient value.

        Args:
            key: Coefficient key to retrieve
            default: Default value if key not found

        Returns:
            Coefficient value or default
        """
        return self.coefficients.get(key, default)

    def __repr__(self) -> str:
        """Return string representation of the model."""
        return f"{self.__class__.__name__}(form='{self.form}')"
