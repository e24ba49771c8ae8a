"""
Exceptions raised by LianaSim.

Everything derives from :class:`LianaSimError`, which the command line
catches to report a failed run without a traceback.
"""


class LianaSimError(Exception):
    """Base exception for all LianaSim errors."""
    pass


class ConfigurationError(LianaSimError):
    """A parameter or coefficient file cannot be read, written or understood."""
    pass


class InvalidParameterError(LianaSimError):
    """A simulation parameter has the wrong type, shape or value."""
    def __init__(self, param_name: str, value: any, reason: str = ""):
        self.param_name = param_name
        self.value = value
        self.reason = reason
        message = f"Simulation parameter '{param_name}' = {value!r} is not usable"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class SimulationError(LianaSimError):
    """The growth, carbon or scaling pipeline cannot produce a result."""
    pass


class GrowthModelError(SimulationError):
    """A biomass or diameter growth model cannot be evaluated."""
    def __init__(self, model_name: str, reason: str):
        self.model_name = model_name
        self.reason = reason
        super().__init__(f"{model_name} model: {reason}")


class DataError(LianaSimError):
    """Input files or output tables are unusable."""
    pass


class ConfigFileNotFoundError(DataError):
    """A parameter or coefficient file does not exist."""
    def __init__(self, file_path: str, file_type: str = "file"):
        self.file_path = file_path
        self.file_type = file_type
        super().__init__(f"Missing {file_type}: {file_path}")


class InvalidDataError(DataError):
    """A parameter or coefficient file parsed to something unusable."""
    def __init__(self, data_description: str, reason: str):
        self.data_description = data_description
        self.reason = reason
        super().__init__(f"Unusable {data_description}: {reason}")


class ExportError(DataError):
    """Simulation tables, summary or figure cannot be written."""
    pass


def validate_positive(value: float, param_name: str) -> float:
    """Return ``value`` unchanged if it is above zero.

    Raises:
        InvalidParameterError: If value is zero or negative
    """
    if value <= 0:
        raise InvalidParameterError(param_name, value, "must be positive")
    return value
