"""
Configuration loader for LianaSim.
Provides unified access to YAML, TOML, and JSON configuration files.

Supports:
- YAML (.yaml, .yml) - simulation parameters
- TOML (.toml) - alternative parameter files
- JSON (.json) - allometric coefficient files

Features:
- Coefficient file caching
- Parameter files outside the package (``--config`` on the command line)
"""
import json
import sys
from pathlib import Path
from typing import Dict, Any, Union, Optional

import yaml

from .exceptions import ConfigurationError, ConfigFileNotFoundError, InvalidDataError
from .logging_config import get_logger

# Handle TOML imports for different Python versions
if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError:
        tomllib = None

try:
    import tomli_w
except ImportError:
    tomli_w = None

DEFAULT_PARAMETERS_FILE = 'simulation_parameters.yaml'
PARAMETERS_KEY = 'simulation'

logger = get_logger(__name__)


class ConfigLoader:
    """Loads and manages LianaSim configuration from the cfg/ directory.

    Attributes:
        cfg_dir: Path to the configuration directory
        simulation_config: Default simulation parameters as a plain dict
    """

    def __init__(self, cfg_dir: Path = None):
        """Initialize the configuration loader.

        Args:
            cfg_dir: Path to the configuration directory. Defaults to the
                cfg/ directory shipped inside the package.
        """
        if cfg_dir is None:
            cfg_dir = Path(__file__).parent / 'cfg'
        self.cfg_dir = Path(cfg_dir)

        # Cache for coefficient files (loaded once, reused)
        self._coefficient_cache: Dict[str, Dict[str, Any]] = {}

        self.simulation_config = self.load_parameters_file(self.cfg_dir / DEFAULT_PARAMETERS_FILE)

    def _load_config_file(self, file_path: Path) -> Dict[str, Any]:
        """Load configuration from a YAML, TOML or JSON file.

        Args:
            file_path: Path to the configuration file

        Returns:
            Dictionary containing configuration data

        Raises:
            ConfigFileNotFoundError: If file doesn't exist
            ConfigurationError: If file format is not supported
            InvalidDataError: If parsing fails or the file is empty
        """
        if not file_path.exists():
            raise ConfigFileNotFoundError(str(file_path), "configuration file")

        suffix = file_path.suffix.lower()
        logger.debug(f"Loading configuration file {file_path}")

        try:
            if suffix in ['.yaml', '.yml']:
                with open(file_path, 'r', encoding='utf-8') as f:
                    data = yaml.safe_load(f)
                    if data is None:
                        raise InvalidDataError("YAML file", "file is empty or contains only comments")
                    return data
            elif suffix == '.toml':
                if tomllib is None:
                    raise ImportError(
                        "TOML support requires 'tomli' package for Python < 3.11. "
                        "Install with: pip install tomli"
                    )
                with open(file_path, 'rb') as f:
                    return tomllib.load(f)
            elif suffix == '.json':
                with open(file_path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
                    if data is None:
                        raise InvalidDataError("JSON file", "file is empty or contains null")
                    return data
            else:
                raise ConfigurationError(f"Unsupported configuration file format: {suffix}. "
                                         f"Supported formats: .yaml, .yml, .toml, .json")
        except yaml.YAMLError as e:
            raise InvalidDataError("YAML configuration", f"parsing error: {str(e)}") from e
        except json.JSONDecodeError as e:
            raise InvalidDataError("JSON configuration", f"parsing error: {str(e)}") from e
        except Exception as e:
            if isinstance(e, (ConfigFileNotFoundError, ConfigurationError, InvalidDataError)):
                raise
            raise ConfigurationError(f"Failed to load configuration from {file_path}: {str(e)}") from e

    def _save_config_file(self, data: Dict[str, Any], file_path: Path) -> None:
        """Save configuration to a YAML, TOML or JSON file.

        Args:
            data: Configuration data to save
            file_path: Path where to save the file

        Raises:
            ConfigurationError: If file format is not supported or the data
                cannot be represented in it
        """
        suffix = file_path.suffix.lower()

        # Serialize first; a failed write must not leave a partial file
        try:
            if suffix in ['.yaml', '.yml']:
                text = yaml.safe_dump(data, default_flow_style=False, sort_keys=False)
            elif suffix == '.toml':
                if tomli_w is None:
                    raise ImportError(
                        "TOML writing requires 'tomli-w' package. "
                        "Install with: pip install tomli-w"
                    )
                text = tomli_w.dumps(data)
            elif suffix == '.json':
                text = json.dumps(data, indent=2)
            else:
                raise ConfigurationError(f"Unsupported configuration file format: {suffix}")
        except (TypeError, ValueError, yaml.YAMLError) as e:
            raise ConfigurationError(
                f"Cannot write configuration to {file_path}: {str(e)}"
            ) from e

        file_path.parent.mkdir(parents=True, exist_ok=True)
        with open(file_path, 'w', encoding='utf-8') as f:
            f.write(text)

    def load_parameters_file(self, file_path: Union[str, Path]) -> Dict[str, Any]:
        """Load simulation parameters from a configuration file.

        The parameters may sit under a top-level ``simulation`` table or
        at the top level of the file.

        Args:
            file_path: Path to a YAML, TOML or JSON parameter file

        Returns:
            Dictionary of parameter values
        """
        data = self._load_config_file(Path(file_path))
        if not isinstance(data, dict):
            raise InvalidDataError("parameter file", f"expected a mapping, got {type(data).__name__}")
        params = data.get(PARAMETERS_KEY, data)
        if not isinstance(params, dict):
            raise InvalidDataError("parameter file", f"'{PARAMETERS_KEY}' must be a mapping")
        return params

    def load_coefficient_file(self, filename: str) -> Dict[str, Any]:
        """Load a JSON coefficient file with caching.

        Args:
            filename: Name of the coefficient file (e.g., 'allometric_coefficients.json')

        Returns:
            Dictionary containing coefficient data

        Raises:
            ConfigFileNotFoundError: If the file doesn't exist
            InvalidDataError: If the file cannot be parsed
        """
        if filename not in self._coefficient_cache:
            self._coefficient_cache[filename] = self._load_config_file(self.cfg_dir / filename)
        return self._coefficient_cache[filename]

    def clear_coefficient_cache(self) -> None:
        """Clear the coefficient file cache.

        Useful for testing or when configuration files may have changed.
        """
        self._coefficient_cache.clear()

    def save_config(self, config_data: Dict[str, Any], file_path: Union[str, Path]) -> None:
        """Save configuration data to file.

        Args:
            config_data: Configuration data to save
            file_path: Path where to save the configuration
        """
        if isinstance(file_path, str):
            file_path = Path(file_path)

        self._save_config_file(config_data, file_path)


# Global configuration loader instance
_config_loader: Optional[ConfigLoader] = None


def get_config_loader() -> ConfigLoader:
    """Get the shared configuration loader instance.

    Returns:
        ConfigLoader for the packaged cfg/ directory
    """
    global _config_loader
    if _config_loader is None:
        _config_loader = ConfigLoader()
    return _config_loader


def load_simulation_config(path: Union[str, Path, None] = None) -> Dict[str, Any]:
    """Convenience function to load simulation parameters.

    Args:
        path: Optional parameter file. If None, the packaged defaults are used.

    Returns:
        Dictionary of parameter values
    """
    loader = get_config_loader()
    if path is None:
        return dict(loader.simulation_config)
    return loader.load_parameters_file(path)


def load_coefficient_file(filename: str) -> Dict[str, Any]:
    """Convenience function to load a JSON coefficient file with caching.

    Args:
        filename: Name of the coefficient file

    Returns:
        Dictionary containing coefficient data
    """
    return get_config_loader().load_coefficient_file(filename)
