"""Main configuration settings with TOML loading support."""

from dataclasses import dataclass, asdict
from typing import Optional, Union
from pathlib import Path
import warnings

try:
    import tomllib  # Python 3.11+
except ImportError:
    import tomli as tomllib

import tomli_w

from .defaults import RESEARCH_CONFIGS, EstimatorConfig, validate_config

# TOML section -> Settings fields it may contain
TOML_SECTIONS = {
    'histogram': ('histogram_min', 'histogram_max', 'n_bins', 'spacing', 'histogram_component'),
    'autocovariance': ('window_size',),
    'processing': ('n_threads',),
    'output': ('output_dir',),
    'advanced': ('verbose',),
}

@dataclass
class Settings:
    """Main configuration settings for a chainflow analysis run.
    
    Can be loaded from TOML files for user customization while providing
    defaults matching the 'standard' preset.
    """
    
    # Histogram parameters
    histogram_min: float = 0.0
    histogram_max: float = 10.0
    n_bins: int = 50
    spacing: str = "linear"
    histogram_component: int = 0
    
    # Autocovariance parameters
    window_size: int = 10
    
    # Processing parameters
    n_threads: int = 1
    
    # Output
    output_dir: str = "output"
    
    verbose: bool = False
    
    def __post_init__(self):
        """Emit configuration warnings when verbose."""
        problems = validate_config(self.estimator_config())
        if problems and self.verbose:
            for problem in problems:
                warnings.warn(f"Configuration warning: {problem}")
    
    def estimator_config(self) -> EstimatorConfig:
        """The estimator-related subset of these settings."""
        return EstimatorConfig(
            histogram_min=self.histogram_min,
            histogram_max=self.histogram_max,
            n_bins=self.n_bins,
            spacing=self.spacing,
            histogram_component=self.histogram_component,
            window_size=self.window_size,
            n_threads=self.n_threads
        )
    
    @classmethod
    def from_preset(cls, preset: str) -> 'Settings':
        """Create settings from a preset configuration.
        
        Parameters
        ----------
        preset : str
            Preset name ('standard', 'log_scale', 'minimal')
            
        Returns
        -------
        Settings
            Settings object with preset values
        """
        if preset not in RESEARCH_CONFIGS:
            raise ValueError(f"Unknown preset '{preset}'. Available: {list(RESEARCH_CONFIGS.keys())}")
        
        return cls(**asdict(RESEARCH_CONFIGS[preset]))
    
    @classmethod
    def from_toml(cls, toml_path: Union[str, Path]) -> 'Settings':
        """Load settings from TOML file.
        
        Both sectioned files (``[histogram]``, ``[autocovariance]``,
        ``[processing]``, ``[output]``, ``[advanced]``) and flat files are
        accepted.
        
        Parameters
        ----------
        toml_path : Union[str, Path]
            Path to TOML configuration file
            
        Returns
        -------
        Settings
            Settings object with values from TOML file
            
        Raises
        ------
        FileNotFoundError
            If TOML file doesn't exist
        """
        toml_path = Path(toml_path)
        if not toml_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {toml_path}")
        
        with open(toml_path, 'rb') as f:
            config_data = tomllib.load(f)
        
        settings_data = {}
        for section in TOML_SECTIONS:
            if section in config_data:
                settings_data.update(config_data[section])
        
        for key, value in config_data.items():
            if not isinstance(value, dict):
                settings_data[key] = value
        
        return cls(**settings_data)
    
    def to_toml(self, toml_path: Union[str, Path]) -> None:
        """Save settings to TOML file, one table per section."""
        values = asdict(self)
        config_data = {}
        for section, keys in TOML_SECTIONS.items():
            config_data[section] = {key: values[key] for key in keys}
        
        with open(Path(toml_path), 'wb') as f:
            tomli_w.dump(config_data, f)
    
    def update(self, **kwargs) -> 'Settings':
        """Create new Settings with updated values."""
        current_dict = asdict(self)
        current_dict.update(kwargs)
        return Settings(**current_dict)


# Global configuration instance
_GLOBAL_CONFIG: Optional[Settings] = None

def get_config(config_path: Optional[Union[str, Path]] = None, 
               preset: Optional[str] = None,
               reload: bool = False) -> Settings:
    """Get global configuration settings.
    
    Parameters
    ----------
    config_path : Optional[Union[str, Path]]
        Path to TOML configuration file. If None, looks for 'chainflow.toml'
        in the working directory, then falls back to the preset.
    preset : Optional[str]
        Preset configuration name, 'standard' if None.
    reload : bool
        Force reload configuration even if already loaded
        
    Returns
    -------
    Settings
        Global configuration settings
    """
    global _GLOBAL_CONFIG
    
    if _GLOBAL_CONFIG is not None and not reload:
        return _GLOBAL_CONFIG
    
    if config_path is not None:
        _GLOBAL_CONFIG = Settings.from_toml(config_path)
    elif Path('chainflow.toml').exists():
        _GLOBAL_CONFIG = Settings.from_toml('chainflow.toml')
    else:
        _GLOBAL_CONFIG = Settings.from_preset(preset or 'standard')
    
    return _GLOBAL_CONFIG

def set_config(settings: Settings) -> None:
    """Set global configuration settings."""
    global _GLOBAL_CONFIG
    _GLOBAL_CONFIG = settings
