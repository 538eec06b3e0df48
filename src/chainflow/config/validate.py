"""Environment validation for chainflow dependencies."""

import sys
from typing import Dict
from packaging import version


def check_environment(min_numpy: str = "1.24") -> None:
    """Check that environment meets minimum dependency requirements.
    
    Parameters
    ----------
    min_numpy : str, default="1.24"
        Minimum required NumPy version
        
    Raises
    ------
    RuntimeError
        If any dependency requirements are not met
        
    Examples
    --------
    >>> check_environment()
    >>> check_environment(min_numpy="1.22")
    """
    errors = []
    
    if sys.version_info < (3, 9):
        errors.append(f"Python 3.9+ required, found {sys.version_info.major}.{sys.version_info.minor}")
    
    try:
        import numpy as np
        numpy_version = np.__version__
        if version.parse(numpy_version) < version.parse(min_numpy):
            errors.append(f"NumPy {min_numpy}+ required, found {numpy_version}")
    except ImportError:
        errors.append("NumPy not installed - required for vector samples")
    
    try:
        import tomli_w  # noqa: F401
    except ImportError:
        errors.append("tomli-w not installed - required for saving settings")
    
    if errors:
        error_msg = "Environment validation failed:\n" + "\n".join(f"  - {err}" for err in errors)
        error_msg += "\n\nTo install required dependencies:\n  pip install numpy packaging tomli-w"
        raise RuntimeError(error_msg)


def get_dependency_versions() -> Dict[str, str]:
    """Get versions of all relevant dependencies.
    
    Returns
    -------
    dict
        Dictionary mapping package names to version strings
    """
    versions = {
        'python': f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}"
    }
    
    try:
        import numpy as np
        versions['numpy'] = np.__version__
    except ImportError:
        versions['numpy'] = 'not installed'
    
    import packaging
    versions['packaging'] = packaging.__version__
    
    if sys.version_info >= (3, 11):
        versions['tomllib'] = 'built-in (3.11+)'
    else:
        try:
            import tomli
            versions['tomli'] = tomli.__version__
        except ImportError:
            versions['tomli'] = 'not installed'
    
    try:
        import tomli_w
        versions['tomli_w'] = getattr(tomli_w, '__version__', 'installed')
    except ImportError:
        versions['tomli_w'] = 'not installed'
    
    return versions


def print_environment_info() -> None:
    """Print dependency and platform information."""
    versions = get_dependency_versions()
    
    print("Chainflow - Environment Information")
    print("=" * 50)
    
    print("\nCore Dependencies:")
    for pkg in ['python', 'numpy']:
        if pkg in versions:
            print(f"  {pkg:12}: {versions[pkg]}")
    
    print("\nConfiguration:")
    for pkg in ['packaging', 'tomllib', 'tomli', 'tomli_w']:
        if pkg in versions:
            print(f"  {pkg:12}: {versions[pkg]}")
    
    print("\nSystem Information:")
    print(f"  Platform     : {sys.platform}")
    print(f"  Architecture : {sys.maxsize > 2**32 and '64-bit' or '32-bit'}")
