"""
NEAT Run Package

This package holds the configuration and the generational driver.

Modules:
    config: Config class, parsing INI configuration files
    trial:  Trial abstract base class

Exported Classes:
    Config: Configuration parameters
    Trial:  Abstract generational driver
"""

from evoneat.run.config import Config
from evoneat.run.trial  import Trial

__all__ = ['Config', 'Trial']
