"""
Exposes the version of geotransform
"""

__version__ = 'v0.1.0'

__all__ = ["__version__"]
