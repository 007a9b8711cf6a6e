"""
Module for linear unit conversions
"""
__all__ = ['LINEAR_UNITS', 'unit_to_meter']

from typing import Optional

# Meters per unit. Names follow the PROJ `+units=` vocabulary.
LINEAR_UNITS = {
    'mm': 0.001,
    'cm': 0.01,
    'm': 1.0,
    'km': 1000.0,
    'ft': 0.3048,
    'us-ft': 1200 / 3937,
    'fath': 1.8288,
    'kmi': 1852.0,
    'nmi': 1852.0,
    'mi': 1609.344,
    'us-mi': 1609.347218694437,
    'yd': 0.9144,
    'us-yd': 0.914401828803658,
    'ch': 20.1168,
    'us-ch': 20.11684023368047,
    'link': 0.201168,
    'ind-yd': 0.91439523,
    'ind-ft': 0.30479841,
    'ind-ch': 20.11669506,
}


def unit_to_meter(unit: str) -> Optional[float]:
    """
    Looks up the meters-per-unit factor of a linear unit name.

    Args:
        unit (str): The unit name, e.g. 'm', 'ft', 'us-ft'. Case-insensitive.

    Returns:
        float: The conversion factor, or None for angular or unknown units
        (for example 'degrees'), which carry no linear scale.
    """
    return LINEAR_UNITS.get(unit.lower())

