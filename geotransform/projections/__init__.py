"""
The closed set of supported projections and name-based lookup
"""

__all__ = ['PROJECTIONS', 'Projection', 'get_projection', 'list_projections']

import re
from typing import Dict, List, Tuple, Type

from geotransform.errors import UnknownProjectionError
from geotransform.projections.azimuthal import Gnomonic, LambertAzimuthalEqualArea, Orthographic
from geotransform.projections.base import Projection
from geotransform.projections.conic import (
    AlbersEqualArea, EquidistantConic, LambertConformalConic
)
from geotransform.projections.cylindrical import (
    Cassini, CylindricalEqualArea, EquidistantCylindrical, Equirectangular, MillerCylindrical
)
from geotransform.projections.geocent import Geocentric
from geotransform.projections.gstmerc import GaussSchreiberTransverseMercator
from geotransform.projections.krovak import Krovak
from geotransform.projections.longlat import Identity, LongLat
from geotransform.projections.mercator import Mercator
from geotransform.projections.nzmg import NewZealandMapGrid
from geotransform.projections.omerc import HotineObliqueMercator
from geotransform.projections.poly import Polyconic
from geotransform.projections.pseudocylindrical import Mollweide, Sinusoidal
from geotransform.projections.somerc import SwissObliqueMercator
from geotransform.projections.stereographic import (
    GaussConformal, ObliqueStereographic, Stereographic
)
from geotransform.projections.tmerc import TransverseMercator, UniversalTransverseMercator
from geotransform.projections.vandg import VanDerGrinten

PROJECTIONS: Tuple[Type[Projection], ...] = (
    LongLat,
    Identity,
    Geocentric,
    TransverseMercator,
    UniversalTransverseMercator,
    Mercator,
    LambertConformalConic,
    AlbersEqualArea,
    EquidistantConic,
    LambertAzimuthalEqualArea,
    Gnomonic,
    Orthographic,
    Stereographic,
    ObliqueStereographic,
    GaussConformal,
    HotineObliqueMercator,
    SwissObliqueMercator,
    GaussSchreiberTransverseMercator,
    Krovak,
    Cassini,
    Polyconic,
    Sinusoidal,
    Mollweide,
    Equirectangular,
    EquidistantCylindrical,
    MillerCylindrical,
    CylindricalEqualArea,
    NewZealandMapGrid,
    VanDerGrinten,
)


def _name_key(name: str) -> str:
    return re.sub(r'[\s_]+', '_', name.strip().lower())


_BY_NAME: Dict[str, Type[Projection]] = {
    _name_key(name): projection
    for projection in PROJECTIONS
    for name in projection.names
}


def get_projection(name: str) -> Type[Projection]:
    """
    Looks up a projection class by any of its names, ignoring case and
    treating spaces and underscores alike.

    Args:
        name:
            A PROJ name ('tmerc') or WKT name ('Transverse_Mercator')

    Returns:
        The projection class

    Raises:
        UnknownProjectionError: if no projection answers to the name
    """
    try:
        return _BY_NAME[_name_key(name)]
    except KeyError as exc:
        raise UnknownProjectionError(f'Unknown projection: {name}') from exc


def list_projections() -> List[str]:
    """The canonical name of every supported projection"""
    return [projection.names[0] for projection in PROJECTIONS]
