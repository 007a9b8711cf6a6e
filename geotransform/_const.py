"""
Constants declarations for geotransform
"""
import math

# WGS84 Ellipsoid Constants
WGS84_A = 6378137.0  # Semi-major axis (meters)
WGS84_B = 6356752.314  # Semi-minor axis (meters)
WGS84_ES = 0.0066943799901413165  # Eccentricity squared

# Angles
HALF_PI = math.pi / 2
FORTPI = math.pi / 4
TWO_PI = math.pi * 2
SPI = 3.14159265359  # slightly larger than pi, keeps +/-180 from wrapping
D2R = 0.01745329251994329577
R2D = 57.29577951308232088
SEC_TO_RAD = 4.84813681109535993589914102357e-6

EPSLN = 1.0e-10

# Authalic sphere series (R_A)
SIXTH = 0.1666666666666666667
RA4 = 0.04722222222222222222
RA6 = 0.02215608465608465608

# Datum comparison
ES_TOLERANCE = 0.000000000050

# Geocentric conversion
GEOCENTRIC_GENAU = 1.0e-12
GEOCENTRIC_GENAU2 = GEOCENTRIC_GENAU * GEOCENTRIC_GENAU
GEOCENTRIC_MAX_ITER = 30
LATITUDE_CLAMP = HALF_PI * 1.001

# Grid shift
GRID_INVERSE_MAX_ITER = 9
GRID_INVERSE_TOL = 1.0e-12
NULL_GRID = 'null'

# Iterative solver caps
PHI2Z_MAX_ITER = 15
IMLFN_MAX_ITER = 15
INV_MLFN_MAX_ITER = 20
IQSFNZ_MAX_ITER = 30
ALBERS_MAX_ITER = 25
POLYCONIC_MAX_ITER = 20
KROVAK_MAX_ITER = 15
GAUSS_MAX_ITER = 20
SWISS_MAX_ITER = 20
NZMG_MAX_ITER = 20
MOLLWEIDE_MAX_ITER = 50
ISOMETRIC_LAT_MAX_ITER = 30
