"""
Static name-to-constant tables for ellipsoids, datums and prime meridians
"""

__all__ = ['DATUMS', 'ELLIPSOIDS', 'PRIME_MERIDIANS', 'match_key']

import re
from typing import Any, Dict, Mapping, Optional

_IGNORED_CHARS = re.compile(r'[\s_\-/()]')

# a: semi-major axis (m), rf: reciprocal flattening, b: semi-minor axis (m)
ELLIPSOIDS: Dict[str, Dict[str, Any]] = {
    'MERIT': {'a': 6378137.0, 'rf': 298.257, 'name': 'MERIT 1983'},
    'SGS85': {'a': 6378136.0, 'rf': 298.257, 'name': 'Soviet Geodetic System 85'},
    'GRS80': {'a': 6378137.0, 'rf': 298.257222101, 'name': 'GRS 1980(IUGG, 1980)'},
    'IAU76': {'a': 6378140.0, 'rf': 298.257, 'name': 'IAU 1976'},
    'airy': {'a': 6377563.396, 'b': 6356256.910, 'name': 'Airy 1830'},
    'APL4': {'a': 6378137.0, 'rf': 298.25, 'name': 'Appl. Physics. 1965'},
    'NWL9D': {'a': 6378145.0, 'rf': 298.25, 'name': 'Naval Weapons Lab., 1965'},
    'mod_airy': {'a': 6377340.189, 'b': 6356034.446, 'name': 'Modified Airy'},
    'andrae': {'a': 6377104.43, 'rf': 300.0, 'name': 'Andrae 1876 (Den., Iclnd.)'},
    'aust_SA': {'a': 6378160.0, 'rf': 298.25, 'name': 'Australian Natl & S. Amer. 1969'},
    'GRS67': {'a': 6378160.0, 'rf': 298.2471674270, 'name': 'GRS 67(IUGG 1967)'},
    'bessel': {'a': 6377397.155, 'rf': 299.1528128, 'name': 'Bessel 1841'},
    'bess_nam': {'a': 6377483.865, 'rf': 299.1528128, 'name': 'Bessel 1841 (Namibia)'},
    'clrk66': {'a': 6378206.4, 'b': 6356583.8, 'name': 'Clarke 1866'},
    'clrk80': {'a': 6378249.145, 'rf': 293.4663, 'name': 'Clarke 1880 mod.'},
    'clrk80ign': {'a': 6378249.2, 'b': 6356515.0, 'name': 'Clarke 1880 (IGN)'},
    'clrk58': {'a': 6378293.645208759, 'rf': 294.2606763692654, 'name': 'Clarke 1858'},
    'CPM': {'a': 6375738.7, 'rf': 334.29, 'name': 'Comm. des Poids et Mesures 1799'},
    'delmbr': {'a': 6376428.0, 'rf': 311.5, 'name': 'Delambre 1810 (Belgium)'},
    'engelis': {'a': 6378136.05, 'rf': 298.2566, 'name': 'Engelis 1985'},
    'evrst30': {'a': 6377276.345, 'rf': 300.8017, 'name': 'Everest 1830'},
    'evrst48': {'a': 6377304.063, 'rf': 300.8017, 'name': 'Everest 1948'},
    'evrst56': {'a': 6377301.243, 'rf': 300.8017, 'name': 'Everest 1956'},
    'evrst69': {'a': 6377295.664, 'rf': 300.8017, 'name': 'Everest 1969'},
    'evrstSS': {'a': 6377298.556, 'rf': 300.8017, 'name': 'Everest (Sabah & Sarawak)'},
    'fschr60': {'a': 6378166.0, 'rf': 298.3, 'name': 'Fischer (Mercury Datum) 1960'},
    'fschr60m': {'a': 6378155.0, 'rf': 298.3, 'name': 'Fischer 1960'},
    'fschr68': {'a': 6378150.0, 'rf': 298.3, 'name': 'Fischer 1968'},
    'helmert': {'a': 6378200.0, 'rf': 298.3, 'name': 'Helmert 1906'},
    'hough': {'a': 6378270.0, 'rf': 297.0, 'name': 'Hough'},
    'intl': {'a': 6378388.0, 'rf': 297.0, 'name': 'International 1909 (Hayford)'},
    'kaula': {'a': 6378163.0, 'rf': 298.24, 'name': 'Kaula 1961'},
    'lerch': {'a': 6378139.0, 'rf': 298.257, 'name': 'Lerch 1979'},
    'mprts': {'a': 6397300.0, 'rf': 191.0, 'name': 'Maupertius 1738'},
    'new_intl': {'a': 6378157.5, 'b': 6356772.2, 'name': 'New International 1967'},
    'plessis': {'a': 6376523.0, 'b': 6355863.0, 'name': 'Plessis 1817 (France)'},
    'krass': {'a': 6378245.0, 'rf': 298.3, 'name': 'Krassovsky, 1942'},
    'SEasia': {'a': 6378155.0, 'b': 6356773.3205, 'name': 'Southeast Asia'},
    'walbeck': {'a': 6376896.0, 'b': 6355834.8467, 'name': 'Walbeck'},
    'WGS60': {'a': 6378165.0, 'rf': 298.3, 'name': 'WGS 60'},
    'WGS66': {'a': 6378145.0, 'rf': 298.25, 'name': 'WGS 66'},
    'WGS7': {'a': 6378135.0, 'rf': 298.26, 'name': 'WGS 72'},
    'WGS84': {'a': 6378137.0, 'rf': 298.257223563, 'name': 'WGS 84'},
    'sphere': {'a': 6370997.0, 'b': 6370997.0, 'name': 'Normal Sphere (r=6370997)'},
}

# towgs84: Helmert parameters to WGS84 (m, arc-seconds, ppm)
# nadgrids: comma separated grid names, '@' marks an optional grid
DATUMS: Dict[str, Dict[str, str]] = {
    'wgs84': {'towgs84': '0,0,0', 'ellipse': 'WGS84', 'name': 'WGS84'},
    'ch1903': {'towgs84': '674.374,15.056,405.346', 'ellipse': 'bessel', 'name': 'swiss'},
    'ggrs87': {
        'towgs84': '-199.87,74.79,246.62', 'ellipse': 'GRS80',
        'name': 'Greek_Geodetic_Reference_System_1987'
    },
    'nad83': {'towgs84': '0,0,0', 'ellipse': 'GRS80', 'name': 'North_American_Datum_1983'},
    'nad27': {
        'nadgrids': '@conus,@alaska,@ntv2_0.gsb,@ntv1_can.dat', 'ellipse': 'clrk66',
        'name': 'North_American_Datum_1927'
    },
    'potsdam': {
        'towgs84': '598.1,73.7,418.2,0.202,0.045,-2.455,6.7', 'ellipse': 'bessel',
        'name': 'Potsdam Rauenberg 1950 DHDN'
    },
    'carthage': {'towgs84': '-263.0,6.0,431.0', 'ellipse': 'clrk80', 'name': 'Carthage 1934 Tunisia'},
    'hermannskogel': {
        'towgs84': '577.326,90.129,463.919,5.137,1.474,5.297,2.4232', 'ellipse': 'bessel',
        'name': 'Hermannskogel'
    },
    'osni52': {
        'towgs84': '482.530,-130.596,564.557,-1.042,-0.214,-0.631,8.15', 'ellipse': 'airy',
        'name': 'Irish National'
    },
    'ire65': {
        'towgs84': '482.530,-130.596,564.557,-1.042,-0.214,-0.631,8.15', 'ellipse': 'mod_airy',
        'name': 'Ireland 1965'
    },
    'rassadiran': {'towgs84': '-133.63,-157.5,-158.62', 'ellipse': 'intl', 'name': 'Rassadiran'},
    'nzgd49': {
        'towgs84': '59.47,-5.04,187.44,0.47,-0.1,1.024,-4.5993', 'ellipse': 'intl',
        'name': 'New Zealand Geodetic Datum 1949'
    },
    'osgb36': {
        'towgs84': '446.448,-125.157,542.060,0.1502,0.2470,0.8421,-20.4894', 'ellipse': 'airy',
        'name': 'Airy 1830'
    },
    's_jtsk': {'towgs84': '589,76,480', 'ellipse': 'bessel', 'name': 'S-JTSK (Ferro)'},
    'beduaram': {'towgs84': '-106,-87,188', 'ellipse': 'clrk80', 'name': 'Beduaram'},
    'gunung_segara': {'towgs84': '-403,684,41', 'ellipse': 'bessel', 'name': 'Gunung Segara Jakarta'},
    'rnb72': {
        'towgs84': '106.869,-52.2978,103.724,-0.33657,0.456955,-1.84218,1', 'ellipse': 'intl',
        'name': 'Reseau National Belge 1972'
    },
}

# Longitude of the prime meridian east of Greenwich, in degrees
PRIME_MERIDIANS: Dict[str, float] = {
    'greenwich': 0.0,
    'lisbon': -9.131906111111,
    'paris': 2.337229166667,
    'bogota': -74.080916666667,
    'madrid': -3.687938888889,
    'rome': 12.452333333333,
    'bern': 7.439583333333,
    'jakarta': 106.807719444444,
    'ferro': -17.666666666667,
    'brussels': 4.367975,
    'stockholm': 18.058277777778,
    'athens': 23.7163375,
    'oslo': 10.722916666667,
}


def _normalize_key(key: str) -> str:
    return _IGNORED_CHARS.sub('', key.lower())


def match_key(table: Mapping[str, Any], key: str) -> Optional[Any]:
    """
    Looks up a key in a table, ignoring case, whitespace, underscores, hyphens,
    slashes and parentheses.

    Args:
        table:
            The table to search

        key:
            The lookup key

    Returns:
        The matching value, or None if no key matches
    """
    if key in table:
        return table[key]

    target = _normalize_key(key)
    for candidate, value in table.items():
        if _normalize_key(candidate) == target:
            return value

    return None
