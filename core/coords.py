from __future__ import annotations
import math

# Galactic north pole (J2000) and the galactic longitude of the celestial pole
GAL_POLE_RA_DEG = 192.85
GAL_POLE_DEC_DEG = 27.13
GAL_NCP_LON_DEG = 122.93

_SIN_DG = math.sin(math.radians(GAL_POLE_DEC_DEG))
_COS_DG = math.cos(math.radians(GAL_POLE_DEC_DEG))


def clamp(x: float, lo: float, hi: float) -> float:
    return lo if x < lo else hi if x > hi else x

def wrap_deg(x: float) -> float:
    x = x % 360.0
    return x if x >= 0 else x + 360.0

def ang_diff_deg(a: float, b: float) -> float:
    """Smallest signed difference a-b in degrees in [-180,180)."""
    d = (a - b + 180.0) % 360.0 - 180.0
    return d

def _safe_asin(x: float) -> float:
    return math.asin(clamp(x, -1.0, 1.0))

def cart_to_sph(x: float, y: float, z: float) -> tuple[float,float]:
    """(lon_deg in [0,360), lat_deg) of a cartesian direction."""
    h = math.hypot(x, y)
    lon = math.degrees(math.atan2(y, x)) % 360.0
    lat = math.degrees(math.atan2(z, h))
    return lon, lat

def equatorial_to_horizontal(ra_deg: float, dec_deg: float, lat_deg: float, lst_deg: float) -> tuple[float,float]:
    """
    Return (alt_deg, az_deg). Az measured from North towards East (0..360).

    atan2 takes the unnormalised sine/cosine pair, so the zenith and the
    celestial poles need no division; there azimuth collapses to 0.
    """
    ha = math.radians(lst_deg - ra_deg)
    dec = math.radians(dec_deg)
    lat = math.radians(lat_deg)

    sin_dec, cos_dec = math.sin(dec), math.cos(dec)
    sin_lat, cos_lat = math.sin(lat), math.cos(lat)
    cos_ha = math.cos(ha)

    alt = _safe_asin(sin_dec*sin_lat + cos_dec*cos_lat*cos_ha)

    y = -cos_dec * math.sin(ha)
    x = sin_dec*cos_lat - cos_dec*cos_ha*sin_lat
    az = math.atan2(y, x)
    return math.degrees(alt), wrap_deg(math.degrees(az))

def horizontal_to_equatorial(alt_deg: float, az_deg: float, lat_deg: float, lst_deg: float) -> tuple[float,float]:
    """Inverse of equatorial_to_horizontal. Returns (ra_deg, dec_deg)."""
    alt = math.radians(alt_deg)
    az = math.radians(az_deg)
    lat = math.radians(lat_deg)

    sin_alt, cos_alt = math.sin(alt), math.cos(alt)
    sin_lat, cos_lat = math.sin(lat), math.cos(lat)
    cos_az = math.cos(az)

    dec = _safe_asin(sin_alt*sin_lat + cos_alt*cos_lat*cos_az)

    y = -cos_alt * math.sin(az)
    x = sin_alt*cos_lat - cos_alt*cos_az*sin_lat
    ha = math.degrees(math.atan2(y, x))
    return wrap_deg(lst_deg - ha), math.degrees(dec)

def galactic_to_equatorial(l_deg: float, b_deg: float) -> tuple[float,float]:
    """
    Rotate galactic (l, b) onto equatorial (ra, dec), both in degrees.
    Exact spherical rotation about the galactic pole.
    """
    b = math.radians(b_deg)
    dl = math.radians(GAL_NCP_LON_DEG - l_deg)
    sin_b, cos_b = math.sin(b), math.cos(b)

    dec = _safe_asin(_SIN_DG*sin_b + _COS_DG*cos_b*math.cos(dl))

    y = cos_b * math.sin(dl)
    x = _COS_DG*sin_b - _SIN_DG*cos_b*math.cos(dl)
    ra = GAL_POLE_RA_DEG + math.degrees(math.atan2(y, x))
    return wrap_deg(ra), math.degrees(dec)

def equatorial_to_galactic(ra_deg: float, dec_deg: float) -> tuple[float,float]:
    """Inverse of galactic_to_equatorial. Returns (l_deg, b_deg)."""
    dec = math.radians(dec_deg)
    da = math.radians(ra_deg - GAL_POLE_RA_DEG)
    sin_d, cos_d = math.sin(dec), math.cos(dec)

    b = _safe_asin(_SIN_DG*sin_d + _COS_DG*cos_d*math.cos(da))

    y = cos_d * math.sin(da)
    x = sin_d*_COS_DG - cos_d*_SIN_DG*math.cos(da)
    l = GAL_NCP_LON_DEG - math.degrees(math.atan2(y, x))
    return wrap_deg(l), math.degrees(b)

def is_finite_point(x: float, y: float) -> bool:
    return math.isfinite(x) and math.isfinite(y)
