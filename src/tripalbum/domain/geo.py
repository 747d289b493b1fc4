import math
from typing import Optional, Sequence

import numpy as np
from pyproj import Geod

_GEOD = Geod(ellps="WGS84")


def distance_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Geodesic distance in meters on the WGS84 ellipsoid."""
    _, _, dist = _GEOD.inv(lon1, lat1, lon2, lat2)
    return float(dist)


def distance_matrix_m(lats: Sequence[Optional[float]], lons: Sequence[Optional[float]]) -> np.ndarray:
    """
    Pairwise geodesic distances in meters.

    Entries involving a point without coordinates are `inf`.
    """
    n = len(lats)
    dist_matrix = np.zeros((n, n))
    for i in range(n):
        for j in range(i + 1, n):
            if lats[i] is None or lons[i] is None or lats[j] is None or lons[j] is None:
                dist = math.inf
            else:
                dist = distance_m(lats[i], lons[i], lats[j], lons[j])
            dist_matrix[i][j] = dist_matrix[j][i] = dist
    return dist_matrix
