"""Small vector, rotation, interpolation and string helpers."""

from __future__ import annotations

import math
from collections.abc import Sequence

Vector = tuple[float, float, float]

_MASK64 = (1 << 64) - 1


def to_fixed_point(value: float, frac: int) -> int:
    """Convert ``value`` to a fixed-point integer with ``frac`` fractional bits.

    The result is truncated towards zero.
    """
    scaled = value * 2.0 ** frac
    return math.floor(scaled) if value >= 0 else math.ceil(scaled)


def distance(point1: Sequence[float], point2: Sequence[float]) -> float:
    """Euclidean distance between two 3-D points."""
    return math.sqrt(sum((a - b) ** 2 for a, b in zip(point1[:3], point2[:3])))


def vec_point2line(
    point: Sequence[float],
    line_point_a: Sequence[float],
    line_point_b: Sequence[float],
) -> Vector:
    """Vector moving ``point`` to its perpendicular projection on line AB."""
    direction = [b - a for a, b in zip(line_point_a[:3], line_point_b[:3])]
    length2 = sum(d * d for d in direction)
    if length2 == 0:
        raise ValueError("line is defined by two identical points")
    t = sum(d * (p - a) for d, p, a in zip(direction, point, line_point_a)) / length2
    return tuple(
        t * d + a - p for d, a, p in zip(direction, line_point_a, point)
    )  # type: ignore[return-value]


def rotate(
    point: Sequence[float],
    movvec: Sequence[float],
    normvec: Sequence[float],
    angle: float,
) -> Vector:
    """Rotate ``point`` by ``angle`` degrees around an axis.

    The axis is parallel to ``normvec`` and is moved to the origin by
    ``movvec``; the sense of rotation follows the right-hand rule about
    ``normvec``.  The rotated point is returned.
    """
    p0 = point[0] - movvec[0]
    p1 = point[1] - movvec[1]
    p2 = point[2] - movvec[2]

    half = math.radians(angle) / 2
    sin_half = math.sin(half)
    qw = math.cos(half)
    qx = sin_half * normvec[0]
    qy = sin_half * normvec[1]
    qz = sin_half * normvec[2]

    # q * v, where v is the pure quaternion of the point
    tw = -qx * p0 - qy * p1 - qz * p2
    tx = qw * p0 + qy * p2 - qz * p1
    ty = qw * p1 - qx * p2 + qz * p0
    tz = qw * p2 + qx * p1 - qy * p0

    # (q * v) * q^-1, with q^-1 = (qw, -qx, -qy, -qz)
    rw, rx, ry, rz = qw, -qx, -qy, -qz
    r0 = tw * rx + tx * rw + ty * rz - tz * ry
    r1 = tw * ry - tx * rz + ty * rw + tz * rx
    r2 = tw * rz + tx * ry - ty * rx + tz * rw

    return (r0 + movvec[0], r1 + movvec[1], r2 + movvec[2])


def angle_of_vectors(vector1: Sequence[float], vector2: Sequence[float]) -> float:
    """Angle in degrees between two position vectors."""
    origin = (0.0, 0.0, 0.0)
    len1 = distance(vector1, origin)
    len2 = distance(vector2, origin)
    if len1 == 0 or len2 == 0:
        raise ValueError("angle is undefined for a zero vector")
    dot = sum(a * b for a, b in zip(vector1[:3], vector2[:3]))
    cosine = max(-1.0, min(1.0, dot / (len1 * len2)))
    return math.degrees(math.acos(cosine))


def cross_product(vector1: Sequence[float], vector2: Sequence[float]) -> Vector:
    """Cross product of two 3-D vectors."""
    return (
        vector1[1] * vector2[2] - vector1[2] * vector2[1],
        vector1[2] * vector2[0] - vector1[0] * vector2[2],
        vector1[0] * vector2[1] - vector1[1] * vector2[0],
    )


def trilinear_weights(dx: float, dy: float, dz: float) -> list[list[list[float]]]:
    """Trilinear interpolation weights, indexed ``[x][y][z]``.

    ``dx``, ``dy`` and ``dz`` give the position of the point inside the unit cube.
    """
    wx = (1 - dx, dx)
    wy = (1 - dy, dy)
    wz = (1 - dz, dz)
    return [[[x * y * z for z in wz] for y in wy] for x in wx]


def binary_string(value: int) -> str:
    """The low 64 bits of ``value`` as a string of 64 binary digits."""
    return format(value & _MASK64, "064b")


def _upper(char: str) -> str:
    return char.upper() if char.isascii() else char


def _same_ignore_case(str1: str, str2: str) -> bool:
    return len(str1) == len(str2) and all(
        _upper(a) == _upper(b) for a, b in zip(str1, str2)
    )


def equals_ignore_case(str1: str, str2: str) -> bool:
    """True if the two strings are equal apart from ASCII letter case."""
    return _same_ignore_case(str1, str2)


def prefix_equals_ignore_case(str1: str, str2: str, num: int) -> bool:
    """True if the first ``num`` characters match, ignoring ASCII case.

    A string shorter than ``num`` matches only a string that ends at the
    same place.  At least one character position is always compared.
    """
    count = max(num, 1)
    return _same_ignore_case(str1[:count], str2[:count])