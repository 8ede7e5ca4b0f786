"""
Utilidades geométricas para la colocación de átomos.

Funciones puras sobre puntos `(x, y)` y ángulos en radianes, medidos con
`atan2(dy, dx)` en las mismas coordenadas que guardan los átomos.
"""
from __future__ import annotations

import math
from typing import Tuple

Point = Tuple[float, float]

FULL_TURN = 2.0 * math.pi


def angle_rad(origin: Point, point: Point) -> float:
    """Ángulo de la dirección origen -> punto, en (-pi, pi]."""
    dx = point[0] - origin[0]
    dy = point[1] - origin[1]
    if dx == 0 and dy == 0:
        return 0.0
    return math.atan2(dy, dx)


def normalize_angle_rad(theta: float) -> float:
    """Normaliza un ángulo al rango [0, 2pi)."""
    return theta % FULL_TURN


def angle_distance_rad(a: float, b: float) -> float:
    """Distancia angular mínima entre dos ángulos, en [0, pi]."""
    diff = abs(normalize_angle_rad(a) - normalize_angle_rad(b))
    return min(diff, FULL_TURN - diff)


def endpoint_from_angle_len(origin: Point, theta: float, length: float) -> Point:
    """Calcula el punto final desde un origen, ángulo y longitud."""
    return (
        origin[0] + math.cos(theta) * length,
        origin[1] + math.sin(theta) * length,
    )
