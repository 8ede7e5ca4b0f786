"""Colocación de hidrógenos nuevos alrededor de un átomo padre.

Los hidrógenos se sitúan sobre una circunferencia de radio fijo centrada en
el padre. Hay dos modos:

- simple: reparte la circunferencia en `max(n, 3)` pasos iguales empezando
  en el ángulo 0, de modo que 1 o 2 H quedan espaciados como si fueran 3;
- con colisiones: recorre ángulos candidatos a pasos de pi/6 y elige, para
  cada H, el candidato más alejado de los vecinos ya presentes (colocación
  voraz del punto más lejano). Los H recién colocados cuentan como vecinos
  para los siguientes, así que dos H de una misma llamada nunca comparten
  ángulo.
"""

from __future__ import annotations

import logging
import math
from typing import List

from molcore.model import HYDROGEN, Atom, Bond, BondType, IdFactory, Molecule, new_id
from valence.geom import FULL_TURN, angle_distance_rad, angle_rad, endpoint_from_angle_len

LOG = logging.getLogger(__name__)

HYDROGEN_DISTANCE = 30.0
SCAN_STEP = math.pi / 6
MIN_SIMPLE_POSITIONS = 3

# Holgura para considerar empatados dos candidatos.
_TIE_EPS = 1e-9

_SCAN_CANDIDATES = [step * SCAN_STEP for step in range(int(round(FULL_TURN / SCAN_STEP)))]


def simple_angles(count: int) -> List[float]:
    """Ángulos del modo simple para `count` hidrógenos."""
    if count <= 0:
        return []
    angle_step = FULL_TURN / max(count, MIN_SIMPLE_POSITIONS)
    return [i * angle_step for i in range(count)]


def _neighbor_angles(parent: Atom, molecule: Molecule) -> List[float]:
    origin = (parent.x, parent.y)
    seen = set()
    angles: List[float] = []
    for neighbor in molecule.neighbors(parent.id):
        if neighbor.id in seen or neighbor.id == parent.id:
            continue
        seen.add(neighbor.id)
        angles.append(angle_rad(origin, (neighbor.x, neighbor.y)))
    return angles


def collision_aware_angles(parent: Atom, molecule: Molecule, count: int) -> List[float]:
    """Elige ángulos para `count` H evitando los vecinos del padre.

    Args:
        parent: Átomo al que se unirán los hidrógenos.
        molecule: Instantánea con los vecinos actuales (H y átomos pesados).
        count: Número de hidrógenos a colocar.

    Returns:
        Lista de ángulos en radianes, uno por hidrógeno, en orden de
        colocación. Los empates se resuelven a favor del primer candidato
        en orden creciente de ángulo.
    """
    occupied = _neighbor_angles(parent, molecule)
    chosen: List[float] = []
    for _ in range(max(count, 0)):
        best_angle = 0.0
        best_clearance = 0.0
        for candidate in _SCAN_CANDIDATES:
            clearance = FULL_TURN
            for existing in occupied:
                clearance = min(clearance, angle_distance_rad(candidate, existing))
            if clearance > best_clearance + _TIE_EPS:
                best_clearance = clearance
                best_angle = candidate
        chosen.append(best_angle)
        occupied.append(best_angle)
    return chosen


def place_hydrogens(
    parent: Atom,
    molecule: Molecule,
    count: int,
    avoid_neighbors: bool = False,
    id_factory: IdFactory = new_id,
    distance: float = HYDROGEN_DISTANCE,
) -> Molecule:
    """Crea `count` hidrógenos unidos por enlace simple a `parent`.

    Args:
        parent: Átomo padre; debe existir en `molecule`.
        molecule: Instantánea de partida.
        count: Número de H a añadir; `<= 0` no hace nada.
        avoid_neighbors: Usa el modo con colisiones en lugar del simple.
        id_factory: Generador de IDs para los átomos y enlaces nuevos.
        distance: Radio de la circunferencia de colocación.

    Returns:
        Nueva instantánea con los átomos y enlaces añadidos al final; los
        existentes se conservan en su orden. Devuelve `molecule` tal cual
        si no hay nada que añadir o el padre no pertenece a ella.
    """
    if count <= 0:
        return molecule
    if molecule.find_atom(parent.id) is None:
        LOG.debug(f"place_hydrogens: unknown parent atom {parent.id}")
        return molecule

    if avoid_neighbors:
        angles = collision_aware_angles(parent, molecule, count)
    else:
        angles = simple_angles(count)

    origin = (parent.x, parent.y)
    new_atoms: List[Atom] = []
    new_bonds: List[Bond] = []
    for angle in angles:
        x, y = endpoint_from_angle_len(origin, angle, distance)
        hydrogen = Atom(id=id_factory(), element=HYDROGEN, x=x, y=y)
        new_atoms.append(hydrogen)
        new_bonds.append(
            Bond(id=id_factory(), source_id=parent.id, target_id=hydrogen.id, type=BondType.SINGLE)
        )

    LOG.debug(
        f"Placed {len(new_atoms)} H on {parent.element} {parent.id} "
        f"({'collision-aware' if avoid_neighbors else 'simple'})"
    )
    return molecule.with_atoms(new_atoms).with_bonds(new_bonds)
