"""Conversión entre instantáneas `Molecule` y moléculas de RDKit.

Se usa para exportar el dibujo a SMILES/molfile (p. ej., para consultar su
nombre) y para importar estructuras desde SMILES con H explícitos.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Tuple

from molcore.errors import MoleculeFormatError
from molcore.model import HYDROGEN, Atom, Bond, BondType, IdFactory, Molecule, new_id
from valence.reconcile import fill_missing_hydrogens

try:
    from rdkit import Chem
    from rdkit.Chem import AllChem
except Exception:  # pragma: no cover - optional dependency at runtime
    Chem = None
    AllChem = None

LOG = logging.getLogger(__name__)

DEFAULT_BOND_LENGTH = 40.0


def _require_rdkit():
    if Chem is None or AllChem is None:
        raise RuntimeError("RDKit no disponible")


def _rdkit_bond_type(bond_type: BondType):
    if bond_type == BondType.DOUBLE:
        return Chem.BondType.DOUBLE
    if bond_type == BondType.TRIPLE:
        return Chem.BondType.TRIPLE
    return Chem.BondType.SINGLE


def molecule_to_rdkit_with_map(molecule: Molecule, sanitize: bool = True):
    """Construye una molécula de RDKit con las posiciones 2D del dibujo.

    Args:
        molecule: Instantánea a convertir.
        sanitize: Ejecuta `SanitizeMol` sobre el resultado.

    Returns:
        Tupla `(mol, id_map)` con el mapa ID de átomo -> índice RDKit.

    Raises:
        RuntimeError: Si RDKit no está instalado.
    """
    _require_rdkit()
    rw = Chem.RWMol()
    id_map: Dict[str, int] = {}

    for atom in molecule.atoms:
        id_map[atom.id] = rw.AddAtom(Chem.Atom(atom.element))

    for bond in molecule.bonds:
        begin = id_map.get(bond.source_id)
        end = id_map.get(bond.target_id)
        if begin is None or end is None or begin == end:
            continue
        # RDKit no admite enlaces paralelos entre el mismo par de átomos.
        if rw.GetBondBetweenAtoms(begin, end) is not None:
            continue
        rw.AddBond(begin, end, _rdkit_bond_type(bond.type))
        if bond.type == BondType.WEDGE:
            rw.GetBondBetweenAtoms(begin, end).SetBondDir(Chem.BondDir.BEGINWEDGE)
        elif bond.type == BondType.DASH:
            rw.GetBondBetweenAtoms(begin, end).SetBondDir(Chem.BondDir.BEGINDASH)

    mol = rw.GetMol()
    conf = Chem.Conformer(mol.GetNumAtoms())
    for atom in molecule.atoms:
        conf.SetAtomPosition(id_map[atom.id], (atom.x, atom.y, 0.0))
    mol.AddConformer(conf, assignId=True)
    if sanitize:
        Chem.SanitizeMol(mol)
    return mol, id_map


def molecule_to_rdkit(molecule: Molecule):
    mol, _ = molecule_to_rdkit_with_map(molecule)
    return mol


def molecule_to_smiles(molecule: Molecule, keep_hydrogens: bool = False) -> str:
    """Exporta la molécula a SMILES canónico.

    Los H materializados se pliegan de nuevo en recuentos implícitos salvo
    que se pida `keep_hydrogens`.
    """
    mol = molecule_to_rdkit(molecule)
    if not keep_hydrogens:
        mol = Chem.RemoveHs(mol)
    return Chem.MolToSmiles(mol, canonical=True)


def molecule_to_molfile(molecule: Molecule) -> str:
    mol = molecule_to_rdkit(molecule)
    return Chem.MolToMolBlock(mol)


def _scale_to_default(
    positions: List[Tuple[float, float]],
    bonds: List[Tuple[int, int]],
    target: float = DEFAULT_BOND_LENGTH,
) -> List[Tuple[float, float]]:
    if not bonds:
        return positions
    lengths = []
    for a1, a2 in bonds:
        dx = positions[a2][0] - positions[a1][0]
        dy = positions[a2][1] - positions[a1][1]
        lengths.append((dx * dx + dy * dy) ** 0.5)
    avg = sum(lengths) / len(lengths)
    if avg <= 0:
        return positions
    scale = target / avg
    return [(x * scale, y * scale) for x, y in positions]


def rdkit_to_molecule(
    mol,
    add_hydrogens: bool = True,
    id_factory: IdFactory = new_id,
) -> Molecule:
    """Convierte una molécula de RDKit en una instantánea.

    Args:
        mol: Molécula de RDKit (los enlaces aromáticos se kekulizan).
        add_hydrogens: Materializa los H implícitos de cada átomo pesado.
        id_factory: Generador de IDs para átomos y enlaces.

    Returns:
        La instantánea con coordenadas escaladas a la longitud de enlace
        por defecto del editor.

    Raises:
        RuntimeError: Si RDKit no está instalado.
        MoleculeFormatError: Si `mol` es `None`.
    """
    _require_rdkit()
    if mol is None:
        raise MoleculeFormatError("Mol inválido")
    mol = Chem.Mol(mol)
    Chem.Kekulize(mol, clearAromaticFlags=True)
    if mol.GetNumConformers() == 0:
        AllChem.Compute2DCoords(mol)
    conf = mol.GetConformer()

    raw_positions = []
    for atom in mol.GetAtoms():
        pos = conf.GetAtomPosition(atom.GetIdx())
        raw_positions.append((pos.x, pos.y))
    bond_pairs = [(b.GetBeginAtomIdx(), b.GetEndAtomIdx()) for b in mol.GetBonds()]
    positions = _scale_to_default(raw_positions, bond_pairs)

    atoms: List[Atom] = []
    for atom in mol.GetAtoms():
        x, y = positions[atom.GetIdx()]
        atoms.append(Atom(id=id_factory(), element=atom.GetSymbol(), x=x, y=y))

    bonds: List[Bond] = []
    for bond in mol.GetBonds():
        bond_type = BondType.SINGLE
        if bond.GetBondType() == Chem.BondType.DOUBLE:
            bond_type = BondType.DOUBLE
        elif bond.GetBondType() == Chem.BondType.TRIPLE:
            bond_type = BondType.TRIPLE
        elif bond.GetBondDir() == Chem.BondDir.BEGINWEDGE:
            bond_type = BondType.WEDGE
        elif bond.GetBondDir() == Chem.BondDir.BEGINDASH:
            bond_type = BondType.DASH
        bonds.append(
            Bond(
                id=id_factory(),
                source_id=atoms[bond.GetBeginAtomIdx()].id,
                target_id=atoms[bond.GetEndAtomIdx()].id,
                type=bond_type,
            )
        )

    molecule = Molecule(atoms, bonds)
    if add_hydrogens:
        for atom in atoms:
            if atom.element != HYDROGEN:
                molecule = fill_missing_hydrogens(atom.id, molecule, id_factory=id_factory)
    LOG.debug(f"Imported {len(molecule.atoms)} atoms, {len(molecule.bonds)} bonds from RDKit")
    return molecule


def smiles_to_molecule(
    smiles: str,
    add_hydrogens: bool = True,
    id_factory: IdFactory = new_id,
) -> Molecule:
    _require_rdkit()
    mol = Chem.MolFromSmiles(smiles)
    if mol is None:
        raise MoleculeFormatError(f"SMILES inválido: {smiles}")
    return rdkit_to_molecule(mol, add_hydrogens=add_hydrogens, id_factory=id_factory)


def molfile_to_molecule(
    molfile: str,
    add_hydrogens: bool = True,
    id_factory: IdFactory = new_id,
) -> Molecule:
    _require_rdkit()
    mol = Chem.MolFromMolBlock(molfile, sanitize=True)
    if mol is None:
        raise MoleculeFormatError("Molfile inválido")
    return rdkit_to_molecule(mol, add_hydrogens=add_hydrogens, id_factory=id_factory)
