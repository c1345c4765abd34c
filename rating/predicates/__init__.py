"""
Predicates Package

Exports all match atoms and the composition table that selects them per
granularity code.

Composition:
    Each granularity code maps to a (narrow, wide) pair of atom lists.
    The wide list is used when the destination zip has at least
    WIDE_ZIP_LENGTH characters and usually adds the 5-digit S_Z5 atom.
    Codes absent from the table cannot be quoted.
"""

from .base import MatchAtom
from .city_state_to_city_state import CS_CS
from .zip_to_zip import Z_Z
from .zip_to_city_state import Z_CS
from .city_state_to_zip import CS_Z
from .city_state_to_state import CS_S
from .state_to_city_state import S_CS
from .state_to_zip5 import S_Z5
from .state_to_zip3 import S_Z3
from .zip3_to_state import Z3_S
from .state_to_state import S_S
from .state_zip3_to_state_zip3 import SZ_SZ
from ..precedence import ALL_CATEGORIES


# All atoms
ALL = [CS_CS, Z_Z, Z_CS, CS_Z, CS_S, S_CS, S_Z5, S_Z3, Z3_S, S_S, SZ_SZ]

WIDE_ZIP_LENGTH = 5


# =============================================================================
# COMPOSITION TABLE
# =============================================================================

COMPOSITION = {
    # code:     (narrow destination zip, wide destination zip)
    "CSZ_CSZ": (
        [Z_Z, CS_CS, Z_CS, CS_Z, S_Z3, Z3_S, S_S, CS_S, S_CS, SZ_SZ],
        [Z_Z, CS_CS, Z_CS, CS_Z, S_Z3, S_Z5, Z3_S, S_S, CS_S, S_CS, SZ_SZ],
    ),
    "CSZ_CS": (
        [CS_CS, Z_CS, Z3_S, S_S, CS_S, S_CS],
        [CS_CS, Z_CS, Z3_S, S_S, CS_S, S_CS],
    ),
    "CSZ_S": (
        [Z3_S, S_S, CS_S],
        [Z3_S, S_S, CS_S],
    ),
    "CSZ_Z": (
        [Z_Z, CS_Z, S_Z3],
        [Z_Z, CS_Z, S_Z3, S_Z5],
    ),
    "CS_CSZ": (
        [CS_CS, CS_Z, S_Z3, S_S, CS_S, S_CS],
        [CS_CS, CS_Z, S_Z3, S_S, CS_S, S_CS, S_Z5],
    ),
    "CS_CS": (
        [CS_CS, S_S, CS_S, S_CS],
        [CS_CS, S_S, CS_S, S_CS],
    ),
    "CS_S": (
        [S_S, CS_S],
        [S_S, CS_S],
    ),
    # Wide variant repeats S_Z5 and omits S_Z3. Pending product confirmation.
    "CS_Z": (
        [CS_Z, S_Z3],
        [CS_Z, S_Z5, S_Z5],
    ),
    "S_CSZ": (
        [S_CS, S_Z3, S_S],
        [S_CS, S_Z3, S_S, S_Z5],
    ),
    "S_CS": (
        [S_CS, S_S],
        [S_CS, S_S],
    ),
    "S_S": (
        [S_S],
        [S_S],
    ),
    "S_SZ": (
        [S_S, S_Z3],
        [S_S, S_Z3, S_Z5],
    ),
    "SZ_S": (
        [S_S, Z3_S],
        [S_S, Z3_S],
    ),
    "S_Z": (
        [S_Z3],
        [S_Z3, S_Z5],
    ),
    "Z_CSZ": (
        [Z3_S, Z_CS, Z_Z],
        [Z3_S, Z_CS, Z_Z],
    ),
    "Z_CS": (
        [Z3_S, Z_CS],
        [Z3_S, Z_CS],
    ),
    "Z_S": (
        [Z3_S],
        [Z3_S],
    ),
    "Z_Z": (
        [Z_Z],
        [Z_Z],
    ),
    "SZ_SZ": (
        [Z3_S, Z_Z, S_S, S_Z3, SZ_SZ],
        [Z3_S, Z_Z, S_S, S_Z3, S_Z5, SZ_SZ],
    ),
}


# =============================================================================
# HELPERS
# =============================================================================

_FIELD_LETTERS = {"C": "city", "S": "state", "Z": "zip_code"}


def fields_of(side_code: str) -> frozenset[str]:
    """Route fields a side code says are populated ("CS" -> city, state)."""
    return frozenset(_FIELD_LETTERS[letter] for letter in side_code)


def get_atoms(code: str, destination_zip: str = "") -> list[type[MatchAtom]] | None:
    """
    Atoms composed for a granularity code.

    Args:
        code: Granularity code from classify_route()
        destination_zip: Route destination zip, selects the narrow/wide list

    Returns:
        Atom classes in composition order, or None if the code is unmapped
    """
    entry = COMPOSITION.get(code)
    if entry is None:
        return None
    narrow, wide = entry
    return list(wide if len(destination_zip) >= WIDE_ZIP_LENGTH else narrow)


# =============================================================================
# VALIDATION
# =============================================================================

def validate_predicates() -> None:
    """
    Validate atom and composition table integrity.

    Raises ValueError if any configuration issues are found.
    Called at import time to fail fast on configuration errors.
    """
    errors = []

    names = [a.name for a in ALL]
    if len(names) != len(set(names)):
        errors.append(f"Duplicate atom names: {names}")

    for atom in ALL:
        # Check every category is a known precedence category
        for category in atom.categories:
            if category not in ALL_CATEGORIES:
                errors.append(f"{atom.name}: unknown precedence category '{category}'")

        if not atom.categories:
            errors.append(f"{atom.name}: must declare at least one precedence category")

    for code, variants in COMPOSITION.items():
        origin_code, _, destination_code = code.partition("_")
        origin_fields = fields_of(origin_code)
        destination_fields = fields_of(destination_code)

        for atoms in variants:
            for atom in atoms:
                # Check atom only reads fields the code guarantees
                if not atom.origin_fields <= origin_fields:
                    errors.append(f"{code}: {atom.name} needs origin {sorted(atom.origin_fields)}")
                if not atom.destination_fields <= destination_fields:
                    errors.append(f"{code}: {atom.name} needs destination {sorted(atom.destination_fields)}")

    if errors:
        raise ValueError("Predicate configuration errors:\n  " + "\n  ".join(errors))


# Run validation at import time
validate_predicates()

__all__ = [
    # Base
    "MatchAtom",
    # Atom classes
    "CS_CS",
    "Z_Z",
    "Z_CS",
    "CS_Z",
    "CS_S",
    "S_CS",
    "S_Z5",
    "S_Z3",
    "Z3_S",
    "S_S",
    "SZ_SZ",
    # Tables
    "ALL",
    "COMPOSITION",
    "WIDE_ZIP_LENGTH",
    # Helpers
    "fields_of",
    "get_atoms",
]
