"""Static angling reference data.

Adding a new module:
1. Create ``reference/{name}.py`` with constants/dataclasses
2. Re-export from this ``__init__.py``
"""

from fishbox.reference.species import SPECIES as SPECIES
from fishbox.reference.species import SpeciesInfo as SpeciesInfo
from fishbox.reference.species import in_closed_season as in_closed_season
from fishbox.reference.species import is_undersized as is_undersized
from fishbox.reference.species import suggested_species as suggested_species
