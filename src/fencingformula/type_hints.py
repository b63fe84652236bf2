"""Type hints used in Fencing Formula."""

from typing import Dict, List, Literal

# Separation rule kinds (for type hints)
SeparationKind = Literal["club", "country"]

# Tiebreak direction
Direction = Literal["asc", "desc"]

# Ordered poule sizes, one entry per poule
PouleSizes = List[int]
# Athlete ids, usually in ranking order
AthleteIds = List[str]
# Poule size -> number of poules with that size
SizeDistribution = Dict[int, int]
