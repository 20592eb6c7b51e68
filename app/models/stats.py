from dataclasses import dataclass, asdict
from typing import Optional


@dataclass(frozen=True)
class ModelStats:
    """
    Summary of the loaded dataset and the heuristic's agreement rate.
    accuracy is None when there are no records to compare against.
    """
    accuracy: Optional[float] # Percent, 0-100
    total_passengers: int
    survived_count: int
    death_count: int

    def to_dict(self) -> dict:
        return asdict(self)
