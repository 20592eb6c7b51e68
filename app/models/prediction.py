from dataclasses import dataclass, asdict


@dataclass
class PredictionInput:
    """
    Hypothetical passenger edited through the prediction form.
    Numeric fields may hold NaN after a bad form entry.
    """
    pclass: float = 3
    sex: str = "male"
    age: float = 30
    sibsp: float = 0
    parch: float = 0
    fare: float = 15
    embarked: str = "S"

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class PredictionResult:
    probability: float # Clamped to [0, 1]
    survived: bool

    @property
    def message(self) -> str:
        return "Passenger survived" if self.survived else "Passenger did not survive"

    def to_dict(self) -> dict:
        return {
            "survived": self.survived,
            "probability": self.probability,
            "message": self.message
        }
