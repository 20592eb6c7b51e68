from dataclasses import dataclass, asdict
from typing import Optional

# Columns coerced to int (default 0) and float (default None) by the parser
INT_COLUMNS = ("PassengerId", "Survived", "Pclass", "SibSp", "Parch")
FLOAT_COLUMNS = ("Age", "Fare")
STR_COLUMNS = ("Name", "Sex", "Ticket", "Cabin", "Embarked")


@dataclass(frozen=True)
class PassengerRecord:
    PassengerId: int = 0
    Survived: int = 0 # 0 - Dead or 1 - survived
    Pclass: int = 0
    Name: str = ""
    Sex: str = ""
    Age: Optional[float] = None
    SibSp: int = 0
    Parch: int = 0
    Ticket: str = ""
    Fare: Optional[float] = None
    Cabin: str = ""
    Embarked: str = ""

    def to_dict(self) -> dict:
        return asdict(self)
