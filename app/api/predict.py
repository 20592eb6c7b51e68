import math
from typing import List, Optional, Union

from fastapi import APIRouter
from pydantic import BaseModel

from app.core.parsing import leading_float, leading_int
from app.models.passenger import PassengerRecord
from app.models.prediction import PredictionInput, PredictionResult

router = APIRouter()

BASE_SCORE = 0.5

# Additive adjustments, applied in this order
WEIGHTS = {
    "female": 0.35,
    "male": -0.25,
    "first_class": 0.2,
    "second_class": 0.05,
    "other_class": -0.15,
    "child": 0.1,
    "elderly": -0.1,
    "small_family": 0.05,
    "large_family": -0.1,
    "high_fare": 0.1,
    "low_fare": -0.05,
}

CHILD_AGE = 16
ELDERLY_AGE = 60
LARGE_FAMILY = 4
HIGH_FARE = 50
LOW_FARE = 10

# Used when age / fare are missing
DEFAULT_AGE = 30
DEFAULT_FARE = 15


# For validation input data
class PassengerData(BaseModel):
    Pclass: int
    Sex: str
    Age: Optional[float] = None
    SibSp: int = 0
    Parch: int = 0
    Fare: Optional[float] = None
    Embarked: str = "S"

    def to_input(self) -> PredictionInput:
        return PredictionInput(
            pclass=self.Pclass,
            sex=self.Sex,
            age=self.Age,
            sibsp=self.SibSp,
            parch=self.Parch,
            fare=self.Fare,
            embarked=self.Embarked
        )


def or_default(value, default):
    """
    None, NaN and 0 all count as missing
    """
    if value is None or value == 0:
        return default
    if isinstance(value, float) and math.isnan(value):
        return default
    return value


def parse_form_int(raw: Optional[str]) -> float:
    number = leading_int(raw or "")
    return math.nan if number is None else number


def parse_form_float(raw: Optional[str]) -> float:
    number = leading_float(raw or "")
    return math.nan if number is None else number


def passenger_features(passenger: Union[PredictionInput, PassengerRecord]) -> dict:
    """
    Map a dataset record or a form input onto the scored attributes
    """
    if isinstance(passenger, PassengerRecord):
        return {
            "sex": passenger.Sex,
            "pclass": passenger.Pclass,
            "age": passenger.Age,
            "sibsp": passenger.SibSp,
            "parch": passenger.Parch,
            "fare": passenger.Fare,
            "embarked": passenger.Embarked
        }
    return passenger.to_dict()


def predict_survival(passenger: Union[PredictionInput, PassengerRecord]) -> PredictionResult:
    """
    Rule-based survival score:
    - starts at 0.5
    - adds fixed weights for sex, class, age, family size and fare
    - clamps to [0, 1], survived when above 0.5

    Comparisons against NaN are false, so a bad number just skips its rule.
    Embarkation port does not affect the score.
    """
    features = passenger_features(passenger)
    score = BASE_SCORE

    # Gender (strongest predictor)
    if features["sex"] == "female":
        score += WEIGHTS["female"]
    else:
        score += WEIGHTS["male"]

    # Class
    if features["pclass"] == 1:
        score += WEIGHTS["first_class"]
    elif features["pclass"] == 2:
        score += WEIGHTS["second_class"]
    else:
        score += WEIGHTS["other_class"]

    # Age
    age = or_default(features["age"], DEFAULT_AGE)
    if age < CHILD_AGE:
        score += WEIGHTS["child"]
    elif age > ELDERLY_AGE:
        score += WEIGHTS["elderly"]

    # Family size
    family_size = or_default(features["sibsp"], 0) + or_default(features["parch"], 0)
    if 0 < family_size < LARGE_FAMILY:
        score += WEIGHTS["small_family"]
    elif family_size >= LARGE_FAMILY:
        score += WEIGHTS["large_family"]

    # Fare (proxy for wealth)
    fare = or_default(features["fare"], DEFAULT_FARE)
    if fare > HIGH_FARE:
        score += WEIGHTS["high_fare"]
    elif fare < LOW_FARE:
        score += WEIGHTS["low_fare"]

    probability = max(0.0, min(1.0, score))
    return PredictionResult(probability=probability, survived=probability > 0.5)


def key_factors(passenger: PredictionInput) -> List[str]:
    """
    Plain-language reasons shown next to a prediction
    """
    if passenger.sex == "female":
        gender = "Female (higher survival rate)"
    else:
        gender = "Male (lower survival rate)"

    if passenger.pclass == 1:
        pclass = "1st Class (highest survival)"
    elif passenger.pclass == 2:
        pclass = "2nd Class (moderate survival)"
    else:
        pclass = "3rd Class (lowest survival)"

    age = DEFAULT_AGE if passenger.age is None else passenger.age
    if age < CHILD_AGE:
        age_group = "Child (higher survival)"
    elif age > ELDERLY_AGE:
        age_group = "Elderly (lower survival)"
    else:
        age_group = "Adult"

    family_size = or_default(passenger.sibsp, 0) + or_default(passenger.parch, 0)
    if family_size == 0:
        family = "Traveling alone"
    else:
        family = f"Family of {int(family_size) + 1}"

    return [
        f"Gender: {gender}",
        f"Class: {pclass}",
        f"Age: {age_group}",
        f"Family: {family}",
    ]


@router.post("/")
def make_prediction(data: PassengerData):
    """
    Making prediction for one passenger
    """
    passenger = data.to_input()
    result = predict_survival(passenger)

    return {
        "status": "success",
        **result.to_dict(),
        "key_factors": key_factors(passenger)
    }


@router.post("/batch")
def make_batch_prediction(passengers: List[PassengerData]):
    """
    Prediction for a list of passengers, in request order
    """
    results = []
    for idx, data in enumerate(passengers):
        result = predict_survival(data.to_input())
        results.append({
            "passenger_index": idx,
            "survived": result.survived,
            "probability": result.probability
        })

    return {
        "status": "success",
        "results": results
    }
