from typing import Sequence

from fastapi import APIRouter, Depends, HTTPException

from app.api.predict import (
    BASE_SCORE,
    CHILD_AGE,
    DEFAULT_AGE,
    DEFAULT_FARE,
    ELDERLY_AGE,
    HIGH_FARE,
    LARGE_FAMILY,
    LOW_FARE,
    WEIGHTS,
    predict_survival,
)
from app.core.dataset import DatasetState, Failed, Loading, get_dataset
from app.models.passenger import PassengerRecord
from app.models.stats import ModelStats

router = APIRouter()


def calculate_model_stats(passengers: Sequence[PassengerRecord]) -> ModelStats:
    """
    Counts and the rule-based model's agreement with the Survived labels.
    Accuracy stays None for an empty dataset.
    """
    total_passengers = len(passengers)
    survived_count = sum(1 for p in passengers if p.Survived == 1)
    death_count = total_passengers - survived_count

    correct_predictions = 0
    for passenger in passengers:
        predicted = predict_survival(passenger)
        if (predicted.survived and passenger.Survived == 1) or (
            not predicted.survived and passenger.Survived == 0
        ):
            correct_predictions += 1

    accuracy = None
    if total_passengers > 0:
        accuracy = correct_predictions / total_passengers * 100

    return ModelStats(
        accuracy=accuracy,
        total_passengers=total_passengers,
        survived_count=survived_count,
        death_count=death_count
    )


@router.get("/stats")
def model_stats(dataset: DatasetState = Depends(get_dataset)):
    """
    Getting dataset statistics and model accuracy
    """
    if isinstance(dataset, Loading):
        raise HTTPException(
            status_code=503,
            detail="Dataset is still loading"
        )
    if isinstance(dataset, Failed):
        raise HTTPException(
            status_code=404,
            detail="Statistics unavailable: dataset failed to load"
        )
    return dataset.stats.to_dict()


@router.get("/rules")
def model_rules():
    """
    Getting the scoring rules of the model
    """
    return {
        "algorithm": "RuleBased",
        "base_score": BASE_SCORE,
        "weights": WEIGHTS,
        "thresholds": {
            "child_age_below": CHILD_AGE,
            "elderly_age_above": ELDERLY_AGE,
            "large_family_from": LARGE_FAMILY,
            "high_fare_above": HIGH_FARE,
            "low_fare_below": LOW_FARE
        },
        "defaults": {
            "age": DEFAULT_AGE,
            "fare": DEFAULT_FARE
        },
        "survived_above": 0.5
    }
