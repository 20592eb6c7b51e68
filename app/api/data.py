import asyncio
import json
import logging
from dataclasses import fields
from pathlib import Path
from typing import List, Optional

import pandas as pd
from fastapi import APIRouter, Depends, HTTPException

from app.api.model import calculate_model_stats
from app.core.config import PREVIEW_LIMIT
from app.core.dataset import DatasetState, Failed, Loading, Ready, get_dataset
from app.core.parsing import leading_float, leading_int
from app.models.passenger import (
    FLOAT_COLUMNS,
    INT_COLUMNS,
    STR_COLUMNS,
    PassengerRecord,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def parse_int(value: str) -> int:
    number = leading_int(value)
    return 0 if number is None else number


def parse_float(value: str) -> Optional[float]:
    if not value:
        return None
    return leading_float(value)


def parse_csv_line(line: str) -> List[str]:
    """
    Split one line on commas, keeping commas inside double quotes.
    Quotes toggle the quoted state and are dropped; "" is not an escape.
    """
    result = []
    current = ""
    in_quotes = False

    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            result.append(current)
            current = ""
        else:
            current += char

    # Last field goes out even when a quote was left open
    result.append(current)
    return result


def parse_csv(csv_text: str) -> List[PassengerRecord]:
    """
    Parse passenger CSV text into records:
    - first line is the header, columns mapped by name
    - integer columns default to 0, Age/Fare to None
    - bad values never drop a row
    """
    lines = [line.rstrip("\r") for line in csv_text.strip().split("\n")]
    headers = lines[0].split(",")

    passengers = []
    for line in lines[1:]:
        values = parse_csv_line(line)
        passenger = {}

        for index, header in enumerate(headers):
            value = values[index].replace('"', "") if index < len(values) else ""

            if header in INT_COLUMNS:
                passenger[header] = parse_int(value)
            elif header in FLOAT_COLUMNS:
                passenger[header] = parse_float(value)
            elif header in STR_COLUMNS:
                passenger[header] = value

        passengers.append(PassengerRecord(**passenger))

    return passengers


async def load_dataset(path: Path) -> DatasetState:
    """
    Read the dataset file once and summarize it.
    A missing or unreadable file gives Failed instead of raising.
    """
    try:
        csv_text = await asyncio.to_thread(path.read_text, encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Error loading data from %s: %s", path, e)
        return Failed(error=str(e))

    passengers = parse_csv(csv_text)
    stats = calculate_model_stats(passengers)

    logger.info(
        "Loaded %d passengers from %s (accuracy: %s)",
        stats.total_passengers,
        path,
        "n/a" if stats.accuracy is None else f"{stats.accuracy:.1f}%"
    )
    return Ready(passengers=tuple(passengers), stats=stats)


def require_ready(dataset: DatasetState) -> Ready:
    if isinstance(dataset, Loading):
        raise HTTPException(
            status_code=503,
            detail="Dataset is still loading"
        )
    if isinstance(dataset, Failed):
        raise HTTPException(
            status_code=404,
            detail=f"Dataset not loaded: {dataset.error}"
        )
    return dataset


@router.get("/status")
def data_status(dataset: DatasetState = Depends(get_dataset)):
    if isinstance(dataset, Loading):
        return {
            "status": "loading",
            "message": "Dataset is still loading"
        }
    if isinstance(dataset, Failed):
        return {
            "status": "failed",
            "message": dataset.error
        }
    return {
        "status": "loaded",
        "rows": len(dataset.passengers),
        "columns": [f.name for f in fields(PassengerRecord)]
    }


@router.get("/preview")
def data_preview(limit: int = PREVIEW_LIMIT, dataset: DatasetState = Depends(get_dataset)):
    ready = require_ready(dataset)
    return {
        "preview": [p.to_dict() for p in ready.passengers[:max(limit, 0)]]
    }


@router.get("/stats")
def data_stats(dataset: DatasetState = Depends(get_dataset)):
    """
    Descriptive statistics of the loaded records (pandas describe)
    """
    ready = require_ready(dataset)
    if not ready.passengers:
        return {"statistics": {}}

    df = pd.DataFrame([p.to_dict() for p in ready.passengers])
    # to_json turns numpy scalars and NaN into plain JSON values
    stats = json.loads(df.describe(include="all").to_json())
    return {
        "statistics": stats
    }
