import logging
import math
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from app.api import data, model, predict
from app.core.config import DATA_PATH, LOG_LEVEL
from app.core.dataset import DatasetState, Failed, Loading, get_dataset, set_dataset
from app.models.prediction import PredictionInput

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)

BASE_DIR = Path(__file__).resolve().parent.parent


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One-shot load, the page shows "loading" until this finishes
    set_dataset(Loading())
    set_dataset(await data.load_dataset(DATA_PATH))
    yield


app = FastAPI(
    title="Titanic Survival Predictor",
    description="Rule-based survival prediction on the Titanic dataset",
    version="0.1.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)

# Simple handler errors and validation
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Get first error from list
    error = exc.errors()[0]

    # Get the field name (it is always at the end of the 'loc' list)
    field_name = error.get("loc")[-1]
    error_message = error.get("msg")

    # Return a clear response with status 422
    return JSONResponse(
        status_code=422,
        content={
            "status": "error",
            "message": f"Error in field '{field_name}': {error_message}"
        }
    )

# Static & templates
app.mount("/static", StaticFiles(directory=BASE_DIR / "static"), name="static")
templates = Jinja2Templates(directory=BASE_DIR / "templates")

# API routers
app.include_router(data.router, prefix="/api/data", tags=["Data"])
app.include_router(model.router, prefix="/api/model", tags=["Model"])
app.include_router(predict.router, prefix="/api/predict", tags=["Predict"])


def form_value(value) -> str:
    """
    Number as shown back in the form; NaN shows as an empty field
    """
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
    return str(value)


@app.get("/", response_class=HTMLResponse)
async def index(
    request: Request,
    pclass: Optional[str] = None,
    sex: Optional[str] = None,
    age: Optional[str] = None,
    sibsp: Optional[str] = None,
    parch: Optional[str] = None,
    fare: Optional[str] = None,
    embarked: Optional[str] = None,
    predict_survival: Optional[str] = None,
    dataset: DatasetState = Depends(get_dataset)
):
    # Form fields left out of the query keep their defaults
    passenger = PredictionInput()
    if pclass is not None:
        passenger.pclass = predict.parse_form_int(pclass)
    if sex is not None:
        passenger.sex = sex
    if age is not None:
        passenger.age = predict.parse_form_int(age)
    if sibsp is not None:
        passenger.sibsp = predict.parse_form_int(sibsp)
    if parch is not None:
        passenger.parch = predict.parse_form_int(parch)
    if fare is not None:
        passenger.fare = predict.parse_form_float(fare)
    if embarked is not None:
        passenger.embarked = embarked

    prediction = None
    factors = []
    if predict_survival is not None:
        prediction = predict.predict_survival(passenger)
        factors = predict.key_factors(passenger)

    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "loading": isinstance(dataset, Loading),
            "error": dataset.error if isinstance(dataset, Failed) else None,
            "stats": getattr(dataset, "stats", None),
            "form": {k: form_value(v) for k, v in passenger.to_dict().items()},
            "prediction": prediction,
            "factors": factors
        }
    )
