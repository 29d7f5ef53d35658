import logging
from datetime import datetime, timezone

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .log import LoggingMiddleware, configure_logging
from .models import Animal, CompatibilityResult, Profile
from .schemas import CompatibilityRequest, HealthResponse, ValidationErrorResponse
from .services.chinese import resolve_profile, years_for_animal
from .services.compatibility import calculate_compatibility
from .services.tables import validate_tables, zodiac_data
from .services.validation import InvalidYear, InvalidYearPair, validate_birth_year, validate_pair

logger = logging.getLogger(__name__)


app = FastAPI(
    title=settings.APP_TITLE,
    version="1.0.0",
    description="Harmony Match – Chinese zodiac compatibility service",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(LoggingMiddleware)


@app.on_event("startup")
def on_startup():
    """Configure logging and refuse to start on broken relation tables."""
    configure_logging(settings.LOG_LEVEL)
    validate_tables()
    logger.info("%s ready", settings.SERVICE_NAME)


@app.exception_handler(InvalidYearPair)
def invalid_year_pair_handler(request: Request, exc: InvalidYearPair):
    logger.info("rejected years on %s: %s", request.url.path, exc.errors)
    body = ValidationErrorResponse(errors=exc.errors)
    return JSONResponse(status_code=422, content=body.model_dump())


@app.exception_handler(InvalidYear)
def invalid_year_handler(request: Request, exc: InvalidYear):
    body = ValidationErrorResponse(errors={exc.side or "year": exc.message})
    return JSONResponse(status_code=422, content=body.model_dump())


@app.get("/")
def root():
    return {"status": "ok", "app": settings.SERVICE_NAME}


@app.get("/api/health", response_model=HealthResponse)
def health():
    """Liveness check; unrelated to the engine."""
    return HealthResponse(
        status="ok",
        service=settings.SERVICE_NAME,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )


# ----------------------------------------------------
# REFERENCE DATA
# ----------------------------------------------------


@app.get("/api/v1/zodiac")
def zodiac():
    return zodiac_data()


@app.get("/api/v1/profile/{year}", response_model=Profile)
def profile(year: str):
    """Single-year preview, e.g. while a partner year is being typed."""
    return resolve_profile(validate_birth_year(year, side="year"))


@app.get("/api/v1/animals/{animal}/years")
def animal_years(
    animal: str,
    start: int = Query(
        default=settings.YEARS_RANGE_START,
        ge=settings.YEARS_QUERY_MIN,
        le=settings.YEARS_QUERY_MAX,
    ),
    end: int = Query(
        default=settings.YEARS_RANGE_END,
        ge=settings.YEARS_QUERY_MIN,
        le=settings.YEARS_QUERY_MAX,
    ),
):
    try:
        resolved = Animal(animal.capitalize())
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Unknown zodiac animal: {animal}")

    return {"animal": resolved.value, "years": years_for_animal(resolved, start, end)}


# ----------------------------------------------------
# COMPATIBILITY
# ----------------------------------------------------


@app.post("/api/v1/compatibility", response_model=CompatibilityResult)
def compatibility(payload: CompatibilityRequest):
    """
    Two birth years -> full compatibility result:
    - both years are validated independently (422 lists every failing side)
    - scoring itself cannot fail once the years are valid
    """
    year1, year2 = validate_pair(payload.year1, payload.year2)
    return calculate_compatibility(year1, year2)
