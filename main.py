from typing import List

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from database import get_document, save_document, settings_file_path, transaction
from errors import DrugTrackerError, UnknownPersonError
from logging_config import get_logger, setup_logging
from drug_schedule import check_and_reset, due_drugs, set_status, validate_document
from schemas import Person, dump_document
from settings import get_settings

# Load environment variables before settings are read
load_dotenv()

setup_logging()
logger = get_logger("api")

app = FastAPI(title="Drug Tracker API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info(
        "HTTP %s %s from %s",
        request.method,
        request.url.path,
        request.client.host if request.client else "?",
    )
    return await call_next(request)


def _http_error(e: DrugTrackerError) -> HTTPException:
    if e.status_code >= 500:
        logger.error("Request failed: %s", e)
    else:
        logger.warning("Request rejected: %s", e)
    return HTTPException(status_code=e.status_code, detail=str(e))


@app.api_route("/api/v1", methods=["GET", "POST"], response_class=PlainTextResponse)
async def liveness():
    return "OK"


# Core Routes
@app.get("/api/v1/drugs/settings")
async def get_drug_settings():
    try:
        people = get_document()
    except DrugTrackerError as e:
        raise _http_error(e)
    result = dump_document(people)
    logger.debug("Drug settings: %s", result)
    return result


@app.post("/api/v1/drugs/settings")
async def set_drug_settings(people: List[Person]):
    try:
        validate_document(people)
        with transaction():
            save_document(people)
    except DrugTrackerError as e:
        raise _http_error(e)
    return Response(status_code=200)


@app.get("/api/v1/drugs")
async def get_due_drugs():
    """Drugs past their time and not taken yet, after the daily reset check."""
    try:
        with transaction():
            people, reset = check_and_reset(get_document())
            if reset:
                save_document(people)
        due = due_drugs(people)
    except DrugTrackerError as e:
        raise _http_error(e)
    return dump_document(due)


@app.put("/api/v1/drugs/{person_name}/{drug_name}")
async def mark_drug_taken(person_name: str, drug_name: str):
    try:
        with transaction():
            people = get_document()
            if not any(p.person_name == person_name for p in people):
                raise UnknownPersonError(f"person {person_name!r} not found")
            people = set_status(people, person_name, drug_name, True)
            save_document(people)
    except DrugTrackerError as e:
        raise _http_error(e)
    matched = sum(
        1 for p in people if p.person_name == person_name for d in p.drugs if d.name == drug_name
    )
    logger.info("Marked %s/%s as taken (%d matching drugs)", person_name, drug_name, matched)
    return Response(status_code=200)


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    logger.info(
        "Server is running on %s:%d with settings file %s",
        settings.host,
        settings.port,
        settings_file_path(),
    )
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        timeout_keep_alive=settings.http_timeout_seconds,
    )
