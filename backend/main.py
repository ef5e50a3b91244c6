# Backend main entry point - clinic directory API
import logging
import os
from dotenv import load_dotenv
load_dotenv()  # Load .env so DEMO_MODE / LOG_LEVEL work for local runs
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from typing import Dict, List, Optional, Union
from errors import ClinicValidationError, DataSourceError, PillNotOpen, UnknownFilterKey
from filters import check_key
from seed import seed_data
from session import DirectorySession
from source import ClinicSource

logging.basicConfig(
    level=getattr(logging, os.environ.get("LOG_LEVEL", "INFO").upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize seed data
if os.environ.get("SEED_ON_STARTUP", "true").lower() == "true":
    seed_data()

app = FastAPI(title="Clinic Directory API")

source = ClinicSource()
session = DirectorySession(source)


def _is_demo_mode() -> bool:
    """True only when DEMO_MODE env var is explicitly 'true' (case-insensitive)."""
    return os.environ.get("DEMO_MODE", "").lower() == "true"

# Configure CORS - allow local dev and the deployed frontend
_allowed_origins = [
    "http://localhost:5173",
    "http://localhost:5174",
]
_frontend_url = os.environ.get("FRONTEND_URL", "")
if _frontend_url:
    _allowed_origins.append(_frontend_url)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(UnknownFilterKey)
async def unknown_filter_key_handler(request: Request, exc: UnknownFilterKey):
    return JSONResponse(status_code=404, content={"detail": exc.message})


@app.exception_handler(PillNotOpen)
async def pill_not_open_handler(request: Request, exc: PillNotOpen):
    return JSONResponse(status_code=409, content={"detail": exc.message})


# Request/Response models
class ClinicResponse(BaseModel):
    id: str
    clinicCode: str
    name: str
    doctorName: str
    address: str
    phone: str
    services: List[str]

class ClinicCreate(BaseModel):
    # Either naming is accepted; validation happens in the data source
    clinicId: Optional[str] = None
    clinic_code: Optional[str] = None
    clinicCode: Optional[str] = None
    name: Optional[str] = None
    doctorName: Optional[str] = None
    doctor_name: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    services: Union[str, List[Union[str, Dict[str, str]]], None] = None

class FilterValue(BaseModel):
    value: str = Field(default="", max_length=200)

class SearchText(BaseModel):
    text: str = Field(default="", max_length=200)


def _clinic_responses(clinics) -> List[ClinicResponse]:
    return [ClinicResponse(**c.to_dict()) for c in clinics]

@app.get("/")
def read_root():
    return {"message": "Clinic Directory API"}

@app.get("/health")
def health_check():
    return {"status": "healthy"}


@app.get("/clinics", response_model=List[ClinicResponse])
def get_clinics(name: str = "", phone: str = "", services: str = ""):
    """Get clinics, optionally filtered by name, phone and comma separated services"""
    try:
        results = source.fetch_clinics({"name": name, "phone": phone, "services": services})
    except DataSourceError as exc:
        logger.exception("Fetching clinics failed")
        raise HTTPException(status_code=502, detail=exc.message)
    return _clinic_responses(results)

@app.get("/clinics/search", response_model=List[ClinicResponse])
def search_clinics(q: str = ""):
    """Free-text search over every clinic column"""
    try:
        results = source.search_clinics(q)
    except DataSourceError as exc:
        logger.exception("Searching clinics failed")
        raise HTTPException(status_code=502, detail=exc.message)
    return _clinic_responses(results)

@app.post("/clinics", response_model=ClinicResponse, status_code=201)
def create_clinic(payload: ClinicCreate):
    """Register a clinic; it also appears in the open directory page"""
    try:
        clinic = session.add_clinic(payload.model_dump(exclude_none=True))
    except ClinicValidationError as exc:
        raise HTTPException(status_code=422, detail={"errors": exc.errors})
    return ClinicResponse(**clinic.to_dict())


@app.get("/directory")
def get_directory():
    """Current directory page: filters, pills, search box, highlighted rows"""
    return session.view()

@app.post("/directory/filters/{key}")
def set_filter(key: str, body: FilterValue):
    session.set_filter(key, body.value)
    return session.view()

@app.delete("/directory/filters/{key}")
def clear_filter(key: str):
    session.clear_filter(key)
    return session.view()

@app.delete("/directory/filters")
def clear_all_filters():
    """Reset every filter and the search box, close pills, reload all clinics"""
    session.clear_all()
    return session.view()

@app.post("/directory/pills/{key}/open")
def open_pill(key: str):
    session.open_pill(key)
    return session.view()

@app.post("/directory/pills/{key}/toggle")
def toggle_pill(key: str):
    session.toggle_pill(key)
    return session.view()

@app.post("/directory/pills/{key}/close")
def close_pill(key: str):
    check_key(key)
    if session.open_key == key:
        session.close_pill()
    return session.view()

@app.put("/directory/pills/{key}/draft")
def edit_pill_draft(key: str, body: FilterValue):
    session.edit_draft(key, body.value)
    return session.view()

@app.post("/directory/pills/{key}/apply")
def apply_pill(key: str):
    session.apply_pill(key)
    return session.view()

@app.post("/directory/pills/{key}/clear")
def clear_pill(key: str):
    session.clear_pill(key)
    return session.view()

@app.put("/directory/search")
def type_search(body: SearchText):
    """Search box keystrokes: local filtering and highlighting only"""
    session.set_search_text(body.text)
    return session.view()

@app.post("/directory/search")
def submit_search(body: SearchText):
    """Search box submit: server-side search, banner on failure"""
    session.submit_search(body.text)
    return session.view()

@app.post("/directory/reload")
def reload_directory():
    session.reload()
    return session.view()


@app.get("/demo/status")
def demo_status():
    """Returns whether demo mode is enabled. Only for frontend visibility gate."""
    return {"demoMode": _is_demo_mode()}


@app.post("/demo/reset")
def demo_reset():
    """
    Reset prototype to baseline. Only available when DEMO_MODE=true.
    Restores seed clinics and starts a fresh directory page.
    """
    if not _is_demo_mode():
        raise HTTPException(status_code=404, detail="Demo reset not available")
    seed_data()
    session.reset()
    return {"status": "ok"}


@app.post("/demo/fail-next")
def demo_fail_next():
    """Make the next fetch/search fail, to exercise the error banner. DEMO_MODE only."""
    if not _is_demo_mode():
        raise HTTPException(status_code=404, detail="Demo scenarios not available")
    source.fail_next()
    return {"status": "armed"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
