import logging

from fastapi import FastAPI, UploadFile, File, HTTPException, Query

from .config import get_settings
from .document import load, load_response, pretty_response
from .exceptions import ParseFailedError
from .models import HealthResponse, LoadResponse, PrettyResponse

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = FastAPI(
    title="edi-intake",
    description="Encoding detection, format classification and parsing of EDI interchanges",
    version="0.1.0",
)

@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}

@app.post("/load", response_model=LoadResponse)
async def load_interchange(
    file: UploadFile = File(...),
    strict: bool = Query(default=settings.strict),
):
    raw = await file.read()
    try:
        document = load(raw, file.filename or "", strict=strict)
    except ParseFailedError as exc:
        raise HTTPException(status_code=422, detail=f"Parse failed: {exc.message}")
    return load_response(document)

@app.post("/pretty", response_model=PrettyResponse)
async def pretty_interchange(file: UploadFile = File(...)):
    raw = await file.read()
    return pretty_response(load(raw, file.filename or ""))
