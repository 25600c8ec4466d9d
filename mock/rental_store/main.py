from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pathlib import Path
import json
import os

app = FastAPI(title="Mock Rental Backend", version="1.0.0")
# Support both local development and Docker
DATA_DIR = Path("/rental_stub") if os.path.exists("/rental_stub") else Path(__file__).resolve().parents[1] / "rental_stub"


def _load_rentals() -> list:
    return json.loads((DATA_DIR / "rentals.json").read_text())["rentals"]


@app.get("/health")
def health(): return {"status": "ok"}


@app.get("/admin/rentals")
def list_rentals(status: str | None = None):
    rentals = _load_rentals()
    if status:
        rentals = [r for r in rentals if r["status"] == status]
    return JSONResponse(content={"rentals": rentals})


@app.get("/admin/rentals/{rental_id}")
def get_rental(rental_id: str):
    for rental in _load_rentals():
        if rental["id"] == rental_id:
            return JSONResponse(content={"rental": rental})
    raise HTTPException(status_code=404, detail="rental not found")
