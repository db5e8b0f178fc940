"""FastAPI application exposing the Travel Compositor import."""

from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from .config import configure_logging
from .importer import import_tc_travel, map_tc_data_to_offerte
from .models import result_to_dict
from .services.travel_compositor import TC_MICROSITES, TcImportError


@asynccontextmanager
async def lifespan(_app: FastAPI):
    configure_logging()
    yield


app = FastAPI(title="TC Offerte Import", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class TcImportPayload(BaseModel):
    travel_id: str = Field(..., alias="travelId", min_length=1)
    microsite_id: Optional[str] = Field(None, alias="micrositeId")


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/tc/microsites")
def list_microsites() -> List[Dict[str, str]]:
    return TC_MICROSITES


@app.post("/tc/import")
def import_travel(payload: TcImportPayload) -> Dict[str, Any]:
    try:
        result = import_tc_travel(payload.travel_id, payload.microsite_id)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except TcImportError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    return result_to_dict(result)


@app.post("/tc/map")
def map_travel(travel: Dict[str, Any]) -> Dict[str, Any]:
    """Map an already fetched TC travel without calling Travel Compositor."""

    return result_to_dict(map_tc_data_to_offerte(travel))
