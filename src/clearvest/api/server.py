from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import BaseModel, ConfigDict, Field

from ..advisor import generate_response
from ..calculation.fee_calculator import price_holdings
from ..config_loader import load_settings
from ..errors import FormatError
from ..generator import generate_sample_portfolio
from ..models import RawHolding
from ..pipeline import analyze_portfolio, generate_report
from ..reference_data import DEFAULT_BROKER, list_brokers
from ..sources.csv_upload import parse_portfolio_csv
from ..sources.export import export_filename, render_export_csv


# ========================================================================================
# PYDANTIC MODELS
# ========================================================================================

class HoldingIn(BaseModel):
    """A single holding as submitted by the browser."""
    model_config = ConfigDict(str_strip_whitespace=True)

    symbol: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0, allow_inf_nan=False)
    broker: str = Field(..., min_length=1)

    def to_raw(self) -> RawHolding:
        return RawHolding(symbol=self.symbol, amount=self.amount, broker_name=self.broker)


class AnalyzeRequest(BaseModel):
    holdings: List[HoldingIn] = Field(..., min_length=1)
    market_data: bool = False


class ExportRequest(BaseModel):
    holdings: List[HoldingIn] = Field(..., min_length=1)


class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1)
    holdings: List[HoldingIn] = Field(default_factory=list)


# ========================================================================================
# FASTAPI APPLICATION
# ========================================================================================

settings = load_settings()

app = FastAPI(title="ClearVest Fee Analyzer API", version="0.1.0")
logger = logging.getLogger(__name__)

# Credentials stay off because the default origin list is a wildcard.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _raw_holdings(holdings: List[HoldingIn]) -> List[RawHolding]:
    return [holding.to_raw() for holding in holdings]


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/brokers")
def get_brokers() -> List[Dict[str, Any]]:
    """Known broker fee schedules plus the fallback applied to unknown names."""
    profiles = [asdict(profile) for profile in list_brokers()]
    profiles.append({**asdict(DEFAULT_BROKER), "fallback": True})
    return profiles


@app.get("/portfolio/sample")
def get_sample_portfolio(seed: Optional[int] = Query(None, description="Seed for a reproducible portfolio")) -> Dict[str, Any]:
    rng = random.Random(seed) if seed is not None else None
    holdings = generate_sample_portfolio(rng)
    return {
        "holdings": [
            {"symbol": h.symbol, "amount": h.amount, "broker": h.broker_name} for h in holdings
        ]
    }


@app.post("/portfolio/analyze")
def analyze(request: AnalyzeRequest) -> Dict[str, Any]:
    report = analyze_portfolio(_raw_holdings(request.holdings), settings, market_data=request.market_data)
    return generate_report(report)


def _analyze_upload(contents: bytes, market_data: bool) -> Dict[str, Any]:
    raw = parse_portfolio_csv(contents)
    return generate_report(analyze_portfolio(raw, settings, market_data=market_data))


@app.post("/portfolio/upload")
async def upload_portfolio(request: Request, market_data: bool = Query(False)) -> Dict[str, Any]:
    """Analyze a raw CSV body (columns Asset, Amount, Broker)."""
    contents = await request.body()
    try:
        return await asyncio.to_thread(_analyze_upload, contents, market_data)
    except FormatError as exc:
        logger.info(f"Rejected portfolio upload: {exc}")
        raise HTTPException(status_code=400, detail=str(exc))


@app.post("/portfolio/export")
def export_portfolio(request: ExportRequest) -> Response:
    priced = price_holdings(_raw_holdings(request.holdings))
    filename = export_filename(settings.export_basename)
    return Response(
        content=render_export_csv(priced),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@app.post("/chat")
def chat(request: ChatRequest) -> Dict[str, Any]:
    priced = price_holdings(_raw_holdings(request.holdings))
    return asdict(generate_response(request.message, priced))
