"""FastAPI application for the invoice-automation ROI simulator."""

from __future__ import annotations

import logging
import re
from typing import Any, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, StreamingResponse
from pydantic import BaseModel, ValidationError

from backend.config.settings import Settings
from backend.engine.calculator import compute, parse_scenario_input
from backend.models.enums import ReportFormat
from backend.models.errors import (
    CalculationError,
    RenderError,
    ROIError,
    StoreUnavailableError,
)
from backend.models.scenario import ScenarioResult, ScenarioSummary
from backend.reporting import PdfReportRenderer, render, render_stream
from backend.store import capture_lead_best_effort, get_lead_capture, get_scenario_store

settings = Settings()

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Invoice ROI API", version="0.1.0")

# CORS — allow the React dev server
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

scenario_store = get_scenario_store(settings)
lead_capture = get_lead_capture(settings)

_EMAIL_RE = re.compile(r"^\S+@\S+\.\S+$")

_ERROR_STATUS: dict[type[ROIError], int] = {
    CalculationError: 422,
    RenderError: 422,
    StoreUnavailableError: 503,
}


class SaveScenarioRequest(BaseModel):
    scenario_name: Optional[str] = None
    input_data: Optional[dict[str, Any]] = None
    result_data: Optional[dict[str, Any]] = None


class SaveScenarioResponse(BaseModel):
    id: int
    message: str


class GenerateReportRequest(BaseModel):
    email: Optional[str] = None
    scenario_data: Optional[dict[str, Any]] = None
    format: ReportFormat = ReportFormat.PDF


@app.exception_handler(ROIError)
async def roi_error_handler(request: Request, exc: ROIError):
    status = _ERROR_STATUS.get(type(exc), 500)
    logger.info(f"{request.url.path} rejected: {exc.kind} {exc.fields}")
    return JSONResponse(status_code=status, content=exc.to_dict())


@app.post("/simulate", response_model=ScenarioResult)
async def simulate(body: dict[str, Any]):
    """Run the ROI calculation for one set of inputs."""
    return compute(body)


@app.post("/scenarios", response_model=SaveScenarioResponse, status_code=201)
async def save_scenario(body: SaveScenarioRequest):
    """Persist a scenario snapshot."""
    if not body.scenario_name or not body.input_data or not body.result_data:
        return JSONResponse(
            status_code=400, content={"error": "Missing required scenario data."}
        )
    try:
        inputs = parse_scenario_input(body.input_data)
        results = ScenarioResult.model_validate(body.result_data)
    except CalculationError as e:
        return JSONResponse(status_code=400, content=e.to_dict())
    except ValidationError as e:
        fields = [".".join(str(p) for p in err["loc"]) for err in e.errors()]
        return JSONResponse(
            status_code=400,
            content={"error": "invalid-result", "detail": str(e), "fields": fields},
        )
    if inputs.scenario_name != body.scenario_name:
        return JSONResponse(
            status_code=400,
            content={
                "error": "invalid-input",
                "detail": "scenario_name does not match input_data.scenario_name",
                "fields": ["scenario_name"],
            },
        )

    scenario_id = scenario_store.save(inputs.scenario_name, inputs, results)
    logger.info(f"Saved scenario {scenario_id} '{inputs.scenario_name}'")
    return SaveScenarioResponse(id=scenario_id, message="Scenario saved successfully!")


@app.get("/scenarios", response_model=list[ScenarioSummary])
async def list_scenarios():
    """List saved scenarios, newest first."""
    return scenario_store.list_scenarios()


@app.post("/report/generate")
async def generate_report(body: GenerateReportRequest):
    """Capture the requester's email and return the report document."""
    if not body.email or not _EMAIL_RE.match(body.email):
        return JSONResponse(status_code=400, content={"error": "A valid email is required."})

    # A failed lead capture is logged and never blocks the report
    if body.format is ReportFormat.PDF:
        renderer = PdfReportRenderer(compress=settings.pdf_compression)
        stream = render_stream(body.format, body.scenario_data, renderer=renderer)
        capture_lead_best_effort(lead_capture, body.email)
        return StreamingResponse(
            stream.chunks,
            media_type=stream.media_type,
            headers={"Content-Disposition": f'attachment; filename="{stream.filename}"'},
        )

    document = render(body.format, body.scenario_data)
    capture_lead_best_effort(lead_capture, body.email)
    return HTMLResponse(
        content=document.content,
        headers={"Content-Disposition": f'inline; filename="{document.filename}"'},
    )


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=3001)
