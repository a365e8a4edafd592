"""SEO audit API – FastAPI app exposing the audit engine."""

import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from ai_service import create_insight_service
from audit_service import audit_website
from config import configure_logging
from errors import FetchError, FetchErrorKind, ParseError
from schemas import AuditReportResponse, AuditRequest

logger = logging.getLogger(__name__)

app = FastAPI(
    title="SEO Audit API",
    description="Rule-based website SEO audit with optional AI insights",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def startup() -> None:
    configure_logging()
    app.state.insight_service = create_insight_service()


@app.post("/audit", response_model=AuditReportResponse)
def audit(body: AuditRequest, request: Request) -> AuditReportResponse:
    """
    Pipeline: fetch page -> analyze -> score -> recommend -> AI insights -> return report.
    """
    insight_service = getattr(request.app.state, "insight_service", None)
    try:
        report = audit_website(body.url, insight_service=insight_service)
    except FetchError as e:
        status = 400 if e.kind is FetchErrorKind.INVALID_URL else 502
        raise HTTPException(status_code=status, detail=e.message) from e
    except ParseError as e:
        raise HTTPException(status_code=422, detail=e.message) from e

    return AuditReportResponse.model_validate(report)


@app.get("/health")
def health() -> dict:
    """Health check for deployment."""
    return {"status": "ok"}
