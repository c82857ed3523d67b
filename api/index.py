"""
FastAPI wrapper for the NLP Term Injector - Vercel Serverless Function.

This module exposes coverage analysis, term injection and the enrichment
helpers as a REST API.
"""

import logging
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from term_injector import __version__
from term_injector.config import InjectionConfig
from term_injector.content_sources import ContentExtractionError, fetch_url_content
from term_injector.coverage import analyze_coverage
from term_injector.enrichment import create_enriched_callout, generate_term_faqs
from term_injector.injector import TermInjector
from term_injector.models import FAQItem, Term
from term_injector.report import format_report_dict
from term_injector.term_loader import (
    TermLoadError,
    normalize_category,
    normalize_importance,
    parse_terms_payload,
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="NLP Term Injector API",
    description="Raises lexical term coverage of HTML content with natural sentence insertion",
    version=__version__,
)

# Enable CORS for all origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class TermInput(BaseModel):
    """Single term input model."""
    text: str
    category: Optional[str] = Field("basic", description="title, header, basic or extended")
    importance: Optional[int] = Field(None, description="Importance 0-100, defaults to 50")


class TermsSource(BaseModel):
    """Terms either as records or as a term discovery payload."""
    terms: list[TermInput] = Field(default_factory=list, description="Term records")
    terms_payload: Optional[dict] = Field(
        None,
        description="Term discovery payload with a 'terms_txt' object; used when terms is empty",
    )


class AnalyzeRequest(TermsSource):
    """Request model for coverage analysis."""
    content: Optional[str] = Field(None, description="HTML content")
    source_url: Optional[str] = Field(None, description="URL to fetch content from")


class InjectRequest(AnalyzeRequest):
    """Request model for term injection."""
    target_coverage: int = Field(85, ge=0, le=100, description="Target coverage percentage")
    max_insertions: int = Field(30, ge=0, description="Maximum insertions")
    inject_headers: bool = Field(True, description="Run the heading rewrite pass")
    prioritize_critical: bool = Field(True, description="Try critical terms first")
    seed: Optional[int] = Field(None, description="Seed for reproducible template choice")


class InjectResponse(BaseModel):
    """Response model for injection results."""
    success: bool
    message: str
    final_content: str
    added_terms: list[str]
    failed_terms: list[str]
    initial_coverage: int
    final_coverage: int
    insertion_report: list[dict]
    report: dict


class CalloutRequest(TermsSource):
    """Request model for callout generation."""
    topic: str
    style: str = Field("tip", description="tip, info, warning or expert")


class FAQInput(BaseModel):
    question: str
    answer: str


class FAQRequest(TermsSource):
    """Request model for FAQ top-up."""
    topic: str
    existing_faqs: list[FAQInput] = Field(default_factory=list)
    target_count: int = Field(10, ge=0)


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str


def _build_terms(request: TermsSource) -> list[Term]:
    """Convert request terms (records or payload) to Term objects."""
    if request.terms:
        return [
            Term(
                text=t.text,
                category=normalize_category(t.category),
                importance=normalize_importance(t.importance),
            )
            for t in request.terms
            if t.text.strip()
        ]
    if request.terms_payload:
        return parse_terms_payload(request.terms_payload)
    return []


def _resolve_content(request: AnalyzeRequest) -> str:
    """Return request content, fetching it when only a URL is given."""
    if request.content is not None:
        return request.content
    if request.source_url:
        return fetch_url_content(request.source_url)
    raise HTTPException(status_code=400, detail="Provide either content or source_url")


@app.get("/api/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        version=__version__,
    )


@app.post("/api/analyze")
async def analyze(request: AnalyzeRequest):
    """Analyze term coverage of content."""
    try:
        content = _resolve_content(request)
        terms = _build_terms(request)
    except (ContentExtractionError, TermLoadError) as e:
        raise HTTPException(status_code=400, detail=str(e))

    return analyze_coverage(content, terms).to_dict()


@app.post("/api/inject", response_model=InjectResponse)
async def inject(request: InjectRequest):
    """
    Inject missing terms into content.

    Runs the header pass and the body pass until the target coverage is
    met or the insertion budget is spent.
    """
    try:
        content = _resolve_content(request)
        terms = _build_terms(request)
        config = InjectionConfig(
            target_coverage=request.target_coverage,
            max_insertions=request.max_insertions,
            inject_headers=request.inject_headers,
            prioritize_critical=request.prioritize_critical,
            seed=request.seed,
        )
    except (ContentExtractionError, TermLoadError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        result = TermInjector(config).inject(content, terms)
    except Exception as e:
        logger.exception("Term injection failed")
        raise HTTPException(status_code=500, detail=str(e))

    return InjectResponse(
        success=True,
        message=f"Coverage {result.initial_coverage}% -> {result.final_coverage}%",
        final_content=result.final_content,
        added_terms=result.added_terms,
        failed_terms=result.failed_terms,
        initial_coverage=result.initial_coverage,
        final_coverage=result.final_coverage,
        insertion_report=[d.to_dict() for d in result.insertion_report],
        report=format_report_dict(result),
    )


@app.post("/api/callout")
async def callout(request: CalloutRequest):
    """Build a term-rich callout block."""
    try:
        markup = create_enriched_callout(_build_terms(request), request.topic, request.style)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"html": markup}


@app.post("/api/faqs")
async def faqs(request: FAQRequest):
    """Top up an FAQ list with questions about unmentioned terms."""
    existing = [FAQItem(question=f.question, answer=f.answer) for f in request.existing_faqs]
    items = generate_term_faqs(
        request.topic,
        _build_terms(request),
        existing_faqs=existing,
        target_count=request.target_count,
    )
    return {"faqs": [item.to_dict() for item in items]}


@app.get("/api/info")
async def api_info():
    """Get API information and usage instructions."""
    return {
        "name": "NLP Term Injector API",
        "version": __version__,
        "description": "Heuristic term coverage analysis and injection",
        "endpoints": {
            "GET /api/health": "Health check",
            "POST /api/analyze": "Analyze term coverage of content",
            "POST /api/inject": "Inject missing terms until the target coverage is met",
            "POST /api/callout": "Build a term-rich callout block",
            "POST /api/faqs": "Top up FAQs with questions about unmentioned terms",
            "GET /api/info": "This endpoint",
        },
        "documentation": "/docs",
        "openapi": "/openapi.json",
    }
