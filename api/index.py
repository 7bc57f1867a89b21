"""
FastAPI wrapper for the NLP Content Optimizer - Vercel Serverless Function.

This module exposes the optimization pipeline and phrase analysis as a
REST API for deployment on Vercel.
"""

import asyncio
import os
from typing import Literal, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from nlp_content_optimizer import __version__
from nlp_content_optimizer.config import PipelineConfig
from nlp_content_optimizer.phrase_rules import calculate_phrase_quality_score
from nlp_content_optimizer.pipeline import ContentOptimizationPipeline

DEFAULT_TIMEOUT_SECONDS = 30.0

app = FastAPI(
    title="NLP Content Optimizer API",
    description="Deterministic optimization of generated prose with change tracking and quality metrics",
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


class OptimizeRequest(BaseModel):
    """Request model for content optimization."""
    content: str = Field(..., description="Prose to optimize")
    replacement_strategy: Literal["first", "hashed"] = Field(
        "first", description="How prohibited phrase replacements are chosen"
    )
    legacy_tags: bool = Field(
        False, description="Report complexity truncations as grammar changes"
    )


class ChangeOut(BaseModel):
    """One recorded edit."""
    stage: str
    original: str
    optimized: str
    reason: str


class OptimizeResponse(BaseModel):
    """Response model for optimization results."""
    optimizedContent: str
    changes: list[ChangeOut]
    metrics: dict[str, float]
    failedStages: list[str] = Field(default_factory=list)


class PhraseAnalysisRequest(BaseModel):
    """Request model for phrase analysis."""
    content: str


class PhraseAnalysisResponse(BaseModel):
    """Phrase quality summary."""
    overall_score: int
    detected_phrases: int
    high_severity_count: int
    category_breakdown: dict[str, int]
    recommendations: list[str]


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str


def _optimize_timeout() -> float:
    """Read the optimization timeout from OPTIMIZE_TIMEOUT_SECONDS."""
    raw = os.environ.get("OPTIMIZE_TIMEOUT_SECONDS")
    if not raw:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        return float(raw)
    except ValueError:
        return DEFAULT_TIMEOUT_SECONDS


@app.get("/api/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        version=__version__,
    )


@app.post("/api/optimize", response_model=OptimizeResponse)
async def optimize(request: OptimizeRequest):
    """
    Optimize content.

    Runs the full pipeline and returns the optimized prose, the change log
    and the quality metrics. Fails with 504 when the run exceeds the
    configured timeout.
    """
    config = PipelineConfig(
        replacement_strategy=request.replacement_strategy,
        complexity_change_stage="grammar" if request.legacy_tags else "complexity",
    )
    pipeline = ContentOptimizationPipeline(config=config)

    try:
        result = await asyncio.wait_for(pipeline.optimize(request.content), timeout=_optimize_timeout())
    except asyncio.TimeoutError:
        raise HTTPException(status_code=504, detail="Content optimization timed out")
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))

    return OptimizeResponse(**result.to_dict())


@app.post("/api/analyze/phrases", response_model=PhraseAnalysisResponse)
async def analyze_phrases(request: PhraseAnalysisRequest):
    """Score content by the prohibited phrases it contains."""
    score = calculate_phrase_quality_score(request.content)
    return PhraseAnalysisResponse(
        overall_score=score.overall_score,
        detected_phrases=score.detected_phrases,
        high_severity_count=score.high_severity_count,
        category_breakdown=score.category_breakdown,
        recommendations=score.recommendations,
    )
