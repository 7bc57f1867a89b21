"""Tests for the FastAPI endpoints."""

import asyncio
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Add api directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "api"))

import index
from index import app


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


class TestHealth:
    """Tests for the health endpoint."""

    def test_health(self, client):
        """Test the service reports healthy with its version."""
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "version": index.__version__}


class TestOptimize:
    """Tests for the optimize endpoint."""

    def test_optimize(self, client, scenario_d_content):
        """Test overused terms are rewritten and reported."""
        response = client.post("/api/optimize", json={"content": scenario_d_content})
        data = response.json()

        assert response.status_code == 200
        assert "meticulous" not in data["optimizedContent"]
        assert sum(1 for c in data["changes"] if c["stage"] == "prohibited") >= 4
        assert all(set(c) == {"stage", "original", "optimized", "reason"} for c in data["changes"])
        assert set(data["metrics"]) == {
            "svoCompliance",
            "languagePrecisionScore",
            "fillerContentPercentage",
            "grammarAccuracy",
            "semanticCoherenceScore",
        }
        assert data["failedStages"] == []

    def test_empty_content(self, client):
        """Test empty content returns empty output and zero metrics."""
        data = client.post("/api/optimize", json={"content": ""}).json()

        assert data["optimizedContent"] == ""
        assert data["changes"] == []
        assert all(value == 0 for value in data["metrics"].values())

    def test_invalid_strategy(self, client):
        """Test unknown strategies are rejected by validation."""
        response = client.post(
            "/api/optimize", json={"content": "Some text.", "replacement_strategy": "random"}
        )
        assert response.status_code == 422

    def test_timeout(self, client, monkeypatch):
        """Test a run exceeding the timeout fails with 504."""
        async def slow_optimize(self, content):
            await asyncio.sleep(1)

        monkeypatch.setenv("OPTIMIZE_TIMEOUT_SECONDS", "0.01")
        monkeypatch.setattr(index.ContentOptimizationPipeline, "optimize", slow_optimize)

        response = client.post("/api/optimize", json={"content": "Some text here."})

        assert response.status_code == 504

    def test_pipeline_error(self, client, monkeypatch):
        """Test unexpected errors become 500 responses."""
        async def broken_optimize(self, content):
            raise RuntimeError("pipeline broke")

        monkeypatch.setattr(index.ContentOptimizationPipeline, "optimize", broken_optimize)

        response = client.post("/api/optimize", json={"content": "Some text here."})

        assert response.status_code == 500
        assert response.json()["detail"] == "pipeline broke"

    def test_timeout_setting(self, monkeypatch):
        """Test the timeout falls back to the default on bad values."""
        monkeypatch.setenv("OPTIMIZE_TIMEOUT_SECONDS", "soon")
        assert index._optimize_timeout() == index.DEFAULT_TIMEOUT_SECONDS

        monkeypatch.setenv("OPTIMIZE_TIMEOUT_SECONDS", "5")
        assert index._optimize_timeout() == 5.0


class TestAnalyzePhrases:
    """Tests for the phrase analysis endpoint."""

    def test_analyze(self, client):
        """Test detected phrases are scored."""
        response = client.post("/api/analyze/phrases", json={"content": "Let's leverage synergy."})
        data = response.json()

        assert response.status_code == 200
        assert data["detected_phrases"] == 2
        assert data["overall_score"] == 65
