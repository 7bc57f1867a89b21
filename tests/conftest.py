"""
Pytest fixtures and configuration for NLP Content Optimizer tests.
"""

import pytest
from pathlib import Path

from docx import Document

from nlp_content_optimizer.models import PhraseRule


@pytest.fixture
def sample_phrases_csv(tmp_path: Path) -> Path:
    """Create a sample prohibited phrase CSV file."""
    csv_path = tmp_path / "phrases.csv"
    csv_content = """phrase,replacements,severity,category
synergy,collaboration|teamwork,4,overused_seo
low-hanging fruit,quick wins;easy opportunities,3,cliche
end result,result,,redundant
"""
    csv_path.write_text(csv_content)
    return csv_path


@pytest.fixture
def sample_phrases_excel(tmp_path: Path) -> Path:
    """Create a sample prohibited phrase Excel file."""
    import pandas as pd

    xlsx_path = tmp_path / "phrases.xlsx"
    data = {
        "Term": ["realm", "bespoke"],
        "Alternatives": ["field|area", "custom"],
        "Severity": [5, 5],
    }
    df = pd.DataFrame(data)
    df.to_excel(xlsx_path, index=False)
    return xlsx_path


@pytest.fixture
def sample_docx(tmp_path: Path) -> Path:
    """Create a sample Word document."""
    docx_path = tmp_path / "sample.docx"
    doc = Document()

    doc.add_heading("Data Platform Overview", level=1)
    doc.add_paragraph(
        "This meticulous approach helps teams ship faster. "
        "The platform stores data for every application."
    )
    doc.add_paragraph("")
    doc.add_paragraph("Our customers grow revenue with a clear strategy.")

    doc.save(docx_path)
    return docx_path


@pytest.fixture
def fixture_rules() -> tuple[PhraseRule, ...]:
    """A tiny rule table independent of the built-in defaults."""
    return (
        PhraseRule(phrase="widget", replacements=("gadget", "device"), severity=4),
        PhraseRule(phrase="foo bar", replacements=("baz",), severity=2, category="cliche"),
    )


@pytest.fixture
def scenario_d_content() -> str:
    """Sentence packed with overused SEO terms."""
    return "This meticulous approach to navigating complexities in the realm of bespoke solutions."
