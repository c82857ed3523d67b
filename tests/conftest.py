"""
Pytest fixtures and configuration for NLP Term Injector tests.
"""

import json
import random
from pathlib import Path

import pytest

from term_injector.models import Term, TermCategory


WRITING_PARAGRAPHS = [
    "Writing clear content is an important skill for every team. A good strategy keeps "
    "each article focused on what readers actually need to know.",
    "Every draft should follow a simple process. Outline the main points first, then fill "
    "in the details and cut anything that does not help the reader.",
    "Editing is where the real benefit shows up. Reading the piece aloud is an effective "
    "method for catching awkward sentences before they reach an audience.",
]


@pytest.fixture
def writing_paragraphs() -> list[str]:
    """Plain text of the three sample paragraphs."""
    return list(WRITING_PARAGRAPHS)


@pytest.fixture
def sample_content() -> str:
    """Three paragraphs about content writing, none mentioning SEO."""
    return "\n".join(f"<p>{text}</p>" for text in WRITING_PARAGRAPHS)


@pytest.fixture
def sample_content_with_headings() -> str:
    """Sample content with second and third level headings."""
    return (
        "<h1>A Guide to Better Writing</h1>\n"
        f"<p>{WRITING_PARAGRAPHS[0]}</p>\n"
        "<h2>Getting Started</h2>\n"
        f"<p>{WRITING_PARAGRAPHS[1]}</p>\n"
        "<h3>Editing Your Draft</h3>\n"
        f"<p>{WRITING_PARAGRAPHS[2]}</p>"
    )


@pytest.fixture
def seo_terms() -> list[Term]:
    """A critical basic term and a non-critical extended term."""
    return [
        Term("seo", TermCategory.BASIC, 90),
        Term("optimization", TermCategory.EXTENDED, 70),
    ]


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible template choice."""
    return random.Random(42)


@pytest.fixture
def sample_terms_csv(tmp_path: Path) -> Path:
    """Create a sample terms CSV file."""
    csv_path = tmp_path / "terms.csv"
    csv_content = """term,category,importance
keyword research,header,95
search intent,basic,80
content audit,extended,60
internal linking,,
"""
    csv_path.write_text(csv_content)
    return csv_path


@pytest.fixture
def sample_terms_excel(tmp_path: Path) -> Path:
    """Create a sample terms Excel file."""
    import pandas as pd

    xlsx_path = tmp_path / "terms.xlsx"
    data = {
        "Keyword": ["keyword research", "search intent", "content audit"],
        "Type": ["title", "basic", "extended"],
        "Weight": [100, 75, 55],
    }
    df = pd.DataFrame(data)
    df.to_excel(xlsx_path, index=False)
    return xlsx_path


@pytest.fixture
def sample_terms_payload() -> dict:
    """A term discovery payload with comma-separated lists."""
    return {
        "terms_txt": {
            "title": "keyword research, seo guide",
            "h1": "keyword research tools",
            "h2": "search intent",
            "h3": "long tail keywords",
            "content_basic": "ranking factors, Keyword Research, x, backlinks",
            "content_extended": "crawl budget",
        }
    }


@pytest.fixture
def sample_terms_json(tmp_path: Path, sample_terms_payload: dict) -> Path:
    """Create a JSON file holding a term discovery payload."""
    json_path = tmp_path / "terms.json"
    json_path.write_text(json.dumps(sample_terms_payload))
    return json_path


@pytest.fixture
def sample_html_page() -> str:
    """A full HTML page with page chrome around the main content."""
    return """
<!DOCTYPE html>
<html>
<head>
    <title>Writing Guide</title>
    <script>var tracking = true;</script>
</head>
<body>
    <header>
        <nav>Navigation content</nav>
    </header>
    <main>
        <h1>A Guide to Better Writing</h1>
        <p>Writing clear content is an important skill for every team.</p>
    </main>
    <footer>Footer content</footer>
</body>
</html>
"""
