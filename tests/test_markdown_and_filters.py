"""Tests for markdown preview rendering and client-side filters."""

from datetime import datetime

from dentalhub.features.documents.filters import category_options, filter_documents, matches_search
from dentalhub.features.documents.markdown import render_markdown
from dentalhub.features.documents.models import DocumentCategory
from dentalhub.features.documents.schemas import DocumentResponse


def _document(title, tags=(), category=None):
    now = datetime(2024, 1, 1)
    return DocumentResponse(
        id=title.lower().replace(" ", "-"),
        clinic_id="clinic-1",
        created_by="doctor-1",
        title=title,
        content="x",
        category=category,
        tags=list(tags),
        created_at=now,
        updated_at=now,
    )


def test_render_headings_and_emphasis():
    html = render_markdown("# Title\n## Section\n### Sub\nSome **bold** and *soft* text")

    assert "<h1>Title</h1>" in html
    assert "<h2>Section</h2>" in html
    assert "<h3>Sub</h3>" in html
    assert "<strong>bold</strong>" in html
    assert "<em>soft</em>" in html


def test_render_lists_and_paragraphs():
    html = render_markdown("Intro\n\n- one\n1. two")

    assert html.startswith("<p>Intro</p><p>")
    assert "<li>one</li>" in html
    assert "<li>two</li>" in html


def test_render_escapes_html():
    html = render_markdown("<script>alert(1)</script>")

    assert "<script>" not in html
    assert "&lt;script&gt;" in html


def test_matches_search():
    document = _document("Radiation Safety", tags=["X-Ray", "Policy"])

    assert matches_search(document, "safety")
    assert matches_search(document, "xray") is False
    assert matches_search(document, "x-ray")
    assert matches_search(document, "POL")
    assert matches_search(document, "   ")


def test_filter_documents_composes_with_and():
    documents = [
        _document("Intake", tags=["new patient"], category=DocumentCategory.FORMS),
        _document("Privacy", category=DocumentCategory.POLICIES),
        _document("New Hire Policy", category=DocumentCategory.POLICIES),
    ]

    assert [d.title for d in filter_documents(documents, DocumentCategory.POLICIES)] == ["Privacy", "New Hire Policy"]
    assert [d.title for d in filter_documents(documents, search="new")] == ["Intake", "New Hire Policy"]
    assert [d.title for d in filter_documents(documents, DocumentCategory.FORMS, "new")] == ["Intake"]
    assert filter_documents(documents, DocumentCategory.INSURANCE) == []


def test_category_options():
    options = category_options()

    assert options[0] == (None, "All")
    assert [label for _, label in options[1:]] == [
        "Policies", "Protocols", "Forms", "Instructions", "Insurance", "Other",
    ]
