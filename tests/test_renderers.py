"""Tests for the HTML and PDF report backends."""

import pytest

from backend.models.enums import ReportFormat
from backend.models.errors import RenderError
from backend.reporting import (
    HtmlReportRenderer,
    PdfReportRenderer,
    build_report_content,
    get_renderer,
    render,
    render_stream,
    report_filename,
)


def _pdf_literal(text: str) -> bytes:
    # PDF string literals escape parentheses
    return text.replace("(", "\\(").replace(")", "\\)").encode()


class TestHtmlRenderer:
    def test_contains_all_sections(self, report_payload, report_date):
        doc = render(ReportFormat.HTML, report_payload, report_date)
        html = doc.content
        assert isinstance(html, str)
        assert html.startswith("<!DOCTYPE html>")
        assert "<h1>Invoicing Automation ROI Report</h1>" in html
        assert "Generated on: January 5, 2024" in html
        assert "Q4 Pilot Projection" in html
        assert "<strong>Monthly Savings:</strong> $34100.00" in html
        assert "<strong>Payback Period:</strong> 1.5 months" in html
        assert "<strong>Net Savings (36 months):</strong> $1177600.00" in html
        assert "<strong>Return on Investment (ROI):</strong> 2355.20%" in html
        assert "<strong>Avg Hours Per Invoice:</strong> 0.17" in html

    def test_sections_in_order(self, report_payload, report_date):
        html = render("html", report_payload, report_date).content
        positions = [
            html.index("Invoicing Automation ROI Report</h1>"),
            html.index("Generated on:"),
            html.index("Scenario:"),
            html.index("Key Results"),
            html.index("Inputs Used"),
        ]
        assert positions == sorted(positions)

    def test_escapes_scenario_name(self, pilot_inputs, pilot_result, report_date):
        pilot_inputs["scenario_name"] = "<script>alert(1)</script>"
        payload = {"inputs": pilot_inputs, "results": pilot_result.model_dump()}
        html = render(ReportFormat.HTML, payload, report_date).content
        assert "<script>" not in html
        assert "&lt;script&gt;" in html

    def test_deterministic(self, report_payload, report_date):
        first = render(ReportFormat.HTML, report_payload, report_date)
        second = render(ReportFormat.HTML, report_payload, report_date)
        assert first == second

    def test_metadata(self, report_payload, report_date):
        doc = render(ReportFormat.HTML, report_payload, report_date)
        assert doc.media_type == "text/html; charset=utf-8"
        assert doc.filename == "ROI-Report-Q4-Pilot-Projection.html"

    def test_stream_chunks_join_to_document(self, report_payload, report_date):
        content = build_report_content(report_payload, report_date)
        renderer = HtmlReportRenderer()
        chunks = list(renderer.stream(content, chunk_size=100))
        assert len(chunks) > 1
        assert b"".join(chunks).decode("utf-8") == renderer.render(content)


class TestPdfRenderer:
    def test_is_pdf(self, report_payload, report_date):
        doc = render(ReportFormat.PDF, report_payload, report_date)
        assert isinstance(doc.content, bytes)
        assert doc.content.startswith(b"%PDF")
        assert b"%%EOF" in doc.content[-16:]
        assert doc.media_type == "application/pdf"
        assert doc.filename == "ROI-Report-Q4-Pilot-Projection.pdf"

    def test_contains_labelled_values(self, report_payload, report_date):
        pdf = render(ReportFormat.PDF, report_payload, report_date).content
        assert b"Invoicing Automation ROI Report" in pdf
        assert b"January 5, 2024" in pdf
        assert b"Q4 Pilot Projection" in pdf
        assert b"Monthly Savings:" in pdf
        assert b"$34100.00" in pdf
        assert b"1.5 months" in pdf
        assert b"$1177600.00" in pdf
        assert _pdf_literal("Net Savings (36 months):") in pdf
        assert _pdf_literal("Return on Investment (ROI):") in pdf
        assert b"2355.20%" in pdf
        assert b"Inputs Used" in pdf
        assert b"Avg Hours Per Invoice:" in pdf

    def test_stream_matches_render(self, report_payload, report_date):
        content = build_report_content(report_payload, report_date)
        renderer = PdfReportRenderer()
        chunks = list(renderer.stream(content, chunk_size=512))
        assert len(chunks) > 1
        assert all(len(c) <= 512 for c in chunks)
        assert b"".join(chunks).startswith(b"%PDF")

    def test_abandoned_stream_closes_cleanly(self, report_payload, report_date):
        stream = render_stream(ReportFormat.PDF, report_payload, report_date, chunk_size=256)
        first = next(stream.chunks)
        assert first.startswith(b"%PDF")
        stream.close()
        with pytest.raises(StopIteration):
            next(stream.chunks)

    def test_compressed_output_is_still_pdf(self, report_payload, report_date):
        renderer = PdfReportRenderer(compress=True)
        pdf = render(ReportFormat.PDF, report_payload, report_date, renderer=renderer).content
        assert pdf.startswith(b"%PDF")

    def test_long_inputs_paginate(self, pilot_inputs, pilot_result, report_date):
        pilot_inputs["scenario_name"] = "Very long scenario name " * 200
        payload = {"inputs": pilot_inputs, "results": pilot_result.model_dump()}
        pdf = render(ReportFormat.PDF, payload, report_date).content
        assert b"Page 2" in pdf


class TestHtmlPdfParity:
    def test_same_labelled_values(self, report_payload, report_date):
        content = build_report_content(report_payload, report_date)
        html = render(ReportFormat.HTML, report_payload, report_date).content
        pdf = render(ReportFormat.PDF, report_payload, report_date).content
        for section in content.sections:
            for field in section.fields:
                assert f"{field.label}:" in html
                assert _pdf_literal(f"{field.label}:") in pdf
                assert field.value in html
                assert field.value.encode() in pdf


class TestRenderErrors:
    @pytest.mark.parametrize("fmt", list(ReportFormat))
    def test_missing_results_fails_before_output(self, fmt, pilot_inputs):
        with pytest.raises(RenderError) as exc_info:
            render(fmt, {"inputs": pilot_inputs})
        assert exc_info.value.kind == "missing-data"

    def test_stream_validates_eagerly(self):
        with pytest.raises(RenderError):
            render_stream(ReportFormat.PDF, {"results": {}})

    def test_unknown_format(self, report_payload):
        with pytest.raises(ValueError):
            render("docx", report_payload)


class TestHelpers:
    def test_get_renderer(self):
        assert isinstance(get_renderer("html"), HtmlReportRenderer)
        assert isinstance(get_renderer(ReportFormat.PDF, compress=True), PdfReportRenderer)

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("Q4 Pilot Projection", "ROI-Report-Q4-Pilot-Projection.pdf"),
            ('bad/"name"', "ROI-Report-bad-name.pdf"),
            ("///", "ROI-Report-scenario.pdf"),
        ],
    )
    def test_report_filename(self, name, expected):
        assert report_filename(name, ReportFormat.PDF) == expected
