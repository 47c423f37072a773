"""Report download routes."""

from __future__ import annotations

from flask import Blueprint

from doorprize.db import get_session
from doorprize.services.report_service import Report, ReportService
from doorprize.utils.responses import attachment

reports_bp = Blueprint("reports", __name__)

_service = ReportService()


def _send(report: Report):
    return attachment(report.body, mimetype=report.mimetype, filename=report.filename)


@reports_bp.get("/sessions/<session_id>/report.csv")
def csv_report(session_id: str):
    return _send(_service.csv_report(get_session(), session_id))


@reports_bp.get("/sessions/<session_id>/report.txt")
def text_report(session_id: str):
    return _send(_service.text_report(get_session(), session_id))
