from enum import Enum


class ReportFormat(str, Enum):
    HTML = "html"
    PDF = "pdf"
