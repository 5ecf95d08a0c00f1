from .analyzer import analyze_mz_executable
from .report import ReportWriter
