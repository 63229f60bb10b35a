from gjk.diagnostics.report import check_queries, generate_diagnostic_report, reference_dist2

__all__ = [
    "check_queries",
    "generate_diagnostic_report",
    "reference_dist2",
]
