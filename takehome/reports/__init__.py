"""Report generators."""

from takehome.reports.tax_summary import ScenarioComparisonGenerator, TaxSummaryGenerator

__all__ = ["ScenarioComparisonGenerator", "TaxSummaryGenerator"]
