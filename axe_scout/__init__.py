# axe_scout/__init__.py
"""
AxeScout package initializer.
Defines package version and exposes the audit interface.
"""
__version__ = "0.1.0"

from axe_scout.audit import wcag  # noqa: E402
from axe_scout.accumulator import ReportAccumulator  # noqa: E402

__all__ = ["__version__", "wcag", "ReportAccumulator"]
