"""hifztrack - progression engine for a page-by-page memorization tracker."""

__version__ = "0.1.0"
