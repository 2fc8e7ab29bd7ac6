"""Meeting Insights: CSV meeting usefulness scoring and dashboard analytics."""

__version__ = "0.1.0"
