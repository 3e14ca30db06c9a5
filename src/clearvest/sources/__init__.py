"""Portfolio input and output formats."""

from .csv_upload import parse_portfolio_csv, read_portfolio_csv
from .export import export_filename, export_priced_holdings_to_csv, render_export_csv

__all__ = [
    "parse_portfolio_csv",
    "read_portfolio_csv",
    "export_filename",
    "export_priced_holdings_to_csv",
    "render_export_csv",
]
