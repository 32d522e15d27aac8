"""
Production Dashboard — machine and shift performance analytics

Analytics backend for turning department production sheets (date, machine,
shift, target, actual) into dashboard-ready tables, pie-chart breakdowns,
A/B shift matrices and best-machine leaderboards.

To swap Google Sheets for another feed:
    Provide any callable returning the raw rows (header first) and hand it
    to session.DashboardSession.open_section, or pass the rows straight to
    dashboard.load_store. loaders.load_workbook_rows reads Excel exports.

To connect to Streamlit/Dash:
    Build a store with dashboard.load_store(rows), then call the get_*_view
    functions in dashboard for each widget.

To add a department:
    Add an entry to config.SECTIONS and set PRODUCTION_SHEET_ID_<KEY> /
    PRODUCTION_SHEET_RANGE_<KEY> in the environment if it does not live in
    the shared spreadsheet.
"""
