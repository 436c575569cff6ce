"""
Coach Production Dashboard

Polling pipeline behind the bus-production dashboard: fetches the
production sheet and the daily manpower summary, normalises the loosely
typed rows, and sorts/paginates them for the bar-chart view.

To point at a different spreadsheet:
    Set COACH_DASHBOARD_BUS_URL / COACH_DASHBOARD_SUMMARY_URL, or pass an
    exported .xlsx path instead of a URL. Column names live in config.

To connect a front end:
    Start a poller.PollScheduler built with poller.build_refresh_jobs(),
    then call dashboard.get_dashboard_view(state.snapshot(), view_state)
    on every render to get a plain dict of counts, summary and chart frame.

To classify status from a fixed column:
    Set config.STATUS_COLUMN (or COACH_DASHBOARD_STATUS_COLUMN). Rows
    without a yes/no value in that column fall back to the field scan.
"""
