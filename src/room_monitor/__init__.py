"""Room monitor scheduling package.

Organized by feature modules (schedules, attendance, reconciliation, reports, ...)
with pure engine components, service/repository layers and a thin Flask
controller layer.
"""
