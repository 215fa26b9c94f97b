"""Hour Bank package.

Attendance punches, per-employee bank of hours and reconciliation with a
remote spreadsheet store. Organized by feature modules (punches, records,
ledger, sync, ...) with a thin Flask controller layer over service and
repository layers.
"""
