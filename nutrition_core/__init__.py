"""Core (UI-agnostic) dashboard logic.

This package contains:
- data loading (CSV text -> typed records)
- the region merge / aggregation routine
- the dashboard state container
- page compute functions (JSON-serializable payloads)
- chart helpers (Altair -> Vega-Lite spec dict)
"""
