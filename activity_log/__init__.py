"""
Activity Log - Source Package

A personal daily-activity logger. Entries (date, time, category, amount,
note) are stored as pages in a Notion database and managed through a
small HTTP API and a Streamlit frontend.

DESIGN PRINCIPLES:
1. Storage layer is swappable (the API only sees the storage interface)
2. Deleting archives, never removes
3. Reading never fails on a malformed record
4. Every change is logged
"""

__version__ = "1.0.0"
__author__ = "Activity Log Team"
