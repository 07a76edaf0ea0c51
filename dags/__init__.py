"""
Airflow DAGs Package

Contains the DAG definitions for the portal lead sync.

DAGs:
- portal_lead_sync: Backfill on first run, then incremental sync (every 2 hours)
"""
