"""
Ingestion layer: reading meeting CSV exports and normalizing their rows.

Submodules:
  meeting_csv: CSV reader, per-row normalizer, ``RowValidationError``
"""
