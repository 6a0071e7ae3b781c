"""Ingest pipeline for ING CSV exports: decoding, preamble, rows, records."""
