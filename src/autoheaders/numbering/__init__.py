"""Signifier parsing, level ranges and the counter state machine."""
