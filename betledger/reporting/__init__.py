"""Reporting module."""

from betledger.reporting.summary import format_summary

__all__ = ["format_summary"]
