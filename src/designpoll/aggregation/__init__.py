"""Aggregation module for survey analytics.

Reads a snapshot of responses and designs and produces projection rows
(per-design stats, per-respondent groups), filtered, sorted and exported.
Forbidden: database writes, blob store access.
"""
