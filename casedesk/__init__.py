"""Casedesk: case-management REST backend."""
