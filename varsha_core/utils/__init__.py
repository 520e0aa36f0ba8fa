"""Shared utilities: validation, errors, exporters, submission history"""
