"""Packaged name tables.

This package holds the JSON table documents (e.g. localenames_ckb.json,
timezonenames_fr_CA.json) read through importlib.resources. Keeping it a
real package makes the resources discoverable both locally and when
installed.
"""
