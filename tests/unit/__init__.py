"""Unit tests.

Unit tests never start real processes; they drive loggo through the
doubles in ``tests.fakes``.
"""
