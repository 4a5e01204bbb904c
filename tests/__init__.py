"""Test suite for loggo."""
