"""Test suite package; lets tests import shared payloads via ``tests.helpers``."""
