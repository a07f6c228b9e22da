"""Test suite for the offline dictionary translator."""
