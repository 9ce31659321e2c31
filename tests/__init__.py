"""Test suite for snapbridge."""
