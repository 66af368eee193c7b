"""Tests for the helm-resource command line tool."""
