"""Tests for the inspector tools."""
