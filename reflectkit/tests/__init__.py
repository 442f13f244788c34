"""Tests for reflectkit."""
