"""Tests for the reflection core."""
