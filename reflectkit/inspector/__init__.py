"""Inspection tools built on the reflection core."""

from .config import InspectorSettings as InspectorSettings
from .stub import render_stub as render_stub
from .summary import TypeSummary as TypeSummary
from .summary import summarize as summarize
