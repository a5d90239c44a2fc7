# Reporting Module
"""
Renderers for demo results:
- Console narration (rich) - console.py
- JSON for front ends and scripting - structured.py
"""

from .console import render_result, render_steps, tip_for
from .structured import render_json

__all__ = [
    'render_result',
    'render_steps',
    'tip_for',
    'render_json',
]
