"""
Cynthia page combiner

Assembles HTML pages from content fragments, page metadata, a presentation
mode and a chain of plugin transformation hooks.
"""

__version__ = "3.0.0"
GENERATOR_NAME = "Cynthia"
