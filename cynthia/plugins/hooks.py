"""
Plugin Hook Points and Runner Kinds

The points in the page pipeline where plugins may rewrite the document,
and the closed set of runners a hook may ask for.
"""

from __future__ import annotations

from enum import Enum


class HookPoint(str, Enum):
    """Where in the pipeline a hook runs, named after the manifest runner keys."""

    BODY = "modifyBodyHTML"
    HEAD = "modifyHeadHTML"
    OUTPUT = "modifyOutputHTML"

    @property
    def substitutes_content(self) -> bool:
        """
        Whether `input` is bound to a placeholder that is swapped for the
        content after decoding.

        Head hooks instead receive the JSON-escaped head fragment directly
        in the template, since heads are small and plugins embed them
        literally.
        """
        return self is not HookPoint.HEAD


class RunnerKind(str, Enum):
    """Runners a hook can be executed with."""

    JS = "js"

    @classmethod
    def parse(cls, kind: str) -> RunnerKind | None:
        """Return the runner for a manifest `type` value, or None when unsupported."""
        try:
            return cls(kind)
        except ValueError:
            return None


# ── Master list ───────────────────────────────────────────────────────────────
ALL_HOOK_POINTS: list[HookPoint] = [HookPoint.BODY, HookPoint.HEAD, HookPoint.OUTPUT]

# Content markers produced by the content loader instead of a document.
# The page pipeline returns them untouched.
CONTENT_LOCATION_ERROR = "contentlocationerror"
NOT_FOUND_ERROR = "404error"
CONTENT_TYPE_ERROR = "contenttypeerror"

BYPASS_MARKERS: frozenset[str] = frozenset({CONTENT_LOCATION_ERROR, NOT_FOUND_ERROR, CONTENT_TYPE_ERROR})
