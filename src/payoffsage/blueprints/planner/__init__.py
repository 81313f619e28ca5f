"""Planner blueprint package."""

from __future__ import annotations

from flask import Blueprint

bp = Blueprint("planner", __name__, url_prefix="/planner")

from . import routes  # noqa: E402,F401

__all__ = ["bp"]
