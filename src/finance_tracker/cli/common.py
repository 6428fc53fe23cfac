#!/usr/bin/env python3
"""
Shared CLI Helpers

Engine access through the click context and conversion of domain errors into
click errors.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import click

from ..core.config import get_config
from ..core.errors import FinanceTrackerError, PersistenceError
from ..engine import FinanceEngine


def get_engine(ctx: click.Context) -> FinanceEngine:
    """
    Get the engine for this invocation, creating it on first use.

    A pre-built engine may be supplied as ``obj={"engine": ...}``.
    """
    obj = ctx.ensure_object(dict)
    if obj.get("engine") is None:
        with handle_errors():
            obj["engine"] = FinanceEngine.from_config(obj.get("config") or get_config())
    engine: FinanceEngine = obj["engine"]
    return engine


@contextmanager
def handle_errors() -> Iterator[None]:
    """Convert finance tracker errors into ClickException (non-zero exit)."""
    try:
        yield
    except PersistenceError as e:
        raise click.ClickException(f"Not saved: {e}") from e
    except FinanceTrackerError as e:
        raise click.ClickException(str(e)) from e


def drop_unset(**fields: Any) -> dict[str, Any]:
    """Keep only the options the user actually passed."""
    return {name: value for name, value in fields.items() if value is not None}


def is_verbose(ctx: click.Context, verbose: bool = False) -> bool:
    return verbose or bool((ctx.obj or {}).get("verbose", False))
