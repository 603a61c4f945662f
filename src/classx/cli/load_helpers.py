from __future__ import annotations

"""Shared helpers for resolving CLI arguments with CLI-friendly errors."""

import importlib
from typing import Type

import typer
from rich.console import Console
from rich.markup import escape

from classx.core.objects import ClassX
from classx.io.loaders import InputFileSpec, LoaderError, load_input


def resolve_target(target: str) -> Type[ClassX]:
    """Import ``package.module:ClassName`` (nested names allowed after the colon)."""
    module_name, sep, qualname = target.partition(":")
    if not sep or not module_name or not qualname:
        raise ValueError(f"Target must look like 'package.module:ClassName', got {target!r}")
    obj: object = importlib.import_module(module_name)
    for part in qualname.split("."):
        obj = getattr(obj, part)
    if not (isinstance(obj, type) and issubclass(obj, ClassX)):
        raise TypeError(f"{target} is not a ClassX subclass")
    return obj


def resolve_target_or_exit(target: str, *, console: Console) -> Type[ClassX]:
    try:
        return resolve_target(target)
    except (ImportError, AttributeError, ValueError, TypeError) as err:
        console.print(f"[red]Cannot resolve target[/red] {escape(target)}: {escape(str(err))}", soft_wrap=True)
        raise typer.Exit(code=2)


def load_input_or_exit(path: str, *, console: Console, verbose_errors: bool = False) -> InputFileSpec:
    try:
        return load_input(path)
    except LoaderError as err:
        if verbose_errors and err.details:
            console.print(f"[red]Failed to load input:[/red] {err.message} ({err.file_path})")
            for line in err.details:
                console.print(f"  - {line}", markup=False)
        else:
            console.print(f"[red]Failed to load input:[/red] {escape(str(err))}", soft_wrap=True)
        raise typer.Exit(code=1)


__all__ = ["resolve_target", "resolve_target_or_exit", "load_input_or_exit"]
