"""Deferred command loading for the vista CLI.

``vista --version`` and ``vista --help`` should not pay for importing the
scanner, manifest and prerender modules. Each subcommand is registered as a
``(module, attribute)`` pair and imported the first time click asks for it.
"""

from __future__ import annotations

import importlib
from typing import Any

import click

# name -> (module path, attribute), e.g. {"scan": ("vista.commands.scan", "scan")}
CommandTable = dict[str, tuple[str, str]]


class LazyGroup(click.Group):
    """Click group whose subcommands come from a ``CommandTable``."""

    def __init__(
        self,
        *args: Any,
        lazy_subcommands: CommandTable | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.lazy_subcommands: CommandTable = dict(lazy_subcommands or {})

    def list_commands(self, ctx: click.Context) -> list[str]:
        return sorted(set(super().list_commands(ctx)) | set(self.lazy_subcommands))

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        command = super().get_command(ctx, cmd_name)
        if command is None and cmd_name in self.lazy_subcommands:
            command = self._import_command(cmd_name)
            # Cache as a regular command so later lookups skip the import
            self.add_command(command, cmd_name)
        return command

    def _import_command(self, cmd_name: str) -> click.Command:
        module_path, attr_name = self.lazy_subcommands[cmd_name]
        try:
            command = getattr(importlib.import_module(module_path), attr_name)
        except (ImportError, AttributeError) as e:
            raise click.ClickException(f"Cannot load 'vista {cmd_name}': {e}") from None
        if not isinstance(command, click.Command):
            raise click.ClickException(
                f"Cannot load 'vista {cmd_name}': {module_path}.{attr_name} is not a command"
            )
        return command


__all__ = ["CommandTable", "LazyGroup"]
