"""Subcommand groups for musdis.

Provides register_commands() which uses deferred imports so the service
layer is only loaded when a command actually runs.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups on the root CLI group."""
    from musdis.commands.artists import artist
    from musdis.commands.releases import release
    from musdis.commands.tags import tag
    from musdis.commands.tracks import track
    from musdis.commands.users import user

    cli.add_command(user)
    cli.add_command(tag)
    cli.add_command(artist)
    cli.add_command(release)
    cli.add_command(track)
