# ABOUTME: CLI package for shelfkeeper, built on Click.
# ABOUTME: Defines the root command group, configures logging, and registers subcommands.

import logging

import click

from shelfkeeper.cli.commands import add_cmd, info_cmd, ls_cmd, rm_cmd, set_cmd, stats_cmd


@click.group()
@click.version_option(package_name="shelfkeeper")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log catalog activity.")
def cli(verbose: bool) -> None:
    """shelfkeeper - catalog the books on your shelves."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


cli.add_command(add_cmd.add)
cli.add_command(info_cmd.info)
cli.add_command(ls_cmd.ls)
cli.add_command(rm_cmd.rm)
cli.add_command(set_cmd.set_field)
cli.add_command(stats_cmd.stats)
