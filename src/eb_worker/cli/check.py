"""Check a message mapping file.

CLI that loads the mapping, prints the middleware mapped to each message name
and, with --resolve, verifies every identifier can be resolved.
"""

import os

import click
import dotenv

from config import get_settings
from eb_worker.exceptions import UnresolvableMiddlewareError, WorkerError
from eb_worker.middleware_list import MiddlewareList, load_message_mapping
from eb_worker.resolver import ImportResolver, Resolver


def unresolved_identifiers(mapping: dict[str, MiddlewareList], resolver: Resolver) -> list[str]:
    """Return every mapped identifier the resolver fails on, each listed once."""
    failed: list[str] = []
    for middleware_list in mapping.values():
        for identifier in middleware_list.identifiers:
            if identifier in failed:
                continue
            try:
                resolver.resolve(identifier)
            except UnresolvableMiddlewareError as e:
                click.secho(str(e), err=True, color=True, fg="red")
                failed.append(identifier)
    return failed


@click.command()
@click.option(
    "--mapping-file",
    type=click.Path(exists=True, dir_okay=False),
    required=False,
    help="JSON file mapping message names to middleware, defaults to EB_WORKER_MAPPING_FILE",
)
@click.option("--config-key", type=str, required=False, help="Key the mapping is nested under, defaults to eb_worker")
@click.option("--resolve", is_flag=True, default=False, help="Also check every middleware can be imported")
@click.option(
    "--handlers-path",
    type=str,
    multiple=True,
    help="A directory to search for middleware modules, can be used multiple times",
)
def main(mapping_file: str | None, config_key: str | None, resolve: bool, handlers_path: tuple[str, ...]) -> None:
    """Validate the mapping file and list the middleware mapped to each message."""
    if os.path.exists(".env"):
        dotenv.load_dotenv()
    settings = get_settings()

    mapping_file = mapping_file or settings.mapping_file
    if not mapping_file:
        raise click.ClickException("No mapping file provided and EB_WORKER_MAPPING_FILE is not set")

    try:
        mapping = load_message_mapping(mapping_file, config_key or settings.config_key)
    except (OSError, WorkerError) as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"{len(mapping)} message(s) mapped in {mapping_file}")
    for name, middleware_list in mapping.items():
        identifiers = ", ".join(middleware_list.identifiers) or "(no middleware)"
        click.echo(f"{name}: {identifiers}")

    if resolve:
        resolver = ImportResolver(list(handlers_path) + settings.handlers_path)
        failed = unresolved_identifiers(mapping, resolver)
        if failed:
            raise click.ClickException(f"{len(failed)} middleware could not be resolved")
        click.secho("All middleware resolved", color=True, fg="green")


if __name__ == "__main__":
    main()
