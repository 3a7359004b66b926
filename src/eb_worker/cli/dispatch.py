"""Dispatch one message through the worker middleware locally.

CLI that builds the delivery the queue daemon would POST (queue and message id
headers plus a JSON body), runs it through the mapped middleware and prints the
resulting response.
"""

import json
import os
import traceback
import uuid
from typing import Any

import click
import dotenv
from icecream import ic
from pydantic import ValidationError

from config import get_settings
from eb_worker.exceptions import WorkerError
from eb_worker.http import Delivery, Response
from eb_worker.middleware.worker import WorkerMiddleware
from eb_worker.middleware_list import load_message_mapping
from eb_worker.resolver import ImportResolver


@click.command()
@click.option("--message", type=str, required=True, help="The message body to deliver (JSON with name and payload)")
@click.option(
    "--mapping-file",
    type=click.Path(exists=True, dir_okay=False),
    required=False,
    help="JSON file mapping message names to middleware, defaults to EB_WORKER_MAPPING_FILE",
)
@click.option(
    "--handlers-path",
    type=str,
    multiple=True,
    help="A directory to search for middleware modules, can be used multiple times",
)
@click.option("--queue", type=str, default="default-queue", help="The queue name sent in the queue header")
@click.option("--message-id", type=str, required=False, help="The message id header, random if omitted")
@click.option("--verbose", is_flag=True, help="Dump the dispatch attributes seen at the end of the chain")
def main(**kwargs: Any) -> None:
    """Deliver a single message to its mapped middleware and print the response."""
    if os.path.exists(".env"):
        dotenv.load_dotenv()
    settings = get_settings()

    mapping_file = kwargs["mapping_file"] or settings.mapping_file
    if not mapping_file:
        raise click.ClickException("No mapping file provided and EB_WORKER_MAPPING_FILE is not set")
    message = kwargs["message"]
    message_id = kwargs["message_id"] or uuid.uuid4().hex
    verbose = kwargs["verbose"]

    try:
        json.loads(message)
    except json.JSONDecodeError as err:
        raise click.ClickException(f"Invalid JSON: {message}") from err

    try:
        mapping = load_message_mapping(mapping_file, settings.config_key)
    except (OSError, WorkerError) as e:
        raise click.ClickException(str(e)) from e

    resolver = ImportResolver(list(kwargs["handlers_path"]) + settings.handlers_path)
    middleware = WorkerMiddleware.from_settings(mapping, resolver, settings)
    delivery = Delivery(
        headers={settings.queue_header: kwargs["queue"], settings.message_id_header: message_id},
        body=message,
        client_host="127.0.0.1",
    )

    def out(request: Delivery, response: Response) -> Response:
        if verbose:
            ic(request.attributes)
        return response

    click.echo(f"Dispatching message {message_id} from queue {kwargs['queue']}")
    try:
        response = middleware(delivery, Response(), out)
    except ValidationError as e:
        raise click.ClickException(f"Invalid message: {e}") from e
    except WorkerError as e:
        raise click.ClickException(str(e)) from e
    except Exception as e:
        click.secho(f"Error handling message: {e}", err=True, color=True, fg="red")
        click.secho(f"Stack trace: {traceback.format_exc()}", err=True, color=True, fg="red")
        raise click.ClickException(f"Middleware failed: {e}") from e

    click.echo(f"Status: {response.status_code}")
    for name, value in response.headers.items():
        click.echo(f"{name}: {value}")
    if response.body:
        click.echo(response.body)


if __name__ == "__main__":
    main()
