import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn

from clientforge.codegen.codegen import Codegen
from clientforge.codegen.generator import assemble
from clientforge.codegen.schema_loader import SchemaLoader
from clientforge.config import get_config
from clientforge.exceptions import ClientForgeError

console = Console()
app = typer.Typer(
    name='clientforge',
    help='Generate typed Python clients from OpenAPI documents',
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: Annotated[
        bool, typer.Option('--verbose', '-v', help='Show debug output')
    ] = False,
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(message)s',
        handlers=[RichHandler(console=console, show_path=False)],
    )


@app.command()
def generate(
    config: Annotated[
        str | None,
        typer.Option(
            '--config', '-c', help='Path to configuration file (YAML or JSON)'
        ),
    ] = None,
) -> None:
    """Generate typed client code from configuration.

    If no config file is specified, clientforge.yaml / clientforge.yml in the
    current directory or [tool.clientforge] in pyproject.toml is used.

    Examples:
        clientforge generate
        clientforge generate --config my-config.yaml
        clientforge generate -c config.json
    """
    try:
        codegen_config = get_config(config)

        for document_config in codegen_config.documents:
            with Progress(
                SpinnerColumn(),
                TextColumn('[progress.description]{task.description}'),
                console=console,
            ) as progress:
                task = progress.add_task(
                    f'Generating code for {document_config.source} '
                    f'in {document_config.output}...',
                    total=None,
                )
                written = Codegen(document_config).generate()
                progress.update(
                    task,
                    description=f'Code generation completed for {document_config.source}!',
                )

            console.print('[dim]Generated files:[/dim]')
            for path in written:
                console.print(f'  - {path}')

    except ClientForgeError as e:
        console.print(f'[red]Error:[/red] {e}')
        raise typer.Exit(1)


@app.command()
def validate(
    source: Annotated[str, typer.Argument(help='Path or URL of the OpenAPI document')],
) -> None:
    """Check that a document can be generated without writing any files.

    Examples:
        clientforge validate ./petstore.yaml
        clientforge validate https://api.example.com/openapi.json
    """
    try:
        module = assemble(SchemaLoader().load(source))
    except ClientForgeError as e:
        console.print(f'[red]Error:[/red] {e}')
        raise typer.Exit(1)

    console.print(f'[green]Valid:[/green] {source}')
    console.print(f'  - {len(module.records())} record types')
    console.print(f'  - {len(module.sum_types())} sum types')
    console.print(f'  - {len(module.operations)} operations')


@app.command()
def version() -> None:
    """Show the version of clientforge."""
    from clientforge import __version__

    console.print(f'clientforge version: {__version__}')


if __name__ == '__main__':
    app()
