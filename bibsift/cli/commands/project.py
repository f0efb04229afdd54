"""Project creation and inspection commands."""

from pathlib import Path

import click

from bibsift.cli.helpers import configured_languages, load_project, project_option
from bibsift.storage.importers import EndnoteXmlImporter
from bibsift.storage.listing import ATTRIBUTE_ALIASES, attribute_values
from bibsift.storage.project import Project

LIST_CHOICES = ("years", "authors", "publications", "titles", "hashes")

lang_option = click.option(
    "--lang",
    "-l",
    "languages",
    multiple=True,
    help="Keep records in this language (repeatable, 'all' keeps every language)",
)


@click.command()
@click.argument("xml_file", type=click.Path(exists=True, path_type=Path))
@click.argument("project_file", type=click.Path(path_type=Path))
@click.argument("data_dir", type=click.Path(file_okay=False, path_type=Path))
@lang_option
@click.option("--force", is_flag=True, help="Overwrite an existing project file")
@click.pass_context
def create(
    ctx: click.Context,
    xml_file: Path,
    project_file: Path,
    data_dir: Path,
    languages: tuple[str, ...],
    force: bool,
) -> None:
    """Create a project from an EndNote XML export.

    Converted text will be stored under DATA_DIR.
    """
    console = ctx.obj.console

    if project_file.exists() and not force:
        raise click.ClickException(
            f"Project file {project_file} already exists. Use --force to overwrite."
        )

    importer = EndnoteXmlImporter(configured_languages(ctx, languages))
    records = importer.import_file(xml_file)

    project = Project.create(data_dir, records)
    project.save(project_file)

    console.print(
        f"[green]✓[/green] Created project {project_file} with {len(records)} records"
    )


@click.command()
@click.argument("xml_file", type=click.Path(exists=True, path_type=Path))
@click.argument(
    "attribute",
    type=click.Choice(["all", *ATTRIBUTE_ALIASES], case_sensitive=False),
)
@lang_option
@click.pass_context
def show(
    ctx: click.Context,
    xml_file: Path,
    attribute: str,
    languages: tuple[str, ...],
) -> None:
    """Show the records of an EndNote XML export or one of their attributes.

    ATTRIBUTE is 'all' to list every record, or an attribute such as
    'years', 'authors' or 'publications' to list its distinct values.
    """
    importer = EndnoteXmlImporter(configured_languages(ctx, languages))
    records = importer.import_file(xml_file)

    if attribute.lower() == "all":
        values = [str(record) for record in records]
    else:
        values = attribute_values(records, attribute)

    for value in values:
        click.echo(value)


@click.command(name="list")
@project_option
@click.argument("what", type=click.Choice(LIST_CHOICES, case_sensitive=False))
@click.pass_context
def list_values(ctx: click.Context, project_path: Path | None, what: str) -> None:
    """List distinct values of a project's indexed entries, sorted."""
    project = load_project(ctx, project_path)
    index = project.build_index()

    what = what.lower()
    if what == "years":
        values = [str(year) for year in sorted(index.years())]
    elif what == "hashes":
        values = sorted(index.hashes())
    else:
        values = sorted(getattr(index, what)(), key=str.lower)

    for value in values:
        click.echo(value)
