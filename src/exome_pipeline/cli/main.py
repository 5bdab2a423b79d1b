"""Command-line entry point: global options plus the info command.

Subcommands live in their own modules and are registered at the bottom.
"""

import logging
from pathlib import Path

import click
import structlog

from exome_pipeline import __version__
from exome_pipeline.config.loader import load_config
from exome_pipeline.cli.prioritize_cmd import prioritize
from exome_pipeline.cli.reference_cmd import load_reference
from exome_pipeline.lookup import reference_tables_loaded
from exome_pipeline.persistence import PipelineStore


def configure_logging(verbose: bool) -> None:
    """Apply one level to stdlib logging and to structlog's library loggers."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    logging.getLogger().setLevel(level)
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(level))


@click.group()
@click.option(
    '--config',
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default='config/default.yaml',
    envvar='EXOME_PIPELINE_CONFIG',
    show_default=True,
    help='Pipeline configuration YAML (or set EXOME_PIPELINE_CONFIG)'
)
@click.option(
    '--verbose',
    is_flag=True,
    help='Show DEBUG output, including per-gene lookup events'
)
@click.version_option(__version__, prog_name='exome-pipeline')
@click.pass_context
def cli(ctx, config, verbose):
    """Exome-pipeline: filter variants and rank candidate genes by mouse phenotype similarity.

    Filters annotated variants by target effect, population frequency and
    call quality, then prioritizes the affected genes with MGI PhenoDigm
    scores for a query disease.
    """
    configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config
    ctx.obj['verbose'] = verbose


@cli.command()
@click.pass_context
def info(ctx):
    """Display pipeline information and configuration summary."""
    config_path = ctx.obj['config_path']

    click.echo(f"Exome Pipeline v{__version__}")
    click.echo(f"Config: {config_path}")
    click.echo()

    try:
        config = load_config(config_path)

        click.echo(f"Config Hash: {config.config_hash()[:16]}...")
        click.echo()

        click.echo(click.style("Reference Data Versions:", bold=True))
        click.echo(f"  PhenoDigm Release: {config.versions.phenodigm_release}")
        click.echo(f"  MGI Release:       {config.versions.mgi_release}")
        click.echo()

        click.echo(click.style("Filters:", bold=True))
        click.echo(f"  Minimum Quality:   > {config.filters.min_quality}")
        click.echo(f"  Maximum Frequency: <= {config.filters.max_frequency_pct}%")
        click.echo(f"  Off-target Effects: {', '.join(config.filters.off_target_effects)}")
        click.echo()

        click.echo(click.style("PhenoDigm Priority:", bold=True))
        click.echo(f"  Disease: {config.phenodigm.disease_id}")
        click.echo(f"  Lookup Timeout: {config.phenodigm.lookup_timeout_seconds}s")
        click.echo()

        click.echo(click.style("Paths:", bold=True))
        click.echo(f"  Data Directory: {config.data_dir}")
        click.echo(f"  DuckDB Path: {config.duckdb_path}")

        if config.duckdb_path.exists():
            with PipelineStore.from_config(config) as store:
                loaded = reference_tables_loaded(store)
                tables = store.registered_tables()
            status = click.style("loaded", fg='green') if loaded else click.style("missing", fg='yellow')
            click.echo(f"  Reference Tables: {status}")
            click.echo()

            click.echo(click.style("Stored Tables:", bold=True))
            for table in tables:
                click.echo(
                    f"  {table['table_name']}: {table['row_count']} rows "
                    f"(loaded {table['loaded_at']:%Y-%m-%d %H:%M})"
                )
        else:
            click.echo(f"  Reference Tables: {click.style('missing', fg='yellow')}")

    except Exception as e:
        click.echo(click.style(f"Error loading config: {e}", fg='red'), err=True)
        ctx.exit(1)


cli.add_command(load_reference)
cli.add_command(prioritize)


if __name__ == '__main__':
    cli()
