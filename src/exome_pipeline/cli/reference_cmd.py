"""Load-reference command: import PhenoDigm reference dumps into DuckDB."""

import logging
import sys
from pathlib import Path

import click

from exome_pipeline.config.loader import load_config
from exome_pipeline.lookup import load_reference_tables, read_reference_tsv
from exome_pipeline.persistence import PipelineStore, ProvenanceTracker

logger = logging.getLogger(__name__)


@click.command('load-reference')
@click.option(
    '--orthologs',
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help='TSV with human_gene_symbol, mgi_gene_id, mgi_gene_symbol'
)
@click.option(
    '--summary',
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help='TSV with disease_id, mgi_gene_id, mgi_gene_symbol, max_combined_perc'
)
@click.pass_context
def load_reference(ctx, orthologs, summary):
    """Load the PhenoDigm ortholog and gene-level summary tables.

    Replaces existing reference tables, so re-running with new dumps is safe.
    """
    config_path = ctx.obj['config_path']
    click.echo(click.style("=== Load PhenoDigm Reference ===", bold=True))
    click.echo()

    store = None
    try:
        config = load_config(config_path)
        store = PipelineStore.from_config(config)
        provenance = ProvenanceTracker.from_config(config)

        click.echo("Reading reference files...")
        orthologs_df = read_reference_tsv(orthologs)
        summary_df = read_reference_tsv(summary)
        click.echo(f"  Orthologs: {orthologs_df.height} rows")
        click.echo(f"  Summary:   {summary_df.height} rows")
        click.echo()

        load_reference_tables(store, orthologs_df, summary_df, provenance)
        provenance.save_to_store(store)

        click.echo(click.style(f"Reference tables saved to {config.duckdb_path}", fg='green'))

    except Exception as e:
        click.echo(click.style(f"Loading reference failed: {e}", fg='red'), err=True)
        logger.exception("Loading reference failed")
        sys.exit(1)
    finally:
        if store is not None:
            store.close()
