"""Prioritize command: filter variants and rank genes by PhenoDigm similarity.

Pipeline steps:
1. Build the filter chain and the PhenoDigm priority from configuration
2. Read annotated variants
3. Run filters, group surviving variants into genes
4. Score genes against the query disease and rank them
5. Write ranked genes (TSV + Parquet), HTML report and provenance
"""

import logging
import sys
from pathlib import Path

import click

from exome_pipeline.config.loader import load_config_with_overrides
from exome_pipeline.filters import build_filters
from exome_pipeline.lookup import PhenodigmLookup, reference_tables_loaded
from exome_pipeline.output import build_html_report, write_html_report, write_ranked_genes
from exome_pipeline.persistence import PipelineStore, ProvenanceTracker
from exome_pipeline.priority import PhenodigmPriority
from exome_pipeline.runner import AnalysisRunner
from exome_pipeline.variant_reader import read_variants_tsv

logger = logging.getLogger(__name__)


@click.command('prioritize')
@click.option(
    '--variants',
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help='Annotated variant TSV (chrom, pos, ref, alt, quality, gene_symbol, effect, frequency_pct)'
)
@click.option(
    '--disease',
    type=str,
    default=None,
    help='Query disease id (e.g. OMIM:154700, ORPHANET:558); overrides config'
)
@click.option(
    '--min-quality',
    type=float,
    default=None,
    help='Minimum variant quality; overrides config'
)
@click.option(
    '--output-dir',
    type=click.Path(path_type=Path),
    default=None,
    help='Output directory (default: {data_dir}/results)'
)
@click.pass_context
def prioritize(ctx, variants, disease, min_quality, output_dir):
    """Filter variants and rank affected genes by mouse phenotype similarity.

    Requires the PhenoDigm reference tables (see load-reference).

    Examples:

        exome-pipeline prioritize --variants sample.tsv

        exome-pipeline prioritize --variants sample.tsv --disease ORPHANET:558
    """
    config_path = ctx.obj['config_path']

    click.echo(click.style("=== Variant Filtering and Gene Prioritization ===", bold=True))
    click.echo()

    store = None
    try:
        config = load_config_with_overrides(config_path, {
            "phenodigm.disease_id": disease,
            "filters.min_quality": min_quality,
        })
        disease_id = config.phenodigm.disease_id
        click.echo(f"Disease: {disease_id}")

        # Construct filters before reading any variant so bad thresholds fail fast
        filters = build_filters(config.filters)
        click.echo(f"Filters: {', '.join(repr(f) for f in filters)}")
        click.echo()

        store = PipelineStore.from_config(config)
        if not reference_tables_loaded(store):
            click.echo(click.style(
                "PhenoDigm reference tables not found. Run 'exome-pipeline load-reference' first.",
                fg='red'
            ), err=True)
            sys.exit(1)

        provenance = ProvenanceTracker.from_config(config)

        click.echo(click.style("Step 1: Reading variants...", bold=True))
        variant_list = read_variants_tsv(variants)
        click.echo(click.style(f"  Read {len(variant_list)} variants", fg='green'))
        click.echo()
        provenance.record_step('read_variants', {
            'path': str(variants),
            'variant_count': len(variant_list),
        })

        click.echo(click.style("Step 2: Filtering and prioritizing...", bold=True))
        runner = AnalysisRunner()
        with PhenodigmLookup.open(store, config.phenodigm.lookup_timeout_seconds) as lookup:
            priority = PhenodigmPriority(disease_id, lookup)
            result = runner.analyse(variant_list, filters, [priority])

        for report in result.filter_reports:
            click.echo(f"  {report.kind.value}: {report.before} -> {report.after}")
        for summary in result.priority_summaries:
            click.echo(click.style(
                f"  {summary.analysed_genes} genes scored, "
                f"{summary.records_found} with PhenoDigm similarity",
                fg='green'
            ))
        click.echo()
        provenance.record_step('run_filters', {
            report.kind.value: {'before': report.before, 'after': report.after, 'errors': report.errors}
            for report in result.filter_reports
        })
        provenance.record_step('run_priorities', {
            summary.kind.value: {
                'analysed_genes': summary.analysed_genes,
                'records_found': summary.records_found,
            }
            for summary in result.priority_summaries
        })

        click.echo(click.style("Step 3: Writing output...", bold=True))
        output_dir = output_dir or (config.data_dir / "results")
        paths = write_ranked_genes(result.genes, output_dir)
        html_path = write_html_report(
            build_html_report(result.filter_reports, [priority]),
            output_dir / "report.html",
        )
        sidecar_path = provenance.save_sidecar(paths["tsv"])
        provenance.save_to_store(store)
        click.echo(click.style(f"  TSV: {paths['tsv']}", fg='green'))
        click.echo(click.style(f"  Parquet: {paths['parquet']}", fg='green'))
        click.echo(click.style(f"  Report: {html_path}", fg='green'))
        click.echo(click.style(f"  Provenance: {sidecar_path}", fg='green'))
        click.echo()

        click.echo(click.style("=== Top Candidates ===", bold=True))
        for gene in result.genes[:10]:
            score = gene.priority_score(priority.kind)
            if score is not None and score.has_data:
                click.echo(f"  {gene.symbol}\t{score.score:.3f}\t{score.external_label or '-'}")
            else:
                click.echo(f"  {gene.symbol}\tno mouse model")
        click.echo()
        click.echo(click.style("Prioritization complete!", fg='green', bold=True))

    except Exception as e:
        click.echo(click.style(f"Prioritize command failed: {e}", fg='red'), err=True)
        logger.exception("Prioritize command failed")
        sys.exit(1)
    finally:
        if store is not None:
            store.close()
