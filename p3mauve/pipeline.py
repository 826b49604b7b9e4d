#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
p3mauve command-line entry points.

Two workflows are provided:
1. p3-mauve: fetch genomes from the data API, align them with Mauve and
   write the alignment as JSON
2. xmfa2json: convert an existing XMFA alignment to JSON

Examples:
    p3-mauve -g 204722.5,224914.11,262698.4 -o out/
    p3-mauve --jfile job.json -o out/ --sstring '{"data_api": "https://..."}'
    xmfa2json -i out/alignment.xmfa --gaps --summary
"""

import sys
import argparse
import logging
import traceback

from .config import Config, setup_logging, P3MauveError
from .helpers import GenomeFetcher, MauveRunner, xmfa_to_json
from .utils import load_job_params, validate_params, mauve_options, data_api_endpoint
from .utils.job_params import MAUVE_OPTION_FLAGS

# Set up module logger
logger = logging.getLogger(__name__)

MAUVE_OPTION_HELP = {
    'seed-weight': 'Use the specified seed weight for calculating initial anchors',
    'max-gapped-aligner-length': 'Maximum number of base pairs to attempt aligning with the gapped aligner',
    'max-breakpoint-distance-scale': 'Set the maximum weight scaling by breakpoint distance. '
                                     'Must be in [0, 1]. Defaults to 0.9',
    'conservation-distance-scale': 'Scale conservation distances by this amount. Must be in [0, 1]. Defaults to 1',
    'weight': 'Minimum pairwise LCB score',
    'min-scaled-penalty': 'Minimum breakpoint penalty after scaling the penalty by expected divergence',
    'hmm-p-go-homologous': 'Probability of transitioning from the unrelated to the homologous state [0.0001]',
    'hmm-p-go-unrelated': 'Probability of transitioning from the homologous to the unrelated state [0.000001]',
}


def _add_common_arguments(parser):
    parser.add_argument('--debug', nargs='*', metavar='MODULE',
                        help='Enable debug mode (universal or specific modules)')
    parser.add_argument('--config', metavar='[.json]', help='Configuration file')


def _normalize_debug(args):
    if args.debug is not None:
        args.debug = True if len(args.debug) == 0 else args.debug
    else:
        args.debug = False


def parse_arguments(argv=None):
    """Parse command line arguments for the alignment workflow."""
    parser = argparse.ArgumentParser(
        prog='p3-mauve',
        description='Given genome IDs, downloads FASTA files and runs Mauve',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument('-g', '--genome-ids', metavar='<ids>', help='Genome IDs comma delimited')
    parser.add_argument('--jstring', metavar='<json>', help='Pass job params (json) as string')
    parser.add_argument('--jfile', metavar='<file>', help='Pass job params (json) as file')
    parser.add_argument('--sstring', metavar='<json>', help='Server config (json) as string')
    parser.add_argument('-o', '--output', metavar='<dir>', help='Where to save files/results')
    parser.add_argument('-s', '--suffix', metavar='<suffix>', help='Suffix to append to sequence file names')
    parser.add_argument('-n', '--no-mauve', action='store_true', help='Just fetch data')
    parser.add_argument('--recipe', choices=Config.MAUVE_BINARIES,
                        help='Use progressiveMauve or mauveAligner (defaults to progressiveMauve)')

    for flag, help_text in MAUVE_OPTION_HELP.items():
        parser.add_argument(f'--{flag}', metavar='<value>', help=f'Mauve option: {help_text}')

    _add_common_arguments(parser)

    args = parser.parse_args(argv)
    _normalize_debug(args)

    if not (args.genome_ids or args.jfile or args.jstring):
        parser.error("one of --genome-ids, --jfile or --jstring is required")

    return args


def parse_xmfa_arguments(argv=None):
    """Parse command line arguments for XMFA conversion."""
    parser = argparse.ArgumentParser(
        prog='xmfa2json',
        description='Convert a Mauve XMFA alignment to JSON',
    )

    parser.add_argument('-i', '--input', required=True, metavar='[.xmfa]', help='XMFA alignment file')
    parser.add_argument('-o', '--output', metavar='[.json]', help='JSON output (default: input with .json)')
    parser.add_argument('--include-seqs', action='store_true', help='Keep aligned sequences and full names')
    parser.add_argument('--gaps', action='store_true', help='Annotate regions with gap runs')
    parser.add_argument('--strict-gaps', action='store_true',
                        help='Also report gap runs that reach the end of a sequence')
    parser.add_argument('--flush', action='store_true',
                        help='Keep the last LCB even if the file lacks a final separator')
    parser.add_argument('--summary', action='store_true', help='Write a CSV summary of all regions')

    _add_common_arguments(parser)

    args = parser.parse_args(argv)
    _normalize_debug(args)
    return args


def setup_pipeline(args):
    """Set up logging and configuration."""
    setup_logging(debug=args.debug)

    Config.get_instance()

    if args.config:
        Config.load_from_file(args.config)
        logger.debug(f"Loaded configuration from {args.config}")


def _cli_options(args):
    """Collect recipe and Mauve options given on the command line."""
    options = {'recipe': args.recipe}
    for param_name, flag in MAUVE_OPTION_FLAGS.items():
        options[param_name] = getattr(args, flag.replace('-', '_'))
    return options


def run_alignment(args):
    """
    Fetch genomes and run Mauve.

    Returns:
        str or None: Alignment JSON path, None when only fetching
    """
    params = load_job_params(jfile=args.jfile, jstring=args.jstring, genome_ids=args.genome_ids,
                             output=args.output, **_cli_options(args))
    validate_params(params)

    endpoint = data_api_endpoint(args.sstring)
    out_dir = params['output']

    logger.info('Fetching genomes...')
    fetcher = GenomeFetcher(endpoint=endpoint)
    paths = fetcher.fetch_genome_fastas(params['genome_ids'], out_dir, args.suffix)

    if args.no_mauve:
        logger.info(f"Fetched {len(paths)} genome(s), skipping Mauve")
        return None

    logger.info('Running Mauve...')
    runner = MauveRunner()
    return runner.run(params.get('recipe'), paths, mauve_options(params), out_dir)


def _run(parse, workflow, argv):
    try:
        args = parse(argv)
        setup_pipeline(args)
        workflow(args)
        return True

    except P3MauveError as e:
        logger.error(f"Pipeline error: {e}")
        logger.debug(f"Error details: {str(e)}", exc_info=True)
        return False
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        logger.debug(traceback.format_exc())
        return False


def run_pipeline(argv=None):
    """Alignment workflow entry point."""
    return _run(parse_arguments, run_alignment, argv)


def run_xmfa_conversion(argv=None):
    """XMFA conversion entry point."""
    def convert(args):
        json_path = xmfa_to_json(
            args.input,
            json_path=args.output,
            summary=args.summary or None,
            include_sequences=args.include_seqs or None,
            compute_gaps=args.gaps or None,
            strict_gaps=args.strict_gaps or None,
            flush=args.flush or None,
        )
        logger.info(f"Alignment JSON written to {json_path}")

    return _run(parse_xmfa_arguments, convert, argv)


def main():
    """Entry point for p3-mauve."""
    success = run_pipeline()
    sys.exit(0 if success else 1)


def xmfa_main():
    """Entry point for xmfa2json."""
    success = run_xmfa_conversion()
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
