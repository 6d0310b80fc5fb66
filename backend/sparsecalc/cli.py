import logging
import os

import click

from sparsecalc.services.matrix_service import MatrixService, DEFAULT_OUTPUT_DIR
from sparsecalc.utils.errors import MatrixError
from sparsecalc.utils.matrix_ops import OPERATIONS


@click.command('compute')
@click.argument('operation', type=click.Choice(sorted(OPERATIONS), case_sensitive=False))
@click.argument('matrix_a', type=click.Path(dir_okay=False))
@click.argument('matrix_b', type=click.Path(dir_okay=False))
@click.option('-o', '--output', 'output_path', type=click.Path(dir_okay=False),
              help='Output file (default: <output-dir>/<a>_<b>_results.txt).')
@click.option('--output-dir', envvar='MATRIX_OUTPUT_DIR', default=DEFAULT_OUTPUT_DIR, show_default=True,
              help='Directory for the default output file.')
@click.option('--with-entries', is_flag=True, help='Also write the non-zero entries of the result.')
@click.option('--show/--no-show', default=False, help='Print the resulting matrix.')
@click.option('-v', '--verbose', is_flag=True, help='Enable debug logging.')
def compute_command(operation, matrix_a, matrix_b, output_path, output_dir, with_entries, show, verbose):
    """Apply OPERATION (add, subtract, multiply) to MATRIX_A and MATRIX_B."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else os.environ.get('LOG_LEVEL', 'WARNING').upper(),
        format='%(levelname)s %(name)s: %(message)s'
    )

    service = MatrixService(output_dir=output_dir)
    try:
        result, written = service.compute_to_file(
            operation.lower(), matrix_a, matrix_b,
            output_path=output_path, include_entries=with_entries
        )
    except (MatrixError, OSError) as e:
        click.echo(f'Error: {e}', err=True)
        raise SystemExit(1)

    if show:
        click.echo('Resulting Matrix:')
        click.echo(result.to_string())
    click.echo(f'Result written to {written}')


def main():
    """Console script entry point"""
    compute_command()


if __name__ == '__main__':
    main()
