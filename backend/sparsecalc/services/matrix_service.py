import logging
import os
import re
from collections import namedtuple

from sparsecalc.utils.errors import MalformedInputError
from sparsecalc.utils.helpers import format_entry
from sparsecalc.utils.matrix_ops import perform_operation
from sparsecalc.utils.sparse_matrix import SparseMatrix

logger = logging.getLogger(__name__)

ParsedMatrix = namedtuple('ParsedMatrix', ['rows', 'cols', 'entries'])

DEFAULT_OUTPUT_DIR = 'results'

INTEGER_PATTERN = re.compile(r'[+-]?[0-9]+')


def _parse_int(token, line_number):
    """Convierte un token a entero; no acepta decimales ni texto extra"""
    token = token.strip()
    # Solo dígitos ASCII con signo opcional
    if not INTEGER_PATTERN.fullmatch(token):
        raise MalformedInputError(line=line_number)
    return int(token)


def _parse_header(line, name, line_number):
    """Lee una línea de encabezado 'rows=N' o 'cols=N'"""
    prefix = f"{name}="
    if not line.startswith(prefix):
        raise MalformedInputError(line=line_number)
    value = _parse_int(line[len(prefix):], line_number)
    if value < 0:
        raise MalformedInputError(f"Dimensión negativa para {name}", line=line_number)
    return value


def parse_entry(text, line_number=None):
    """
    Convierte una línea como '(0, 381, -694)' en una tripleta.

    Raises:
        MalformedInputError: si la línea no tiene el formato esperado
    """
    text = text.strip()
    if not text.startswith('(') or not text.endswith(')'):
        raise MalformedInputError(line=line_number)

    parts = text[1:-1].split(',')
    if len(parts) != 3:
        raise MalformedInputError(line=line_number)

    row, col, value = (_parse_int(part, line_number) for part in parts)
    return row, col, value


def parse_matrix_text(text):
    """
    Parsea el formato de texto de una matriz dispersa:

        rows=8433
        cols=3180
        (0, 381, -694)
        (0, 128, -838)

    Las líneas vacías se ignoran.

    Returns:
        ParsedMatrix: (rows, cols, entries)
    """
    lines = [line.strip() for line in text.splitlines()]
    lines = [line for line in lines if line]

    if len(lines) < 2:
        raise MalformedInputError("Faltan los encabezados rows= y cols=")

    rows = _parse_header(lines[0], 'rows', 1)
    cols = _parse_header(lines[1], 'cols', 2)
    entries = [parse_entry(line, number) for number, line in enumerate(lines[2:], start=3)]

    logger.debug("Matriz parseada: %sx%s con %s entradas", rows, cols, len(entries))
    return ParsedMatrix(rows, cols, entries)


def read_matrix_file(file_path):
    """Lee y parsea un archivo de matriz dispersa"""
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            content = f.read()
    except UnicodeDecodeError:
        raise MalformedInputError(f"El archivo {file_path} no es texto UTF-8 válido") from None
    try:
        return parse_matrix_text(content)
    except MalformedInputError as e:
        logger.error("Error leyendo el archivo de matriz %s: %s", file_path, e)
        raise


def load_matrix(file_path):
    """Lee un archivo y construye la SparseMatrix correspondiente"""
    parsed = read_matrix_file(file_path)
    return SparseMatrix(parsed.rows, parsed.cols, parsed.entries)


def format_result(matrix, include_entries=False):
    """
    Formato del archivo de salida: dimensiones del resultado y, opcionalmente,
    sus entradas no-cero.
    """
    lines = [f"rows: {matrix.rows}", f"cols: {matrix.cols}"]
    if include_entries:
        lines.extend(format_entry(*entry) for entry in matrix.serialize())
    return "\n".join(lines)


def write_output(output_path, matrix, include_entries=False):
    """Escribe el resultado, creando el directorio si no existe"""
    directory = os.path.dirname(output_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(output_path, 'w', encoding='utf-8') as f:
        f.write(format_result(matrix, include_entries))
    return output_path


def build_output_path(output_dir, path_a, path_b):
    """Nombre del archivo de salida a partir de los nombres de las entradas"""
    stem_a = os.path.splitext(os.path.basename(path_a))[0]
    stem_b = os.path.splitext(os.path.basename(path_b))[0]
    return os.path.join(output_dir, f"{stem_a}_{stem_b}_results.txt")


class MatrixService:
    """Servicio para operaciones entre matrices dispersas leídas desde archivos"""

    def __init__(self, output_dir=DEFAULT_OUTPUT_DIR):
        self.output_dir = output_dir

    def compute(self, operation, path_a, path_b):
        """Carga ambas matrices y aplica la operación"""
        matrix_a = load_matrix(path_a)
        matrix_b = load_matrix(path_b)
        return perform_operation(operation, matrix_a, matrix_b)

    def compute_to_file(self, operation, path_a, path_b, output_path=None, include_entries=False):
        """
        Aplica la operación y escribe el resultado.

        Returns:
            tuple: (SparseMatrix resultado, ruta del archivo de salida)
        """
        result = self.compute(operation, path_a, path_b)
        if output_path is None:
            output_path = build_output_path(self.output_dir, path_a, path_b)
        write_output(output_path, result, include_entries)
        logger.info("Resultado %s escrito en %s", repr(result), output_path)
        return result, output_path
