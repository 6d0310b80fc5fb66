import logging

from sparsecalc.utils.errors import DimensionMismatchError, UnsupportedOperationError
from sparsecalc.utils.sparse_matrix import SparseMatrix

logger = logging.getLogger(__name__)


def _copy_into(result, matrix):
    for row, row_data in matrix.data.items():
        for col, value in row_data.items():
            result.set_value(row, col, value)


def _accumulate(result, row, col, value):
    result.set_value(row, col, result.get_value(row, col) + value)


def add(matrix_a, matrix_b):
    """
    Suma dos matrices dispersas.

    Args:
        matrix_a (SparseMatrix): Primer operando
        matrix_b (SparseMatrix): Segundo operando

    Returns:
        SparseMatrix: Nueva matriz con el resultado

    Raises:
        DimensionMismatchError: si las dimensiones no coinciden
    """
    if matrix_a.shape != matrix_b.shape:
        raise DimensionMismatchError('add', matrix_a.shape, matrix_b.shape)

    result = SparseMatrix(matrix_a.rows, matrix_a.cols)
    _copy_into(result, matrix_a)

    for row, col, value in matrix_b.serialize():
        _accumulate(result, row, col, value)

    return result


def subtract(matrix_a, matrix_b):
    """
    Resta matrix_b de matrix_a.

    Raises:
        DimensionMismatchError: si las dimensiones no coinciden
    """
    if matrix_a.shape != matrix_b.shape:
        raise DimensionMismatchError('subtract', matrix_a.shape, matrix_b.shape)

    result = SparseMatrix(matrix_a.rows, matrix_a.cols)
    _copy_into(result, matrix_a)

    for row, col, value in matrix_b.serialize():
        _accumulate(result, row, col, -value)

    return result


def multiply(matrix_a, matrix_b):
    """
    Multiplica matrix_a por matrix_b.

    Solo se visitan las filas de matrix_b que tienen elementos; las filas vacías
    de matrix_a no aportan nada al resultado.

    Returns:
        SparseMatrix: Matriz de dimensiones (matrix_a.rows, matrix_b.cols)

    Raises:
        DimensionMismatchError: si matrix_a.cols != matrix_b.rows
    """
    if matrix_a.cols != matrix_b.rows:
        raise DimensionMismatchError('multiply', matrix_a.shape, matrix_b.shape)

    result = SparseMatrix(matrix_a.rows, matrix_b.cols)

    for row_a, row_data in matrix_a.data.items():
        for col_a, value_a in row_data.items():
            # La columna de A indica la fila de B que participa
            row_b = matrix_b.data.get(col_a)
            if not row_b:
                continue
            for col_b, value_b in row_b.items():
                _accumulate(result, row_a, col_b, value_a * value_b)

    return result


OPERATIONS = {
    'add': add,
    'subtract': subtract,
    'multiply': multiply,
}


def get_operation(name):
    """Devuelve la función asociada al nombre de la operación"""
    key = name.strip().lower() if isinstance(name, str) else name
    try:
        return OPERATIONS[key]
    except (KeyError, TypeError):
        raise UnsupportedOperationError(name, OPERATIONS) from None


def perform_operation(name, matrix_a, matrix_b):
    """
    Ejecuta la operación indicada sobre dos matrices.

    Args:
        name (str): 'add', 'subtract' o 'multiply'

    Returns:
        SparseMatrix: Resultado de la operación
    """
    operation = get_operation(name)
    logger.debug("Ejecutando %s sobre %r y %r", operation.__name__, matrix_a, matrix_b)
    return operation(matrix_a, matrix_b)
