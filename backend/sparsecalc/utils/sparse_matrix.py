from collections import namedtuple

from sparsecalc.utils.errors import IndexOutOfBoundsError
from sparsecalc.utils.helpers import format_entry

Entry = namedtuple('Entry', ['row', 'col', 'value'])


def _check_int(name, value):
    # bool es subclase de int pero no es un valor válido de la matriz
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} debe ser un entero, se recibió {type(value).__name__}")


class SparseMatrix:
    """
    Implementación de Matriz Dispersa usando diccionarios anidados para almacenar
    elementos no-cero: fila -> (columna -> valor).
    Los ceros nunca se almacenan; un cero lógico es la ausencia de la entrada.
    """

    def __init__(self, rows, cols, entries=()):
        """
        Inicializa una matriz dispersa con las dimensiones dadas.

        Args:
            rows (int): Número de filas
            cols (int): Número de columnas
            entries (iterable): Tripletas (fila, col, valor); si una posición se
                repite, gana la última
        """
        _check_int('rows', rows)
        _check_int('cols', cols)
        if rows < 0 or cols < 0:
            raise ValueError(f"Dimensiones inválidas: {rows}x{cols}")

        self.rows = rows
        self.cols = cols
        self.data = {}  # fila -> {columna: valor}

        for row, col, value in entries:
            self.set_value(row, col, value)

    @property
    def shape(self):
        return (self.rows, self.cols)

    @property
    def nnz(self):
        """Cantidad de elementos no-cero almacenados"""
        return sum(len(row_data) for row_data in self.data.values())

    def set_value(self, row, col, value):
        """
        Establece un valor en la posición especificada.
        Escribir 0 elimina la entrada existente, si la hay.

        Args:
            row (int): Índice de fila (base 0)
            col (int): Índice de columna (base 0)
            value (int): Valor a establecer

        Raises:
            IndexOutOfBoundsError: si la posición está fuera de la matriz
        """
        _check_int('row', row)
        _check_int('col', col)
        _check_int('value', value)
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexOutOfBoundsError(row, col, self.shape)

        if value != 0:
            self.data.setdefault(row, {})[col] = value
        elif row in self.data and col in self.data[row]:
            del self.data[row][col]
            if not self.data[row]:
                del self.data[row]

    def get_value(self, row, col):
        """
        Obtiene el valor en la posición especificada.

        Args:
            row (int): Índice de fila (base 0)
            col (int): Índice de columna (base 0)

        Returns:
            int: Valor en la posición (fila, col), 0 si no se encuentra
        """
        return self.data.get(row, {}).get(col, 0)

    def get_row(self, row):
        """
        Obtiene todos los elementos en una fila específica.

        Returns:
            dict: Diccionario con índices de columna como claves y valores
        """
        return dict(self.data.get(row, {}))

    def serialize(self):
        """
        Recorre los elementos no-cero ordenados por fila y luego por columna.
        Cada llamada produce un recorrido nuevo.

        Yields:
            Entry: (fila, col, valor)
        """
        for row in sorted(self.data):
            row_data = self.data[row]
            for col in sorted(row_data):
                yield Entry(row, col, row_data[col])

    def get_density(self):
        """
        Calcula la densidad de la matriz (porcentaje de elementos no-cero).

        Returns:
            float: Densidad como porcentaje
        """
        total_elements = self.rows * self.cols
        return (self.nnz / total_elements) * 100 if total_elements > 0 else 0

    def to_string(self):
        """Representación de la matriz: encabezado con dimensiones y una tripleta por línea"""
        lines = [f"Rows: {self.rows}, Cols: {self.cols}"]
        lines.extend(format_entry(*entry) for entry in self.serialize())
        return "\n".join(lines)

    def __eq__(self, other):
        if not isinstance(other, SparseMatrix):
            return NotImplemented
        return self.shape == other.shape and self.data == other.data

    def __str__(self):
        return self.to_string()

    def __repr__(self):
        return f"SparseMatrix({self.rows}x{self.cols}, {self.nnz} elementos no-cero)"


def create_sparse_matrix_from_entries(rows, cols, entries):
    """
    Crea una matriz dispersa desde una secuencia de tripletas.
    Args:
        rows (int): Número de filas
        cols (int): Número de columnas
        entries (iterable): Tripletas (fila, col, valor) o diccionarios con
            claves 'row', 'col', 'value'
    Returns:
        SparseMatrix: Nueva matriz dispersa
    """
    triples = []
    for entry in entries:
        if isinstance(entry, dict):
            triples.append((entry['row'], entry['col'], entry['value']))
        else:
            triples.append(tuple(entry))
    return SparseMatrix(rows, cols, triples)


def create_identity_matrix(size):
    """
    Crea una matriz identidad del tamaño dado.

    Args:
        size (int): Tamaño de la matriz identidad

    Returns:
        SparseMatrix: Matriz identidad
    """
    return SparseMatrix(size, size, ((i, i, 1) for i in range(size)))


def create_zero_matrix(rows, cols):
    """
    Crea una matriz cero con las dimensiones dadas.

    Returns:
        SparseMatrix: Matriz cero
    """
    return SparseMatrix(rows, cols)
