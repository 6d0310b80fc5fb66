class MatrixError(Exception):
    """Error base de las operaciones con matrices dispersas"""


class DimensionMismatchError(MatrixError, ValueError):
    """Las dimensiones de los operandos no son compatibles con la operación"""

    def __init__(self, operation, shape_a, shape_b):
        self.operation = operation
        self.shape_a = shape_a
        self.shape_b = shape_b
        super().__init__(
            f"Dimensiones incompatibles para {operation}: "
            f"{shape_a[0]}x{shape_a[1]} y {shape_b[0]}x{shape_b[1]}"
        )


class IndexOutOfBoundsError(MatrixError, IndexError):
    """Una entrada cae fuera de las dimensiones declaradas"""

    def __init__(self, row, col, shape):
        self.row = row
        self.col = col
        self.shape = shape
        super().__init__(
            f"Posición ({row}, {col}) fuera de la matriz {shape[0]}x{shape[1]}"
        )


class UnsupportedOperationError(MatrixError, ValueError):
    """Operación desconocida"""

    def __init__(self, operation, supported=()):
        self.operation = operation
        self.supported = tuple(supported)
        message = f"Operación no soportada: {operation!r}"
        if self.supported:
            message += f" (use una de: {', '.join(self.supported)})"
        super().__init__(message)


class MalformedInputError(MatrixError, ValueError):
    """El texto de entrada no sigue el formato esperado"""

    def __init__(self, message="Input file has wrong format", line=None):
        self.line = line
        if line is not None:
            message = f"{message} (línea {line})"
        super().__init__(message)
