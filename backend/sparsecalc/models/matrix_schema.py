from marshmallow import Schema, fields, validate, validates_schema, ValidationError, post_load

from sparsecalc.utils.errors import IndexOutOfBoundsError
from sparsecalc.utils.sparse_matrix import create_sparse_matrix_from_entries


class StrictInteger(fields.Integer):
    """Entero que no acepta decimales, booleanos ni cadenas"""

    def __init__(self, **kwargs):
        super().__init__(strict=True, **kwargs)

    def _deserialize(self, value, attr, data, **kwargs):
        if isinstance(value, bool):
            raise self.make_error('invalid')
        return super()._deserialize(value, attr, data, **kwargs)


class MatrixSchema(Schema):
    """
    Valida el JSON de una matriz dispersa:
        {"rows": 2, "cols": 2, "entries": [[0, 0, 1], [1, 1, 2]]}
    y lo convierte en SparseMatrix.
    """
    rows = StrictInteger(required=True, validate=validate.Range(min=0))
    cols = StrictInteger(required=True, validate=validate.Range(min=0))
    entries = fields.List(
        fields.List(StrictInteger(), validate=validate.Length(equal=3)),
        load_default=list,
    )

    @validates_schema
    def validate_bounds(self, data, **kwargs):
        """Verifica que cada entrada esté dentro de las dimensiones"""
        rows = data.get('rows')
        cols = data.get('cols')
        if rows is None or cols is None:
            return
        for idx, (row, col, _) in enumerate(data.get('entries', [])):
            if not (0 <= row < rows and 0 <= col < cols):
                error = IndexOutOfBoundsError(row, col, (rows, cols))
                raise ValidationError({'entries': {idx: [str(error)]}})

    @post_load
    def make_matrix(self, data, **kwargs):
        return create_sparse_matrix_from_entries(data['rows'], data['cols'], data['entries'])


class OperationRequestSchema(Schema):
    """Cuerpo de la petición de una operación binaria"""
    matrix_a = fields.Nested(MatrixSchema, required=True)
    matrix_b = fields.Nested(MatrixSchema, required=True)


def dump_matrix(matrix, include_entries=True):
    """Convierte una SparseMatrix en un diccionario serializable a JSON"""
    data = {
        'rows': matrix.rows,
        'cols': matrix.cols,
        'nnz': matrix.nnz,
        'density': matrix.get_density(),
    }
    if include_entries:
        data['entries'] = [list(entry) for entry in matrix.serialize()]
    return data
