from flask import Blueprint, request, jsonify, Response, current_app
from marshmallow import ValidationError
from werkzeug.utils import secure_filename
import graphviz

from sparsecalc.models.matrix_schema import MatrixSchema, OperationRequestSchema, dump_matrix
from sparsecalc.services.graph_service import render_matrix_svg
from sparsecalc.services.matrix_service import parse_matrix_text
from sparsecalc.utils.errors import MatrixError, UnsupportedOperationError
from sparsecalc.utils.helpers import generate_response, allowed_matrix_file
from sparsecalc.utils.matrix_ops import get_operation
from sparsecalc.utils.sparse_matrix import SparseMatrix

api_bp = Blueprint('api', __name__)
operation_schema = OperationRequestSchema()
matrix_schema = MatrixSchema()


def _result_response(operation_name, result):
    return jsonify(generate_response(
        data=dump_matrix(result),
        message=f'{operation_name} completed successfully'
    )), 200


def _error_response(error, status, details=None):
    body = generate_response(success=False, error=error)
    if details is not None:
        body['details'] = details
    return jsonify(body), status


# Matrix operation with JSON payload
@api_bp.route('/matrices/<operation>', methods=['POST'])
def compute(operation):
    """Apply add, subtract or multiply to two matrices sent as JSON"""
    try:
        operation_func = get_operation(operation)
    except UnsupportedOperationError as e:
        return _error_response(str(e), 404)

    data = request.get_json(silent=True)
    if not data:
        return _error_response('No data provided', 400)

    try:
        operands = operation_schema.load(data)
        current_app.logger.debug(
            "Compute %s on %r and %r", operation_func.__name__, operands['matrix_a'], operands['matrix_b']
        )
        result = operation_func(operands['matrix_a'], operands['matrix_b'])
        return _result_response(operation_func.__name__, result)
    except ValidationError as e:
        return _error_response('Validation error', 400, e.messages)
    except MatrixError as e:
        return _error_response(str(e), 400)
    except Exception as e:
        current_app.logger.exception("Unexpected error computing %s", operation)
        return _error_response(str(e), 500)


# Matrix operation with uploaded text files
@api_bp.route('/matrices/<operation>/upload', methods=['POST'])
def compute_upload(operation):
    """Apply an operation to two uploaded matrix files (matrix_a, matrix_b)"""
    try:
        operation_func = get_operation(operation)
    except UnsupportedOperationError as e:
        return _error_response(str(e), 404)

    matrices = []
    for field in ('matrix_a', 'matrix_b'):
        if field not in request.files:
            return _error_response(f'No file provided for {field}', 400)

        file = request.files[field]
        if file.filename == '':
            return _error_response(f'No file selected for {field}', 400)

        if not allowed_matrix_file(file.filename):
            return _error_response('Only TXT files are allowed', 400)

        filename = secure_filename(file.filename) or field

        try:
            parsed = parse_matrix_text(file.read().decode('utf-8'))
            matrices.append(SparseMatrix(parsed.rows, parsed.cols, parsed.entries))
        except UnicodeDecodeError:
            return _error_response(f'Invalid text encoding in {filename}', 400)
        except MatrixError as e:
            return _error_response(f'Invalid matrix file {filename}: {e}', 400)

        current_app.logger.debug("Loaded %s from %s", repr(matrices[-1]), filename)

    try:
        result = operation_func(*matrices)
        return _result_response(operation_func.__name__, result)
    except MatrixError as e:
        return _error_response(str(e), 400)
    except Exception as e:
        current_app.logger.exception("Unexpected error computing %s", operation)
        return _error_response(str(e), 500)


@api_bp.route('/matrices/render', methods=['POST'])
def render_matrix():
    """Render a single matrix as a Graphviz SVG"""
    data = request.get_json(silent=True)
    if not data:
        return _error_response('No data provided', 400)

    try:
        matrix = matrix_schema.load(data)
    except ValidationError as e:
        return _error_response('Validation error', 400, e.messages)

    title = request.args.get('title', 'MATRIZ DISPERSA')
    try:
        svg = render_matrix_svg(matrix, title)
    except graphviz.ExecutableNotFound as e:
        current_app.logger.error("Graphviz is not installed: %s", e)
        return _error_response('Graphviz executable not found', 503)

    return Response(svg, mimetype='image/svg+xml')
