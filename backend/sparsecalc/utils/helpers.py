from datetime import datetime, timezone


def generate_response(success=True, data=None, message=None, error=None):
    """Generate standardized API response"""
    response = {
        'success': success,
        'timestamp': datetime.now(timezone.utc).isoformat()
    }

    if data is not None:
        response['data'] = data

    if message:
        response['message'] = message

    if error:
        response['error'] = error

    return response


def format_entry(row, col, value):
    """Format one triple the way input files write it"""
    return f"({row}, {col}, {value})"


def allowed_matrix_file(filename):
    """Only plain text matrix files are accepted"""
    return bool(filename) and filename.lower().endswith('.txt')
