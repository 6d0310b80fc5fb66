from flask import Blueprint, jsonify

from sparsecalc import __version__
from sparsecalc.utils.matrix_ops import OPERATIONS

main_bp = Blueprint('main', __name__)

@main_bp.route('/')
def index():
    """Root endpoint"""
    return jsonify({
        'message': 'Sparse Matrix API',
        'version': __version__,
        'status': 'running'
    })

@main_bp.route('/health')
def health_check():
    """Health check endpoint"""
    return jsonify({
        'status': 'healthy',
        'message': 'API is running successfully'
    })

@main_bp.route('/api-info')
def api_info():
    """API information endpoint"""
    return jsonify({
        'name': 'Sparse Matrix API',
        'version': __version__,
        'description': 'Addition, subtraction and multiplication of sparse integer matrices',
        'operations': sorted(OPERATIONS),
        'endpoints': {
            'main': '/',
            'health': '/health',
            'api_info': '/api-info',
            'compute': '/api/v1/matrices/<operation>',
            'upload': '/api/v1/matrices/<operation>/upload',
            'render': '/api/v1/matrices/render'
        }
    })
