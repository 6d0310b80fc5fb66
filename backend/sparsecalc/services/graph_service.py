from itertools import groupby
from operator import attrgetter

import graphviz


def build_matrix_graph(matrix, title='MATRIZ DISPERSA'):
    """
    Construye un grafo Graphviz con la estructura de la matriz: un nodo de
    encabezado, un nodo por fila y por columna con elementos, y un nodo por
    cada valor no-cero enlazado a su fila y su columna.
    """
    dot = graphviz.Digraph(format='svg')
    dot.attr(rankdir='LR', nodesep='0.7', ranksep='0.7', splines='ortho')
    dot.attr('node', shape='box', style='filled', fontname='Arial')

    dot.node('header', f'{title}\n{matrix.rows}x{matrix.cols}', fillcolor='#f9f9b6', width='2.2', height='0.7')

    entries = list(matrix.serialize())
    # serialize() ya viene ordenado por fila
    entries_by_row = [(row, list(group)) for row, group in groupby(entries, key=attrgetter('row'))]
    col_indices = sorted({entry.col for entry in entries})

    # Columnas (verde) en la fila superior
    col_nodes = []
    for col in col_indices:
        node_id = f'col_{col}'
        dot.node(node_id, f'C{col}', fillcolor='#b6f9b6', width='1.2', height='0.7')
        dot.edge('header', node_id)
        col_nodes.append(node_id)

    # Filas (naranja) en la primera columna
    for row, _ in entries_by_row:
        node_id = f'row_{row}'
        dot.node(node_id, f'F{row}', fillcolor='#ff9966', width='1.5', height='0.7')
        dot.edge('header', node_id)

    if col_nodes:
        dot.body.append('{rank=same; ' + ' '.join(['header'] + col_nodes) + ';}')

    for row, row_entries in entries_by_row:
        cells = [f'v_{entry.row}_{entry.col}' for entry in row_entries]
        dot.body.append('{rank=same; ' + ' '.join([f'row_{row}'] + cells) + ';}')

    for row, col, value in entries:
        value_node = f'v_{row}_{col}'
        dot.node(value_node, str(value), fillcolor='white', width='1', height='0.7')
        dot.edge(f'row_{row}', value_node)
        dot.edge(f'col_{col}', value_node)

    return dot


def render_matrix_svg(matrix, title='MATRIZ DISPERSA'):
    """Renderiza la matriz como SVG; requiere el ejecutable 'dot' de Graphviz"""
    return build_matrix_graph(matrix, title).pipe(format='svg')
