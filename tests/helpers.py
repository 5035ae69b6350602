from roadplan import RoadBuilder

FIGURE_EIGHT_TEXT = '''
plan "Figure eight"
node A at (0, 0, 0)
node B at (1, 0, 0)
node C at (1, 0, 1)
node D at (0, 0, 1)
node E at (2, 0, 0)
node F at (2, 0, 1)
roads A-B-C-D-A
roads B-E-F-C
'''

FIGURE_EIGHT_POSITIONS = {
    'A': (0.0, 0.0, 0.0),
    'B': (1.0, 0.0, 0.0),
    'C': (1.0, 0.0, 1.0),
    'D': (0.0, 0.0, 1.0),
    'E': (2.0, 0.0, 0.0),
    'F': (2.0, 0.0, 1.0),
}

FIGURE_EIGHT_EDGES = [
    ('A', 'B'), ('B', 'C'), ('C', 'D'), ('D', 'A'),
    ('B', 'E'), ('E', 'F'), ('F', 'C'),
]


def builders(positions, edges):
    nodes = {name: RoadBuilder(name, pos) for name, pos in positions.items()}
    for a, b in edges:
        nodes[a].connect(nodes[b])
    return list(nodes.values())


def figure_eight():
    return builders(FIGURE_EIGHT_POSITIONS, FIGURE_EIGHT_EDGES)


def ring(n):
    positions = {f'N{i}': (float(i), 0.0, float(i % 2)) for i in range(n)}
    edges = [(f'N{i}', f'N{(i + 1) % n}') for i in range(n)]
    return builders(positions, edges)


def grid(size):
    """Square grid of ``size`` x ``size`` cells, nodes named ``G<i><j>``."""
    positions = {}
    edges = []
    for i in range(size + 1):
        for j in range(size + 1):
            positions[f'G{i}{j}'] = (float(i), 0.0, float(j))
            if i < size:
                edges.append((f'G{i}{j}', f'G{i + 1}{j}'))
            if j < size:
                edges.append((f'G{i}{j}', f'G{i}{j + 1}'))
    return builders(positions, edges)


def keys(cycles):
    return sorted(cycle.key for cycle in cycles)
