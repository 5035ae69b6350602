import pytest

from roadplan import parse_network
from roadplan.lexer import tokenize_line

from helpers import FIGURE_EIGHT_TEXT


def test_tokenize_node_statement():
    tokens = tokenize_line('node A1 at (0, -2.5, 1e3)  # corner', 1)

    assert [t[0] for t in tokens] == [
        'ID', 'ID', 'ID', 'LPAREN', 'NUMBER', 'COMMA', 'DASH', 'NUMBER', 'COMMA', 'NUMBER', 'RPAREN',
    ]
    assert tokens[1][1] == 'A1'
    assert tokens[1][3] == 6


def test_tokenize_rejects_unknown_character():
    with pytest.raises(SyntaxError) as exc:
        tokenize_line('road A~B', 3)

    assert '[line 3, col 7]' in str(exc.value)


def test_parse_figure_eight():
    network = parse_network(FIGURE_EIGHT_TEXT)

    assert network.title == 'Figure eight'
    assert [s.kind for s in network.stmts] == ['plan'] + ['node'] * 6 + ['roads', 'roads']
    assert network.stmts[2].data == {'id': 'B', 'position': (1.0, 0.0, 0.0)}
    assert network.stmts[7].data == {'ids': ['A', 'B', 'C', 'D', 'A']}
    assert [(c.start, c.end) for c in network.connections()][:3] == [('A', 'B'), ('B', 'C'), ('C', 'D')]
    assert len(network.connections()) == 7


def test_parse_signed_coordinates():
    network = parse_network('node N at (-1, +2, -0.25)')

    assert network.stmts[0].data['position'] == (-1.0, 2.0, -0.25)


def test_parse_road_with_name_option():
    network = parse_network('road Market-Harbour [name="Quay Street"]')

    stmt = network.stmts[0]
    assert stmt.kind == 'road'
    assert stmt.data['edge'] == ('Market', 'Harbour')
    assert stmt.opts == {'name': 'Quay Street'}
    assert stmt.span.line == 1 and stmt.span.col == 6
    assert network.connections()[0].road_name == 'Quay Street'


def test_default_road_name_joins_node_names():
    network = parse_network('road A-B')

    assert network.connections()[0].road_name == 'A-B'


def test_comments_and_blank_lines_are_skipped():
    network = parse_network('# header\n\nnode A at (0, 0, 0)  # origin\n')

    assert len(network.stmts) == 1


@pytest.mark.parametrize(
    'text, message_part',
    [
        ('bridge A-B', 'unknown statement "bridge"'),
        ('node A at (0, 0)', 'position needs 3 coordinates'),
        ('node A (0, 0, 0)', 'expected ID, got LPAREN'),
        ('node A on (0, 0, 0)', "expected keyword 'at'"),
        ('roads A', 'expected "-" ID in chain'),
        ('road A-B [name="x" "y"]', "Expected ',' or ']'"),
        ('road A-B extra', "unexpected token 'extra'"),
    ],
)
def test_syntax_errors(text, message_part):
    with pytest.raises(SyntaxError) as exc:
        parse_network(text)

    assert message_part in str(exc.value)


def test_syntax_error_points_at_column():
    text = 'node A at (0, 0, 0) extra'

    with pytest.raises(SyntaxError) as exc:
        parse_network(text)

    lines = str(exc.value).splitlines()
    assert lines[-2].strip() == text
    assert lines[-1].rstrip().endswith('^')
    assert len(lines[-1].rstrip()) == len('    ') + text.index('extra') + 1


def test_string_literals_keep_non_ascii_text():
    tokens = tokenize_line('road A-B [name="Straße \\"Süd\\" \\\\ Weg"]', 1)

    assert tokens[-2] == ('STRING', 'Straße "Süd" \\ Weg', 1, 16)


def test_unterminated_string_is_reported():
    with pytest.raises(SyntaxError) as exc:
        tokenize_line('plan "Old Town', 2)

    assert '[line 2, col 6] unterminated string literal' in str(exc.value)
