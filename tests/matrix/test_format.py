"""
Tests for the fixed-width text rendering.
"""

from densemat import Matrix, format_matrix


class TestFormat:

    def test_grid(self):
        m = Matrix.from_buffer(2, 2, [1, 2.346, -3, 1000])
        expected = (
            "      1.00       2.35 \n"
            "     -3.00    1000.00 \n"
        )
        assert str(m) == expected

    def test_one_line_per_row(self):
        text = format_matrix(Matrix.zeros(3, 4))
        lines = text.splitlines()
        assert len(lines) == 3
        assert all(len(line) == 4 * 11 for line in lines)

    def test_empty(self):
        assert str(Matrix.zeros(0, 3)) == ""
        assert str(Matrix.zeros(2, 0)) == "\n\n"

    def test_custom_precision(self):
        assert format_matrix(Matrix.from_buffer(1, 1, [0.5]), width=5, precision=1) == "  0.5 \n"
