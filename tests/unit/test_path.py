"""Unit tests for kanji_trainer.parsing.path.

Tests the path tokenizer and PathParser:
    - tokenize: sign- and comma-delimited numbers, command letters
    - move-to, relative and absolute cubic commands
    - implicit command repetition
    - recovery from unknown commands and malformed operands
    - strict mode
"""

import unittest

from kanji_trainer.domain.geometry import Point
from kanji_trainer.errors import MalformedOperands, UnrecognizedCommand
from kanji_trainer.parsing.path import PathParser, parse_path, tokenize


def _xy(points):
    return [(round(p.x, 6), round(p.y, 6)) for p in points]


class TestTokenize(unittest.TestCase):
    """Tests for tokenize."""

    def test_comma_delimited(self):
        self.assertEqual([t.text for t in tokenize('M1,2')], ['M', '1', '2'])

    def test_minus_sign_delimits(self):
        """A minus sign starts a new number without a separator."""
        tokens = tokenize('c1.5-2-3.25,4')
        self.assertEqual([t.text for t in tokens], ['c', '1.5', '-2', '-3.25', '4'])

    def test_whitespace_ignored(self):
        tokens = tokenize('M 1 , 2 c 3 4')
        self.assertEqual([t.text for t in tokens], ['M', '1', '2', 'c', '3', '4'])

    def test_leading_decimal_point(self):
        self.assertEqual([t.text for t in tokenize('M.5,.25')], ['M', '.5', '.25'])

    def test_token_kinds(self):
        kinds = [t.kind for t in tokenize('M1,2L#')]
        self.assertEqual(kinds, ['command', 'number', 'number', 'command', 'other'])

    def test_positions(self):
        tokens = tokenize('M10,2')
        self.assertEqual([t.position for t in tokens], [0, 1, 4])


class TestMoveTo(unittest.TestCase):
    """Tests for the M command."""

    def test_move_only_gives_one_point(self):
        """M x y alone yields exactly (x, y)."""
        self.assertEqual(parse_path('M12.5,-3', subdivisions=2), [Point(12.5, -3.0)])

    def test_negative_coordinates(self):
        self.assertEqual(parse_path('M-5-6', subdivisions=2), [Point(-5.0, -6.0)])

    def test_empty_path(self):
        self.assertEqual(parse_path('', subdivisions=2), [])

    def test_second_move_appends(self):
        points = parse_path('M0,0M5,5', subdivisions=2)
        self.assertEqual(points, [Point(0.0, 0.0), Point(5.0, 5.0)])


class TestCubicCommands(unittest.TestCase):
    """Tests for c and C."""

    def test_relative_cubic_point_count(self):
        """Start point plus N+1 points per segment."""
        for n in range(5):
            points = parse_path('M0,0c10,0,20,0,30,0', subdivisions=n)
            self.assertEqual(len(points), 1 + n + 1)

    def test_relative_cubic_endpoint(self):
        """Relative offsets are measured from the segment start."""
        points = parse_path('M5,5c10,0,20,0,30,0', subdivisions=1)
        self.assertEqual(_xy(points), [(5, 5), (20, 5), (35, 5)])

    def test_end_to_end_midpoint(self):
        """M0,0c10,0,20,0,30,0 with one subdivision has a midpoint at 15."""
        points = parse_path('M0,0c10,0,20,0,30,0', subdivisions=1)
        self.assertEqual(_xy(points), [(0, 0), (15, 0), (30, 0)])

    def test_absolute_cubic(self):
        points = parse_path('M0,0C0,10,10,10,10,0', subdivisions=0)
        self.assertEqual(_xy(points), [(0, 0), (10, 0)])

    def test_absolute_matches_relative(self):
        """The same curve written both ways gives the same points."""
        rel = parse_path('M10,10c5,10,15,10,20,0', subdivisions=3)
        ab = parse_path('M10,10C15,20,25,20,30,10', subdivisions=3)
        self.assertEqual(_xy(rel), _xy(ab))

    def test_chained_segments_continue_from_end(self):
        """The second segment starts where the first ended."""
        points = parse_path('M0,0c0,0,10,0,10,0c0,0,10,0,10,0', subdivisions=0)
        self.assertEqual(_xy(points), [(0, 0), (10, 0), (20, 0)])

    def test_implicit_repetition(self):
        """Extra operand groups after c repeat the command."""
        explicit = parse_path('M0,0c0,0,10,0,10,0c0,0,10,0,10,0', subdivisions=1)
        implicit = parse_path('M0,0c0,0,10,0,10,0,0,0,10,0,10,0', subdivisions=1)
        self.assertEqual(_xy(explicit), _xy(implicit))

    def test_chained_relative_option(self):
        """With chained offsets each control point builds on the previous one."""
        points = parse_path('M0,0c10,0,20,0,30,0', subdivisions=0, chained_relative=True)
        self.assertEqual(_xy(points), [(0, 0), (60, 0)])

    def test_cubic_before_move_starts_at_origin(self):
        with self.assertLogs('kanji_trainer.parsing.path', level='WARNING'):
            points = parse_path('c0,0,10,0,10,0', subdivisions=0)
        self.assertEqual(_xy(points), [(0, 0), (10, 0)])

    def test_realistic_kanjivg_path(self):
        """A path in the style of real stroke data parses to a sane polyline."""
        d = 'M11.5,51.72c3.12,0.78,6.6,0.87,9.75,0.53c14.88-1.62,38.25-4.12,58.63-4.31'
        points = parse_path(d, subdivisions=2)
        self.assertEqual(len(points), 1 + 3 + 3)
        self.assertAlmostEqual(points[3].x, 11.5 + 9.75, places=6)
        self.assertAlmostEqual(points[3].y, 51.72 + 0.53, places=6)
        self.assertAlmostEqual(points[-1].x, 11.5 + 9.75 + 58.63, places=6)
        self.assertAlmostEqual(points[-1].y, 51.72 + 0.53 - 4.31, places=6)


class TestRecovery(unittest.TestCase):
    """Tests for unknown commands and malformed operands."""

    def test_unknown_command_skipped(self):
        """An unknown command and its numbers are skipped; parsing continues."""
        with self.assertLogs('kanji_trainer.parsing.path', level='WARNING') as logs:
            points = parse_path('M0,0L5,5c0,0,10,0,10,0', subdivisions=0)
        self.assertEqual(_xy(points), [(0, 0), (10, 0)])
        self.assertEqual(len(logs.records), 1)
        self.assertIn("'L'", logs.output[0])

    def test_unknown_command_does_not_move_current_point(self):
        with self.assertLogs('kanji_trainer.parsing.path', level='WARNING'):
            points = parse_path('M1,1Z0,0c0,0,1,0,1,0', subdivisions=0)
        self.assertEqual(_xy(points), [(1, 1), (2, 1)])

    def test_stray_numbers_after_move(self):
        """Numbers after M cannot repeat it and are skipped."""
        with self.assertLogs('kanji_trainer.parsing.path', level='WARNING'):
            points = parse_path('M0,0 7 8', subdivisions=0)
        self.assertEqual(points, [Point(0.0, 0.0)])

    def test_missing_operands_keeps_partial(self):
        """A truncated command ends the parse but keeps earlier points."""
        with self.assertLogs('kanji_trainer.parsing.path', level='WARNING') as logs:
            points = parse_path('M0,0c0,0,10,0,10,0c1,2', subdivisions=0)
        self.assertEqual(_xy(points), [(0, 0), (10, 0)])
        self.assertIn('needs 6 numbers', logs.output[0])

    def test_strict_unknown_command_raises(self):
        parser = PathParser(subdivisions=0, strict=True)
        with self.assertRaises(UnrecognizedCommand) as ctx:
            parser.parse('M0,0L5,5')
        self.assertEqual(ctx.exception.token, 'L')
        self.assertEqual(ctx.exception.position, 4)

    def test_strict_malformed_operands_raises(self):
        parser = PathParser(subdivisions=0, strict=True)
        with self.assertRaises(MalformedOperands):
            parser.parse('M0')


if __name__ == '__main__':
    unittest.main()
