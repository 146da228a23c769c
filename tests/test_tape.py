import unittest

from tapebf.tape import Tape


class TapeTests(unittest.TestCase):
    def test_starts_empty(self) -> None:
        self.assertEqual(len(Tape()), 0)

    def test_read_extends_with_zero_cells(self) -> None:
        tape = Tape()
        self.assertEqual(tape.read(4), 0)
        self.assertEqual(len(tape), 5)
        self.assertEqual(tape.cells(), [0, 0, 0, 0, 0])

    def test_write_extends_and_wraps(self) -> None:
        tape = Tape()
        tape.write(2, 257)
        self.assertEqual(tape.cells(), [0, 0, 1])
        tape.write(0, -1)
        self.assertEqual(tape.read(0), 255)

    def test_peek_does_not_extend(self) -> None:
        tape = Tape()
        tape.write(0, 7)
        self.assertEqual(tape.peek(0), 7)
        self.assertEqual(tape.peek(100), 0)
        self.assertEqual(len(tape), 1)

    def test_negative_position_rejected(self) -> None:
        tape = Tape()
        with self.assertRaises(IndexError):
            tape.read(-1)
        with self.assertRaises(IndexError):
            tape.peek(-1)

    def test_window_pads_unreached_cells(self) -> None:
        tape = Tape()
        tape.write(1, 9)
        self.assertEqual(tape.window(0, 4), [0, 9, 0, 0])
        self.assertEqual(len(tape), 2)

    def test_cells_returns_copy(self) -> None:
        tape = Tape()
        tape.write(0, 1)
        cells = tape.cells()
        cells[0] = 99
        self.assertEqual(tape.peek(0), 1)

    def test_clear(self) -> None:
        tape = Tape()
        tape.write(3, 1)
        tape.clear()
        self.assertEqual(len(tape), 0)


if __name__ == "__main__":
    unittest.main()
