import unittest


from dungeongen.dungeon import EMPTY, PATH_FLOOR, ROOM_FLOOR, Dungeon, GenerationConfig, render_ascii


class TestBasicDungeon(unittest.TestCase):
    def setUp(self):
        self.d = Dungeon(GenerationConfig(seed=42))

    def test_rooms_exist(self):
        self.assertGreater(self.d.metrics["rooms"], 0)

    def test_cells_are_known_types(self):
        w = self.d.width
        h = self.d.height
        for x in range(w):
            for y in range(h):
                self.assertIn(self.d.grid.get(x, y), (EMPTY, ROOM_FLOOR, PATH_FLOOR))

    def test_corridors_touch_floor(self):
        # Every corridor cell continues into another corridor or a room orthogonally
        g = self.d.grid
        for x, y in g.iter_cells(PATH_FLOOR):
            self.assertTrue(
                any(g.get(nx, ny) != EMPTY for nx, ny in g.neighbours(x, y)),
                f"Corridor at {(x, y)} is a dead pixel",
            )

    def test_ascii_render_dimensions(self):
        lines = render_ascii(self.d).splitlines()
        self.assertEqual(len(lines), self.d.height)
        self.assertTrue(all(len(line) == self.d.width for line in lines))
        if self.d.start_goal is not None:
            text = "\n".join(lines)
            self.assertEqual(text.count("S"), 1)
            self.assertEqual(text.count("G"), 1)

    def test_ascii_render_orientation(self):
        # top line is the highest y row
        top = render_ascii(self.d).splitlines()[0]
        row = self.d.grid.to_rows()[self.d.height - 1]
        for ch, cell in zip(top, row):
            if cell == EMPTY:
                self.assertEqual(ch, "#")


if __name__ == "__main__":
    unittest.main()
