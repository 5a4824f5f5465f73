# Tile and corridor-class constants centralized for modular imports
EMPTY = "E"
ROOM_FLOOR = "R"
PATH_FLOOR = "P"

CELL_TYPES = (EMPTY, ROOM_FLOOR, PATH_FLOOR)

# Corridor cell classes (only PATH_FLOOR cells carry one)
ROOM_ADJACENT = "room_adjacent"
ISOLATED = "isolated"
EVENTABLE = "eventable"
NOT_EVENTABLE = "not_eventable"
UNCLASSIFIED = "unclassified"

PATH_CLASSES = (ROOM_ADJACENT, ISOLATED, EVENTABLE, NOT_EVENTABLE, UNCLASSIFIED)

# ASCII map glyphs used by render_ascii / the CLI
GLYPHS = {
    EMPTY: "#",
    ROOM_FLOOR: ".",
    ROOM_ADJACENT: "+",
    ISOLATED: "-",
    EVENTABLE: "E",
    NOT_EVENTABLE: "x",
    UNCLASSIFIED: "~",
    "start": "S",
    "goal": "G",
}

ORTHOGONAL = ((0, 1), (0, -1), (1, 0), (-1, 0))
DIAGONAL = ((1, 1), (1, -1), (-1, 1), (-1, -1))


def render_ascii(dungeon) -> str:
    """Render a generated dungeon as text, top row first.

    Corridor cells show their class glyph; the start and goal room centers are
    marked ``S`` and ``G`` when a pair was selected.
    """
    grid = dungeon.grid
    classes = dungeon.path_classes
    marks = {}
    if dungeon.start_goal is not None:
        marks[dungeon.rooms[dungeon.start_goal.start].center] = GLYPHS["start"]
        marks[dungeon.rooms[dungeon.start_goal.goal].center] = GLYPHS["goal"]
    lines = []
    for y in range(grid.height - 1, -1, -1):
        row = []
        for x in range(grid.width):
            if (x, y) in marks:
                row.append(marks[(x, y)])
                continue
            cell = grid.get(x, y)
            if cell == PATH_FLOOR:
                row.append(GLYPHS[classes.get(x, y) or UNCLASSIFIED])
            else:
                row.append(GLYPHS[cell])
        lines.append("".join(row))
    return "\n".join(lines)


__all__ = [
    "EMPTY",
    "ROOM_FLOOR",
    "PATH_FLOOR",
    "CELL_TYPES",
    "ROOM_ADJACENT",
    "ISOLATED",
    "EVENTABLE",
    "NOT_EVENTABLE",
    "UNCLASSIFIED",
    "PATH_CLASSES",
    "GLYPHS",
    "ORTHOGONAL",
    "DIAGONAL",
    "render_ascii",
]
