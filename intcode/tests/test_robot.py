from intcode.computer import Computer
from intcode.robot import WHITE, PaintingRobotIO

# Paints white, black, white, white while turning left each time, then reads
# the colour back at the origin.
SQUARE = [
    3, 100, 104, 1, 104, 0,
    3, 100, 104, 0, 104, 0,
    3, 101, 104, 1, 104, 0,
    3, 101, 104, 1, 104, 0,
    3, 102,
    99,
]


def test_robot_paints_and_turns():
    robot = PaintingRobotIO()
    computer = Computer(SQUARE, io=robot)
    computer.run()
    assert computer.is_done()
    assert robot.painted == 4
    assert robot.position == (0, 0)
    assert robot.heading == 0
    assert computer.memory.get(102) == WHITE
    assert robot.render() == " #\n##"


def test_robot_start_panel_colour():
    robot = PaintingRobotIO(start_colour=WHITE)
    assert robot.input() == WHITE
    assert robot.painted == 0
