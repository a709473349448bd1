from zaplog.color import Color


def test_color_formatting():
    assert Color.RED.add("foo") == "\x1b[31mfoo\x1b[0m"


def test_color_codes_start_at_thirty():
    assert [int(c) for c in Color] == list(range(30, 38))
    assert Color.WHITE.add("") == "\x1b[37m\x1b[0m"