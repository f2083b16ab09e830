from objtasks.shapes import Rectangle


def test_rectangle_fields_and_area():
    r = Rectangle(10, 20)
    assert r.width == 10
    assert r.height == 20
    assert r.get_area() == 200


def test_area_follows_current_fields():
    r = Rectangle(2, 3)
    r.width = 5
    assert r.get_area() == 15
    # each instance uses its own values
    assert Rectangle(1, 1).get_area() == 1
    assert r.get_area() == 15
