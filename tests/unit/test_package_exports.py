from __future__ import annotations

import compositor


def test_public_api() -> None:
    assert compositor.__version__ == "1.0.0"
    for name in compositor.__all__:
        assert hasattr(compositor, name), name


def test_top_level_usage() -> None:
    class Wheels(compositor.Role):
        count = compositor.Attribute(default=4)

    resolver = compositor.RoleResolver({"Wheels": Wheels})
    factory = compositor.Compositor("Garage::Car", resolver=resolver)
    car = factory.class_for("Wheels")()
    assert car.count == 4
    assert type(car).__qualname__ == "Garage::Car::Wheels"
