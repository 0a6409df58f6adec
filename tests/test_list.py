from dataclasses import dataclass, field

import pytest

from divisible import Divisible, Power, divisible, divide_by

@divisible(power=Power.INDEXED)
@dataclass
class Foo:
    """ Lists divided together, with a shared value and a counter. """
    foo: int = field(metadata=divide_by("clone"))
    bar: float = field(metadata=divide_by("default"))
    baz: list
    baz2: list

class TestList:
    def test_base_length(self):
        f = Foo(3, 0.5, [1, 2, 3], [2.4, 3.3])
        assert f.base_length() == 2

    def test_divide(self):
        f = Foo(3, 0.5, [1, 2, 3], [2.4, 3.3])
        (left, right) = f.divide()

        assert left == Foo(3, 0.5, [1], [2.4])
        assert right == Foo(3, 0.0, [2, 3], [3.3])

    def test_divide_recursively(self):
        f = Foo(1, 1.0, list(range(100)), list(range(100, 200)))

        parts = [f]
        while any(p.base_length() > 1 for p in parts):
            divided = []
            for p in parts:
                if p.base_length() > 1:
                    divided.extend(p.divide())
                else:
                    divided.append(p)
            parts = divided

        assert len(parts) == 100
        assert [p.baz[0] for p in parts] == list(range(100))
        assert [p.baz2[0] for p in parts] == list(range(100, 200))
        assert all(p.foo == 1 for p in parts)
        # Only the leftmost part kept the counter.
        assert [p.bar for p in parts].count(1.0) == 1
        assert parts[0].bar == 1.0

    def test_registered(self):
        f = Foo(3, 0.5, [], [])
        assert isinstance(f, Divisible)
        assert Foo.Power is Power.INDEXED

    def test_empty(self):
        f = Foo(3, 0.5, [], [1])
        assert f.base_length() == 0
        (left, right) = f.divide()
        assert left.baz == [] and right.baz == []
        assert left.baz2 == [] and right.baz2 == [1]
