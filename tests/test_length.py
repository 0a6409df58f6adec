from dataclasses import dataclass, field

import pytest

from divisible import Divisible, Power, config, divisible, divide_by, expand

class Forever(Divisible):
    """ A divisible value without end. """

    def base_length(self):
        return None

    def divide_at(self, index):
        return (Forever(), Forever())

@divisible(power=Power.INDEXED)
@dataclass
class Shortest:
    short: list
    long: list

@divisible(power=Power.INDEXED, length_policy="unbounded")
@dataclass
class Longest:
    short: list
    long: list

@divisible(power=Power.INDEXED)
@dataclass
class Passengers:
    name: str = field(metadata=divide_by("clone"))
    count: int = field(metadata=divide_by("default"))

@divisible(power=Power.INDEXED, length_policy="unbounded")
@dataclass
class LongestPassengers:
    name: str = field(metadata=divide_by("clone"))

@divisible(power=Power.BASIC)
@dataclass
class Unit:
    pass

@divisible(power=Power.BASIC, length_policy="unbounded")
@dataclass
class LongestUnit:
    pass

@divisible(power=Power.INDEXED)
@dataclass
class Endless:
    values: list
    rest: Forever

@divisible(power=Power.INDEXED, length_policy="unbounded")
@dataclass
class LongestEndless:
    values: list
    rest: Forever

@divisible(power=Power.INDEXED)
@dataclass
class Nested:
    inner: Shortest
    values: tuple

FIVE = [1, 2, 3, 4, 5]
EIGHT = list(range(8))

class TestBounded:
    def test_shortest_field(self):
        assert Shortest(FIVE, EIGHT).base_length() == 5
        assert Shortest(EIGHT, FIVE).base_length() == 5

    def test_passengers_are_unbounded(self):
        assert Passengers("a", 3).base_length() is None

    def test_unit_is_unbounded(self):
        assert Unit().base_length() is None

    def test_unbounded_fields_are_ignored(self):
        assert Endless([1, 2, 3], Forever()).base_length() == 3

    def test_nested(self):
        assert Nested(Shortest(FIVE, EIGHT), (1, 2, 3)).base_length() == 3
        assert Nested(Shortest([1], EIGHT), (1, 2, 3)).base_length() == 1

    def test_source(self):
        source = expand(Shortest)
        assert "return _bounded_length((_base_length(self.short), _base_length(self.long)))" in source

    def test_configured_default(self, monkeypatch):
        monkeypatch.setitem(config, "length_policy", "unbounded")

        @divisible(power=Power.INDEXED)
        @dataclass
        class Configured:
            short: list
            long: list

        assert Configured(FIVE, EIGHT).base_length() == 8

class TestUnbounded:
    def test_longest_field(self):
        assert Longest(FIVE, EIGHT).base_length() == 8
        assert Longest(EIGHT, FIVE).base_length() == 8

    def test_passengers_are_unbounded(self):
        assert LongestPassengers("a").base_length() is None

    def test_unit_is_empty(self):
        assert LongestUnit().base_length() == 0

    def test_unbounded_fields(self):
        assert LongestEndless([1, 2, 3], Forever()).base_length() is None

    def test_source(self):
        assert "_unbounded_length(" in expand(Longest)
