from dataclasses import dataclass, field
from typing import Callable, NamedTuple

import pytest

from divisible import (AmbiguousTargetError, DeclarationError, DeriveError, MissingDeclarationError,
        ParallelIterator, Policy, Power, SliceIter, divisible, divide_by, expand,
        iteration_target, parallel_iterator)
from divisible.derive import describe
from divisible.derive.ir import FunctionDef, Implementation, Return, Source

def triple(x):
    return 3 * x

class Recorder(SliceIter):
    """ A SliceIter remembering where it was divided. """

    cuts = []

    def divide_at(self, index):
        Recorder.cuts.append(index)
        return super().divide_at(index)

@parallel_iterator(item=int, sequential_iterator=map, iterator_extraction="map(self.op, i)")
@divisible(power=Power.INDEXED)
@dataclass
class Mapped:
    op: Callable = field(metadata=divide_by("copy"))
    inner: SliceIter

@parallel_iterator(item=int, sequential_iterator=map, iterator_extraction="map(triple, i)",
        power=Power.INDEXED)
@dataclass
class Tripled:
    inner: SliceIter

@parallel_iterator(item=str, sequential_iterator=map, power=Power.INDEXED,
        iterator_extraction=lambda record, i: map(record.prefix.__add__, i))
@dataclass
class Prefixed:
    prefix: str = field(metadata=divide_by("clone"))
    inner: SliceIter

@parallel_iterator(item=int, sequential_iterator=iter, iterator_extraction="i")
@divisible(power=Power.INDEXED)
@dataclass
class Zipped:
    keys: list
    inner: SliceIter = field(metadata=iteration_target())

@parallel_iterator(item=int, sequential_iterator=iter, iterator_extraction="i")
@divisible(power=Power.INDEXED, divide_by={"name": "clone"})
class Labelled(NamedTuple):
    name: str
    inner: SliceIter

def double(x):
    return 2 * x

def mapped(count, blocks=None, policy=Policy.DEFAULT):
    return Mapped(double, SliceIter(list(range(count)), blocks, policy))

class TestForwarding:
    def test_extract_iter(self):
        m = mapped(9)
        assert list(m.extract_iter(3)) == [0, 2, 4]
        assert m.base_length() == 6
        assert list(m.extract_iter(2)) == [6, 8]
        assert list(m.to_sequential()) == [10, 12, 14, 16]

    def test_to_sequential(self):
        assert list(mapped(4).to_sequential()) == [0, 2, 4, 6]

    def test_blocks_sizes(self):
        assert list(mapped(9, blocks=[3, 4, 2]).blocks_sizes()) == [3, 4, 2]

    def test_policy(self):
        assert mapped(9).policy() == Policy.DEFAULT
        assert mapped(9, policy=Policy.join(16)).policy() == Policy("join", (16,))

    def test_module_names(self):
        assert list(Tripled(SliceIter([1, 2])).to_sequential()) == [3, 6]

    def test_callable_extraction(self):
        p = Prefixed("x", SliceIter(["a", "b", "c"]))
        assert list(p.extract_iter(1)) == ["xa"]
        assert list(p.to_sequential()) == ["xb", "xc"]

    def test_earmarked_target(self):
        z = Zipped([10, 20, 30], SliceIter([1, 2, 3]))
        assert list(z.extract_iter(2)) == [1, 2]
        assert z.keys == [10, 20, 30]

    def test_attributes(self):
        assert Mapped.Item is int
        assert Mapped.SequentialIterator is map
        assert Prefixed.Power is Power.INDEXED
        assert isinstance(mapped(1), ParallelIterator)

class TestFlatten:
    def test_blocks(self):
        Recorder.cuts.clear()
        m = Mapped(double, Recorder(list(range(9)), [3, 4, 2]))
        assert list(m) == [2 * x for x in range(9)]
        assert Recorder.cuts == [3, 4, 2]

    def test_repeated_blocks(self):
        Recorder.cuts.clear()
        m = Mapped(double, Recorder(list(range(9)), [4]))
        assert list(m) == [2 * x for x in range(9)]
        assert Recorder.cuts == [4, 4, 1]

    def test_order_independent_of_blocks(self):
        expected = list(range(0, 40, 2))
        for blocks in ([1], [20], [3, 4, 2], [7, 1], [100]):
            assert list(mapped(20, blocks)) == expected

    def test_default_blocks(self):
        assert list(mapped(3000)) == list(range(0, 6000, 2))

    def test_empty(self):
        assert list(mapped(0)) == []

    def test_callable_extraction(self):
        p = Prefixed("-", SliceIter(["a", "b", "c"], [2]))
        assert list(p) == ["-a", "-b", "-c"]

    def test_positional(self):
        record = Labelled("n", SliceIter([1, 2, 3, 4], [3]))
        assert list(record.iter_blocks()) == [1, 2, 3, 4]

    def test_positional_keeps_tuple_iteration(self):
        record = Labelled("n", SliceIter([1, 2]))
        assert len(tuple(record)) == 2
        assert record._asdict()["name"] == "n"

class TestDeclarations:
    def test_ambiguous(self):
        @dataclass
        class TwoInner:
            a: SliceIter
            b: SliceIter

        with pytest.raises(AmbiguousTargetError) as e:
            parallel_iterator(item=int, sequential_iterator=iter, iterator_extraction="i",
                    power=Power.INDEXED)(TwoInner)
        assert e.value.candidates == ("a", "b")
        # Nothing was installed, not even the divisible capability.
        assert not hasattr(TwoInner, "divide_at")
        assert not hasattr(TwoInner, "extract_iter")

    def test_disambiguated(self):
        @dataclass
        class TwoInner:
            a: SliceIter
            b: SliceIter

        parallel_iterator(item=int, sequential_iterator=iter, iterator_extraction="i",
                power=Power.INDEXED, iteration_target="b")(TwoInner)
        record = TwoInner(SliceIter([1, 2]), SliceIter([3, 4]))
        assert list(record.to_sequential()) == [3, 4]

    def test_no_target(self):
        @divisible(power=Power.INDEXED)
        @dataclass
        class Passenger:
            name: str = field(metadata=divide_by("clone"))

        with pytest.raises(AmbiguousTargetError):
            parallel_iterator(item=int, sequential_iterator=iter,
                    iterator_extraction="i")(Passenger)
        assert not hasattr(Passenger, "extract_iter")

    def test_missing_item(self):
        @dataclass
        class Wrapper:
            inner: SliceIter

        with pytest.raises(MissingDeclarationError) as e:
            parallel_iterator(sequential_iterator=iter, iterator_extraction="i",
                    power=Power.INDEXED)(Wrapper)
        assert e.value.declaration == "item"

    def test_missing_extraction(self):
        @dataclass
        class Wrapper:
            inner: SliceIter

        with pytest.raises(MissingDeclarationError) as e:
            parallel_iterator(item=int, sequential_iterator=iter, power=Power.INDEXED)(Wrapper)
        assert e.value.declaration == "iterator_extraction"

    def test_missing_power(self):
        @dataclass
        class Wrapper:
            inner: SliceIter

        with pytest.raises(MissingDeclarationError) as e:
            parallel_iterator(item=int, sequential_iterator=iter, iterator_extraction="i")(Wrapper)
        assert e.value.declaration == "power"

    def test_invalid_extraction(self):
        @dataclass
        class Wrapper:
            inner: SliceIter

        with pytest.raises(DeclarationError):
            parallel_iterator(item=int, sequential_iterator=iter, iterator_extraction="map(",
                    power=Power.INDEXED)(Wrapper)
        with pytest.raises(DeclarationError):
            parallel_iterator(item=int, sequential_iterator=iter, iterator_extraction=42,
                    power=Power.INDEXED)(Wrapper)

    def test_commented_extraction(self):
        @dataclass
        class Wrapper:
            inner: SliceIter

        parallel_iterator(item=int, sequential_iterator=iter, iterator_extraction="i  # identity",
                power=Power.INDEXED)(Wrapper)
        assert list(Wrapper(SliceIter([1, 2, 3], [2]))) == [1, 2, 3]
        assert "return (i  # identity\n)" in expand(Wrapper)

    def test_uncompilable(self):
        @dataclass
        class Wrapper:
            inner: SliceIter

        impl = Implementation("ParallelIterator", describe(Wrapper))
        impl.add(FunctionDef("to_sequential", ["self"], [Return(Source("i)"))]))
        with pytest.raises(DeriveError) as e:
            impl.compile()
        assert isinstance(e.value, DeclarationError)
        assert impl.compiled is None

    def test_expand(self):
        source = expand(Mapped)
        assert "# Divisible for Mapped" in source
        assert "# ParallelIterator for Mapped" in source
        assert "i = self.inner.extract_iter(size)" in source
        assert "return (map(self.op, i))" in source
        assert "return self.inner.blocks_sizes()" in source
        assert "return self.inner.policy()" in source
        assert "def __iter__(self):" in source

    def test_expand_positional(self):
        source = expand(Labelled)
        assert "i = self[1].to_sequential()" in source
        assert "def __iter__" not in source
